"""Record descriptors for pydantic models and dataclasses.

This module turns a record type into a static list of fields to encode, with
the key each one is written under and whether it is skipped when empty. The
descriptor is built once per type and cached, so field directives are never
parsed on the encoding path.
"""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Iterator, List, Tuple, Type

from pydantic import BaseModel
from pydantic.fields import FieldInfo

from ..exceptions import SchemaError
from ..models.fields import DIRECTIVE_KEY, parse_directive
from ..models.ref import dereference, is_reference

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FieldSchema:
    """Encoding information for a single record field.

    Attributes:
        name: Attribute name on the record
        key: Dictionary key the field is written under
        omit_empty: Skip the field when its value is empty
    """

    name: str
    key: str
    omit_empty: bool

    def include(self, value: Any) -> bool:
        """Return whether a field holding value is written."""
        return not (self.omit_empty and is_empty(value))


class RecordSchema:
    """Encoding descriptor for an entire record type.

    Excluded fields are dropped when the descriptor is built; the remaining
    fields keep declaration order.

    Example:
        >>> schema = RecordSchema.from_type(Reading)
        >>> [(f.name, f.key) for f in schema.fields]
        [('sensor', 'sensor'), ('depth', 'depth_m')]
    """

    def __init__(self, record_type: Type[Any]) -> None:
        """Initialize schema from a record type.

        Args:
            record_type: Pydantic model class or dataclass type

        Raises:
            SchemaError: If the type is not a record or a directive is invalid
        """
        self.record_type = record_type
        self.fields: List[FieldSchema] = []
        self._introspect()

    @classmethod
    def from_type(cls, record_type: Type[Any]) -> RecordSchema:
        """Return the cached schema for a record type.

        Args:
            record_type: Pydantic model class or dataclass type

        Returns:
            RecordSchema instance
        """
        return _schema_for(record_type)

    def _introspect(self) -> None:
        """Introspect the record type and populate field schemas."""
        default_omit = bool(getattr(self.record_type, "tnet_omit_empty", False))

        seen: dict[str, str] = {}
        for name, default_key, directive in self._declared_fields():
            options = parse_directive(directive)
            if options.exclude:
                continue

            key = options.rename or default_key
            if key in seen:
                raise SchemaError(
                    f"{self.record_type.__name__}: fields {seen[key]!r} and {name!r} "
                    f"both map to key {key!r}"
                )
            seen[key] = name

            self.fields.append(
                FieldSchema(name=name, key=key, omit_empty=options.omit_empty or default_omit)
            )

        logger.debug(
            "Built record schema for %s: %s",
            self.record_type.__qualname__,
            [field.key for field in self.fields],
        )

    def _declared_fields(self) -> Iterator[Tuple[str, str, Any]]:
        """Yield ``(name, default_key, directive)`` for each declared field."""
        if isinstance(self.record_type, type) and issubclass(self.record_type, BaseModel):
            model_fields: dict[str, FieldInfo] = self.record_type.model_fields
            for name, field_info in model_fields.items():
                extra = field_info.json_schema_extra
                directive = extra.get(DIRECTIVE_KEY) if isinstance(extra, dict) else None
                yield name, field_info.alias or name, directive
            return

        if dataclasses.is_dataclass(self.record_type):
            for field in dataclasses.fields(self.record_type):
                yield field.name, field.name, field.metadata.get(DIRECTIVE_KEY)
            return

        raise SchemaError(f"{self.record_type!r} is not a pydantic model or dataclass")

    def items(self, record: Any) -> Iterator[Tuple[str, Any]]:
        """Yield ``(key, value)`` pairs for the fields of record that are written.

        Args:
            record: Instance of this schema's record type

        Returns:
            Iterator over included pairs, in declaration order
        """
        for field in self.fields:
            value = getattr(record, field.name)
            if field.include(value):
                yield field.key, value


@lru_cache(maxsize=None)
def _schema_for(record_type: Type[Any]) -> RecordSchema:
    return RecordSchema(record_type)


def is_record(obj: Any) -> bool:
    """Check whether obj is a record instance (not a record class)."""
    if isinstance(obj, BaseModel):
        return True
    return dataclasses.is_dataclass(obj) and not isinstance(obj, type)


def is_empty(value: Any) -> bool:
    """Check whether value is the empty value for its type.

    Empty values are None, False, zero, empty text, bytes, mappings and
    sequences, unset references, and records whose written fields are all
    empty. A record that reaches itself through its own fields is not
    empty, so encoding it fails on the circular reference instead.
    """
    return _is_empty(value, set())


def _is_empty(value: Any, path: set[int]) -> bool:
    if is_reference(value):
        value = dereference(value)
    if value is None:
        return True
    if isinstance(value, (bool, int, float)):
        return not value
    if isinstance(value, (str, bytes, bytearray, memoryview, Mapping, Sequence)):
        return len(value) == 0
    if is_record(value):
        marker = id(value)
        if marker in path:
            return False
        schema = RecordSchema.from_type(type(value))
        path.add(marker)
        try:
            return all(_is_empty(getattr(value, field.name), path) for field in schema.fields)
        finally:
            path.discard(marker)
    return False

