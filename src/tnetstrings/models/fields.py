"""Field directives for record flattening.

A directive tells the encoder how one field of a record becomes a dictionary
pair. It can be given in two forms:

- a string, as in ``"name"``, ``"name,omitempty"``, ``",omitempty"`` or ``"-"``
- a ``FieldOptions`` instance

Pydantic models carry the directive in ``json_schema_extra`` (see
``TNetField``); dataclasses carry it in field ``metadata`` (see
``record_field``). Both store it under the ``"tnetstrings"`` key.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Any, Optional, Union, cast

from pydantic import Field
from pydantic.fields import FieldInfo

from ..exceptions import SchemaError

DIRECTIVE_KEY = "tnetstrings"

EXCLUDE = "-"
OMIT_EMPTY = "omitempty"


@dataclass(frozen=True)
class FieldOptions:
    """Parsed field directive.

    Attributes:
        rename: Dictionary key to use instead of the field name
        exclude: Drop the field entirely
        omit_empty: Drop the field when its value is empty for its type
    """

    rename: Optional[str] = None
    exclude: bool = False
    omit_empty: bool = False


def parse_directive(directive: Union[str, FieldOptions, None]) -> FieldOptions:
    """Parse a field directive into FieldOptions.

    Args:
        directive: Directive string, FieldOptions, or None for defaults

    Returns:
        Parsed options

    Raises:
        SchemaError: If the directive is malformed or names an unknown option

    Example:
        >>> parse_directive("depth_m,omitempty")
        FieldOptions(rename='depth_m', exclude=False, omit_empty=True)
        >>> parse_directive("-")
        FieldOptions(rename=None, exclude=True, omit_empty=False)
    """
    if directive is None:
        return FieldOptions()
    if isinstance(directive, FieldOptions):
        return directive
    if not isinstance(directive, str):
        raise SchemaError(
            f"field directive must be a string or FieldOptions, got {type(directive).__name__}"
        )

    if directive == EXCLUDE:
        return FieldOptions(exclude=True)

    name, *options = directive.split(",")
    omit_empty = False
    for option in options:
        if option == OMIT_EMPTY:
            omit_empty = True
        elif option:
            raise SchemaError(f"unknown field option {option!r} in directive {directive!r}")

    return FieldOptions(rename=name or None, omit_empty=omit_empty)


def _directive_value(
    rename: Optional[str], exclude: bool, omit_empty: bool
) -> Union[str, FieldOptions]:
    if exclude:
        return EXCLUDE
    return FieldOptions(rename=rename, omit_empty=omit_empty)


def TNetField(
    *,
    rename: str | None = None,
    exclude: bool = False,
    omit_empty: bool = False,
    **kwargs: Any,
) -> FieldInfo:
    """Create a pydantic field carrying a tnetstrings directive.

    This is a convenience wrapper around Pydantic's Field() that stores the
    directive in ``json_schema_extra`` where the record schema looks for it.

    Args:
        rename: Dictionary key to use instead of the field name
        exclude: Never encode this field
        omit_empty: Skip this field when its value is empty
        **kwargs: Additional Field() arguments (default, description, etc.)

    Returns:
        Pydantic FieldInfo suitable for use as a field default/metadata.

    Example:
        >>> class Reading(BaseRecord):
        ...     depth: float = TNetField(rename="depth_m")
        ...     note: str = TNetField(default="", omit_empty=True)
        ...     cache: dict = TNetField(default_factory=dict, exclude=True)
    """
    directive = _directive_value(rename, exclude, omit_empty)
    if isinstance(directive, FieldOptions):
        # pydantic only accepts JSON-like values in json_schema_extra
        directive = _options_to_string(directive)
    return cast(FieldInfo, Field(json_schema_extra={DIRECTIVE_KEY: directive}, **kwargs))


def record_field(
    *,
    rename: str | None = None,
    exclude: bool = False,
    omit_empty: bool = False,
    **kwargs: Any,
) -> Any:
    """Create a dataclass field carrying a tnetstrings directive.

    Args:
        rename: Dictionary key to use instead of the field name
        exclude: Never encode this field
        omit_empty: Skip this field when its value is empty
        **kwargs: Additional dataclasses.field() arguments

    Returns:
        A dataclasses.Field

    Example:
        >>> @dataclass
        ... class Ping:
        ...     seq: int = record_field(rename="n")
        ...     payload: bytes = record_field(default=b"", omit_empty=True)
    """
    metadata = dict(kwargs.pop("metadata", None) or {})
    metadata[DIRECTIVE_KEY] = _directive_value(rename, exclude, omit_empty)
    return dataclasses.field(metadata=metadata, **kwargs)


def _options_to_string(options: FieldOptions) -> str:
    if options.exclude:
        return EXCLUDE
    directive = options.rename or ""
    if options.omit_empty:
        directive += "," + OMIT_EMPTY
    return directive
