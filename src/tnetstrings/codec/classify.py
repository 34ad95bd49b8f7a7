"""Classification of Python values into the tnetstrings value model.

``classify`` walks a whole value tree up front and returns the matching
``Value`` tree. Nothing is written until classification succeeds, so an
unsupported value anywhere in the tree leaves the output sink untouched.
"""

from __future__ import annotations

import enum
import math
from collections.abc import Mapping, Sequence
from typing import Any, Callable, Iterable, Tuple

from ..exceptions import EncodeError, UnsupportedTypeError
from ..models.ref import dereference, is_reference
from .schema import RecordSchema, is_record
from .values import NULL, Boolean, Dictionary, Float, Integer, List, String, Value

_TEXT = (str, bytes, bytearray, memoryview)


def classify(obj: Any) -> Value:
    """Classify a Python value into the tnetstrings value model.

    Dictionary keys follow the same text rule as string values: ``str`` is
    written as UTF-8 and ``bytes``, ``bytearray`` and ``memoryview`` as their
    raw bytes. Any other key type is unsupported.

    Args:
        obj: Value to classify

    Returns:
        The equivalent Value tree

    Raises:
        UnsupportedTypeError: If obj (or anything nested in it) has no
            tnetstrings representation
        EncodeError: If a float is not finite, two dictionary keys collide,
            or containers reference each other in a cycle

    Example:
        >>> classify([1, "a"])
        List(items=(Integer(value=1), String(value=b'a')))
    """
    return _Classifier().classify(obj)


class _Classifier:
    """Single-use classifier tracking the containers on the current path."""

    def __init__(self) -> None:
        self._path: set[int] = set()

    def classify(self, obj: Any) -> Value:
        if is_reference(obj):
            obj = dereference(obj)

        if obj is None:
            return NULL

        # bool is a subclass of int
        if isinstance(obj, bool):
            return Boolean(obj)
        if isinstance(obj, int):
            return Integer(int(obj))
        if isinstance(obj, float):
            if not math.isfinite(obj):
                raise EncodeError(f"cannot encode non-finite float {obj!r}")
            return Float(float(obj))
        if isinstance(obj, _TEXT):
            return String(_to_bytes(obj))
        if isinstance(obj, enum.Enum):
            return self.classify(obj.value)

        if is_record(obj):
            schema = RecordSchema.from_type(type(obj))
            return self._enter(obj, lambda: self._dictionary(schema.items(obj)))
        if isinstance(obj, Mapping):
            return self._enter(obj, lambda: self._dictionary(obj.items()))
        if isinstance(obj, Sequence):
            return self._enter(obj, lambda: List(tuple(self.classify(item) for item in obj)))

        raise UnsupportedTypeError(type(obj))

    def _enter(self, container: Any, build: Callable[[], Value]) -> Value:
        marker = id(container)
        if marker in self._path:
            raise EncodeError(f"circular reference to {type(container).__name__}")
        self._path.add(marker)
        try:
            value: Value = build()
        finally:
            self._path.discard(marker)
        return value

    def _dictionary(self, items: Iterable[Tuple[Any, Any]]) -> Dictionary:
        pairs = []
        for key, value in items:
            if not isinstance(key, _TEXT):
                raise UnsupportedTypeError(type(key), "dictionary key")
            pairs.append((_to_bytes(key), self.classify(value)))
        return Dictionary.from_pairs(pairs)


def _to_bytes(text: Any) -> bytes:
    if isinstance(text, str):
        return text.encode("utf-8")
    return bytes(text)
