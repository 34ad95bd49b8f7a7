"""Explicit optional/reference wrapper.

``Ref`` makes "maybe a value" a first-class thing the classifier understands:
a set reference encodes exactly like its target, an unset one encodes as null.
``weakref.ref`` objects are treated the same way.
"""

from __future__ import annotations

import weakref
from typing import Any, Generic, Optional, TypeVar

T = TypeVar("T")

_UNSET: Any = object()


class Ref(Generic[T]):
    """Holds a value or nothing.

    Example:
        >>> dumps(Ref(5))
        b'1:5#'
        >>> dumps(Ref())
        b'0:~'
    """

    __slots__ = ("_target",)

    def __init__(self, target: T = _UNSET) -> None:
        self._target = target

    @property
    def is_set(self) -> bool:
        return self._target is not _UNSET

    def get(self) -> Optional[T]:
        """Return the referenced value, or None when unset."""
        if self._target is _UNSET:
            return None
        return self._target

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Ref):
            return NotImplemented
        return self.is_set == other.is_set and self.get() == other.get()

    def __hash__(self) -> int:
        return hash((Ref, self.get()))

    def __repr__(self) -> str:
        if not self.is_set:
            return "Ref()"
        return f"Ref({self._target!r})"


def is_reference(obj: Any) -> bool:
    """Check whether obj is a reference wrapper the classifier unwraps."""
    return isinstance(obj, (Ref, weakref.ReferenceType))


def dereference(obj: Any) -> Any:
    """Follow reference wrappers until reaching a plain value.

    Unset ``Ref`` objects and dead weak references dereference to None.
    """
    while is_reference(obj):
        obj = obj.get() if isinstance(obj, Ref) else obj()
    return obj
