"""Closed value model for tnetstrings.

Every encodable value is classified into exactly one of seven variants before
any byte is written. Each variant is a frozen dataclass; ``Value`` is their
union. The tag byte that terminates a frame lives on the ``Tag`` enum.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Tuple, Union

from ..exceptions import EncodeError


class Tag(bytes, enum.Enum):
    """Trailing type byte of a tnetstrings frame."""

    STRING = b","
    INTEGER = b"#"
    FLOAT = b"^"
    BOOLEAN = b"!"
    NULL = b"~"
    DICTIONARY = b"}"
    LIST = b"]"


@dataclass(frozen=True)
class String:
    """Raw byte string (text is stored UTF-8 encoded).

    Attributes:
        value: Payload bytes
    """

    value: bytes
    tag = Tag.STRING


@dataclass(frozen=True)
class Integer:
    """Whole number of arbitrary size."""

    value: int
    tag = Tag.INTEGER


@dataclass(frozen=True)
class Float:
    """Floating-point number, rendered with six fractional digits."""

    value: float
    tag = Tag.FLOAT


@dataclass(frozen=True)
class Boolean:
    value: bool
    tag = Tag.BOOLEAN


@dataclass(frozen=True)
class Null:
    tag = Tag.NULL


@dataclass(frozen=True)
class List:
    """Ordered sequence of values.

    Attributes:
        items: Child values in encoding order
    """

    items: Tuple[Value, ...] = ()
    tag = Tag.LIST


@dataclass(frozen=True)
class Dictionary:
    """Key/value pairs with unique byte-string keys.

    Pairs are kept in canonical order: ascending by key bytes. Use
    ``Dictionary.from_pairs`` to build one from unordered input.

    Attributes:
        pairs: ``(key, value)`` tuples sorted by key
    """

    pairs: Tuple[Tuple[bytes, Value], ...] = ()
    tag = Tag.DICTIONARY

    @classmethod
    def from_pairs(cls, pairs: list[tuple[bytes, Value]]) -> Dictionary:
        """Sort pairs by key and build a dictionary.

        Args:
            pairs: ``(key, value)`` tuples in any order

        Returns:
            Dictionary with pairs in canonical order

        Raises:
            EncodeError: If two pairs share a key
        """
        ordered = sorted(pairs, key=lambda pair: pair[0])
        for previous, current in zip(ordered, ordered[1:]):
            if previous[0] == current[0]:
                raise EncodeError(f"duplicate dictionary key: {current[0]!r}")
        return cls(tuple(ordered))


Value = Union[String, Integer, Float, Boolean, Null, List, Dictionary]

NULL = Null()
