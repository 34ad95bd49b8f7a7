"""Encoded size calculation.

This module computes how many bytes a value will occupy once encoded, without
building the encoded output.
"""

from __future__ import annotations

from typing import Any

from ..codec.classify import classify
from ..codec.frames import render_scalar
from ..codec.values import Dictionary, List, Value


def frame_size(value: Value) -> int:
    """Return the size in bytes of the frame for a classified value.

    Args:
        value: Classified value

    Returns:
        Length prefix digits + colon + payload + tag
    """
    if isinstance(value, List):
        payload = sum(frame_size(item) for item in value.items)
    elif isinstance(value, Dictionary):
        payload = sum(_string_frame_size(key) + frame_size(item) for key, item in value.pairs)
    else:
        payload = len(render_scalar(value))
    return _framed(payload)


def encoded_size(obj: Any) -> int:
    """Calculate the encoded size of a value in bytes.

    Args:
        obj: Any encodable value

    Returns:
        ``len(dumps(obj))``

    Raises:
        UnsupportedTypeError: If obj contains an unsupported value
        EncodeError: If obj cannot be encoded

    Example:
        >>> encoded_size({"a": 1})
        11  # b'8:1:a,1:1#}'
    """
    return frame_size(classify(obj))


def field_sizes(record: Any) -> dict[str, int]:
    """Get the encoded size of each written pair of a record or mapping.

    Each entry counts both the key frame and the value frame.

    Args:
        record: Record instance or mapping

    Returns:
        Dictionary mapping keys to pair sizes in bytes, in canonical key order.
        Keys are decoded with ``surrogateescape``, so distinct key bytes stay
        distinct and ``key.encode("utf-8", "surrogateescape")`` restores them.

    Raises:
        TypeError: If record does not encode as a dictionary

    Example:
        >>> field_sizes({"a": 1, "bb": "xy"})
        {'a': 8, 'bb': 10}
    """
    value = classify(record)
    if not isinstance(value, Dictionary):
        raise TypeError(f"{type(record).__name__} does not encode as a dictionary")
    return {
        key.decode("utf-8", errors="surrogateescape"): _string_frame_size(key) + frame_size(item)
        for key, item in value.pairs
    }


def _string_frame_size(data: bytes) -> int:
    return _framed(len(data))


def _framed(payload: int) -> int:
    return len(str(payload)) + 1 + payload + 1
