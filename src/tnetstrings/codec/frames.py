"""Frame-level writing of tnetstrings values.

This module renders classified values as ``<length>:<payload><tag>`` frames.
Scalars go straight to the sink; lists and dictionaries are assembled in an
in-memory buffer first so the outer length prefix is known before anything of
the composite reaches the sink.
"""

from __future__ import annotations

import io
from typing import Protocol

from .values import NULL, Boolean, Dictionary, Float, Integer, List, Null, String, Tag, Value

# Fractional digits in a float payload. Lossy for most values.
FLOAT_PRECISION = 6


class Sink(Protocol):
    """Anything that accepts bytes through ``write``."""

    def write(self, data: bytes) -> object: ...


def render_float(value: float) -> bytes:
    """Render a float payload with FLOAT_PRECISION fractional digits.

    Example:
        >>> render_float(3.14159265)
        b'3.141593'
    """
    return f"{value:.{FLOAT_PRECISION}f}".encode("ascii")


def render_scalar(value: Value) -> bytes:
    """Return the payload bytes of a scalar value.

    Raises:
        TypeError: If value is a List or Dictionary
    """
    if isinstance(value, String):
        return value.value
    if isinstance(value, Boolean):
        return b"true" if value.value else b"false"
    if isinstance(value, Integer):
        return str(value.value).encode("ascii")
    if isinstance(value, Float):
        return render_float(value.value)
    if isinstance(value, Null):
        return b""
    raise TypeError(f"not a scalar value: {type(value).__name__}")


class FrameWriter:
    """Writes value frames to a sink.

    The writer never reads, seeks, flushes or closes the sink; errors raised
    by ``sink.write`` propagate unchanged. A sink that reports a short write
    is called again with the rest of the frame.

    Example:
        >>> buffer = io.BytesIO()
        >>> writer = FrameWriter(buffer)
        >>> writer.write_integer(123)
        >>> writer.write_null()
        >>> buffer.getvalue()
        b'3:123#0:~'
    """

    def __init__(self, sink: Sink) -> None:
        """Initialize a writer over sink.

        Args:
            sink: Destination with a ``write(bytes)`` method
        """
        self.sink = sink

    def write_frame(self, payload: bytes, tag: Tag) -> None:
        """Write one frame around an already rendered payload.

        Args:
            payload: Frame payload
            tag: Trailing type byte

        Raises:
            OSError: If the sink accepts no bytes before the frame is complete
        """
        data = b"%d:%s%s" % (len(payload), payload, tag.value)
        written = self.sink.write(data)

        # Raw sinks return the count they took, which may be short
        remaining = memoryview(data)
        while isinstance(written, int) and written < len(remaining):
            if written <= 0:
                raise OSError(
                    f"sink accepted no bytes with {len(remaining)} of {len(data)} left to write"
                )
            remaining = remaining[written:]
            written = self.sink.write(remaining)

    def write_string(self, data: bytes) -> None:
        self.write_frame(data, Tag.STRING)

    def write_integer(self, value: int) -> None:
        self.write_value(Integer(value))

    def write_float(self, value: float) -> None:
        self.write_value(Float(value))

    def write_boolean(self, value: bool) -> None:
        self.write_value(Boolean(value))

    def write_null(self) -> None:
        self.write_value(NULL)

    def write_list(self, value: List) -> None:
        """Write a list frame, children in order."""
        buffer = io.BytesIO()
        child = FrameWriter(buffer)
        for item in value.items:
            child.write_value(item)
        self.write_frame(buffer.getvalue(), Tag.LIST)

    def write_dictionary(self, value: Dictionary) -> None:
        """Write a dictionary frame as alternating key and value frames.

        Pairs are written in the dictionary's canonical (key-sorted) order.
        """
        buffer = io.BytesIO()
        child = FrameWriter(buffer)
        for key, item in value.pairs:
            child.write_string(key)
            child.write_value(item)
        self.write_frame(buffer.getvalue(), Tag.DICTIONARY)

    def write_value(self, value: Value) -> None:
        """Dispatch value to the writer for its variant.

        Args:
            value: Classified value

        Raises:
            TypeError: If value is not one of the seven variants
        """
        if isinstance(value, List):
            self.write_list(value)
        elif isinstance(value, Dictionary):
            self.write_dictionary(value)
        else:
            self.write_frame(render_scalar(value), value.tag)
