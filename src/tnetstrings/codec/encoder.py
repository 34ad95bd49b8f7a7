"""tnetstrings encoder.

This module provides the Encoder class and the ``dump``/``dumps``/``encode``
functions that convert Python values to tnetstrings frames.
"""

from __future__ import annotations

import io
import logging
from typing import Any

from .classify import classify
from .frames import FrameWriter, Sink

logger = logging.getLogger(__name__)


class Encoder:
    """Streaming tnetstrings encoder bound to an output sink.

    Each ``encode`` call classifies the complete value first and only then
    writes its frame, so a value that cannot be encoded writes nothing.
    Frames from earlier calls stay in the sink.

    Instances hold no state besides the sink. Encoders over distinct sinks
    can be used from different threads; sharing one sink is the caller's
    responsibility.

    Example:
        >>> buffer = io.BytesIO()
        >>> encoder = Encoder(buffer)
        >>> encoder.encode({"a": 1})
        >>> encoder.encode([1, 2, 3])
        >>> buffer.getvalue()
        b'8:1:a,1:1#}12:1:1#1:2#1:3#]'
    """

    def __init__(self, sink: Sink) -> None:
        """Initialize an encoder.

        Args:
            sink: Destination with a ``write(bytes)`` method (file opened in
                binary mode, socket file, ``io.BytesIO``, ...)
        """
        self.sink = sink
        self._writer = FrameWriter(sink)

    def encode(self, obj: Any) -> None:
        """Encode obj and write it to the sink as one frame.

        Args:
            obj: Value to encode

        Raises:
            UnsupportedTypeError: If obj contains a value with no
                tnetstrings representation
            EncodeError: If obj contains a non-finite float, colliding
                dictionary keys, or a circular reference
            SchemaError: If a record type in obj has invalid field directives
            OSError: Whatever the sink raises, unchanged
        """
        value = classify(obj)
        self._writer.write_value(value)


def dump(obj: Any, fp: Sink) -> None:
    """Encode obj as a tnetstring and write it to fp.

    Args:
        obj: Value to encode
        fp: Destination with a ``write(bytes)`` method

    Raises:
        UnsupportedTypeError: If obj contains an unsupported value
        EncodeError: If obj cannot be encoded
    """
    Encoder(fp).encode(obj)


def dumps(obj: Any) -> bytes:
    """Encode obj as a tnetstring.

    Args:
        obj: Value to encode. Supported: None, bool, int, float, str, bytes,
            bytearray, memoryview, enum members, mappings with str/bytes keys,
            sequences, pydantic models, dataclasses, Ref and weakref.ref

    Returns:
        Encoded frame

    Raises:
        UnsupportedTypeError: If obj contains an unsupported value
        EncodeError: If obj cannot be encoded

    Examples:
        ```python
        from tnetstrings import dumps

        dumps("hello")        # b'5:hello,'
        dumps(123)            # b'3:123#'
        dumps(True)           # b'4:true!'
        dumps(None)           # b'0:~'
        dumps([1, 2, 3])      # b'12:1:1#1:2#1:3#]'
        dumps({"a": 1})       # b'8:1:a,1:1#}'
        ```
    """
    buffer = io.BytesIO()
    Encoder(buffer).encode(obj)
    encoded = buffer.getvalue()
    logger.debug("Encoded %s as %d bytes", type(obj).__name__, len(encoded))
    return encoded


encode = dumps
