"""tnetstrings: canonical tnetstrings encoder

A Python library that encodes Python values as tnetstrings, a length-prefixed,
self-describing serialization format where every value is framed as
``<length>:<payload><tag>``.

Key Features:
- Canonical output (dictionary keys sorted, floats fixed at six digits)
- Pydantic models and dataclasses flattened into dictionaries
- Per-field rename / exclude / omit-empty directives
- Streaming Encoder over any binary sink

Quick Start:
    >>> from tnetstrings import BaseRecord, TNetField, dumps
    >>>
    >>> class Ping(BaseRecord):
    ...     seq: int
    ...     body: str = TNetField(default="", omit_empty=True)
    >>>
    >>> dumps(Ping(seq=7))
    b'10:3:seq,1:7#}'
    >>> dumps({"b": [1, 2.5, None], "a": True})
    b'37:1:a,4:true!1:b,18:1:1#8:2.500000^0:~]}'

Wire format: http://tnetstrings.info/
"""

from __future__ import annotations

from .codec import (
    FLOAT_PRECISION,
    Boolean,
    Dictionary,
    Encoder,
    FieldSchema,
    Float,
    Integer,
    List,
    Null,
    RecordSchema,
    String,
    Tag,
    Value,
    classify,
    dump,
    dumps,
    encode,
)
from .exceptions import EncodeError, SchemaError, TnetstringsError, UnsupportedTypeError
from .models import BaseRecord, FieldOptions, Ref, TNetField, parse_directive, record_field
from .utils import encoded_size, field_sizes

__version__ = "0.1.0"

__all__ = [
    # Core API
    "Encoder",
    "encode",
    "dump",
    "dumps",
    "classify",
    "FLOAT_PRECISION",
    # Records
    "BaseRecord",
    "TNetField",
    "record_field",
    "FieldOptions",
    "parse_directive",
    "RecordSchema",
    "FieldSchema",
    "Ref",
    # Value model
    "Tag",
    "Value",
    "String",
    "Integer",
    "Float",
    "Boolean",
    "Null",
    "List",
    "Dictionary",
    # Exceptions
    "TnetstringsError",
    "SchemaError",
    "EncodeError",
    "UnsupportedTypeError",
    # Sizing
    "encoded_size",
    "field_sizes",
    # Version
    "__version__",
]
