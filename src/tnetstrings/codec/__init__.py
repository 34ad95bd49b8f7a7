"""tnetstrings codec.

This module provides value classification, the value model, record
descriptors and the encoder itself.
"""

from __future__ import annotations

from .classify import classify
from .encoder import Encoder, dump, dumps, encode
from .frames import FLOAT_PRECISION, FrameWriter
from .schema import FieldSchema, RecordSchema
from .values import Boolean, Dictionary, Float, Integer, List, Null, String, Tag, Value

__all__ = [
    "Encoder",
    "encode",
    "dump",
    "dumps",
    "classify",
    "FrameWriter",
    "FLOAT_PRECISION",
    "RecordSchema",
    "FieldSchema",
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
]
