"""Record modeling for tnetstrings.

This module provides the BaseRecord class, field directives used when
flattening records into dictionaries, and the Ref optional wrapper.
"""

from __future__ import annotations

from .base import BaseRecord
from .fields import FieldOptions, TNetField, parse_directive, record_field
from .ref import Ref

__all__ = [
    "BaseRecord",
    "FieldOptions",
    "Ref",
    "TNetField",
    "parse_directive",
    "record_field",
]
