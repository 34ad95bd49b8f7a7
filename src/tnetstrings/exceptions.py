"""Exception hierarchy for tnetstrings.

This module defines all custom exceptions used throughout the package.
All exceptions inherit from TnetstringsError for easy catching of any
tnetstrings-specific error.

Errors raised by the output sink itself (``OSError``, ``BrokenPipeError``, ...)
are not part of this hierarchy: they reach the caller unchanged.
"""

from __future__ import annotations

from typing import Any


class TnetstringsError(Exception):
    """Base exception for all tnetstrings errors."""

    pass


class SchemaError(TnetstringsError):
    """Raised when a record declaration cannot be turned into a descriptor.

    Examples:
        - Unknown option in a field directive (e.g. ``"name,bogus"``)
        - Malformed directive value (not a string or FieldOptions)
        - Two fields mapped to the same dictionary key
    """

    pass


class EncodeError(TnetstringsError):
    """Raised when a value cannot be encoded.

    Examples:
        - Non-finite float (``nan``, ``inf``)
        - Two dictionary keys collapsing to the same bytes
        - Circular reference between containers
    """

    pass


class UnsupportedTypeError(EncodeError, TypeError):
    """Raised when a value's type has no tnetstrings representation.

    Attributes:
        type: The offending Python type
        context: Where the value was found (e.g. ``"dictionary key"``), if known
    """

    def __init__(self, type_: type[Any], context: str | None = None) -> None:
        self.type = type_
        self.context = context
        name = f"{type_.__module__}.{type_.__qualname__}"
        if type_.__module__ == "builtins":
            name = type_.__qualname__
        message = f"unsupported type: {name}"
        if context:
            message = f"{message} (as {context})"
        super().__init__(message)
