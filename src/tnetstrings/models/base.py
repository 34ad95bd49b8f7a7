"""Base record class and tnetstrings-specific Pydantic configuration.

This module provides the BaseRecord class that records may inherit from.
Any pydantic model or dataclass is encodable; BaseRecord only adds a sensible
model configuration and the class-level encoding options.
"""

from __future__ import annotations

from typing import ClassVar

from pydantic import BaseModel, ConfigDict


class BaseRecord(BaseModel):
    """Base class for pydantic records encoded as tnetstrings dictionaries.

    Fields become dictionary pairs. Per-field directives are set with
    ``TNetField`` (rename, exclude, omit_empty); record-wide options are
    ClassVar attributes.

    Example:
        >>> class Reading(BaseRecord):
        ...     sensor: str
        ...     depth: float = TNetField(rename="depth_m")
        ...     note: Optional[str] = None
        ...
        ...     tnet_omit_empty: ClassVar[bool] = True
        >>> dumps(Reading(sensor="ctd", depth=12.5))
        b'37:7:depth_m,9:12.500000^6:sensor,3:ctd,}'

    Attributes:
        tnet_omit_empty: Omit every field whose value is empty, as if each
            field had ``omit_empty=True``
    """

    model_config = ConfigDict(
        # Allow arbitrary types (Ref, nested dataclasses)
        arbitrary_types_allowed=True,
        # Validate on assignment
        validate_assignment=True,
        # Forbid extra fields not defined in schema
        extra="forbid",
        # Accept both field names and aliases on construction
        populate_by_name=True,
    )

    tnet_omit_empty: ClassVar[bool] = False
