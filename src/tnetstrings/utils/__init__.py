"""Utility functions for tnetstrings.

This module provides encoded size calculation.
"""

from __future__ import annotations

from .sizing import encoded_size, field_sizes, frame_size

__all__ = [
    "encoded_size",
    "field_sizes",
    "frame_size",
]
