#!/usr/bin/env python3
"""Basic usage example for tnetstrings.

This example demonstrates:
1. Encoding plain Python values
2. Defining a record with Pydantic and field directives
3. Streaming several frames to a file
4. Calculating encoded sizes
"""

from __future__ import annotations

import tempfile
from pathlib import Path
from typing import ClassVar, List

from pydantic import Field

from tnetstrings import BaseRecord, Encoder, TNetField, dumps, encoded_size, field_sizes


class StatusReport(BaseRecord):
    """Underwater vehicle status report."""

    vehicle_id: int = Field(ge=0, le=255, description="Vehicle ID (0-255)")
    depth_cm: int = TNetField(rename="depth", description="Depth in centimeters")
    battery_pct: int = Field(ge=0, le=100, description="Battery percentage (0-100)")
    active: bool = Field(description="Vehicle active flag")
    faults: List[str] = TNetField(default_factory=list, omit_empty=True)
    scratch: str = TNetField(default="", exclude=True)

    tnet_omit_empty: ClassVar[bool] = False


def main() -> None:
    """Run the basic usage example."""
    print("=" * 60)
    print("tnetstrings Basic Usage Example")
    print("=" * 60)
    print()

    print("1. Encoding plain values...")
    for value in ["hello", 123, 2.5, True, None, [1, 2, 3], {"b": 2, "a": 1}]:
        print(f"   {value!r:>20} -> {dumps(value)!r}")
    print()

    print("2. Encoding a record...")
    msg = StatusReport(vehicle_id=42, depth_cm=2500, battery_pct=87, active=True)
    data = dumps(msg)
    print(f"   {data!r}")
    print()

    print("3. Analyzing sizes...")
    for key, size in field_sizes(msg).items():
        print(f"   {key}: {size} bytes")
    print(f"   Total: {encoded_size(msg)} bytes")
    print()

    print("4. Streaming frames to a file...")
    with tempfile.TemporaryDirectory() as tmp:
        path = Path(tmp) / "reports.tnet"
        with open(path, "wb") as fp:
            encoder = Encoder(fp)
            for depth in (1000, 1500, 2000):
                encoder.encode(msg.model_copy(update={"depth_cm": depth}))
        print(f"   Wrote {path.stat().st_size} bytes")
    print()

    print("=" * 60)
    print("Done")
    print("=" * 60)


if __name__ == "__main__":
    main()
