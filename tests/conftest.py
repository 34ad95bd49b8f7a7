"""Pytest configuration and shared fixtures."""

from __future__ import annotations

from typing import Any

import pytest


def read_frame(data: bytes) -> tuple[Any, bytes]:
    """Parse one frame from the front of data, checking the length contract.

    Test-only reader for the wire format: returns the decoded value and the
    remaining bytes. Strings come back as bytes, dictionaries as a list of
    ``(key, value)`` pairs in wire order so key ordering can be asserted.
    """
    length_text, sep, rest = data.partition(b":")
    assert sep == b":", f"missing ':' in {data!r}"
    assert length_text.isdigit(), f"bad length prefix {length_text!r}"
    assert length_text == b"0" or not length_text.startswith(b"0"), "leading zero in length"

    length = int(length_text)
    assert len(rest) > length, f"frame shorter than declared length {length}"
    payload, tag, remaining = rest[:length], rest[length : length + 1], rest[length + 1 :]

    if tag == b",":
        return payload, remaining
    if tag == b"#":
        return int(payload), remaining
    if tag == b"^":
        return float(payload), remaining
    if tag == b"!":
        assert payload in (b"true", b"false")
        return payload == b"true", remaining
    if tag == b"~":
        assert payload == b""
        return None, remaining
    if tag == b"]":
        items = []
        while payload:
            item, payload = read_frame(payload)
            items.append(item)
        return items, remaining
    if tag == b"}":
        pairs = []
        while payload:
            key, payload = read_frame(payload)
            assert isinstance(key, bytes), "dictionary key is not a string frame"
            value, payload = read_frame(payload)
            pairs.append((key, value))
        return pairs, remaining
    raise AssertionError(f"unknown tag {tag!r}")


def read_single(data: bytes) -> Any:
    """Parse data that must hold exactly one frame."""
    value, rest = read_frame(data)
    assert rest == b"", f"trailing bytes after frame: {rest!r}"
    return value


class BrokenSink:
    """Sink that fails on every write."""

    def __init__(self, error: Exception) -> None:
        self.error = error
        self.calls = 0

    def write(self, data: bytes) -> int:
        self.calls += 1
        raise self.error


class RecordingSink:
    """Sink that records every write call."""

    def __init__(self) -> None:
        self.writes: list[bytes] = []

    def write(self, data: bytes) -> int:
        self.writes.append(bytes(data))
        return len(data)

    def getvalue(self) -> bytes:
        return b"".join(self.writes)


class TrickleSink(RecordingSink):
    """Raw-style sink that accepts at most limit bytes per write."""

    def __init__(self, limit: int) -> None:
        super().__init__()
        self.limit = limit

    def write(self, data: bytes) -> int:
        accepted = bytes(data[: self.limit])
        self.writes.append(accepted)
        return len(accepted)


@pytest.fixture
def recording_sink() -> RecordingSink:
    """Fresh sink recording every write."""
    return RecordingSink()


@pytest.fixture
def sample_payload() -> bytes:
    """Sample binary payload with non-ASCII bytes."""
    return b"\x00\xffHello, tnetstrings!\x80"


@pytest.fixture(scope="session")
def parse() -> Any:
    """Reader for a single encoded frame (see read_single)."""
    return read_single


@pytest.fixture(scope="session")
def parse_prefix() -> Any:
    """Reader for the first frame of a stream (see read_frame)."""
    return read_frame


@pytest.fixture
def broken_sink() -> BrokenSink:
    """Sink whose writes fail with BrokenPipeError."""
    return BrokenSink(BrokenPipeError(32, "Broken pipe"))


@pytest.fixture
def trickle_sink() -> TrickleSink:
    """Sink that takes only four bytes per write call."""
    return TrickleSink(4)
