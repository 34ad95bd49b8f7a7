"""Unit tests for classification and encoding."""

from __future__ import annotations

import enum
import io
import weakref
from collections import OrderedDict
from typing import Any, Callable

import pytest

from tnetstrings import (
    Dictionary,
    Encoder,
    EncodeError,
    Integer,
    List,
    Null,
    Ref,
    String,
    TnetstringsError,
    UnsupportedTypeError,
    classify,
    dump,
    dumps,
    encode,
)


class Color(enum.Enum):
    """Test enum."""

    RED = "red"
    GREEN = 2


class Level(enum.IntEnum):
    LOW = 1
    HIGH = 9


class Target:
    """Weak-referenceable object holding nothing encodable."""


class TestScalars:
    """Test scalar encoding."""

    def test_string(self) -> None:
        assert dumps("hello") == b"5:hello,"

    def test_integer(self) -> None:
        assert dumps(123) == b"3:123#"
        assert dumps(-7) == b"2:-7#"

    def test_boolean(self) -> None:
        """Test booleans are not encoded as integers."""
        assert dumps(True) == b"4:true!"
        assert dumps(False) == b"5:false!"

    def test_null(self) -> None:
        assert dumps(None) == b"0:~"

    def test_float(self) -> None:
        assert dumps(1.5) == b"8:1.500000^"
        assert dumps(-0.125) == b"9:-0.125000^"

    def test_multibyte_text_uses_byte_length(self) -> None:
        """Test the length prefix counts UTF-8 bytes, not characters."""
        assert dumps("héllo") == "6:héllo,".encode("utf-8")
        assert dumps("日本") == b"6:" + "日本".encode("utf-8") + b","

    def test_bytes(self, sample_payload: bytes) -> None:
        """Test byte blobs encode as strings."""
        expected = b"%d:%s," % (len(sample_payload), sample_payload)
        assert dumps(sample_payload) == expected
        assert dumps(bytearray(sample_payload)) == expected
        assert dumps(memoryview(sample_payload)) == expected

    def test_enum_uses_value(self) -> None:
        assert dumps(Color.RED) == b"3:red,"
        assert dumps(Color.GREEN) == b"1:2#"
        assert dumps(Level.HIGH) == b"1:9#"

    @pytest.mark.parametrize("value", [float("nan"), float("inf"), float("-inf")])
    def test_non_finite_float(self, value: float) -> None:
        with pytest.raises(EncodeError, match="non-finite"):
            dumps(value)


class TestComposites:
    """Test list and dictionary encoding."""

    def test_list(self) -> None:
        assert dumps([1, 2, 3]) == b"12:1:1#1:2#1:3#]"

    def test_tuple_is_list(self) -> None:
        assert dumps((1, 2, 3)) == dumps([1, 2, 3])

    def test_empty(self) -> None:
        assert dumps([]) == b"0:]"
        assert dumps({}) == b"0:}"

    def test_dictionary(self) -> None:
        assert dumps({"a": 1}) == b"8:1:a,1:1#}"

    def test_dictionary_keys_sorted(self) -> None:
        """Test pairs are written in ascending key order."""
        assert dumps({"b": 2, "a": 1}) == b"16:1:a,1:1#1:b,1:2#}"

    def test_dictionary_order_independent(self) -> None:
        forward = OrderedDict([("x", 1), ("y", [True]), ("z", None)])
        backward = OrderedDict(reversed(list(forward.items())))
        assert dumps(forward) == dumps(backward)

    def test_bytes_keys(self) -> None:
        assert dumps({b"a": 1}) == dumps({"a": 1})

    def test_byte_view_keys(self) -> None:
        """Test memoryview keys are accepted like bytes values."""
        assert dumps({memoryview(b"a"): 1}) == dumps({"a": 1})
        assert classify({memoryview(b"k"): None}) == Dictionary(((b"k", Null()),))

    def test_colliding_keys(self) -> None:
        """Test a str key and a bytes key with the same bytes collide."""
        with pytest.raises(EncodeError, match="duplicate dictionary key"):
            dumps({"a": 1, b"a": 2})

    @pytest.mark.parametrize("key", [1, 1.5, None, (1, 2), True])
    def test_non_text_keys_rejected(self, key: Any) -> None:
        with pytest.raises(UnsupportedTypeError, match="dictionary key") as excinfo:
            dumps({key: "value"})
        assert excinfo.value.type is type(key)
        assert excinfo.value.context == "dictionary key"

    def test_nested(self) -> None:
        value = {"list": [1, "two", 3.0, None], "flag": False}
        assert dumps(value) == (
            b"50:4:flag,5:false!4:list,24:1:1#3:two,8:3.000000^0:~]}"
        )

    def test_circular_reference(self) -> None:
        value: list[Any] = [1]
        value.append(value)
        with pytest.raises(EncodeError, match="circular reference"):
            dumps(value)

    def test_shared_child_is_not_circular(self) -> None:
        """Test the same object may appear twice when it is not its own ancestor."""
        shared = [1]
        assert dumps([shared, shared]) == b"14:4:1:1#]4:1:1#]]"


class TestReferences:
    """Test optional/reference unwrapping."""

    def test_set_ref(self) -> None:
        assert dumps(Ref(5)) == b"1:5#"
        assert dumps(Ref([1])) == dumps([1])

    def test_unset_ref_is_null(self) -> None:
        assert dumps(Ref()) == b"0:~"

    def test_ref_to_none_is_null(self) -> None:
        assert dumps(Ref(None)) == b"0:~"

    def test_nested_refs(self) -> None:
        assert dumps(Ref(Ref("x"))) == b"1:x,"
        assert dumps(Ref(Ref())) == b"0:~"

    def test_weakref(self) -> None:
        """Test live weak references unwrap and dead ones collapse to null."""

        class Box(dict):  # dict itself is not weak-referenceable
            pass

        box = Box(a=1)
        ref = weakref.ref(box)
        assert dumps(ref) == b"8:1:a,1:1#}"

        del box
        assert dumps(ref) == b"0:~"

    def test_ref_equality(self) -> None:
        assert Ref(1) == Ref(1)
        assert Ref() != Ref(None)
        assert repr(Ref()) == "Ref()"
        assert repr(Ref("a")) == "Ref('a')"


class TestUnsupported:
    """Test unsupported value handling."""

    @pytest.mark.parametrize(
        ("value", "type_name"),
        [
            (lambda: None, "function"),
            (1 + 2j, "complex"),
            ({1, 2}, "set"),
            (object(), "object"),
            (Target(), "Target"),
        ],
    )
    def test_unsupported_type(self, value: Any, type_name: str) -> None:
        with pytest.raises(UnsupportedTypeError, match=type_name) as excinfo:
            dumps(value)
        assert excinfo.value.type is type(value)

    def test_unsupported_is_type_error(self) -> None:
        """Test UnsupportedTypeError fits both hierarchies."""
        with pytest.raises(TypeError):
            dumps(1j)
        with pytest.raises(TnetstringsError):
            dumps(1j)

    def test_nested_unsupported_writes_nothing(self, recording_sink: Any) -> None:
        """Test a failure deep in a composite leaves the sink untouched."""
        with pytest.raises(UnsupportedTypeError):
            Encoder(recording_sink).encode({"a": "ok", "b": [1, 2, print]})
        assert recording_sink.writes == []

    def test_top_level_unsupported_writes_nothing(self, recording_sink: Any) -> None:
        with pytest.raises(UnsupportedTypeError, match="function"):
            Encoder(recording_sink).encode(lambda: 1)
        assert recording_sink.writes == []


class TestEncoder:
    """Test the streaming Encoder."""

    def test_multiple_frames(self) -> None:
        buffer = io.BytesIO()
        encoder = Encoder(buffer)
        encoder.encode({"a": 1})
        encoder.encode([1, 2, 3])
        assert buffer.getvalue() == b"8:1:a,1:1#}12:1:1#1:2#1:3#]"

    def test_earlier_frames_survive_failure(self) -> None:
        """Test frames from earlier calls are not rolled back."""
        buffer = io.BytesIO()
        encoder = Encoder(buffer)
        encoder.encode("keep")
        with pytest.raises(UnsupportedTypeError):
            encoder.encode([object()])
        assert buffer.getvalue() == b"4:keep,"

    def test_sink_errors_propagate_unchanged(self, broken_sink: Any) -> None:
        with pytest.raises(BrokenPipeError) as excinfo:
            Encoder(broken_sink).encode([1, 2])
        assert excinfo.value is broken_sink.error
        assert broken_sink.calls == 1

    def test_sink_is_not_closed(self) -> None:
        buffer = io.BytesIO()
        dump("x", buffer)
        assert not buffer.closed
        assert buffer.getvalue() == b"1:x,"

    def test_dump_to_file(self, tmp_path: Any) -> None:
        path = tmp_path / "out.tnet"
        with open(path, "wb") as fp:
            dump({"k": [None]}, fp)
        assert path.read_bytes() == dumps({"k": [None]})

    def test_encode_alias(self) -> None:
        assert encode is dumps

    def test_short_writes_are_completed(
        self, trickle_sink: Any, parse_prefix: Callable[[bytes], Any]
    ) -> None:
        """Test a sink taking a few bytes per call still receives whole frames."""
        encoder = Encoder(trickle_sink)
        encoder.encode([1, 2, 3])
        assert trickle_sink.getvalue() == b"12:1:1#1:2#1:3#]"
        assert len(trickle_sink.writes) == 4

        encoder.encode({"key": "value"})
        first, rest = parse_prefix(trickle_sink.getvalue())
        assert first == [1, 2, 3]
        assert parse_prefix(rest) == ([(b"key", b"value")], b"")


class TestClassify:
    """Test classification into the value model."""

    def test_scalars(self) -> None:
        assert classify("a") == String(b"a")
        assert classify(1) == Integer(1)
        assert classify(None) == Null()

    def test_composite_tree(self) -> None:
        assert classify({"b": [1], "a": None}) == Dictionary(
            ((b"a", Null()), (b"b", List((Integer(1),))))
        )

    def test_int_subclass_normalized(self) -> None:
        value = classify(Level.LOW)
        assert value == Integer(1)
        assert type(value.value) is int  # type: ignore[union-attr]

    def test_classify_is_pure(self) -> None:
        """Test classification does not mutate its input."""
        data = {"b": 1, "a": 2}
        classify(data)
        assert list(data) == ["b", "a"]


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("hello", b"5:hello,"),
        (123, b"3:123#"),
        (True, b"4:true!"),
        (None, b"0:~"),
        ([1, 2, 3], b"12:1:1#1:2#1:3#]"),
        ({"a": 1}, b"8:1:a,1:1#}"),
        ({}, b"0:}"),
        ([], b"0:]"),
    ],
)
def test_reference_encodings(value: Any, expected: bytes, parse: Callable[[bytes], Any]) -> None:
    """Test the reference encodings and that each parses back as one frame."""
    encoded = dumps(value)
    assert encoded == expected
    parse(encoded)
