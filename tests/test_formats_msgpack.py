"""Tests for formats.msgpack: pull parser, element iteration and unpacking."""

from __future__ import annotations

import logging
import struct
from typing import Any

import pytest

from slicecomb.core import DepthLimitExceededError
from slicecomb.diagnostics import DiagnosticCode
from slicecomb.formats.msgpack import (
    Element,
    ElementKind,
    ExtType,
    InvalidUtf8Error,
    MsgPackDecodeError,
    NeverUsedMarkerError,
    NoNextElementError,
    TruncatedElementError,
    UnhashableKeyError,
    iter_elements,
    parse_element,
    unpack,
    unpack_stream,
)
from slicecomb.parsing import Driver, SliceCursor, zero_or_more
from tests.helpers.msgpack_encode import packb


def _element(data: bytes) -> Element:
    cursor, element = parse_element(Driver(), SliceCursor.new(data)).unwrap()
    assert cursor.offset == len(data)
    return element


# ============================================================================
# PULL PARSER: SCALARS
# ============================================================================


class TestScalarMarkers:
    """Every scalar marker decodes to the right kind and value."""

    @pytest.mark.parametrize(
        ("data", "kind", "value"),
        [
            (b"\x00", ElementKind.INT, 0),
            (b"\x7f", ElementKind.INT, 127),
            (b"\xe0", ElementKind.INT, -32),
            (b"\xff", ElementKind.INT, -1),
            (b"\xc0", ElementKind.NIL, None),
            (b"\xc2", ElementKind.BOOL, False),
            (b"\xc3", ElementKind.BOOL, True),
            (b"\xcc\xff", ElementKind.INT, 255),
            (b"\xcd\x01\x00", ElementKind.INT, 256),
            (b"\xce\x00\x01\x00\x00", ElementKind.INT, 65536),
            (b"\xcf" + (1 << 63).to_bytes(8, "big"), ElementKind.INT, 1 << 63),
            (b"\xd0\x80", ElementKind.INT, -128),
            (b"\xd1\xff\x00", ElementKind.INT, -256),
            (b"\xd2\xff\xff\xff\xfe", ElementKind.INT, -2),
            (b"\xd3" + (-(1 << 63)).to_bytes(8, "big", signed=True), ElementKind.INT, -(1 << 63)),
            (b"\xca" + struct.pack(">f", 0.5), ElementKind.FLOAT, 0.5),
            (b"\xcb" + struct.pack(">d", -2.25), ElementKind.FLOAT, -2.25),
        ],
    )
    def test_scalar(self, data: bytes, kind: ElementKind, value: Any) -> None:
        """Kind, value and full consumption."""
        element = _element(data)

        assert element.kind == kind
        assert element.value == value
        assert element.offset == 0
        assert not element.is_container

    @pytest.mark.parametrize(
        "data",
        [b"\xa3abc", b"\xd9\x03abc", b"\xda\x00\x03abc", b"\xdb\x00\x00\x00\x03abc"],
    )
    def test_str_markers(self, data: bytes) -> None:
        """fixstr, str8, str16 and str32 all decode to text."""
        element = _element(data)

        assert element.kind == ElementKind.STR
        assert element.value == "abc"

    @pytest.mark.parametrize("data", [b"\xa0", b"\xd9\x00"])
    def test_empty_str(self, data: bytes) -> None:
        """Zero-length strings are valid."""
        assert _element(data).value == ""

    @pytest.mark.parametrize(
        "data", [b"\xc4\x02\x01\x02", b"\xc5\x00\x02\x01\x02", b"\xc6\x00\x00\x00\x02\x01\x02"]
    )
    def test_bin_markers(self, data: bytes) -> None:
        """bin8, bin16 and bin32 payloads are views of the input."""
        element = _element(data)

        assert element.kind == ElementKind.BIN
        assert isinstance(element.value, memoryview)
        assert bytes(element.value) == b"\x01\x02"

    def test_empty_bin(self) -> None:
        """Zero-length binary is valid."""
        assert bytes(_element(b"\xc4\x00").value) == b""

    @pytest.mark.parametrize(
        ("data", "code", "payload"),
        [
            (b"\xd4\x05\xaa", 5, b"\xaa"),
            (b"\xd5\xff\xaa\xbb", -1, b"\xaa\xbb"),
            (b"\xd6\x01" + b"\x00" * 4, 1, b"\x00" * 4),
            (b"\xd7\x01" + b"\x00" * 8, 1, b"\x00" * 8),
            (b"\xd8\x01" + b"\x00" * 16, 1, b"\x00" * 16),
            (b"\xc7\x03\x02abc", 2, b"abc"),
            (b"\xc8\x00\x00\x02", 2, b""),
            (b"\xc9\x00\x00\x00\x01\x7f\x09", 127, b"\x09"),
        ],
    )
    def test_ext_markers(self, data: bytes, code: int, payload: bytes) -> None:
        """Fixed and sized extension types."""
        element = _element(data)

        assert element.kind == ElementKind.EXT
        assert element.value.code == code
        assert bytes(element.value.data) == payload


class TestContainerHeaders:
    """Arrays and maps come back as headers with their entry counts."""

    @pytest.mark.parametrize(
        ("data", "kind", "size"),
        [
            (b"\x90", ElementKind.ARRAY, 0),
            (b"\x9f", ElementKind.ARRAY, 15),
            (b"\xdc\x01\x00", ElementKind.ARRAY, 256),
            (b"\xdd\x00\x01\x00\x00", ElementKind.ARRAY, 65536),
            (b"\x80", ElementKind.MAP, 0),
            (b"\x8f", ElementKind.MAP, 15),
            (b"\xde\x00\x10", ElementKind.MAP, 16),
            (b"\xdf\x00\x00\x00\x11", ElementKind.MAP, 17),
        ],
    )
    def test_header(self, data: bytes, kind: ElementKind, size: int) -> None:
        """Only the header is consumed."""
        element = _element(data)

        assert element.kind == kind
        assert element.value == size
        assert element.is_container


# ============================================================================
# PULL PARSER: FAILURES
# ============================================================================


class TestElementFailures:
    """Failure classification and positions."""

    def test_empty_input_is_recoverable(self) -> None:
        """No element at all: NoNextElementError, recoverable."""
        progress = parse_element(Driver(), SliceCursor.new(b""))

        assert isinstance(progress.error, NoNextElementError)
        assert progress.error.recoverable()

    def test_never_used_marker(self) -> None:
        """0xC1 is fatal and reported at its own offset."""
        start = SliceCursor.new(b"\x01\xc1").advance_by(1)

        progress = parse_element(Driver(), start)

        assert isinstance(progress.error, NeverUsedMarkerError)
        assert progress.error.marker == 0xC1
        assert progress.error.offset == 1
        assert progress.cursor == start
        assert not progress.error.recoverable()

    @pytest.mark.parametrize(
        "data",
        [b"\xcd\x01", b"\xa3ab", b"\xc4\x05abc", b"\xd9", b"\xd6\x01\x00", b"\xcb\x00"],
    )
    def test_truncated(self, data: bytes) -> None:
        """Input ending inside an element is fatal, at the element's start."""
        start = SliceCursor.new(data)

        progress = parse_element(Driver(), start)

        assert isinstance(progress.error, TruncatedElementError)
        assert progress.error.offset == 0
        assert progress.cursor == start
        assert not progress.error.recoverable()

    def test_invalid_utf8(self) -> None:
        """A str payload that is not UTF-8 is fatal."""
        progress = parse_element(Driver(), SliceCursor.new(b"\xa2\xff\xfe"))

        assert isinstance(progress.error, InvalidUtf8Error)
        assert progress.error.offset == 0
        assert progress.cursor.offset == 0
        assert progress.error.diagnostic.code == DiagnosticCode.INVALID_UTF8

    def test_repetition_ends_cleanly_at_eof(self) -> None:
        """zero_or_more over parse_element stops at the end of input."""
        data = b"\x01\xc0\xa1x"

        cursor, elements = zero_or_more(parse_element)(Driver(), SliceCursor.new(data)).unwrap()

        assert [e.kind for e in elements] == [ElementKind.INT, ElementKind.NIL, ElementKind.STR]
        assert cursor.is_eof

    def test_repetition_aborts_on_malformed(self) -> None:
        """zero_or_more fails when a malformed element follows good ones."""
        progress = zero_or_more(parse_element)(Driver(), SliceCursor.new(b"\x01\x02\xc1"))

        assert isinstance(progress.error, NeverUsedMarkerError)
        assert progress.cursor.offset == 0


# ============================================================================
# iter_elements
# ============================================================================


class TestIterElements:
    """Flat iteration over a buffer."""

    def test_flat_order(self) -> None:
        """Container headers precede their entries."""
        elements = list(iter_elements(b"\x92\x01\x81\xa1k\xc3"))

        assert [(e.kind, e.value, e.offset) for e in elements] == [
            (ElementKind.ARRAY, 2, 0),
            (ElementKind.INT, 1, 1),
            (ElementKind.MAP, 1, 2),
            (ElementKind.STR, "k", 3),
            (ElementKind.BOOL, True, 5),
        ]

    def test_empty(self) -> None:
        """Empty input yields nothing."""
        assert list(iter_elements(b"")) == []

    def test_raises_after_good_elements(self) -> None:
        """Elements before the bad one are still yielded."""
        seen: list[Element] = []

        with pytest.raises(MsgPackDecodeError) as excinfo:
            for element in iter_elements(b"\x01\x02\xcd\x00"):
                seen.append(element)

        assert [e.value for e in seen] == [1, 2]
        assert excinfo.value.offset == 2
        assert isinstance(excinfo.value.__cause__, TruncatedElementError)


# ============================================================================
# unpack / unpack_stream
# ============================================================================


class TestUnpack:
    """Tree building."""

    def test_nested(self) -> None:
        """Maps, arrays and scalars."""
        assert unpack(b"\x82\xa1a\x01\xa1b\x92\xc3\xc0") == {"a": 1, "b": [True, None]}

    def test_bin_and_ext_are_bytes(self) -> None:
        """Views are materialized."""
        value = unpack(packb([b"\x01", ExtType(3, b"xy")]))

        assert value == [b"\x01", ExtType(3, b"xy")]
        assert type(value[0]) is bytes
        assert type(value[1].data) is bytes

    def test_empty_input(self) -> None:
        """Nothing to decode."""
        with pytest.raises(MsgPackDecodeError) as excinfo:
            unpack(b"")

        assert excinfo.value.diagnostic.code == DiagnosticCode.NO_NEXT_ELEMENT

    def test_trailing_data(self) -> None:
        """unpack() accepts exactly one value."""
        with pytest.raises(MsgPackDecodeError) as excinfo:
            unpack(b"\x01\x02\x03")

        assert excinfo.value.offset == 1
        assert excinfo.value.diagnostic.code == DiagnosticCode.TRAILING_DATA
        assert "2 byte(s)" in str(excinfo.value)

    def test_missing_entries_truncate_container(self) -> None:
        """An array announcing more entries than present is truncated."""
        with pytest.raises(MsgPackDecodeError) as excinfo:
            unpack(b"\x93\x01\x02")

        assert excinfo.value.offset == 0
        assert isinstance(excinfo.value.__cause__, TruncatedElementError)

    def test_missing_map_value(self) -> None:
        """A key without its value truncates the map."""
        with pytest.raises(MsgPackDecodeError) as excinfo:
            unpack(b"\x81\xa1k")

        assert isinstance(excinfo.value.__cause__, TruncatedElementError)

    def test_error_inside_nested_container(self) -> None:
        """Fatal errors keep the offset of the bad element."""
        with pytest.raises(MsgPackDecodeError) as excinfo:
            unpack(b"\x91\x91\xc1")

        assert excinfo.value.offset == 2
        assert isinstance(excinfo.value.__cause__, NeverUsedMarkerError)

    @pytest.mark.parametrize("key", [b"\x90", b"\x80"])
    def test_unhashable_key(self, key: bytes) -> None:
        """Array and map keys are rejected."""
        with pytest.raises(MsgPackDecodeError) as excinfo:
            unpack(b"\x81" + key + b"\x01")

        assert excinfo.value.offset == 1
        assert isinstance(excinfo.value.__cause__, UnhashableKeyError)
        assert excinfo.value.diagnostic.code == DiagnosticCode.UNHASHABLE_KEY

    def test_depth_limit(self) -> None:
        """Nesting beyond max_depth raises."""
        assert unpack(b"\x91" * 3 + b"\x90", max_depth=4) == [[[[]]]]

        with pytest.raises(DepthLimitExceededError):
            unpack(b"\x91" * 4 + b"\x90", max_depth=4)

    def test_default_depth_limit(self) -> None:
        """Deeply nested hostile input does not hit RecursionError."""
        with pytest.raises(DepthLimitExceededError):
            unpack(b"\x91" * 5000 + b"\x90")


class TestUnpackStream:
    """Several top-level values."""

    def test_values_in_order(self) -> None:
        """Every value decoded."""
        assert unpack_stream(b"\x01\xa1x\x92\xc2\xc3") == [1, "x", [False, True]]

    def test_empty(self) -> None:
        """Empty input is an empty stream."""
        assert unpack_stream(b"") == []

    def test_malformed_value_raises(self) -> None:
        """A bad value anywhere fails the whole stream."""
        with pytest.raises(MsgPackDecodeError) as excinfo:
            unpack_stream(b"\x01\x02\xa5ab")

        assert excinfo.value.offset == 2

    def test_logs_count(self, caplog: pytest.LogCaptureFixture) -> None:
        """Decoded count logged at DEBUG."""
        with caplog.at_level(logging.DEBUG, logger="slicecomb.formats.msgpack"):
            unpack_stream(b"\x01\x02")

        assert "Decoded 2 top-level value(s) from 2 byte(s)" in caplog.text
