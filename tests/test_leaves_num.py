"""Tests for leaves.num: fixed-width number parsers."""

from __future__ import annotations

import math
import struct
from collections.abc import Callable
from typing import Any

import pytest
from hypothesis import given
from hypothesis import strategies as st

from slicecomb.diagnostics import NotEnoughDataError
from slicecomb.leaves import num
from slicecomb.parsing import Driver, SliceCursor

# ============================================================================
# FIXED EXAMPLES
# ============================================================================


class TestIntegers:
    """Integer parsers decode the right width and byte order."""

    def test_u32_be(self) -> None:
        """[0, 0, 0, 5] is 5 with the cursor at offset 4."""
        cursor, value = num.u32_be(Driver(), SliceCursor.new(bytes([0, 0, 0, 5]))).unwrap()

        assert value == 5
        assert cursor.offset == 4

    @pytest.mark.parametrize(
        ("parser", "data", "expected"),
        [
            (num.u8_le, b"\xff", 255),
            (num.i8_be, b"\xff", -1),
            (num.u16_le, b"\x01\x02", 0x0201),
            (num.u16_be, b"\x01\x02", 0x0102),
            (num.i16_be, b"\xff\xfe", -2),
            (num.i32_le, b"\xfe\xff\xff\xff", -2),
            (num.u64_be, b"\x00" * 7 + b"\x2a", 42),
            (num.i64_le, b"\xff" * 8, -1),
            (num.u128_be, b"\x00" * 15 + b"\x01", 1),
            (num.u128_le, b"\x01" + b"\x00" * 15, 1),
            (num.i128_be, b"\xff" * 16, -1),
            (num.i128_le, b"\x00" * 15 + b"\x80", -(1 << 127)),
        ],
    )
    def test_decodes(
        self, parser: Callable[..., Any], data: bytes, expected: int
    ) -> None:
        """Decoded value and full consumption."""
        cursor, value = parser(Driver(), SliceCursor.new(data)).unwrap()

        assert value == expected
        assert cursor.offset == len(data)

    def test_leaves_rest_of_input(self) -> None:
        """Only the number's width is consumed."""
        progress = num.u16_be(Driver(), SliceCursor.new(b"\x00\x01\x02"))

        assert progress.cursor.offset == 2


class TestFloats:
    """Float parsers."""

    def test_f32_be(self) -> None:
        """IEEE single precision, big-endian."""
        assert num.f32_be(Driver(), SliceCursor.new(struct.pack(">f", 1.5))).value == 1.5

    def test_f64_le(self) -> None:
        """IEEE double precision, little-endian."""
        assert num.f64_le(Driver(), SliceCursor.new(struct.pack("<d", -0.25))).value == -0.25

    def test_nan(self) -> None:
        """NaN decodes as NaN."""
        assert math.isnan(num.f64_be(Driver(), SliceCursor.new(struct.pack(">d", math.nan))).value)


# ============================================================================
# FAILURES
# ============================================================================


class TestShortInput:
    """Too little input fails at the unchanged cursor."""

    @pytest.mark.parametrize("name", num.__all__)
    def test_empty_input_fails(self, name: str) -> None:
        """Every parser fails on empty input with NotEnoughDataError."""
        parser = getattr(num, name)
        start = SliceCursor.new(b"")

        progress = parser(Driver(), start)

        assert progress.cursor == start
        assert isinstance(progress.error, NotEnoughDataError)
        assert progress.error.recoverable()

    def test_partial_input_fails(self) -> None:
        """Three bytes are not a u32."""
        start = SliceCursor.new(b"\x00\x00\x00")

        progress = num.u32_le(Driver(), start)

        assert progress.cursor == start
        assert progress.error.requested == 4
        assert progress.error.available == 3

    def test_parser_names(self) -> None:
        """Parsers carry their public names."""
        assert num.u16_be.__name__ == "u16_be"
        assert num.i128_le.__name__ == "i128_le"


# ============================================================================
# PROPERTIES
# ============================================================================


class TestNumberProperties:
    """Decoding agrees with int.from_bytes for every width."""

    @given(
        data=st.binary(min_size=16, max_size=16),
        width=st.sampled_from([8, 16, 32, 64, 128]),
        signed=st.booleans(),
        order=st.sampled_from(["le", "be"]),
    )
    def test_matches_int_from_bytes(
        self, data: bytes, width: int, signed: bool, order: str
    ) -> None:
        """PROPERTY: <kind><width>_<order> == int.from_bytes on the prefix."""
        parser = getattr(num, f"{'i' if signed else 'u'}{width}_{order}")
        size = width // 8

        _, value = parser(Driver(), SliceCursor.new(data)).unwrap()

        byteorder = "little" if order == "le" else "big"
        assert value == int.from_bytes(data[:size], byteorder, signed=signed)
