"""Fixed-width number parsers for byte cursors.

One parser per width, signedness and byte order, named ``<type>_<order>``:
``u8_le``, ``u16_be``, ``i64_le``, ``f32_be`` and so on, up to 128-bit
integers. Each takes exactly the number's width from the cursor and decodes
it. If fewer bytes remain, it fails with a (recoverable) NotEnoughDataError
at the unchanged cursor.

Parsers ignore the driver state, so they fit any grammar.

Example:
    >>> u32_be(Driver(), SliceCursor.new(b"\\x00\\x00\\x00\\x05")).unwrap()
    (SliceCursor(offset=4), 5)
"""

import struct
from collections.abc import Callable
from typing import Any

from slicecomb.diagnostics import NotEnoughDataError
from slicecomb.parsing.cursor import SliceCursor
from slicecomb.parsing.progress import Progress

# ruff: noqa: RUF022 - __all__ organized by width for readability
__all__ = [
    "u8_le", "u8_be", "i8_le", "i8_be",
    "u16_le", "u16_be", "i16_le", "i16_be",
    "u32_le", "u32_be", "i32_le", "i32_be",
    "u64_le", "u64_be", "i64_le", "i64_be",
    "u128_le", "u128_be", "i128_le", "i128_be",
    "f32_le", "f32_be", "f64_le", "f64_be",
]

type NumberParser[N] = Callable[[Any, SliceCursor], Progress[SliceCursor, N, NotEnoughDataError]]


def _struct_parser(fmt: str) -> NumberParser[Any]:
    """Build a parser decoding one struct format (byte order prefix included)."""
    codec = struct.Struct(fmt)
    size = codec.size

    def parse(driver: Any, cursor: SliceCursor) -> Progress[SliceCursor, Any, NotEnoughDataError]:
        return cursor.take(size).map(lambda raw: codec.unpack(raw)[0])

    parse.__name__ = parse.__qualname__ = _parser_name(fmt)
    return parse


def _wide_int_parser(size: int, byteorder: str, *, signed: bool) -> NumberParser[int]:
    """Build a parser for integers wider than struct supports."""

    def parse(driver: Any, cursor: SliceCursor) -> Progress[SliceCursor, int, NotEnoughDataError]:
        return cursor.take(size).map(
            lambda raw: int.from_bytes(raw, byteorder, signed=signed)  # type: ignore[arg-type]
        )

    kind = "i" if signed else "u"
    order = "le" if byteorder == "little" else "be"
    parse.__name__ = parse.__qualname__ = f"{kind}{size * 8}_{order}"
    return parse


_STRUCT_NAMES = {
    "B": "u8", "b": "i8", "H": "u16", "h": "i16",
    "I": "u32", "i": "i32", "Q": "u64", "q": "i64",
    "f": "f32", "d": "f64",
}


def _parser_name(fmt: str) -> str:
    order = "le" if fmt[0] == "<" else "be"
    return f"{_STRUCT_NAMES[fmt[1]]}_{order}"


# ============================================================================
# 8-BIT
# ============================================================================

u8_le = _struct_parser("<B")
u8_be = _struct_parser(">B")
i8_le = _struct_parser("<b")
i8_be = _struct_parser(">b")

# ============================================================================
# 16-BIT
# ============================================================================

u16_le = _struct_parser("<H")
u16_be = _struct_parser(">H")
i16_le = _struct_parser("<h")
i16_be = _struct_parser(">h")

# ============================================================================
# 32-BIT
# ============================================================================

u32_le = _struct_parser("<I")
u32_be = _struct_parser(">I")
i32_le = _struct_parser("<i")
i32_be = _struct_parser(">i")
f32_le = _struct_parser("<f")
f32_be = _struct_parser(">f")

# ============================================================================
# 64-BIT
# ============================================================================

u64_le = _struct_parser("<Q")
u64_be = _struct_parser(">Q")
i64_le = _struct_parser("<q")
i64_be = _struct_parser(">q")
f64_le = _struct_parser("<d")
f64_be = _struct_parser(">d")

# ============================================================================
# 128-BIT
# ============================================================================

u128_le = _wide_int_parser(16, "little", signed=False)
u128_be = _wide_int_parser(16, "big", signed=False)
i128_le = _wide_int_parser(16, "little", signed=True)
i128_be = _wide_int_parser(16, "big", signed=True)
