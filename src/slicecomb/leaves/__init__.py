"""Leaf parsers for byte cursors.

Leaf parsers are where input actually gets consumed. They follow the plain
``(driver, cursor) -> Progress`` contract, so everything in the combinator
layer accepts them directly.
"""

from . import num
from .num import (
    f32_be,
    f32_le,
    f64_be,
    f64_le,
    i8_be,
    i8_le,
    i16_be,
    i16_le,
    i32_be,
    i32_le,
    i64_be,
    i64_le,
    i128_be,
    i128_le,
    u8_be,
    u8_le,
    u16_be,
    u16_le,
    u32_be,
    u32_le,
    u64_be,
    u64_le,
    u128_be,
    u128_le,
)
from .tag import tag

__all__ = ["num", "tag", *num.__all__]
