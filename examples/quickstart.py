"""Quickstart example for slicecomb.

This example walks through the building blocks: leaf parsers, sequencing,
repetition, alternation with error accumulation, error context, and the
bundled MessagePack grammar.

Note: Examples unwrap results directly for brevity. In production, match on
progress.status and handle the failure case.
"""

from slicecomb import (
    ContextError,
    Driver,
    FurthestErrors,
    SliceCursor,
    count,
    sequence,
    step,
    step_with,
    with_context,
    zero_or_more,
)
from slicecomb.formats.msgpack import MsgPackDecodeError, unpack
from slicecomb.leaves import tag, u8_be, u16_le, u32_be

driver = Driver()

# Example 1: Leaf parser
print("=" * 50)
print("Example 1: Leaf Parser")
print("=" * 50)

cursor, value = u32_be(driver, SliceCursor.new(b"\x00\x00\x00\x05")).unwrap()
print(value, cursor.offset)
# Output: 5 4

# Example 2: Sequencing
print("\n" + "=" * 50)
print("Example 2: Length-Prefixed Data")
print("=" * 50)

pascal_string = sequence(
    step(u8_be, "length"),
    step_with(lambda v: count(v["length"], u8_be), "data"),
    build=lambda v: bytes(v["data"]),
)

cursor, value = pascal_string(driver, SliceCursor.new(b"\x03abcrest")).unwrap()
print(value, cursor.offset)
# Output: b'abc' 4

# Example 3: Repetition
print("\n" + "=" * 50)
print("Example 3: Repetition Stops Cleanly")
print("=" * 50)

cursor, values = zero_or_more(u16_le)(driver, SliceCursor.new(b"\x01\x00\x02\x00\x03")).unwrap()
print(values, cursor.offset)
# Output: [1, 2] 4

# Example 4: Alternation
print("\n" + "=" * 50)
print("Example 4: Alternation, Furthest Error Wins")
print("=" * 50)

gif_with_size = sequence(step(tag(b"GIF"), "magic"), step(u32_be, "size"), build=lambda v: v)
progress = (
    driver.alternate_accumulate_errors(SliceCursor.new(b"GIF\x00"), FurthestErrors())
    .one(tag(b"PNG"))
    .one(gif_with_size)
    .finish()
)
for error in progress.error:
    print(error.format_error())
# Output:
# error[NOT_ENOUGH_DATA]: Requested 4 element(s), 1 remaining
#   --> offset 3
#   = help: The input ended before the value was complete


# Example 5: Error context
print("\n" + "=" * 50)
print("Example 5: Error Context")
print("=" * 50)


class HeaderError(ContextError):
    """Failure while reading a file header."""


progress = with_context(
    u32_be(driver, SliceCursor.new(b"\x01")),
    lambda c: HeaderError("reading the file header", offset=c.offset),
)
print(progress.error.format_chain())
# Output:
# reading the file header
#   caused by: Requested 4 element(s), 1 remaining

# Example 6: MessagePack
print("\n" + "=" * 50)
print("Example 6: MessagePack")
print("=" * 50)

print(unpack(b"\x82\xa1a\x01\xa1b\x92\xc3\xc0"))
# Output: {'a': 1, 'b': [True, None]}

try:
    unpack(b"\xc1")
except MsgPackDecodeError as e:
    print(e.format_error())
# Output:
# error[NEVER_USED_MARKER]: Marker 0xC1 is never used
#   --> offset 0
