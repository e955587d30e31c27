"""MessagePack decoding built on the combinator engine.

Two layers:

- parse_element() is a pull parser: it reads exactly one element. Arrays and
  maps come back as headers holding their element count; their contents are
  the elements that follow. Payloads (strings aside) are zero-copy views of
  the input. iter_elements() runs it over a whole buffer.
- unpack() and unpack_stream() build Python values from those elements:
  nil/bool/int/float/str as themselves, bin as bytes, ext as ExtType, arrays
  as lists and maps as dicts.

Failure classification:
    NoNextElementError      recoverable  input ended before an element started
    TruncatedElementError   fatal        input ended inside an element
    NeverUsedMarkerError    fatal        the reserved marker 0xC1
    InvalidUtf8Error        fatal        str payload is not UTF-8
    UnhashableKeyError      fatal        array/map used as a map key (unpack)

Only running out of input *between* elements is recoverable, which is what
lets a repetition over parse_element() end cleanly at the end of a stream
while any malformed element aborts it.

Every failure is reported at the cursor where the failing element starts.

Nesting is guarded: unpack() enters ``driver.nested()`` per array/map level,
so deeply nested input raises DepthLimitExceededError instead of
RecursionError.
"""

import logging
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from slicecomb.constants import MAX_DEPTH
from slicecomb.core.push import MappingSink
from slicecomb.diagnostics import Diagnostic, ErrorTemplate, ParseFailure, SlicecombError
from slicecomb.leaves.num import (
    f32_be,
    f64_be,
    i8_be,
    i16_be,
    i32_be,
    i64_be,
    u8_be,
    u16_be,
    u32_be,
    u64_be,
)
from slicecomb.parsing.combinators import (
    count,
    count_push_into,
    sequence,
    step,
    step_with,
    zero_or_more,
)
from slicecomb.parsing.cursor import SliceCursor
from slicecomb.parsing.driver import Driver
from slicecomb.parsing.progress import Err, Ok, Progress
from slicecomb.parsing.propagate import early_return, try_parse

__all__ = [
    "Element",
    "ElementKind",
    "ExtType",
    "InvalidUtf8Error",
    "MsgPackDecodeError",
    "MsgPackError",
    "NeverUsedMarkerError",
    "NoNextElementError",
    "TruncatedElementError",
    "UnhashableKeyError",
    "iter_elements",
    "parse_element",
    "unpack",
    "unpack_stream",
]

logger = logging.getLogger(__name__)


# ============================================================================
# DATA MODEL
# ============================================================================


class ElementKind(StrEnum):
    """Kind of a MessagePack element."""

    NIL = "nil"
    BOOL = "bool"
    INT = "int"
    FLOAT = "float"
    STR = "str"
    BIN = "bin"
    EXT = "ext"
    ARRAY = "array"
    MAP = "map"


@dataclass(frozen=True, slots=True)
class ExtType:
    """Application-defined extension value.

    Attributes:
        code: Signed 8-bit extension type
        data: Raw payload (a view of the input for parse_element, bytes for unpack)
    """

    code: int
    data: bytes | memoryview


@dataclass(frozen=True, slots=True)
class Element:
    """One decoded element.

    Attributes:
        kind: Element kind
        value: Decoded scalar, payload view, ExtType, or, for arrays and maps,
            the number of entries that follow (a map entry is a key element
            plus a value element)
        offset: Offset of the element's marker byte
    """

    kind: ElementKind
    value: Any
    offset: int

    @property
    def is_container(self) -> bool:
        """True for array and map headers."""
        return self.kind in (ElementKind.ARRAY, ElementKind.MAP)


# ============================================================================
# ERRORS
# ============================================================================


class MsgPackError(ParseFailure):
    """Base class for MessagePack failure values."""


class NoNextElementError(MsgPackError):
    """No element starts at the cursor because the input is exhausted."""

    def __init__(self, *, offset: int) -> None:
        super().__init__(ErrorTemplate.no_next_element(offset), offset=offset)


class TruncatedElementError(MsgPackError):
    """The input ends inside an element or inside a container's entries."""

    fatal = True

    def __init__(self, *, offset: int) -> None:
        super().__init__(ErrorTemplate.truncated_element(offset), offset=offset)


class NeverUsedMarkerError(MsgPackError):
    """Marker byte reserved by the format (0xC1)."""

    fatal = True

    def __init__(self, *, offset: int, marker: int) -> None:
        super().__init__(ErrorTemplate.never_used_marker(offset, marker), offset=offset)
        self.marker = marker


class InvalidUtf8Error(MsgPackError):
    """String payload failed UTF-8 decoding."""

    fatal = True

    def __init__(self, *, offset: int, reason: str) -> None:
        super().__init__(ErrorTemplate.invalid_utf8(offset, reason), offset=offset)
        self.reason = reason


class UnhashableKeyError(MsgPackError):
    """Map key is an array or a map, which a dict cannot hold."""

    fatal = True

    def __init__(self, *, offset: int, kind: str) -> None:
        super().__init__(ErrorTemplate.unhashable_key(offset, kind), offset=offset)


class MsgPackDecodeError(SlicecombError):
    """Raised by the top-level decoding functions.

    The failure value that stopped decoding, if any, is chained as
    ``__cause__``.

    Attributes:
        offset: Offset the failure refers to
    """

    def __init__(self, message: str | Diagnostic, *, offset: int | None) -> None:
        super().__init__(message)
        self.offset = offset

    @classmethod
    def from_failure(cls, failure: ParseFailure) -> "MsgPackDecodeError":
        """Create from a failure value returned by the grammar."""
        message = failure.diagnostic if failure.diagnostic is not None else str(failure)
        return cls(message, offset=failure.offset)


# ============================================================================
# PULL PARSER
# ============================================================================

type ElementProgress = Progress[SliceCursor, Element, MsgPackError]
type _Decoder = Callable[[Driver[Any], SliceCursor, SliceCursor], ElementProgress]


def _take(size: int) -> Callable[[Driver[Any], SliceCursor], Progress[SliceCursor, Any, Any]]:
    """Payload of ``size`` bytes; empty payloads are valid here."""

    def parse(driver: Driver[Any], cursor: SliceCursor) -> Progress[SliceCursor, Any, Any]:
        if size == 0:
            return cursor.success(cursor.view[:0])
        return cursor.take(size)

    return parse


def _length_prefixed(length: Callable[..., Progress[SliceCursor, int, Any]]) -> Callable[..., Any]:
    return sequence(
        step(length, "length"),
        step_with(lambda v: _take(v["length"]), "data"),
        build=lambda v: v["data"],
    )


def _ext_prefixed(length: Callable[..., Progress[SliceCursor, int, Any]]) -> Callable[..., Any]:
    return sequence(
        step(length, "length"),
        step(i8_be, "code"),
        step_with(lambda v: _take(v["length"]), "data"),
        build=lambda v: ExtType(v["code"], v["data"]),
    )


def _fixed_ext(size: int) -> Callable[..., Any]:
    return sequence(
        step(i8_be, "code"),
        step(_take(size), "data"),
        build=lambda v: ExtType(v["code"], v["data"]),
    )


def _payload[T](progress: Progress[SliceCursor, T, Any], start: SliceCursor) -> Progress[
    SliceCursor, T, MsgPackError
]:
    """Turn a short payload read into a truncated element reported at ``start``."""
    return progress.map_err(lambda _: TruncatedElementError(offset=start.offset)).rewind_on_err(
        start
    )


def _constant(kind: ElementKind, value: Any) -> _Decoder:
    def decode(driver: Driver[Any], cursor: SliceCursor, start: SliceCursor) -> ElementProgress:
        return cursor.success(Element(kind, value, start.offset))

    return decode


def _read(kind: ElementKind, parser: Callable[..., Progress[SliceCursor, Any, Any]]) -> _Decoder:
    def decode(driver: Driver[Any], cursor: SliceCursor, start: SliceCursor) -> ElementProgress:
        return _payload(parser(driver, cursor), start).map(
            lambda value: Element(kind, value, start.offset)
        )

    return decode


def _text(parser: Callable[..., Progress[SliceCursor, Any, Any]]) -> _Decoder:
    def decode(driver: Driver[Any], cursor: SliceCursor, start: SliceCursor) -> ElementProgress:
        def utf8(raw: Any) -> Ok[str] | Err[MsgPackError]:
            try:
                return Ok(str(raw, "utf-8"))
            except UnicodeDecodeError as e:
                return Err(InvalidUtf8Error(offset=start.offset, reason=e.reason))

        return (
            _payload(parser(driver, cursor), start)
            .and_then(start, utf8)
            .map(lambda text: Element(ElementKind.STR, text, start.offset))
        )

    return decode


def _never_used(driver: Driver[Any], cursor: SliceCursor, start: SliceCursor) -> ElementProgress:
    return start.failure(NeverUsedMarkerError(offset=start.offset, marker=0xC1))


_MARKERS: dict[int, _Decoder] = {
    0xC0: _constant(ElementKind.NIL, None),
    0xC1: _never_used,
    0xC2: _constant(ElementKind.BOOL, False),
    0xC3: _constant(ElementKind.BOOL, True),
    0xC4: _read(ElementKind.BIN, _length_prefixed(u8_be)),
    0xC5: _read(ElementKind.BIN, _length_prefixed(u16_be)),
    0xC6: _read(ElementKind.BIN, _length_prefixed(u32_be)),
    0xC7: _read(ElementKind.EXT, _ext_prefixed(u8_be)),
    0xC8: _read(ElementKind.EXT, _ext_prefixed(u16_be)),
    0xC9: _read(ElementKind.EXT, _ext_prefixed(u32_be)),
    0xCA: _read(ElementKind.FLOAT, f32_be),
    0xCB: _read(ElementKind.FLOAT, f64_be),
    0xCC: _read(ElementKind.INT, u8_be),
    0xCD: _read(ElementKind.INT, u16_be),
    0xCE: _read(ElementKind.INT, u32_be),
    0xCF: _read(ElementKind.INT, u64_be),
    0xD0: _read(ElementKind.INT, i8_be),
    0xD1: _read(ElementKind.INT, i16_be),
    0xD2: _read(ElementKind.INT, i32_be),
    0xD3: _read(ElementKind.INT, i64_be),
    0xD4: _read(ElementKind.EXT, _fixed_ext(1)),
    0xD5: _read(ElementKind.EXT, _fixed_ext(2)),
    0xD6: _read(ElementKind.EXT, _fixed_ext(4)),
    0xD7: _read(ElementKind.EXT, _fixed_ext(8)),
    0xD8: _read(ElementKind.EXT, _fixed_ext(16)),
    0xD9: _text(_length_prefixed(u8_be)),
    0xDA: _text(_length_prefixed(u16_be)),
    0xDB: _text(_length_prefixed(u32_be)),
    0xDC: _read(ElementKind.ARRAY, u16_be),
    0xDD: _read(ElementKind.ARRAY, u32_be),
    0xDE: _read(ElementKind.MAP, u16_be),
    0xDF: _read(ElementKind.MAP, u32_be),
}


def _decoder_for(marker: int) -> _Decoder:
    if marker <= 0x7F:
        return _constant(ElementKind.INT, marker)
    if marker <= 0x8F:
        return _constant(ElementKind.MAP, marker & 0x0F)
    if marker <= 0x9F:
        return _constant(ElementKind.ARRAY, marker & 0x0F)
    if marker <= 0xBF:
        return _text(_take(marker & 0x1F))
    if marker >= 0xE0:
        return _constant(ElementKind.INT, marker - 0x100)
    return _MARKERS[marker]


# One decoder per marker byte.
_DISPATCH: tuple[_Decoder, ...] = tuple(_decoder_for(marker) for marker in range(256))


def parse_element(driver: Driver[Any], cursor: SliceCursor) -> ElementProgress:
    """Parse one element starting at ``cursor``.

    Fails with the recoverable NoNextElementError if the input is exhausted,
    and with a fatal error if an element starts but is malformed. Failures
    leave the cursor at the element's start.

    Example:
        >>> progress = parse_element(Driver(), SliceCursor.new(b"\\x93\\x01"))
        >>> progress.value
        Element(kind=<ElementKind.ARRAY: 'array'>, value=3, offset=0)
    """
    first = cursor.take1()
    match first.status:
        case Ok(marker):
            return _DISPATCH[marker](driver, first.cursor, cursor)
        case _:
            return cursor.failure(NoNextElementError(offset=cursor.offset))


def iter_elements(data: bytes | bytearray | memoryview) -> Iterator[Element]:
    """Yield every element of ``data`` in order.

    Container headers are yielded like any other element, followed by
    their entries.

    Raises:
        MsgPackDecodeError: On the first malformed element
    """
    driver: Driver[None] = Driver()
    cursor = SliceCursor.new(data)
    while True:
        progress = parse_element(driver, cursor)
        match progress.status:
            case Ok(element):
                yield element
                cursor = progress.cursor
            case Err(NoNextElementError()) if cursor.is_eof:
                return
            case Err(error):
                raise MsgPackDecodeError.from_failure(error) from error


# ============================================================================
# TREE BUILDER
# ============================================================================


def _materialize(element: Element) -> Any:
    match element.kind:
        case ElementKind.BIN:
            return bytes(element.value)
        case ElementKind.EXT:
            return ExtType(element.value.code, bytes(element.value.data))
        case _:
            return element.value


def _entries[T](progress: Progress[SliceCursor, T, MsgPackError], start: SliceCursor) -> Progress[
    SliceCursor, T, MsgPackError
]:
    """Running out of input inside a container truncates the container."""

    def truncate(error: MsgPackError) -> MsgPackError:
        if isinstance(error, NoNextElementError):
            return TruncatedElementError(offset=start.offset)
        return error

    return progress.map_err(truncate).rewind_on_err(start)


def _value(driver: Driver[Any], cursor: SliceCursor) -> Progress[SliceCursor, Any, MsgPackError]:
    progress = parse_element(driver, cursor)
    match progress.status:
        case Ok(Element(kind=ElementKind.ARRAY, value=size)):
            with driver.nested():
                items = count(size, _value)(driver, progress.cursor)
            return _entries(items, cursor).map(list)
        case Ok(Element(kind=ElementKind.MAP, value=size)):
            with driver.nested():
                pairs = count_push_into(size, MappingSink, _pair)(driver, progress.cursor)
            return _entries(pairs, cursor).map(dict)
        case Ok(element):
            return progress.cursor.success(_materialize(element))
        case _:
            return progress


@early_return
def _pair(
    driver: Driver[Any], cursor: SliceCursor
) -> Progress[SliceCursor, tuple[Any, Any], MsgPackError]:
    after_key, key = try_parse(_value(driver, cursor))
    if isinstance(key, list | dict):
        kind = ElementKind.ARRAY if isinstance(key, list) else ElementKind.MAP
        return cursor.failure(UnhashableKeyError(offset=cursor.offset, kind=kind))
    end, value = try_parse(_value(driver, after_key))
    return end.success((key, value))


def unpack(data: bytes | bytearray | memoryview, *, max_depth: int = MAX_DEPTH) -> Any:
    """Decode exactly one value from ``data``.

    Args:
        data: Encoded input holding one value and nothing else
        max_depth: Maximum array/map nesting

    Raises:
        MsgPackDecodeError: If the input is empty, malformed, or holds more
            than one value
        DepthLimitExceededError: If arrays/maps nest deeper than max_depth

    Example:
        >>> unpack(b"\\x82\\xa1a\\x01\\xa1b\\x92\\xc3\\xc0")
        {'a': 1, 'b': [True, None]}
    """
    driver: Driver[None] = Driver(max_depth=max_depth)
    progress = _value(driver, SliceCursor.new(data))
    match progress.status:
        case Err(error):
            raise MsgPackDecodeError.from_failure(error) from error
        case Ok(value):
            end = progress.cursor
            if not end.is_eof:
                raise MsgPackDecodeError(
                    ErrorTemplate.trailing_data(end.offset, end.remaining), offset=end.offset
                )
            return value


def unpack_stream(
    data: bytes | bytearray | memoryview, *, max_depth: int = MAX_DEPTH
) -> list[Any]:
    """Decode every top-level value of ``data``, in order.

    Empty input decodes to an empty list.

    Raises:
        MsgPackDecodeError: On the first malformed value
        DepthLimitExceededError: If arrays/maps nest deeper than max_depth
    """
    driver: Driver[None] = Driver(max_depth=max_depth)
    progress = zero_or_more(_value)(driver, SliceCursor.new(data))
    match progress.status:
        case Err(error):
            raise MsgPackDecodeError.from_failure(error) from error
        case Ok(values):
            logger.debug("Decoded %d top-level value(s) from %d byte(s)", len(values), len(data))
            return list(values)
