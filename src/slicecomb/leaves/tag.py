"""Literal-prefix matcher."""

from collections.abc import Callable, Sequence
from typing import Any

from slicecomb.diagnostics import NotEnoughDataError, TagMismatchError
from slicecomb.parsing.cursor import SliceCursor
from slicecomb.parsing.progress import Progress

__all__ = ["tag"]

type TagParser = Callable[
    [Any, SliceCursor],
    Progress[SliceCursor, Sequence[Any], NotEnoughDataError | TagMismatchError],
]


def tag(literal: Sequence[Any]) -> TagParser:
    """Create a parser matching ``literal`` at the cursor.

    On success the value is the matched sub-view of the input. Over list or
    tuple input the literal is compared element by element, so a tuple
    literal matches a list input and the other way round.

    Both failure kinds are recoverable and leave the cursor where the
    attempt started:

    - NotEnoughDataError: fewer elements remain than the literal holds
    - TagMismatchError: enough input, but it differs from the literal

    Example:
        >>> gif = tag(b"GIF8")
        >>> gif(Driver(), SliceCursor.new(b"GIF89a")).cursor.offset
        4
        >>> gif(Driver(), SliceCursor.new(b"PNG...")).error
        TagMismatchError("Expected literal b'GIF8'")
    """
    size = len(literal)

    def parse(
        driver: Any, cursor: SliceCursor
    ) -> Progress[SliceCursor, Sequence[Any], NotEnoughDataError | TagMismatchError]:
        progress = cursor.take(size)
        if progress.is_err:
            return progress
        if not _same_elements(progress.value, literal):
            return cursor.failure(TagMismatchError(offset=cursor.offset, expected=literal))
        return progress

    parse.__name__ = parse.__qualname__ = f"tag({literal!r})"
    return parse


def _same_elements(matched: Sequence[Any], literal: Sequence[Any]) -> bool:
    # memoryview and str compare by content against bytes-like and str literals
    if matched == literal:
        return True
    if isinstance(matched, memoryview | str):
        return False
    return tuple(matched) == tuple(literal)
