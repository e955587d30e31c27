"""Open-ended repetition: zero_or_more and one_or_more.

Both repeat a parser until it fails, and the kind of failure decides the
outcome:

- Recoverable failure: the loop ends successfully at the cursor right before
  the failing attempt, with every value collected so far.
- Irrecoverable failure: the whole repetition fails with that error,
  unchanged, and the cursor rewound to where the repetition started. Values
  collected so far are dropped: "you're done" and "something is broken" must
  not look alike.

one_or_more additionally needs its first attempt to succeed; if it fails
(either kind) the combinator fails with that error at the start cursor.

Every success must move the cursor forward. A parser that succeeds without
consuming input would repeat forever; with assertions enabled (the default,
anything but ``python -O``) this raises NonAdvancingRepetitionError.
"""

import logging
from typing import TYPE_CHECKING

from slicecomb.core.push import Push, SequenceSink
from slicecomb.core.recoverable import Recoverable
from slicecomb.diagnostics import ErrorTemplate, NonAdvancingRepetitionError

from ..progress import Err, Ok, Progress

if TYPE_CHECKING:
    from ..driver import Driver
    from ..types import Parser, PushFactory

__all__ = [
    "one_or_more",
    "one_or_more_push_into",
    "zero_or_more",
    "zero_or_more_push_into",
]

logger = logging.getLogger(__name__)


def _check_advanced(combinator: str, before: object, after: object) -> None:
    if __debug__ and not after > before:  # type: ignore[operator]
        raise NonAdvancingRepetitionError(
            ErrorTemplate.non_advancing_repetition(combinator, before)
        )


def _repeat[S, P, T, E: Recoverable, C: Push](
    combinator: str,
    driver: "Driver[S]",
    start: P,
    cursor: P,
    sink: C,
    parser: "Parser[S, P, T, E]",
) -> Progress[P, C, E]:
    while True:
        progress = parser(driver, cursor)
        match progress.status:
            case Ok(value):
                _check_advanced(combinator, cursor, progress.cursor)
                sink.push(value)
                cursor = progress.cursor
            case Err(error) if error.recoverable():
                return Progress.success(cursor, sink)
            case Err(error):
                logger.debug(
                    "%s aborted at %r by irrecoverable error: %s",
                    combinator,
                    progress.cursor,
                    error,
                )
                return Progress.failure(start, error)


def zero_or_more_push_into[S, P, T, E: Recoverable, C: Push](
    build_push: "PushFactory[C]",
    parser: "Parser[S, P, T, E]",
) -> "Parser[S, P, C, E]":
    """Run ``parser`` until it stops matching, pushing values into a fresh sink."""

    def run(driver: "Driver[S]", cursor: P) -> Progress[P, C, E]:
        return _repeat("zero_or_more", driver, cursor, cursor, build_push(), parser)

    return run


def zero_or_more[S, P, T, E: Recoverable](
    parser: "Parser[S, P, T, E]",
) -> "Parser[S, P, list[T], E]":
    """Run ``parser`` until it stops matching, collecting values in a list.

    Succeeds with an empty list at the unchanged cursor if the very first
    attempt fails recoverably.
    """
    return zero_or_more_push_into(SequenceSink, parser)


def one_or_more_push_into[S, P, T, E: Recoverable, C: Push](
    build_push: "PushFactory[C]",
    parser: "Parser[S, P, T, E]",
) -> "Parser[S, P, C, E]":
    """Run ``parser`` until it stops matching (at least once), pushing into a sink."""

    def run(driver: "Driver[S]", start: P) -> Progress[P, C, E]:
        sink = build_push()
        first = parser(driver, start)
        match first.status:
            case Ok(value):
                _check_advanced("one_or_more", start, first.cursor)
                sink.push(value)
            case Err(error):
                return Progress.failure(start, error)
        return _repeat("one_or_more", driver, start, first.cursor, sink, parser)

    return run


def one_or_more[S, P, T, E: Recoverable](
    parser: "Parser[S, P, T, E]",
) -> "Parser[S, P, list[T], E]":
    """Run ``parser`` until it stops matching (at least once), collecting a list.

    Never succeeds with an empty list.
    """
    return one_or_more_push_into(SequenceSink, parser)
