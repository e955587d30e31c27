"""Fixed-count repetition.

All three variants are all-or-nothing: if any run fails, recoverably or
not, the whole combinator fails with that error and the cursor rewound to
where the first run started. Values collected so far are dropped.
"""

from typing import TYPE_CHECKING

from slicecomb.core.push import DiscardSink, Push, SequenceSink

from ..progress import Err, Ok, Progress

if TYPE_CHECKING:
    from ..driver import Driver
    from ..types import Parser, PushFactory

__all__ = ["count", "count_push_into", "skip_count"]


def count_push_into[S, P, T, E, C: Push](
    n: int,
    build_push: "PushFactory[C]",
    parser: "Parser[S, P, T, E]",
) -> "Parser[S, P, C, E]":
    """Run ``parser`` exactly ``n`` times, pushing values into a fresh sink.

    Args:
        n: Number of runs
        build_push: Zero-argument factory for the sink, called once per run
            of the combinator
        parser: Parser to repeat

    Returns:
        Parser yielding the filled sink
    """

    def run(driver: "Driver[S]", cursor: P) -> Progress[P, C, E]:
        sink = build_push()
        start = cursor
        for _ in range(n):
            progress = parser(driver, cursor)
            match progress.status:
                case Ok(value):
                    sink.push(value)
                    cursor = progress.cursor
                case Err(error):
                    return Progress.failure(start, error)
        return Progress.success(cursor, sink)

    return run


def count[S, P, T, E](n: int, parser: "Parser[S, P, T, E]") -> "Parser[S, P, list[T], E]":
    """Run ``parser`` exactly ``n`` times, returning the values in order.

    Don't need the values at all? See skip_count().

    Example:
        >>> count(3, u8_be)(Driver(), SliceCursor.new(b"\\x01\\x02\\x03")).value
        [1, 2, 3]
    """
    return count_push_into(n, SequenceSink, parser)


def skip_count[S, P, T, E](n: int, parser: "Parser[S, P, T, E]") -> "Parser[S, P, None, E]":
    """Run ``parser`` exactly ``n`` times, discarding the values."""
    inner = count_push_into(n, DiscardSink, parser)

    def run(driver: "Driver[S]", cursor: P) -> Progress[P, None, E]:
        return inner(driver, cursor).map(lambda _: None)

    return run
