"""Unwrap-or-propagate for hand-written parsers.

Hand-written grammar functions often chain several parsers and want to bail
out with the first failure. try_parse() gives back ``(cursor, value)`` on
success; on failure it ends the enclosing @early_return function, which then
returns that failure (optionally converted) as its own Progress.

Example:
    >>> @early_return
    ... def pair(driver, cursor):
    ...     cursor, first = try_parse(u8_be(driver, cursor))
    ...     cursor, second = try_parse(u8_be(driver, cursor))
    ...     return cursor.success((first, second))

try_parse() must only be called inside a function decorated with
@early_return; the decorator only intercepts the signal raised by try_parse.
"""

import functools
from collections.abc import Callable
from typing import Any

from .progress import Err, Ok, Progress

__all__ = ["PropagatedFailure", "early_return", "try_parse"]


class PropagatedFailure(Exception):  # noqa: N818 - control-flow signal, not an error
    """Signal carrying a failed Progress to the nearest @early_return."""

    def __init__(self, progress: Progress[Any, Any, Any]) -> None:
        super().__init__(progress)
        self.progress = progress


def try_parse[P, T, E](
    progress: Progress[P, T, E], convert: Callable[[E], Any] | None = None
) -> tuple[P, T]:
    """Return (cursor, value), or propagate the failure.

    Args:
        progress: Result of a parser call
        convert: Applied to the error before it is propagated

    Raises:
        PropagatedFailure: On failure; caught by @early_return
    """
    match progress.status:
        case Ok(value):
            return progress.cursor, value
        case Err(error):
            if convert is not None:
                error = convert(error)
            raise PropagatedFailure(Progress.failure(progress.cursor, error))
    raise AssertionError(progress.status)  # pragma: no cover


def early_return[**A, R](func: Callable[A, R]) -> Callable[A, R]:
    """Decorate a parser so try_parse() failures become its return value."""

    @functools.wraps(func)
    def wrapper(*args: A.args, **kwargs: A.kwargs) -> R:
        try:
            return func(*args, **kwargs)
        except PropagatedFailure as signal:
            return signal.progress  # type: ignore[return-value]

    return wrapper
