"""Error-context adapter.

Grammars built from generic leaves end up with generic errors ("not enough
data"). Applications want errors that say what was being parsed ("reading
the file header") and still keep the low-level reason. The helpers here
rewrite the error of a Progress into an application error built from the
failure cursor:

- with_context(): new error, old error chained as its ``__cause__``
- into_context_leaf(): new error built from the old error and the cursor,
  nothing chained
- context_leaf(): new error built from the cursor alone, old error dropped

Success values and cursors pass through untouched.

Example:
    >>> class HeaderError(ContextError):
    ...     pass
    >>> progress = with_context(
    ...     u32_be(driver, cursor),
    ...     lambda c: HeaderError("reading the file header", offset=c.offset),
    ... )
    >>> progress.error.format_chain()
    'reading the file header\\n  caused by: Requested 4 element(s), 1 remaining'
"""

from collections.abc import Callable, Iterator

from slicecomb.constants import MAX_CAUSE_CHAIN
from slicecomb.core.recoverable import Recoverable
from slicecomb.diagnostics import ErrorTemplate, ParseFailure
from slicecomb.parsing.progress import Progress

__all__ = ["ContextError", "context_leaf", "into_context_leaf", "with_context"]


class ContextError(ParseFailure):
    """Application-level parse failure carrying a context message.

    Subclass per kind of context. Recoverability follows the chained cause
    when there is one, so wrapping an error in context never turns a
    "try something else" into an abort or vice versa. Without a cause the
    class attribute ``fatal`` decides.

    Attributes:
        offset: Input offset of the failure (None for cursors without one)
    """

    def __init__(self, message: str, *, offset: int | None = None) -> None:
        super().__init__(ErrorTemplate.context(message, offset), offset=offset)

    def recoverable(self) -> bool:
        """Delegate to the cause if it classifies itself, else use ``fatal``."""
        cause = self.__cause__
        if isinstance(cause, Recoverable):
            return cause.recoverable()
        return not self.fatal

    def causes(self) -> Iterator[BaseException]:
        """Iterate the chained causes, closest first.

        Stops after MAX_CAUSE_CHAIN entries.
        """
        cause = self.__cause__
        seen = 0
        while cause is not None and seen < MAX_CAUSE_CHAIN:
            yield cause
            cause = cause.__cause__
            seen += 1

    def format_chain(self) -> str:
        """Render this error and its causes, one per line."""
        lines = [str(self)]
        lines.extend(f"  caused by: {cause}" for cause in self.causes())
        return "\n".join(lines)


def with_context[P, T, E: BaseException, C: BaseException](
    progress: Progress[P, T, E], context_fn: Callable[[P], C]
) -> Progress[P, T, C]:
    """Replace the error with ``context_fn(cursor)``, chaining the old one as cause."""

    def wrap(error: E, cursor: P) -> C:
        context = context_fn(cursor)
        context.__cause__ = error
        return context

    return progress.map_err_with_cursor(wrap)


def into_context_leaf[P, T, E, C](
    progress: Progress[P, T, E], context_fn: Callable[[E, P], C]
) -> Progress[P, T, C]:
    """Replace the error with ``context_fn(error, cursor)``; no cause chained."""
    return progress.map_err_with_cursor(context_fn)


def context_leaf[P, T, E, C](
    progress: Progress[P, T, E], context_fn: Callable[[P], C]
) -> Progress[P, T, C]:
    """Replace the error with ``context_fn(cursor)``, dropping the old error."""
    return progress.map_err_with_cursor(lambda _error, cursor: context_fn(cursor))
