"""Alternation: try candidates in priority order.

A candidate runs only if no earlier one succeeded and the failure right
before it, if any, was recoverable. The first irrecoverable failure stops
evaluation: no later candidate runs. Every failure of a candidate that did
run goes into the error accumulator, the final irrecoverable one included.

Candidates run eagerly as they are registered, so registering one after a
success or a fatal failure costs nothing.
"""

import logging
from typing import TYPE_CHECKING, Self

from slicecomb.core.recoverable import Recoverable
from slicecomb.diagnostics import ErrorTemplate, NoAlternativesError

from ..progress import Err, Ok, Progress

if TYPE_CHECKING:
    from ..accumulator import ErrorAccumulator
    from ..driver import Driver
    from ..types import Parser

__all__ = ["Alternate"]

logger = logging.getLogger(__name__)


class Alternate[S, P, T, E: Recoverable, A]:
    """Ordered choice between candidate parsers.

    Every candidate starts from the same cursor.

    Example:
        >>> progress = (
        ...     driver.alternate(cursor)
        ...     .one(tag(b"GIF87a"))
        ...     .one(tag(b"GIF89a"))
        ...     .finish()
        ... )
    """

    __slots__ = ("_accumulator", "_attempts", "_current", "_cursor", "_driver")

    def __init__(
        self,
        driver: "Driver[S]",
        cursor: P,
        accumulator: "ErrorAccumulator[P, E, A]",
    ) -> None:
        """Initialize alternation.

        Args:
            driver: Parse driver handed to every candidate
            cursor: Where every candidate starts
            accumulator: Strategy resolving the error when all candidates fail
        """
        self._driver = driver
        self._cursor = cursor
        self._accumulator = accumulator
        self._current: Progress[P, T, E] | None = None
        self._attempts = 0

    @property
    def attempts(self) -> int:
        """Number of candidates that actually ran."""
        return self._attempts

    def one(self, parser: "Parser[S, P, T, E]") -> Self:
        """Register a candidate, running it unless the outcome is settled."""
        if self._current is not None:
            match self._current.status:
                case Ok(_):
                    return self
                case Err(error) if not error.recoverable():
                    return self
        progress = parser(self._driver, self._cursor)
        self._current = progress
        self._attempts += 1
        match progress.status:
            case Err(error):
                self._accumulator.add_err(error, progress.cursor)
        return self

    def finish(self) -> Progress[P, T, A]:
        """Return the first success, or the accumulated failure.

        On failure the cursor is the one reported by the last candidate that
        ran.

        Raises:
            NoAlternativesError: If no candidate was registered
        """
        current = self._current
        if current is None:
            raise NoAlternativesError(ErrorTemplate.no_alternatives())
        if current.is_ok:
            return current  # type: ignore[return-value]
        logger.debug(
            "All %d attempted alternative(s) failed from %r", self._attempts, self._cursor
        )
        return Progress.failure(current.cursor, self._accumulator.finish())
