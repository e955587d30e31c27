"""Error accumulation strategies.

When every candidate of an alternation fails, which error should the caller
see? An accumulator absorbs each failure as it happens and resolves the
overall error once at the end.

Strategies:
    DiscardErrors: keeps nothing but whether any failure was fatal
    LastErrorOnly: keeps only the most recent failure, O(1) space
    AllErrors: keeps every failure, in attempt order
    FurthestErrors: keeps the failure(s) at the furthest cursor

FurthestErrors implements the usual heuristic for backtracking parsers: the
branch that got deepest into the input is the most informative one, even
though control flow rewound past it.

Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from typing import Protocol

from slicecomb.diagnostics import ErrorTemplate, NoAlternativesError

from .progress import Err, Progress

__all__ = [
    "AllErrors",
    "DiscardErrors",
    "Discarded",
    "ErrorAccumulator",
    "ErrorList",
    "FurthestErrors",
    "LastErrorOnly",
]


class ErrorList[E](list[E]):
    """Errors kept by a multi-error strategy.

    Recoverable when every kept error is, so an alternation using AllErrors
    or FurthestErrors can itself sit inside optional() or a repetition.
    """

    __slots__ = ()

    def recoverable(self) -> bool:
        """True if all kept errors are recoverable."""
        return all(error.recoverable() for error in self)


class ErrorAccumulator[P, E, A](Protocol):
    """Tracks the failures seen by a compound parser.

    Type Parameters:
        P: Cursor type
        E: Error type absorbed
        A: Accumulated result type returned by finish()
    """

    def add_err(self, error: E, cursor: P) -> None:
        """Absorb one failure reported at ``cursor``."""
        ...

    def finish(self) -> A:
        """Return the accumulated error."""
        ...

    def add_progress[T](self, progress: Progress[P, T, E]) -> Progress[P, T, None]:
        """Absorb the error of ``progress``, if any.

        Returns the same Progress with the error replaced by None.
        """
        match progress.status:
            case Err(error):
                self.add_err(error, progress.cursor)
                return Progress.failure(progress.cursor, None)
            case _:
                return progress.map_err(lambda _: None)


class DiscardErrors[P, E](ErrorAccumulator[P, E, "Discarded"]):
    """Accumulator that keeps no error, only whether one was fatal.

    Example:
        >>> acc = DiscardErrors()
        >>> acc.add_err(NotEnoughDataError(offset=0, requested=1, available=0), 0)
        >>> acc.finish()
        Discarded(fatal=False)
    """

    __slots__ = ("_fatal",)

    def __init__(self) -> None:
        self._fatal = False

    def add_err(self, error: E, cursor: P) -> None:
        if not error.recoverable():  # type: ignore[attr-defined]
            self._fatal = True

    def finish(self) -> "Discarded":
        return Discarded(fatal=self._fatal)


@dataclass(frozen=True, slots=True)
class Discarded:
    """Failure value of an alternation whose errors were discarded.

    Recoverable unless one of the discarded errors was fatal, so a
    DiscardErrors alternation can sit inside optional() or a repetition
    just like one keeping an ErrorList.

    Attributes:
        fatal: True if any discarded error was irrecoverable
    """

    fatal: bool = False

    def recoverable(self) -> bool:
        """True if every discarded error was recoverable."""
        return not self.fatal


class LastErrorOnly[P, E](ErrorAccumulator[P, E, E]):
    """Accumulator that only keeps the last added error."""

    __slots__ = ("_error", "_has_error")

    def __init__(self) -> None:
        self._error: E | None = None
        self._has_error = False

    def add_err(self, error: E, cursor: P) -> None:
        self._error = error
        self._has_error = True

    def finish(self) -> E:
        """Return the last error.

        Raises:
            NoAlternativesError: If no error was added
        """
        if not self._has_error:
            raise NoAlternativesError(ErrorTemplate.nothing_accumulated("LastErrorOnly"))
        return self._error  # type: ignore[return-value]


class AllErrors[P, E](ErrorAccumulator[P, E, ErrorList[E]]):
    """Accumulator that stores every added error, in order."""

    __slots__ = ("_errors",)

    def __init__(self) -> None:
        self._errors: ErrorList[E] = ErrorList()

    def add_err(self, error: E, cursor: P) -> None:
        self._errors.append(error)

    def finish(self) -> ErrorList[E]:
        return self._errors


class FurthestErrors[P, E](ErrorAccumulator[P, E, ErrorList[E]]):
    """Accumulator that saves all "best" errors.

    "Best" means reported at the furthest cursor into the input. A strictly
    further error discards everything kept so far; errors at the same cursor
    accumulate together; errors before it are ignored.

    Example:
        >>> acc = FurthestErrors()
        >>> for offset in [0, 0, 3, 1]:
        ...     acc.add_err(f"e{offset}", offset)
        >>> acc.finish()
        ['e3']
    """

    __slots__ = ("_cursor", "_errors")

    def __init__(self, start: P | None = None) -> None:
        """Initialize accumulator.

        Args:
            start: Errors before this cursor are ignored. None (default)
                keeps the first error whatever its position.
        """
        self._cursor = start
        self._errors: ErrorList[E] = ErrorList()

    @property
    def cursor(self) -> P | None:
        """Furthest cursor seen so far."""
        return self._cursor

    def add_err(self, error: E, cursor: P) -> None:
        if self._cursor is None or cursor > self._cursor:  # type: ignore[operator]
            self._cursor = cursor
            self._errors = ErrorList([error])
        elif cursor == self._cursor:
            self._errors.append(error)

    def finish(self) -> ErrorList[E]:
        return self._errors
