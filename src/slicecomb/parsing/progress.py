"""Progress: the universal return shape of every parser.

A Progress pairs a cursor with exactly one outcome: ``Ok(value)`` on success
or ``Err(error)`` on failure. On success the cursor says where to continue.
On failure it is whatever the producing parser's contract says, usually the
unchanged starting cursor ("nothing consumed, safe to retry"), sometimes the
deepest cursor reached ("useful for diagnostics").

Pattern:
    Every parser has signature:
        def parse_foo(driver: Driver[S], cursor: P) -> Progress[P, Foo, FooError]:
            ...
            return cursor.success(foo)

    Progress is frozen and supports structural pattern matching:
        match parse_foo(driver, cursor):
            case Progress(cursor, Ok(value)):
                ...
            case Progress(cursor, Err(error)):
                ...

Python 3.13+. Zero external dependencies.
"""

from collections.abc import Callable
from dataclasses import dataclass

from slicecomb.diagnostics import ErrorTemplate, ProgressUnwrapError

__all__ = ["Err", "Ok", "Progress", "Status"]


@dataclass(frozen=True, slots=True)
class Ok[T]:
    """Successful outcome."""

    value: T


@dataclass(frozen=True, slots=True)
class Err[E]:
    """Failed outcome."""

    error: E


type Status[T, E] = Ok[T] | Err[E]


@dataclass(frozen=True, slots=True)
class Progress[P, T, E]:
    """Where a parser is, and whether it succeeded.

    Type Parameters:
        P: Cursor type
        T: Success value type
        E: Error type

    Example:
        >>> progress = Progress.success(4, "abcd")
        >>> progress.map(len).unwrap()
        (4, 4)
        >>> Progress.failure(0, "boom").is_err
        True
    """

    cursor: P
    status: Status[T, E]

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def success(cls, cursor: P, value: T) -> "Progress[P, T, E]":
        """Create a Progress indicating a successful parse."""
        return cls(cursor, Ok(value))

    @classmethod
    def failure(cls, cursor: P, error: E) -> "Progress[P, T, E]":
        """Create a Progress indicating a failed parse."""
        return cls(cursor, Err(error))

    @classmethod
    def from_result(cls, cursor: P, status: Status[T, E]) -> "Progress[P, T, E]":
        """Create a Progress from a cursor and an Ok/Err status."""
        return cls(cursor, status)

    # ------------------------------------------------------------------
    # Inspection
    # ------------------------------------------------------------------

    @property
    def is_ok(self) -> bool:
        """True if the status is Ok."""
        return isinstance(self.status, Ok)

    @property
    def is_err(self) -> bool:
        """True if the status is Err."""
        return isinstance(self.status, Err)

    @property
    def value(self) -> T:
        """Success value.

        Raises:
            ProgressUnwrapError: If this Progress is a failure
        """
        match self.status:
            case Ok(value):
                return value
            case _:
                raise ProgressUnwrapError(ErrorTemplate.progress_unwrap("value", self.status))

    @property
    def error(self) -> E:
        """Failure value.

        Raises:
            ProgressUnwrapError: If this Progress is a success
        """
        match self.status:
            case Err(error):
                return error
            case _:
                raise ProgressUnwrapError(ErrorTemplate.progress_unwrap("error", self.status))

    def unwrap(self) -> tuple[P, T]:
        """Return (cursor, value).

        Raises:
            ProgressUnwrapError: If this Progress is a failure
        """
        return self.cursor, self.value

    def unwrap_err(self) -> tuple[P, E]:
        """Return (cursor, error).

        Raises:
            ProgressUnwrapError: If this Progress is a success
        """
        return self.cursor, self.error

    def finish(self) -> tuple[P, Status[T, E]]:
        """Split into cursor and Ok/Err status."""
        return self.cursor, self.status

    # ------------------------------------------------------------------
    # Transformation
    # ------------------------------------------------------------------

    def map[T2](self, f: Callable[[T], T2]) -> "Progress[P, T2, E]":
        """Map the success value, if there is one. Cursor untouched."""
        match self.status:
            case Ok(value):
                return Progress(self.cursor, Ok(f(value)))
            case _:
                return self  # type: ignore[return-value]

    def map_with_cursor[T2](self, f: Callable[[T, P], T2]) -> "Progress[P, T2, E]":
        """Map the success value, also passing the current cursor."""
        match self.status:
            case Ok(value):
                return Progress(self.cursor, Ok(f(value, self.cursor)))
            case _:
                return self  # type: ignore[return-value]

    def map_err[E2](self, f: Callable[[E], E2]) -> "Progress[P, T, E2]":
        """Map the error value, if there is one. Cursor untouched."""
        match self.status:
            case Err(error):
                return Progress(self.cursor, Err(f(error)))
            case _:
                return self  # type: ignore[return-value]

    def map_err_with_cursor[E2](self, f: Callable[[E, P], E2]) -> "Progress[P, T, E2]":
        """Map the error value, also passing the current cursor."""
        match self.status:
            case Err(error):
                return Progress(self.cursor, Err(f(error, self.cursor)))
            case _:
                return self  # type: ignore[return-value]

    def and_then[T2](
        self, restore_to: P, f: Callable[[T], Status[T2, E]]
    ) -> "Progress[P, T2, E]":
        """Refine the success value with a fallible step.

        ``f`` returns ``Ok(new_value)`` or ``Err(error)``. If it fails, the
        cursor becomes exactly ``restore_to``, so a failed refinement (bytes
        read but not valid text) looks from outside like a failure of the
        original attempt.

        Example:
            >>> def decode(raw):
            ...     try:
            ...         return Ok(bytes(raw).decode())
            ...     except UnicodeDecodeError as e:
            ...         return Err(e)
            >>> start = SliceCursor.new(b"\\xff")
            >>> start.take(1).and_then(start, decode).cursor.offset
            0
        """
        match self.status:
            case Ok(value):
                status = f(value)
                if isinstance(status, Err):
                    return Progress(restore_to, status)
                return Progress(self.cursor, status)
            case _:
                return self  # type: ignore[return-value]

    def and_then_with_cursor[T2](
        self, restore_to: P, f: Callable[[T, P], Status[T2, E]]
    ) -> "Progress[P, T2, E]":
        """Like and_then, also passing the current cursor to ``f``."""
        return self.and_then(restore_to, lambda value: f(value, self.cursor))

    def rewind_on_err(self, to: P) -> "Progress[P, T, E]":
        """Replace the cursor with ``to`` if this is a failure."""
        if self.is_err:
            return Progress(to, self.status)
        return self

    def into_optional(self, reset_to: P) -> tuple[P, T | None]:
        """Return (cursor, value) on success, (reset_to, None) on failure."""
        match self.status:
            case Ok(value):
                return self.cursor, value
            case _:
                return reset_to, None

    def to[T2, E2](
        self,
        value_type: Callable[[T], T2] | None = None,
        error_type: Callable[[E], E2] | None = None,
    ) -> "Progress[P, T2, E2]":
        """Convert value and error through the target types' own constructors.

        Used where a combinator changes the error representation but keeps
        success values: ``u16_be(driver, cursor).to(error_type=MyError.from_failure)``.
        A ``None`` target leaves that side as it is.
        """
        match self.status:
            case Ok(value) if value_type is not None:
                return Progress(self.cursor, Ok(value_type(value)))
            case Err(error) if error_type is not None:
                return Progress(self.cursor, Err(error_type(error)))
            case _:
                return self  # type: ignore[return-value]
