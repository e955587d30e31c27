"""slicecomb exception hierarchy with structured diagnostics.

Two families share one base class:

- ParseFailure: failure *values*. Leaf parsers and grammars return them inside
  a failed Progress; the engine never raises them. Each one answers
  ``recoverable()``.
- GrammarError: raised when a grammar author breaks an engine contract
  (finishing an empty alternation, a repetition that does not advance,
  unwrapping the wrong Progress variant).

All exceptions store Diagnostic objects for rich error information.

Python 3.13+. Zero external dependencies.
"""

from typing import ClassVar

from .codes import Diagnostic
from .templates import ErrorTemplate

__all__ = [
    "GrammarError",
    "NoAlternativesError",
    "NonAdvancingRepetitionError",
    "NotEnoughDataError",
    "ParseFailure",
    "ProgressUnwrapError",
    "SlicecombError",
    "TagMismatchError",
]


class SlicecombError(Exception):
    """Base exception for all slicecomb errors.

    Attributes:
        diagnostic: Structured diagnostic information (optional)
    """

    def __init__(self, message: str | Diagnostic) -> None:
        """Initialize SlicecombError.

        Args:
            message: Error message string OR Diagnostic object
        """
        if isinstance(message, Diagnostic):
            self.diagnostic: Diagnostic | None = message
            super().__init__(message.message)
        else:
            self.diagnostic = None
            super().__init__(message)

    def format_error(self) -> str:
        """Format the error, using the diagnostic when one is attached."""
        if self.diagnostic is not None:
            return self.diagnostic.format_error()
        return str(self)


class ParseFailure(SlicecombError):
    """A failed parse attempt, carried as a value inside Progress.

    Subclasses set ``fatal = True`` when the failure means the input is
    malformed and every enclosing repetition or alternation must abort.

    Attributes:
        offset: Absolute input offset the failure refers to (None if unknown)
    """

    fatal: ClassVar[bool] = False

    def __init__(self, message: str | Diagnostic, *, offset: int | None = None) -> None:
        super().__init__(message)
        self.offset = offset

    def recoverable(self) -> bool:
        """Return True if a parent parser may try something else."""
        return not self.fatal


class NotEnoughDataError(ParseFailure):
    """The input ran out, or zero elements were requested.

    Recoverable: running out of input is how repetitions end and how
    alternatives learn that a longer branch does not fit.

    Attributes:
        requested: Number of elements the parser asked for
        available: Number of elements that were left
    """

    def __init__(self, *, offset: int, requested: int, available: int) -> None:
        super().__init__(
            ErrorTemplate.not_enough_data(offset, requested, available), offset=offset
        )
        self.requested = requested
        self.available = available


class TagMismatchError(ParseFailure):
    """A literal prefix did not match the input.

    Attributes:
        expected: The literal the parser was looking for
    """

    def __init__(self, *, offset: int, expected: object) -> None:
        super().__init__(ErrorTemplate.tag_mismatch(offset, expected), offset=offset)
        self.expected = expected


class GrammarError(SlicecombError):
    """Grammar author violated an engine contract.

    These are programming errors, not input errors, so they are raised
    instead of returned.
    """


class NoAlternativesError(GrammarError):
    """Alternation finished without any candidate having run."""


class NonAdvancingRepetitionError(GrammarError):
    """A repeated parser succeeded without consuming input.

    Repeating such a parser would loop forever.
    """


class ProgressUnwrapError(GrammarError):
    """Success payload requested from a failure, or vice versa."""
