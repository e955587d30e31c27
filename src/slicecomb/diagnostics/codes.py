"""Diagnostic codes and data structures.

Defines error codes, source spans, and diagnostic messages.
Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from enum import Enum, StrEnum
from typing import Literal

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
    "ErrorCategory",
    "SourceSpan",
]


class ErrorCategory(StrEnum):
    """Error categorization for diagnostics.

    Inherits from ``StrEnum`` so that ``str(category)`` and direct string
    comparisons work without accessing ``.value``.

    Categories:
        INPUT: Leaf-level input failures (underflow, mismatch)
        GRAMMAR: Contract violations by grammar authors
        FORMAT: Failures reported by a concrete format built on the engine
        CONTEXT: Application-facing errors produced by the context adapter
    """

    INPUT = "input"
    GRAMMAR = "grammar"
    FORMAT = "format"
    CONTEXT = "context"


class DiagnosticCode(Enum):
    """Error codes with unique identifiers.

    Organized by category:
        1000-1999: Input errors (returned as failure values by leaf parsers)
        2000-2999: Grammar errors (raised on engine contract violations)
        3000-3999: Format errors (MessagePack grammar)
        4000-4999: Context errors (error-context adapter)
    """

    # Input errors (1000-1999)
    NOT_ENOUGH_DATA = 1001
    TAG_MISMATCH = 1002

    # Grammar errors (2000-2999)
    NO_ALTERNATIVES = 2001
    NON_ADVANCING_REPETITION = 2002
    PROGRESS_UNWRAP = 2003
    MAX_DEPTH_EXCEEDED = 2004

    # Format errors (3000-3999)
    NO_NEXT_ELEMENT = 3001
    TRUNCATED_ELEMENT = 3002
    NEVER_USED_MARKER = 3003
    INVALID_UTF8 = 3004
    TRAILING_DATA = 3005
    UNHASHABLE_KEY = 3006

    # Context errors (4000-4999)
    CONTEXT = 4001


@dataclass(frozen=True, slots=True)
class SourceSpan:
    """Input location for error reporting.

    Offsets count elements of the parsed sequence (bytes for byte input,
    code points for text input).

    Attributes:
        start: Starting offset (0-indexed)
        end: Ending offset (exclusive)
    """

    start: int
    end: int

    def __post_init__(self) -> None:
        """Validate SourceSpan invariants.

        Raises:
            ValueError: If start is negative or end precedes start.
        """
        if self.start < 0:
            msg = f"SourceSpan.start must be >= 0, got {self.start}"
            raise ValueError(msg)
        if self.end < self.start:
            msg = f"SourceSpan.end ({self.end}) must be >= start ({self.start})"
            raise ValueError(msg)

    @classmethod
    def at(cls, offset: int) -> "SourceSpan":
        """Create an empty span at a single offset."""
        return cls(start=offset, end=offset)


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Structured diagnostic message.

    Inspired by Rust compiler diagnostics. Provides rich error information
    for both humans and tools.

    Attributes:
        code: Unique error code
        message: Human-readable error description
        span: Input location (None when no position applies)
        hint: Suggestion for fixing the error
        expected: What the parser expected to find (optional)
        category: Error category
        severity: Error severity level
    """

    code: DiagnosticCode
    message: str
    span: SourceSpan | None = None
    hint: str | None = None
    expected: tuple[str, ...] = ()
    category: ErrorCategory = ErrorCategory.INPUT
    severity: Literal["error", "warning"] = "error"

    def __str__(self) -> str:
        """Return human-readable error description."""
        return self.message

    def format_error(self) -> str:
        """Format diagnostic like Rust compiler.

        Delegates to DiagnosticFormatter for consistent output.

        Example output:
            error[NOT_ENOUGH_DATA]: Requested 4 element(s), 2 remaining
              --> offset 6
              = help: The input ended before the value was complete

        Returns:
            Formatted error message
        """
        from .formatter import DiagnosticFormatter  # noqa: PLC0415 - circular

        return DiagnosticFormatter().format(self)
