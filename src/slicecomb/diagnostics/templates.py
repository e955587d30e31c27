"""Error message templates.

Centralized error message templates for testable, consistent error messages.
Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode, ErrorCategory, SourceSpan


class ErrorTemplate:
    """Centralized error message templates.

    All error messages are created here. NO f-strings in exception constructors!
    This provides:
        - Testable error messages
        - Consistent formatting
        - Documentation of all error cases
    """

    # ------------------------------------------------------------------
    # Input errors
    # ------------------------------------------------------------------

    @staticmethod
    def not_enough_data(offset: int, requested: int, available: int) -> Diagnostic:
        """Input exhausted, or an empty take was requested.

        Args:
            offset: Offset of the cursor the take was attempted from
            requested: Number of elements requested
            available: Number of elements remaining

        Returns:
            Diagnostic for NOT_ENOUGH_DATA
        """
        if requested <= 0:
            msg = f"Requested {requested} elements; a take must consume input"
            hint = "Empty and negative takes are rejected so repetitions cannot loop forever"
        else:
            msg = f"Requested {requested} element(s), {available} remaining"
            hint = "The input ended before the value was complete"
        return Diagnostic(
            code=DiagnosticCode.NOT_ENOUGH_DATA,
            message=msg,
            span=SourceSpan.at(offset),
            hint=hint,
        )

    @staticmethod
    def tag_mismatch(offset: int, expected: object) -> Diagnostic:
        """Literal prefix did not match.

        Args:
            offset: Offset where the literal was expected
            expected: The literal

        Returns:
            Diagnostic for TAG_MISMATCH
        """
        return Diagnostic(
            code=DiagnosticCode.TAG_MISMATCH,
            message=f"Expected literal {expected!r}",
            span=SourceSpan.at(offset),
            expected=(repr(expected),),
        )

    # ------------------------------------------------------------------
    # Grammar errors
    # ------------------------------------------------------------------

    @staticmethod
    def no_alternatives() -> Diagnostic:
        """Alternation finished before any candidate ran.

        Returns:
            Diagnostic for NO_ALTERNATIVES
        """
        return Diagnostic(
            code=DiagnosticCode.NO_ALTERNATIVES,
            message="Alternation finished without any candidate",
            hint="Register at least one candidate with one() before finish()",
            category=ErrorCategory.GRAMMAR,
        )

    @staticmethod
    def nothing_accumulated(strategy: str) -> Diagnostic:
        """Accumulator finished before absorbing any error.

        Args:
            strategy: Name of the accumulation strategy

        Returns:
            Diagnostic for NO_ALTERNATIVES
        """
        return Diagnostic(
            code=DiagnosticCode.NO_ALTERNATIVES,
            message=f"{strategy} finished without any error recorded",
            hint="Only finish an accumulator after a failure was added",
            category=ErrorCategory.GRAMMAR,
        )

    @staticmethod
    def non_advancing_repetition(combinator: str, cursor: object) -> Diagnostic:
        """Repeated parser succeeded without moving the cursor.

        Args:
            combinator: Name of the repetition combinator
            cursor: Cursor the parser was started from

        Returns:
            Diagnostic for NON_ADVANCING_REPETITION
        """
        return Diagnostic(
            code=DiagnosticCode.NON_ADVANCING_REPETITION,
            message=f"{combinator}: parser succeeded without advancing from {cursor!r}",
            hint="A repeated parser must consume input on every success",
            category=ErrorCategory.GRAMMAR,
        )

    @staticmethod
    def progress_unwrap(requested: str, status: object) -> Diagnostic:
        """Wrong Progress variant unwrapped.

        Args:
            requested: "value" or "error"
            status: The status actually present

        Returns:
            Diagnostic for PROGRESS_UNWRAP
        """
        return Diagnostic(
            code=DiagnosticCode.PROGRESS_UNWRAP,
            message=f"Called unwrap for {requested} on {status!r}",
            hint="Check is_ok / is_err before unwrapping",
            category=ErrorCategory.GRAMMAR,
        )

    @staticmethod
    def depth_exceeded(max_depth: int) -> Diagnostic:
        """Nesting depth limit exceeded.

        Args:
            max_depth: The configured limit

        Returns:
            Diagnostic for MAX_DEPTH_EXCEEDED
        """
        return Diagnostic(
            code=DiagnosticCode.MAX_DEPTH_EXCEEDED,
            message=f"Maximum nesting depth ({max_depth}) exceeded",
            hint="Input nests deeper than the grammar allows",
            category=ErrorCategory.GRAMMAR,
        )

    # ------------------------------------------------------------------
    # Format errors (MessagePack)
    # ------------------------------------------------------------------

    @staticmethod
    def no_next_element(offset: int) -> Diagnostic:
        """No element starts at offset.

        Args:
            offset: Offset where an element was expected

        Returns:
            Diagnostic for NO_NEXT_ELEMENT
        """
        return Diagnostic(
            code=DiagnosticCode.NO_NEXT_ELEMENT,
            message="No next element",
            span=SourceSpan.at(offset),
            category=ErrorCategory.FORMAT,
        )

    @staticmethod
    def truncated_element(offset: int) -> Diagnostic:
        """Element started but its payload is incomplete.

        Args:
            offset: Offset of the element's first byte

        Returns:
            Diagnostic for TRUNCATED_ELEMENT
        """
        return Diagnostic(
            code=DiagnosticCode.TRUNCATED_ELEMENT,
            message="Element is truncated",
            span=SourceSpan.at(offset),
            hint="The input ended in the middle of an element",
            category=ErrorCategory.FORMAT,
        )

    @staticmethod
    def never_used_marker(offset: int, marker: int) -> Diagnostic:
        """Reserved marker byte encountered.

        Args:
            offset: Offset of the marker
            marker: The marker byte

        Returns:
            Diagnostic for NEVER_USED_MARKER
        """
        return Diagnostic(
            code=DiagnosticCode.NEVER_USED_MARKER,
            message=f"Marker 0x{marker:02X} is never used",
            span=SourceSpan.at(offset),
            category=ErrorCategory.FORMAT,
        )

    @staticmethod
    def invalid_utf8(offset: int, reason: str) -> Diagnostic:
        """String payload is not valid UTF-8.

        Args:
            offset: Offset of the string element
            reason: Decoder error description

        Returns:
            Diagnostic for INVALID_UTF8
        """
        return Diagnostic(
            code=DiagnosticCode.INVALID_UTF8,
            message=f"String is not valid UTF-8: {reason}",
            span=SourceSpan.at(offset),
            category=ErrorCategory.FORMAT,
        )

    @staticmethod
    def trailing_data(offset: int, remaining: int) -> Diagnostic:
        """Input continues after a complete value.

        Args:
            offset: Offset where the value ended
            remaining: Number of unconsumed bytes

        Returns:
            Diagnostic for TRAILING_DATA
        """
        return Diagnostic(
            code=DiagnosticCode.TRAILING_DATA,
            message=f"{remaining} byte(s) after the value",
            span=SourceSpan.at(offset),
            hint="Use unpack_stream() for inputs holding several values",
            category=ErrorCategory.FORMAT,
        )

    @staticmethod
    def unhashable_key(offset: int, kind: str) -> Diagnostic:
        """Map key cannot be used as a Python dict key.

        Args:
            offset: Offset of the key element
            kind: Element kind of the key

        Returns:
            Diagnostic for UNHASHABLE_KEY
        """
        return Diagnostic(
            code=DiagnosticCode.UNHASHABLE_KEY,
            message=f"Map key of kind {kind} is not hashable",
            span=SourceSpan.at(offset),
            hint="Use iter_elements() to read maps keyed by arrays or maps",
            category=ErrorCategory.FORMAT,
        )

    # ------------------------------------------------------------------
    # Context errors
    # ------------------------------------------------------------------

    @staticmethod
    def context(message: str, offset: int | None) -> Diagnostic:
        """Application-facing error wrapping a parse failure.

        Args:
            message: Context description
            offset: Offset of the failure, if the cursor has one

        Returns:
            Diagnostic for CONTEXT
        """
        return Diagnostic(
            code=DiagnosticCode.CONTEXT,
            message=message,
            span=SourceSpan.at(offset) if offset is not None else None,
            category=ErrorCategory.CONTEXT,
        )
