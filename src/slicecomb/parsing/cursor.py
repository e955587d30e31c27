"""Immutable slice cursor.

Implements the immutable cursor pattern over any sliceable sequence.
Python 3.13+. Zero external dependencies.

Design Philosophy:
    - Cursor is immutable (frozen dataclass); every take() returns a NEW cursor
    - A cursor is an index into a separately owned backing buffer, never a copy
    - Bytes-like input is wrapped in a memoryview once, so views and taken
      sub-views share the caller's buffer (zero-copy)
    - The absolute offset is tracked independently of the view, so error
      values can keep the offset without keeping the input alive
    - Ordering, equality and hashing use the offset only

Invariant:
    offset == len(data) - len(view)

Text input:
    str input works the same way; Python slices strings by copying, so
    views over text are copies rather than shared memory.
"""

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

from slicecomb.diagnostics import NotEnoughDataError

from .progress import Progress

__all__ = ["ByteCursor", "SliceCursor"]

_BYTES_LIKE = (bytes, bytearray, memoryview)


@dataclass(frozen=True, slots=True, order=True)
class SliceCursor:
    """Position in a sliceable input.

    Key Design Decisions:
        1. Frozen dataclass - Immutability enforced by Python
        2. Slots - Cursors are created on every take
        3. Offset-only comparisons - Backing data never compared or hashed
        4. take(0) fails - Prevents infinite repetition loops in callers

    Example:
        >>> cursor = SliceCursor.new(b"hello")
        >>> rest, head = cursor.take(2).unwrap()
        >>> bytes(head)
        b'he'
        >>> rest.offset
        2
        >>> cursor.offset  # Original unchanged (immutability)
        0
        >>> cursor.take(0).is_err
        True
    """

    data: Sequence[Any] = field(compare=False, repr=False)
    offset: int = 0

    @classmethod
    def new(cls, data: Sequence[Any] | bytes | bytearray | memoryview) -> "SliceCursor":
        """Create a cursor at offset 0.

        Args:
            data: Input sequence. Bytes-like input is viewed, not copied.

        Returns:
            Cursor over the whole input
        """
        if isinstance(data, _BYTES_LIKE):
            data = memoryview(data).cast("B")
        return cls(data, 0)

    @classmethod
    def zero(cls) -> "SliceCursor":
        """Return the initial position over empty input."""
        return cls(memoryview(b""), 0)

    @property
    def view(self) -> Sequence[Any]:
        """Remaining input (zero-copy for bytes-like input)."""
        return self.data[self.offset :]

    @property
    def remaining(self) -> int:
        """Number of elements left."""
        return len(self.data) - self.offset

    @property
    def is_eof(self) -> bool:
        """True if no input is left."""
        return self.offset >= len(self.data)

    def advance_by(self, count: int) -> "SliceCursor":
        """Return new cursor advanced by count elements.

        Args:
            count: Number of elements to skip

        Returns:
            New SliceCursor (original unchanged)

        Raises:
            ValueError: If count is negative or beyond the end of the input
        """
        if count < 0 or count > self.remaining:
            msg = f"Cannot advance by {count}: {self.remaining} element(s) remaining"
            raise ValueError(msg)
        return SliceCursor(self.data, self.offset + count)

    def take(self, count: int) -> Progress["SliceCursor", Sequence[Any], NotEnoughDataError]:
        """Take count elements, advancing past them.

        Fails if more elements are requested than are left, and also if zero
        or a negative number of elements is requested, in order to prevent
        infinite loops. On failure the returned cursor is this (unchanged)
        cursor.

        Args:
            count: Number of elements to consume

        Returns:
            Success with the advanced cursor and the consumed sub-view, or
            failure with NotEnoughDataError
        """
        available = self.remaining
        if count <= 0 or count > available:
            return self.failure(
                NotEnoughDataError(offset=self.offset, requested=count, available=available)
            )
        end = self.offset + count
        return SliceCursor(self.data, end).success(self.data[self.offset : end])

    def take1(self) -> Progress["SliceCursor", Any, NotEnoughDataError]:
        """Take a single element, returning the element itself.

        For byte input the value is an int, for text a one-character str.
        """
        if self.is_eof:
            return self.failure(
                NotEnoughDataError(offset=self.offset, requested=1, available=0)
            )
        return SliceCursor(self.data, self.offset + 1).success(self.data[self.offset])

    def success[T, E](self, value: T) -> Progress["SliceCursor", T, E]:
        """Wrap value in a successful Progress at this cursor."""
        return Progress.success(self, value)

    def failure[T, E](self, error: E) -> Progress["SliceCursor", T, E]:
        """Wrap error in a failed Progress at this cursor."""
        return Progress.failure(self, error)


# Convenience alias for byte input.
ByteCursor = SliceCursor
