"""Position protocol.

A position is whatever a grammar uses to say "how far have we got". The
engine only needs three things from it: it is immutable (so it can be kept
as a rewind point), it has a zero value, and positions are totally ordered.

Plain ``int`` offsets meet only the ordering part. They have no ``zero()``,
so ``isinstance(3, Position)`` is False, but the combinators never call
``zero()`` and accept them as positions anyway. SliceCursor is the bundled
implementation and meets the whole protocol.

Python 3.13+.
"""

from typing import Any, Protocol, Self, runtime_checkable

__all__ = ["Position"]


@runtime_checkable
class Position(Protocol):
    """Totally ordered, immutable parse position."""

    @classmethod
    def zero(cls) -> Self:
        """Return the initial position."""
        ...

    def __lt__(self, other: Any, /) -> bool: ...

    def __le__(self, other: Any, /) -> bool: ...
