"""Push sinks: where repeated parsers put their values.

Repetition combinators only ever call ``push(value)``, so the same looping
logic fills a list, a dict, or nothing at all. Sinks are created fresh for
every combinator run through a zero-argument factory (usually the sink class
itself).

Sinks:
    SequenceSink: list; order preserved, duplicates kept
    MappingSink: dict; pushes (key, value) pairs, later write wins
    DiscardSink: drops every value

Python 3.13+. Zero external dependencies.
"""

from typing import Protocol, runtime_checkable

__all__ = ["DiscardSink", "MappingSink", "Push", "SequenceSink"]


@runtime_checkable
class Push[T](Protocol):
    """Collection a repetition can push values into."""

    def push(self, value: T) -> None:
        """Add a value to the collection."""
        ...


class SequenceSink[T](list[T]):
    """List that accepts pushed values in order.

    Compares equal to a plain list with the same items.

    Example:
        >>> sink = SequenceSink()
        >>> sink.push(1)
        >>> sink.push(1)
        >>> sink
        [1, 1]
    """

    __slots__ = ()

    def push(self, value: T) -> None:
        """Append value."""
        self.append(value)


class MappingSink[K, V](dict[K, V]):
    """Dict that accepts pushed (key, value) pairs.

    A duplicate key overwrites the earlier value.

    Example:
        >>> sink = MappingSink()
        >>> sink.push(("a", 1))
        >>> sink.push(("a", 2))
        >>> sink
        {'a': 2}
    """

    __slots__ = ()

    def push(self, value: tuple[K, V]) -> None:
        """Store value[1] under value[0]."""
        key, item = value
        self[key] = item


class DiscardSink:
    """Sink that drops every value.

    Used when only success/failure and the final cursor matter.
    """

    __slots__ = ()

    def push(self, value: object) -> None:
        """Discard value."""

    def __len__(self) -> int:
        return 0

    def __repr__(self) -> str:
        return "DiscardSink()"
