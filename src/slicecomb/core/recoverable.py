"""Recoverable classification of parse errors.

Every error value flowing through the combinators answers one question:
may a parent parser recover and try something else?

- Recoverable: this attempt did not match, but the input is otherwise
  well-formed. Alternation tries the next candidate, optional yields None,
  repetitions stop cleanly.
- Irrecoverable (fatal): the input is malformed. Every enclosing repetition
  and alternation aborts and passes the error up untouched.

Errors are usually irrecoverable when the input is well-formed syntactically
but other constraints failed (a reserved marker, invalid UTF-8 in a string).

Python 3.13+.
"""

from typing import Protocol, runtime_checkable

__all__ = ["Recoverable"]


@runtime_checkable
class Recoverable(Protocol):
    """Capability every error type used with the combinators must provide."""

    def recoverable(self) -> bool:
        """Return True if the failure is recoverable, False otherwise."""
        ...
