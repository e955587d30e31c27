"""Parse driver: per-session state and combinator entry points.

A Driver owns exactly one caller-defined ``state`` value for the lifetime of
a parse session and is handed to every parser call. Stateless grammars leave
the state as None.

State is NOT rewound on backtrack. Only cursors are restored: when an
alternative or a repetition gives up on a branch, whatever that branch wrote
into ``driver.state`` stays written. Grammars that need transactional state
snapshot and restore it themselves around their retry points.

Thread Safety:
    Not thread-safe. Parse independent inputs concurrently with one Driver
    per thread.

Python 3.13+.
"""

import contextlib
import logging
from contextlib import AbstractContextManager

from slicecomb.core.depth_guard import DepthGuard
from slicecomb.core.recoverable import Recoverable

from .accumulator import ErrorAccumulator, LastErrorOnly
from .combinators.alternate import Alternate
from .combinators.optional import optional
from .combinators.sequence import Sequence
from .progress import Progress
from .types import Parser

__all__ = ["Driver"]

logger = logging.getLogger(__name__)


class Driver[S]:
    """Holder of mutable parse-session state.

    Attributes:
        state: Caller-defined context threaded through every parser call

    Example:
        >>> driver = Driver.with_state({"strings": 0})
        >>> driver.run(u8_be, SliceCursor.new(b"\\x07")).value
        7
    """

    __slots__ = ("_depth_guard", "state")

    def __init__(self, state: S | None = None, *, max_depth: int | None = None) -> None:
        """Initialize driver.

        Args:
            state: Initial session state (default: None, for stateless grammars)
            max_depth: Nesting limit enforced by nested(). None (default)
                leaves recursion bounded only by the interpreter stack.
        """
        self.state = state
        self._depth_guard = DepthGuard(max_depth) if max_depth is not None else None
        if self._depth_guard is not None:
            logger.debug("Driver created with max_depth=%d", self._depth_guard.max_depth)

    @classmethod
    def with_state(cls, state: S, *, max_depth: int | None = None) -> "Driver[S]":
        """Create a driver with ``state`` as initial state."""
        return cls(state, max_depth=max_depth)

    @property
    def max_depth(self) -> int | None:
        """Configured nesting limit (None if unbounded)."""
        return self._depth_guard.max_depth if self._depth_guard is not None else None

    @property
    def depth(self) -> int:
        """Current nesting depth tracked by nested()."""
        return self._depth_guard.depth if self._depth_guard is not None else 0

    def nested(self) -> AbstractContextManager[object]:
        """Context manager marking one level of grammar nesting.

        Raises:
            DepthLimitExceededError: On entry, if max_depth levels are active
        """
        if self._depth_guard is None:
            return contextlib.nullcontext()
        return self._depth_guard

    def run[P, T, E](self, parser: Parser[S, P, T, E], cursor: P) -> Progress[P, T, E]:
        """Run ``parser`` from ``cursor`` with this driver."""
        return parser(self, cursor)

    def optional[P, T, E: Recoverable](
        self, cursor: P, parser: Parser[S, P, T, E]
    ) -> Progress[P, T | None, E]:
        """Run ``parser``, making it optional.

        If ``parser`` was successful, its value is passed through.
        Recoverable failures become successes with None as value, at
        ``cursor``. Irrecoverable failures stay that way.
        """
        return optional(parser)(self, cursor)

    def alternate[P, T, E: Recoverable](
        self, cursor: P
    ) -> Alternate[S, P, T, E, E]:
        """Try the parsers supplied via ``one()``, in order, until one matches.

        If none succeeded, ``finish()`` returns the error of the last parser
        run. To keep the errors of the other candidates as well, see
        alternate_accumulate_errors().
        """
        return Alternate(self, cursor, LastErrorOnly())

    def alternate_accumulate_errors[P, T, E: Recoverable, A](
        self, cursor: P, accumulator: ErrorAccumulator[P, E, A]
    ) -> Alternate[S, P, T, E, A]:
        """Like alternate(), resolving failure through ``accumulator``."""
        return Alternate(self, cursor, accumulator)

    def sequence[P](self, cursor: P) -> Sequence[S, P]:
        """Start a step-by-step sequence at ``cursor``."""
        return Sequence(self, cursor)

    def __repr__(self) -> str:
        return f"Driver(state={self.state!r}, max_depth={self.max_depth!r})"
