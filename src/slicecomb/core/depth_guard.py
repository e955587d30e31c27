"""Opt-in nesting limit for recursive grammars.

Combinators recurse on the Python call stack, one or more frames per level of
grammar nesting. Input such as ``[[[[...]]]]`` thousands of levels deep would
otherwise end in RecursionError somewhere inside the engine. A grammar marks
each nesting level with ``with driver.nested():`` and the driver's DepthGuard
turns "too deep" into a DepthLimitExceededError raised at a known point.

Each Driver owns its guard; nothing is shared between parse sessions.
Python 3.13+.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, field

from slicecomb.constants import DEPTH_RESERVE_FRAMES, MAX_DEPTH
from slicecomb.diagnostics import SlicecombError
from slicecomb.diagnostics.templates import ErrorTemplate

__all__ = ["DepthGuard", "DepthLimitExceededError", "depth_clamp"]

logger = logging.getLogger(__name__)


class DepthLimitExceededError(SlicecombError):
    """Input nests deeper than the driver's ``max_depth``.

    Raised, not returned: a depth overrun is a resource guard tripping, and
    no alternative or repetition should try to recover from it.
    """


@dataclass(slots=True)
class DepthGuard:
    """Counts active nesting levels and refuses to go past ``max_depth``.

    Example:
        >>> guard = DepthGuard(max_depth=2)
        >>> with guard, guard:
        ...     guard.is_exceeded()
        True

    Attributes:
        max_depth: Number of levels allowed at once (clamped on creation)
        current_depth: Levels currently entered
    """

    max_depth: int = MAX_DEPTH
    current_depth: int = field(default=0, init=False)

    def __post_init__(self) -> None:
        self.max_depth = depth_clamp(self.max_depth)

    def __enter__(self) -> DepthGuard:
        # Raise before counting: __exit__ never runs when __enter__ fails.
        self.check()
        self.current_depth += 1
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> None:
        self.current_depth -= 1

    @property
    def depth(self) -> int:
        """Levels currently entered."""
        return self.current_depth

    def is_exceeded(self) -> bool:
        """True if entering one more level would raise."""
        return self.current_depth >= self.max_depth

    def check(self) -> None:
        """Raise DepthLimitExceededError if no further level may be entered."""
        if self.is_exceeded():
            raise DepthLimitExceededError(ErrorTemplate.depth_exceeded(self.max_depth))

    def reset(self) -> None:
        """Forget all entered levels."""
        self.current_depth = 0


def depth_clamp(requested_depth: int, reserve_frames: int = DEPTH_RESERVE_FRAMES) -> int:
    """Limit ``requested_depth`` to what the interpreter stack can hold.

    A depth limit above ``sys.getrecursionlimit()`` would never trip before
    RecursionError does, so it is lowered, keeping ``reserve_frames`` frames
    free for the caller, and a warning is logged.

    Args:
        requested_depth: Desired nesting limit
        reserve_frames: Frames kept free below the recursion limit

    Returns:
        ``requested_depth``, or the clamped value
    """
    ceiling = sys.getrecursionlimit() - reserve_frames
    if requested_depth <= ceiling:
        return requested_depth
    logger.warning(
        "Requested depth %d exceeds Python recursion limit (%d). "
        "Clamping to %d; raise sys.setrecursionlimit() to allow deeper nesting.",
        requested_depth,
        sys.getrecursionlimit(),
        ceiling,
    )
    return ceiling
