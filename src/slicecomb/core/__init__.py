"""Core capabilities shared by the engine and the grammars built on it.

This package holds the small protocols every other layer depends on, so the
dependency graph stays one-directional:

    core <- parsing <- leaves / formats / context

Exports:
    Position: Protocol for totally ordered parse positions
    Recoverable: Protocol for classifying failures as recoverable or fatal
    Push, SequenceSink, MappingSink, DiscardSink: Destinations for repetitions
    DepthGuard, DepthLimitExceededError: Opt-in recursion depth limiting

Python 3.13+.
"""

from .depth_guard import DepthGuard, DepthLimitExceededError
from .position import Position
from .push import DiscardSink, MappingSink, Push, SequenceSink
from .recoverable import Recoverable

__all__ = [
    "DepthGuard",
    "DepthLimitExceededError",
    "DiscardSink",
    "MappingSink",
    "Position",
    "Push",
    "Recoverable",
    "SequenceSink",
]
