"""slicecomb - zero-copy parser combinators with explicit backtracking.

Composable primitives for recursive-descent parsers over any ordered cursor
type, with a recoverable/fatal error classification that decides how
failures travel through repetitions and alternations, and pluggable
strategies for which error an exhausted alternation reports.

Public API:
    Driver - Parse session: caller state, combinator entry points, depth guard
    SliceCursor - Immutable cursor over bytes (zero-copy) or any sequence
    Progress, Ok, Err - Return shape of every parser
    count, skip_count, zero_or_more, one_or_more, optional - Repetition
    sequence, step, step_with - Reusable sequencing
    try_parse, early_return - Unwrap-or-propagate for hand-written parsers
    DiscardErrors, LastErrorOnly, AllErrors, FurthestErrors - Error accumulators
    Discarded - Failure value of an alternation using DiscardErrors
    with_context - Wrap failures in application errors

Exceptions:
    SlicecombError - Base exception class
    ParseFailure - Base of failure values returned inside Progress
    GrammarError - Raised on engine contract violations

Submodules:
    slicecomb.core - Protocols (Position, Recoverable, Push), sinks, depth guard
    slicecomb.parsing - Engine and combinators
    slicecomb.leaves - Number and literal leaf parsers for byte cursors
    slicecomb.context - Error-context adapter
    slicecomb.formats.msgpack - MessagePack pull parser and unpacker
    slicecomb.diagnostics - Error codes, templates and formatting
"""

# Essential Public API - Minimal exports for clean namespace
from .context import ContextError, context_leaf, into_context_leaf, with_context
from .core import DepthLimitExceededError, MappingSink, SequenceSink
from .diagnostics import GrammarError, NotEnoughDataError, ParseFailure, SlicecombError
from .parsing import (
    AllErrors,
    DiscardErrors,
    Discarded,
    Driver,
    Err,
    FurthestErrors,
    LastErrorOnly,
    Ok,
    Progress,
    SliceCursor,
    count,
    early_return,
    one_or_more,
    optional,
    sequence,
    skip_count,
    step,
    step_with,
    try_parse,
    zero_or_more,
)

# Version information - Auto-populated from package metadata
# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

try:
    __version__ = _get_version("slicecomb")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "AllErrors",
    "ContextError",
    "DepthLimitExceededError",
    "DiscardErrors",
    "Discarded",
    "Driver",
    "Err",
    "FurthestErrors",
    "GrammarError",
    "LastErrorOnly",
    "MappingSink",
    "NotEnoughDataError",
    "Ok",
    "ParseFailure",
    "Progress",
    "SequenceSink",
    "SliceCursor",
    "SlicecombError",
    "__version__",
    "context_leaf",
    "count",
    "early_return",
    "into_context_leaf",
    "one_or_more",
    "optional",
    "sequence",
    "skip_count",
    "step",
    "step_with",
    "try_parse",
    "with_context",
    "zero_or_more",
]
