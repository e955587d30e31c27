"""The parsing engine: cursors, progress, the driver and the combinators.

Every parser, leaf or compound, has the same shape:

    def parse_foo(driver: Driver[S], cursor: P) -> Progress[P, Foo, FooError]

and the combinators only ever rely on that shape plus three capabilities:
cursors are ordered (``Position``), errors classify themselves as
recoverable or fatal (``Recoverable``), and repetition targets accept
pushed values (``Push``).

Python 3.13+. Zero external dependencies.
"""

from .accumulator import (
    AllErrors,
    DiscardErrors,
    Discarded,
    ErrorAccumulator,
    ErrorList,
    FurthestErrors,
    LastErrorOnly,
)
from .combinators import (
    Alternate,
    Sequence,
    Step,
    count,
    count_push_into,
    one_or_more,
    one_or_more_push_into,
    optional,
    sequence,
    skip_count,
    step,
    step_with,
    zero_or_more,
    zero_or_more_push_into,
)
from .cursor import ByteCursor, SliceCursor
from .driver import Driver
from .progress import Err, Ok, Progress, Status
from .propagate import PropagatedFailure, early_return, try_parse
from .types import Parser, PushFactory

__all__ = [
    "AllErrors",
    "Alternate",
    "ByteCursor",
    "DiscardErrors",
    "Discarded",
    "Driver",
    "Err",
    "ErrorAccumulator",
    "ErrorList",
    "FurthestErrors",
    "LastErrorOnly",
    "Ok",
    "Parser",
    "Progress",
    "PropagatedFailure",
    "PushFactory",
    "Sequence",
    "SliceCursor",
    "Status",
    "Step",
    "count",
    "count_push_into",
    "early_return",
    "one_or_more",
    "one_or_more_push_into",
    "optional",
    "sequence",
    "skip_count",
    "step",
    "step_with",
    "try_parse",
    "zero_or_more",
    "zero_or_more_push_into",
]
