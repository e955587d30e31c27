"""Parser combinators.

Every combinator takes parsers following the ``(driver, cursor) -> Progress``
contract and returns a parser following it too, except Alternate and
Sequence, which are builders evaluated against one driver and cursor.
"""

from .alternate import Alternate
from .count import count, count_push_into, skip_count
from .optional import optional
from .repetition import (
    one_or_more,
    one_or_more_push_into,
    zero_or_more,
    zero_or_more_push_into,
)
from .sequence import Sequence, Step, sequence, step, step_with

__all__ = [
    "Alternate",
    "Sequence",
    "Step",
    "count",
    "count_push_into",
    "one_or_more",
    "one_or_more_push_into",
    "optional",
    "sequence",
    "skip_count",
    "step",
    "step_with",
    "zero_or_more",
    "zero_or_more_push_into",
]
