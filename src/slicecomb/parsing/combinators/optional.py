"""Optional combinator."""

from typing import TYPE_CHECKING

from slicecomb.core.recoverable import Recoverable

from ..progress import Err, Progress

if TYPE_CHECKING:
    from ..driver import Driver
    from ..types import Parser

__all__ = ["optional"]


def optional[S, P, T, E: Recoverable](
    parser: "Parser[S, P, T, E]",
) -> "Parser[S, P, T | None, E]":
    """Wrap ``parser``, making it optional.

    - Success: passed through unchanged.
    - Recoverable failure: success with None as value, cursor rewound to
      where the attempt started.
    - Irrecoverable failure: passed through unchanged, with the cursor the
      inner parser reported.

    A parser whose own success value is None cannot be told apart from an
    absent match; wrap its value first if the difference matters.
    """

    def run(driver: "Driver[S]", cursor: P) -> Progress[P, T | None, E]:
        progress = parser(driver, cursor)
        match progress.status:
            case Err(error) if error.recoverable():
                return Progress.success(cursor, None)
            case _:
                return progress  # type: ignore[return-value]

    return run
