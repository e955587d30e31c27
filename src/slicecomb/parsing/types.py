"""Type aliases for the leaf-parser contract.

A parser is any callable taking ``(driver, cursor)`` and returning a
Progress. Leaf parsers, combinator results and whole grammars all share this
one shape, which is what lets them compose.

Python 3.13+.
"""

from collections.abc import Callable
from typing import TYPE_CHECKING

from .progress import Progress

if TYPE_CHECKING:
    from .driver import Driver

__all__ = ["Parser", "PushFactory"]

# Alias values are evaluated lazily, so the Driver import can stay
# type-checking only.
type Parser[S, P, T, E] = Callable[[Driver[S], P], Progress[P, T, E]]

type PushFactory[C] = Callable[[], C]
