"""Sequencing: run steps one after another, then build a value.

Each step runs from the cursor the previous step stopped at and may bind its
value under a name. A step can also be built from the values bound so far
(read a length, then take that many elements). After the last step a pure,
infallible builder turns the bound values into the sequence's result.

The first failing step ends the sequence. Its cursor and error become the
sequence's result as they are: there is no implicit rewind to the start of
the sequence. Each step owns its own atomicity; a step that must be
all-or-nothing (a multi-element read) guarantees that itself, typically via
count() or Progress.and_then(). Grammars wanting the whole sequence to be
atomic rewind the result explicitly with Progress.rewind_on_err(start).

Two forms:

    Builder, evaluated step by step:
        driver.sequence(cursor)
            .then(u8_be, "length")
            .then_with(lambda v: take(v["length"]), "data")
            .build(lambda v: v["data"])

    Reusable parser:
        sized = sequence(
            step(u8_be, "length"),
            step_with(lambda v: take(v["length"]), "data"),
            build=lambda v: v["data"],
        )
"""

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Self

from ..progress import Err, Ok, Progress

if TYPE_CHECKING:
    from ..driver import Driver
    from ..types import Parser

__all__ = ["Sequence", "Step", "sequence", "step", "step_with"]

type Values = Mapping[str, Any]


class Sequence[S, P]:
    """Step-by-step sequence builder.

    Steps run eagerly as they are added. Once one fails, later steps are
    skipped and build() returns that failure.
    """

    __slots__ = ("_convert_error", "_cursor", "_driver", "_failure", "_values")

    def __init__(
        self,
        driver: "Driver[S]",
        cursor: P,
        *,
        convert_error: Callable[[Any], Any] | None = None,
    ) -> None:
        """Initialize sequence.

        Args:
            driver: Parse driver handed to every step
            cursor: Where the first step starts
            convert_error: Applied to the failing step's error, so steps with
                different error types can share one sequence error type
        """
        self._driver = driver
        self._cursor = cursor
        self._convert_error = convert_error
        self._values: dict[str, Any] = {}
        self._failure: Progress[P, Any, Any] | None = None

    @property
    def cursor(self) -> P:
        """Cursor after the last successful step."""
        return self._cursor

    @property
    def values(self) -> Values:
        """Read-only view of the values bound so far."""
        return MappingProxyType(self._values)

    @property
    def failed(self) -> bool:
        """True once a step has failed."""
        return self._failure is not None

    def then(self, parser: "Parser[S, P, Any, Any]", name: str | None = None) -> Self:
        """Run ``parser`` as the next step, binding its value as ``name``."""
        if self._failure is not None:
            return self
        progress = parser(self._driver, self._cursor)
        match progress.status:
            case Ok(value):
                self._cursor = progress.cursor
                if name is not None:
                    self._values[name] = value
            case Err(error):
                if self._convert_error is not None:
                    error = self._convert_error(error)
                self._failure = Progress.failure(progress.cursor, error)
        return self

    def then_with(
        self,
        factory: Callable[[Values], "Parser[S, P, Any, Any]"],
        name: str | None = None,
    ) -> Self:
        """Build the next step from the values bound so far, then run it."""
        if self._failure is not None:
            return self
        return self.then(factory(self.values), name)

    def build[T](self, builder: Callable[[Values], T]) -> Progress[P, T, Any]:
        """Finish the sequence, building the value from the bound values."""
        if self._failure is not None:
            return self._failure
        return Progress.success(self._cursor, builder(self.values))

    def build_with[T](
        self, builder: Callable[[Values, "Driver[S]", P], T]
    ) -> Progress[P, T, Any]:
        """Finish the sequence; builder also receives the driver and final cursor."""
        if self._failure is not None:
            return self._failure
        return Progress.success(self._cursor, builder(self.values, self._driver, self._cursor))


@dataclass(frozen=True, slots=True)
class Step:
    """One step of a reusable sequence.

    Exactly one of ``parser`` and ``factory`` is set.
    """

    parser: Callable[..., Progress[Any, Any, Any]] | None = None
    factory: Callable[[Values], Callable[..., Progress[Any, Any, Any]]] | None = None
    name: str | None = None


def step(parser: "Parser[Any, Any, Any, Any]", name: str | None = None) -> Step:
    """Sequence step running ``parser``, binding its value as ``name``."""
    return Step(parser=parser, name=name)


def step_with(
    factory: Callable[[Values], "Parser[Any, Any, Any, Any]"], name: str | None = None
) -> Step:
    """Sequence step whose parser is built from the values bound so far."""
    return Step(factory=factory, name=name)


def sequence[S, P, T](
    *steps: "Step | Parser[S, P, Any, Any]",
    build: Callable[[Values], T] | None = None,
    build_with: Callable[[Values, "Driver[S]", P], T] | None = None,
    convert_error: Callable[[Any], Any] | None = None,
) -> "Parser[S, P, T, Any]":
    """Create a reusable parser running ``steps`` in order.

    Bare parsers are accepted as unnamed steps. Pass exactly one of
    ``build`` (receives the bound values) or ``build_with`` (also receives
    the driver and the final cursor).

    Raises:
        TypeError: If neither or both builders are given
    """
    if (build is None) == (build_with is None):
        msg = "sequence() needs exactly one of build= or build_with="
        raise TypeError(msg)
    normalized = tuple(s if isinstance(s, Step) else Step(parser=s) for s in steps)

    def run(driver: "Driver[S]", cursor: P) -> Progress[P, T, Any]:
        seq: Sequence[S, P] = Sequence(driver, cursor, convert_error=convert_error)
        for s in normalized:
            if s.factory is not None:
                seq.then_with(s.factory, s.name)
            else:
                seq.then(s.parser, s.name)  # type: ignore[arg-type]
            if seq.failed:
                break
        if build is not None:
            return seq.build(build)
        return seq.build_with(build_with)  # type: ignore[arg-type]

    return run
