"""Rendering of Diagnostic objects for terminals, logs and tools.

Three renderings of the same diagnostic:

    rust    error[TRUNCATED_ELEMENT]: Element is truncated
              --> offset 12
              = help: The input ended in the middle of an element

    simple  TRUNCATED_ELEMENT: Element is truncated

    json    {"code": "TRUNCATED_ELEMENT", "code_value": 3002, ...}

Python 3.13+. Zero external dependencies.
"""

import json
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from enum import StrEnum

from slicecomb.constants import MAX_DIAGNOSTIC_CONTENT

from .codes import Diagnostic

__all__ = [
    "DiagnosticFormatter",
    "OutputFormat",
]

# Bold red for errors, bold yellow for warnings.
_SEVERITY_COLORS = {"error": "\033[1;31m", "warning": "\033[1;33m"}
_RESET = "\033[0m"


class OutputFormat(StrEnum):
    """Diagnostic rendering styles."""

    RUST = "rust"
    SIMPLE = "simple"
    JSON = "json"


@dataclass(frozen=True, slots=True)
class DiagnosticFormatter:
    """Renders diagnostics in one of the OutputFormat styles.

    Attributes:
        output_format: Rendering style
        sanitize: Cut free-text fields down to ``max_content_length``
        color: Wrap the severity in ANSI color codes (rust style only)
        max_content_length: Longest free-text field kept when sanitizing

    Example:
        >>> diagnostic = ErrorTemplate.not_enough_data(6, 4, 2)
        >>> print(DiagnosticFormatter().format(diagnostic))
        error[NOT_ENOUGH_DATA]: Requested 4 element(s), 2 remaining
          --> offset 6
          = help: The input ended before the value was complete
    """

    output_format: OutputFormat = OutputFormat.RUST
    sanitize: bool = False
    color: bool = False
    max_content_length: int = MAX_DIAGNOSTIC_CONTENT

    def format(self, diagnostic: Diagnostic) -> str:
        """Render one diagnostic."""
        match self.output_format:
            case OutputFormat.SIMPLE:
                return f"{diagnostic.code.name}: {self._text(diagnostic.message)}"
            case OutputFormat.JSON:
                return json.dumps(self._fields(diagnostic), ensure_ascii=False)
            case _:
                return "\n".join(self._rust_lines(diagnostic))

    def format_all(self, diagnostics: Iterable[Diagnostic]) -> str:
        """Render several diagnostics, separated by blank lines."""
        return "\n\n".join(map(self.format, diagnostics))

    def _rust_lines(self, diagnostic: Diagnostic) -> Iterator[str]:
        severity = diagnostic.severity
        if self.color:
            severity = f"{_SEVERITY_COLORS[severity]}{severity}{_RESET}"
        yield f"{severity}[{diagnostic.code.name}]: {self._text(diagnostic.message)}"

        span = diagnostic.span
        if span is not None:
            if span.end > span.start:
                yield f"  --> offsets {span.start}..{span.end}"
            else:
                yield f"  --> offset {span.start}"
        if diagnostic.expected:
            yield f"  = expected: {self._text(', '.join(diagnostic.expected))}"
        if diagnostic.hint:
            yield f"  = help: {self._text(diagnostic.hint)}"

    def _fields(self, diagnostic: Diagnostic) -> dict[str, object]:
        fields: dict[str, object] = {
            "code": diagnostic.code.name,
            "code_value": diagnostic.code.value,
            "message": self._text(diagnostic.message),
            "category": str(diagnostic.category),
            "severity": diagnostic.severity,
        }
        if diagnostic.span is not None:
            fields["start"] = diagnostic.span.start
            fields["end"] = diagnostic.span.end
        if diagnostic.expected:
            fields["expected"] = list(diagnostic.expected)
        if diagnostic.hint:
            fields["hint"] = self._text(diagnostic.hint)
        return fields

    def _text(self, text: str) -> str:
        if self.sanitize and len(text) > self.max_content_length:
            return text[: self.max_content_length] + "..."
        return text
