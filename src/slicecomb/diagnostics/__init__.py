"""Diagnostic system for slicecomb errors.

Provides structured error diagnostics with codes, spans and hints.
Inspired by Rust compiler diagnostics.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode, ErrorCategory, SourceSpan
from .errors import (
    GrammarError,
    NoAlternativesError,
    NonAdvancingRepetitionError,
    NotEnoughDataError,
    ParseFailure,
    ProgressUnwrapError,
    SlicecombError,
    TagMismatchError,
)
from .formatter import DiagnosticFormatter, OutputFormat
from .templates import ErrorTemplate

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
    "DiagnosticFormatter",
    "ErrorCategory",
    "ErrorTemplate",
    "GrammarError",
    "NoAlternativesError",
    "NonAdvancingRepetitionError",
    "NotEnoughDataError",
    "OutputFormat",
    "ParseFailure",
    "ProgressUnwrapError",
    "SlicecombError",
    "SourceSpan",
    "TagMismatchError",
]
