"""Diagnostic system for parsecraft errors.

Provides structured error diagnostics with codes, spans, hints and failure
context paths. Inspired by Rust compiler diagnostics and Elm error messages.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode, FailureKind, SourceSpan
from .errors import (
    GrammarError,
    IntegerOverflowError,
    ParsecraftError,
    ParseFailureError,
    ReferenceAlreadyBoundError,
    UnboundReferenceError,
)
from .formatter import DiagnosticFormatter, OutputFormat
from .templates import ErrorTemplate, FailureLabel

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
    "DiagnosticFormatter",
    "ErrorTemplate",
    "FailureKind",
    "FailureLabel",
    "GrammarError",
    "IntegerOverflowError",
    "OutputFormat",
    "ParseFailureError",
    "ParsecraftError",
    "ReferenceAlreadyBoundError",
    "SourceSpan",
    "UnboundReferenceError",
]
