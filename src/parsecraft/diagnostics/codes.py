"""Diagnostic codes and data structures.

Defines error codes, failure kinds, source spans, and diagnostic messages.
Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from enum import Enum, StrEnum
from typing import Literal

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
    "FailureKind",
    "SourceSpan",
]


class FailureKind(StrEnum):
    """How a parse failure came to be.

    Inherits from ``StrEnum`` so that ``str(kind)`` and direct string
    comparisons work without accessing ``.value``.

    Kinds:
        UNMATCHED: A primitive found no matching input at its position
        LABELED: A failure wrapped with a named grammar context
        ATOMIC: Any failure collapsed to a contextless one at a fixed position
        REJECTED: A structural match turned into a failure by validation
    """

    UNMATCHED = "unmatched"
    LABELED = "labeled"
    ATOMIC = "atomic"
    REJECTED = "rejected"


class DiagnosticCode(Enum):
    """Error codes with unique identifiers.

    Organized by category:
        1000-1999: Parse failures (recoverable, produced by parsers)
        2000-2999: Grammar errors (fatal, programmer misuse)
        3000-3999: Environment errors (optional dependencies, locales)
    """

    # Parse failures (1000-1999)
    PARSE_FAILED = 1001
    UNEXPECTED_EOF = 1002
    VALUE_REJECTED = 1003

    # Grammar errors (2000-2999)
    UNBOUND_REFERENCE = 2001
    REFERENCE_ALREADY_BOUND = 2002
    INTEGER_OVERFLOW = 2003

    # Environment errors (3000-3999)
    LOCALE_UNKNOWN = 3001


@dataclass(frozen=True, slots=True)
class SourceSpan:
    """Source code location for error reporting.

    Note:
        Python strings measure positions in characters (Unicode code points),
        not bytes. For non-text input, positions are element indices and
        line/column fall back to 1 and index + 1.

    Attributes:
        start: Starting offset (0-indexed)
        end: Ending offset (exclusive)
        line: Line number (1-indexed)
        column: Column number (1-indexed)
    """

    start: int
    end: int
    line: int
    column: int

    def __post_init__(self) -> None:
        """Validate SourceSpan invariants.

        Raises:
            ValueError: If start is negative, end precedes start, line is
                less than 1, or column is less than 1.
        """
        if self.start < 0:
            msg = f"SourceSpan.start must be >= 0, got {self.start}"
            raise ValueError(msg)
        if self.end < self.start:
            msg = f"SourceSpan.end ({self.end}) must be >= start ({self.start})"
            raise ValueError(msg)
        if self.line < 1:
            msg = f"SourceSpan.line must be >= 1 (1-indexed), got {self.line}"
            raise ValueError(msg)
        if self.column < 1:
            msg = f"SourceSpan.column must be >= 1 (1-indexed), got {self.column}"
            raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Structured diagnostic message.

    Inspired by Rust compiler diagnostics. Provides rich error information
    for both humans and tools.

    Attributes:
        code: Unique error code
        message: Human-readable error description
        span: Source location (None for errors without an input position)
        hint: Suggestion for fixing the error
        label_path: Grammar labels active at the failure, outermost first
        excerpt: Input rendered with a position marker (``before^after``)
        severity: Error severity level
    """

    code: DiagnosticCode
    message: str
    span: SourceSpan | None = None
    hint: str | None = None
    label_path: tuple[str, ...] = ()
    excerpt: str | None = None
    severity: Literal["error", "warning"] = "error"

    def __str__(self) -> str:
        """Return human-readable error description."""
        return self.message

    def format_error(self) -> str:
        """Format diagnostic like Rust compiler.

        Example output:
            error[PARSE_FAILED]: Expected 'parenthesized expression'
              --> line 1, column 6
              = context: parenthesized expression -> argument list -> number
              = at: (1,2,^foo,4)

        Returns:
            Formatted error message
        """
        from .formatter import DiagnosticFormatter  # noqa: PLC0415 - circular

        return DiagnosticFormatter().format(self)
