"""Diagnostic formatting service.

Centralizes diagnostic output formatting with configurable options, and
renders complete failure chains with source context.
Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

from parsecraft.constants import DEFAULT_CONTEXT_LINES

from .codes import Diagnostic

if TYPE_CHECKING:
    from parsecraft.syntax.failure import Failure

__all__ = [
    "DiagnosticFormatter",
    "OutputFormat",
]


class OutputFormat(StrEnum):
    """Output format options for diagnostic formatting."""

    RUST = "rust"  # Rust compiler-style output (default)
    SIMPLE = "simple"  # Single-line format
    JSON = "json"  # JSON format for tooling integration


@dataclass(frozen=True, slots=True)
class DiagnosticFormatter:
    """Diagnostic formatting service.

    Centralizes formatting of Diagnostic objects into human-readable
    or machine-readable output. Supports multiple output formats and
    sanitization options.

    Attributes:
        output_format: Output style (rust, simple, json)
        sanitize: Truncate content to prevent information leakage
        color: Enable ANSI color codes (for terminal output)
        max_content_length: Maximum content length when sanitizing

    Example:
        >>> formatter = DiagnosticFormatter(output_format=OutputFormat.SIMPLE)
        >>> print(formatter.format(diagnostic))
        PARSE_FAILED: Expected 'number'
    """

    output_format: OutputFormat = OutputFormat.RUST
    sanitize: bool = False
    color: bool = False
    max_content_length: int = 100

    def format(self, diagnostic: Diagnostic) -> str:
        """Format a single diagnostic.

        Args:
            diagnostic: Diagnostic to format

        Returns:
            Formatted diagnostic string
        """
        match self.output_format:
            case OutputFormat.RUST:
                return self._format_rust(diagnostic)
            case OutputFormat.SIMPLE:
                return self._format_simple(diagnostic)
            case OutputFormat.JSON:
                return self._format_json(diagnostic)

    def format_failure(self, failure: Failure, context_lines: int = DEFAULT_CONTEXT_LINES) -> str:
        """Format a failure chain with the source lines around its deepest position.

        The first block is the diagnostic in the configured format. For text
        input a source excerpt follows, with a caret under the innermost
        failure position:

            error[PARSE_FAILED]: Expected parenthesized expression
              --> line 1, column 6
              = context: parenthesized expression -> argument list -> number
              = at: (1,2,^foo,4)
            <BLANKLINE>
               1 | (1,2,foo,4)
                        ^

        Args:
            failure: Outermost failure of a parse
            context_lines: Number of lines to show before/after the failing line

        Returns:
            Multi-line report
        """
        from parsecraft.syntax.cursor import LineOffsetCache  # noqa: PLC0415 - circular

        result_lines = [self.format(failure.to_diagnostic())]

        position = failure.innermost.position
        if not isinstance(position.source, str):
            return result_lines[0]

        line, col = LineOffsetCache(position.source).get_line_col(position.pos)
        lines = position.source.split("\n")

        result_lines.append("")
        start_line = max(1, line - context_lines)
        end_line = min(len(lines), line + context_lines)

        for i in range(start_line, end_line + 1):
            line_num_str = f"{i:4} | "
            result_lines.append(line_num_str + self._maybe_sanitize(lines[i - 1]))

            if i == line:
                pointer = " " * (len(line_num_str) + col - 1) + "^"
                result_lines.append(pointer)

        return "\n".join(result_lines)

    def _format_rust(self, diagnostic: Diagnostic) -> str:
        """Format diagnostic in Rust compiler style.

        Example output:
            error[PARSE_FAILED]: Expected 'number'
              --> line 1, column 6
              = context: number
              = at: (1,2,^foo,4)
        """
        severity = diagnostic.severity if diagnostic.severity == "warning" else "error"

        if self.color:
            if severity == "error":
                severity_str = f"\033[1;31m{severity}\033[0m"  # Bold red
            else:
                severity_str = f"\033[1;33m{severity}\033[0m"  # Bold yellow
        else:
            severity_str = severity

        parts = [f"{severity_str}[{diagnostic.code.name}]: {diagnostic.message}"]

        if diagnostic.span:
            parts.append(f"  --> line {diagnostic.span.line}, column {diagnostic.span.column}")

        if diagnostic.label_path:
            parts.append(f"  = context: {' -> '.join(diagnostic.label_path)}")

        if diagnostic.excerpt is not None:
            parts.append(f"  = at: {self._maybe_sanitize(diagnostic.excerpt)}")

        if diagnostic.hint:
            hint = self._maybe_sanitize(diagnostic.hint)
            parts.append(f"  = help: {hint}")

        return "\n".join(parts)

    def _format_simple(self, diagnostic: Diagnostic) -> str:
        """Format diagnostic in single-line format.

        Example output:
            PARSE_FAILED: Expected 'number'
        """
        message = self._maybe_sanitize(diagnostic.message)
        return f"{diagnostic.code.name}: {message}"

    def _format_json(self, diagnostic: Diagnostic) -> str:
        """Format diagnostic as JSON.

        Example output:
            {"code": "PARSE_FAILED", "message": "...", "severity": "error"}
        """
        import json  # noqa: PLC0415

        data: dict[str, str | int | list[str] | None] = {
            "code": diagnostic.code.name,
            "code_value": diagnostic.code.value,
            "message": self._maybe_sanitize(diagnostic.message),
            "severity": diagnostic.severity,
        }

        if diagnostic.span:
            data["line"] = diagnostic.span.line
            data["column"] = diagnostic.span.column
            data["start"] = diagnostic.span.start
            data["end"] = diagnostic.span.end

        if diagnostic.label_path:
            data["context"] = list(diagnostic.label_path)

        if diagnostic.excerpt is not None:
            data["excerpt"] = self._maybe_sanitize(diagnostic.excerpt)

        if diagnostic.hint:
            data["hint"] = self._maybe_sanitize(diagnostic.hint)

        return json.dumps(data, ensure_ascii=False)

    def _maybe_sanitize(self, text: str) -> str:
        """Truncate text if sanitization is enabled.

        Args:
            text: Text to possibly truncate

        Returns:
            Original or truncated text
        """
        if self.sanitize and len(text) > self.max_content_length:
            return text[: self.max_content_length] + "..."
        return text
