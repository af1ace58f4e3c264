"""Tests for the diagnostics package: codes, templates, errors, formatter.

Python 3.13+.
"""

from __future__ import annotations

import json

import pytest
from hypothesis import given
from hypothesis import strategies as st

from parsecraft.diagnostics import (
    Diagnostic,
    DiagnosticCode,
    DiagnosticFormatter,
    ErrorTemplate,
    FailureKind,
    FailureLabel,
    GrammarError,
    IntegerOverflowError,
    OutputFormat,
    ParseFailureError,
    ParsecraftError,
    ReferenceAlreadyBoundError,
    SourceSpan,
    UnboundReferenceError,
)
from parsecraft.syntax.cursor import Cursor
from parsecraft.syntax.failure import Failure


def _three_layer_failure() -> Failure:
    leaf = Failure(Cursor("(1,2,foo,4)", 5))
    return leaf.wrap("number").wrap("argument list").wrap("parenthesized expression")


# ============================================================================
# CODES
# ============================================================================


class TestCodes:
    """Enums and data structures."""

    def test_failure_kind_is_str(self) -> None:
        """FailureKind compares equal to its value."""
        assert FailureKind.REJECTED == "rejected"
        assert str(FailureKind.ATOMIC) == "atomic"

    def test_code_ranges(self) -> None:
        """Parse failures and grammar errors use separate ranges."""
        assert 1000 <= DiagnosticCode.PARSE_FAILED.value < 2000
        assert 2000 <= DiagnosticCode.UNBOUND_REFERENCE.value < 3000
        assert 3000 <= DiagnosticCode.LOCALE_UNKNOWN.value < 4000

    @pytest.mark.parametrize(
        ("start", "end", "line", "column"),
        [(-1, 0, 1, 1), (5, 4, 1, 1), (0, 0, 0, 1), (0, 0, 1, 0)],
    )
    def test_source_span_validation(self, start: int, end: int, line: int, column: int) -> None:
        """Invalid spans are rejected at construction."""
        with pytest.raises(ValueError, match="SourceSpan"):
            SourceSpan(start=start, end=end, line=line, column=column)

    def test_diagnostic_str_is_message(self) -> None:
        """str(diagnostic) is the bare message."""
        diagnostic = Diagnostic(code=DiagnosticCode.PARSE_FAILED, message="Expected 'x'")
        assert str(diagnostic) == "Expected 'x'"


# ============================================================================
# TEMPLATES
# ============================================================================


class TestTemplates:
    """ErrorTemplate and FailureLabel."""

    def test_failure_labels(self) -> None:
        """Labels are plain, comparable strings."""
        assert FailureLabel.literal("(") == "'('"
        assert FailureLabel.at_least(2) == "expected at least 2 items"
        assert FailureLabel.digit_count(4, 3) == "expected exactly 4 digits, found 3"
        assert "[0, 9]" in FailureLabel.out_of_range("10", 0, 9)

    def test_parse_failed_without_labels(self) -> None:
        """An unlabeled failure still gets a message."""
        assert ErrorTemplate.parse_failed((), None, None).message == "Unexpected input"
        eof = ErrorTemplate.parse_failed((), None, None, at_end=True)
        assert eof.message == "Unexpected end of input"
        assert eof.hint is not None

    def test_rejected_uses_innermost_label(self) -> None:
        """Rejections report the validation message itself."""
        diagnostic = ErrorTemplate.parse_failed(("rule", "too big"), None, None, rejected=True)
        assert diagnostic.code is DiagnosticCode.VALUE_REJECTED
        assert diagnostic.message == "too big"

    def test_unbound_reference_without_name(self) -> None:
        """Anonymous deferred parsers are named generically."""
        message = ErrorTemplate.unbound_reference(None).message
        assert message.startswith("DeferredParser")

    def test_reference_already_bound(self) -> None:
        """Named rules appear quoted."""
        diagnostic = ErrorTemplate.reference_already_bound("expr")
        assert diagnostic.code is DiagnosticCode.REFERENCE_ALREADY_BOUND
        assert "'expr'" in diagnostic.message

    def test_locale_unknown_is_warning(self) -> None:
        """Unknown locales are reported at warning severity."""
        assert ErrorTemplate.locale_unknown("xx_YY").severity == "warning"


# ============================================================================
# ERRORS
# ============================================================================


class TestErrors:
    """Exception hierarchy."""

    def test_plain_message(self) -> None:
        """A string message leaves diagnostic unset."""
        error = ParsecraftError("plain")
        assert error.diagnostic is None
        assert str(error) == "plain"

    def test_diagnostic_message(self) -> None:
        """A Diagnostic is formatted into the exception text."""
        diagnostic = ErrorTemplate.unbound_reference("expr")
        error = UnboundReferenceError(diagnostic)
        assert error.diagnostic is diagnostic
        assert str(error) == diagnostic.format_error()

    def test_hierarchy(self) -> None:
        """Grammar errors and parse failures share one base."""
        assert issubclass(ParseFailureError, ParsecraftError)
        assert issubclass(GrammarError, ParsecraftError)
        for error_class in (UnboundReferenceError, ReferenceAlreadyBoundError, IntegerOverflowError):
            assert issubclass(error_class, GrammarError)
        assert not issubclass(ParseFailureError, GrammarError)

    def test_integer_overflow_text(self) -> None:
        """The overflowing literal is kept on the exception."""
        assert IntegerOverflowError("overflow", text="999").text == "999"
        assert IntegerOverflowError("overflow").text == ""

    def test_parse_failure_error_accessors(self) -> None:
        """Accessors expose the outermost layer."""
        failure = _three_layer_failure()
        error = ParseFailureError(failure)
        assert error.failure is failure
        assert error.labels == ("parenthesized expression",)
        assert error.position.pos == 5
        assert error.cause is failure.cause
        assert "PARSE_FAILED" in str(error)


# ============================================================================
# FORMATTER
# ============================================================================


class TestDiagnosticFormatter:
    """Output formats and failure reports."""

    def test_rust_format(self) -> None:
        """Rust style shows location, context and excerpt."""
        text = DiagnosticFormatter().format(_three_layer_failure().to_diagnostic())
        assert text == (
            "error[PARSE_FAILED]: Expected parenthesized expression\n"
            "  --> line 1, column 6\n"
            "  = context: parenthesized expression -> argument list -> number\n"
            "  = at: (1,2,^foo,4)"
        )

    def test_rust_format_warning_and_hint(self) -> None:
        """Warnings keep their severity and show the hint."""
        text = DiagnosticFormatter().format(ErrorTemplate.locale_unknown("xx"))
        assert text.startswith("warning[LOCALE_UNKNOWN]")
        assert "  = help: " in text

    def test_color(self) -> None:
        """ANSI codes wrap the severity."""
        text = DiagnosticFormatter(color=True).format(ErrorTemplate.unbound_reference("x"))
        assert text.startswith("\033[1;31merror\033[0m")

    def test_simple_format(self) -> None:
        """Simple style is one line."""
        formatter = DiagnosticFormatter(output_format=OutputFormat.SIMPLE)
        text = formatter.format(_three_layer_failure().to_diagnostic())
        assert text == "PARSE_FAILED: Expected parenthesized expression"

    def test_json_format(self) -> None:
        """JSON style carries span and context for tooling."""
        formatter = DiagnosticFormatter(output_format=OutputFormat.JSON)
        data = json.loads(formatter.format(_three_layer_failure().to_diagnostic()))
        assert data["code"] == "PARSE_FAILED"
        assert data["code_value"] == 1001
        assert (data["line"], data["column"]) == (1, 6)
        assert data["context"] == ["parenthesized expression", "argument list", "number"]
        assert data["excerpt"] == "(1,2,^foo,4)"
        assert "hint" not in data

    def test_sanitize_truncates(self) -> None:
        """Long messages are cut when sanitizing."""
        diagnostic = Diagnostic(code=DiagnosticCode.PARSE_FAILED, message="x" * 200)
        formatter = DiagnosticFormatter(output_format=OutputFormat.SIMPLE, sanitize=True)
        assert formatter.format(diagnostic) == "PARSE_FAILED: " + "x" * 100 + "..."

    def test_format_failure_single_line(self) -> None:
        """The source line is shown with a caret under the failure."""
        report = DiagnosticFormatter().format_failure(_three_layer_failure())
        lines = report.split("\n")
        assert "   1 | (1,2,foo,4)" in lines
        assert lines[-1] == " " * 12 + "^"

    def test_format_failure_caret_on_later_line(self) -> None:
        """The caret column is relative to the failing line."""
        failure = Failure(Cursor("ab\ncd!x", 5), ("'x'",))
        lines = DiagnosticFormatter().format_failure(failure).split("\n")
        assert "  --> line 2, column 3" in lines
        assert lines[-2:] == ["   2 | cd!x", " " * 9 + "^"]

    def test_format_failure_context_window(self) -> None:
        """Only context_lines lines around the failing line are shown."""
        failure = Failure(Cursor("a\nb\nc\nd\ne\nf\ng", 6), ("'x'",))
        report = DiagnosticFormatter().format_failure(failure, context_lines=1)
        assert "   3 | c" in report
        assert "   4 | d" in report
        assert "   5 | e" in report
        assert "   2 | b" not in report
        assert "   6 | f" not in report

    def test_format_failure_token_list(self) -> None:
        """Non-text input gets the diagnostic block only."""
        failure = Failure(Cursor([1, 2, 3], 1))
        formatter = DiagnosticFormatter()
        assert formatter.format_failure(failure) == formatter.format(failure.to_diagnostic())

    @given(message=st.text(max_size=300))
    def test_simple_format_length_bound(self, message: str) -> None:
        """PROPERTY: sanitized messages never exceed the limit plus ellipsis."""
        diagnostic = Diagnostic(code=DiagnosticCode.PARSE_FAILED, message=message)
        formatter = DiagnosticFormatter(output_format=OutputFormat.SIMPLE, sanitize=True)
        body = formatter.format(diagnostic).removeprefix("PARSE_FAILED: ")
        assert len(body) <= formatter.max_content_length + 3
