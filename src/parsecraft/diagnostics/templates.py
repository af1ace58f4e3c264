"""Error message templates.

Centralized error message templates for testable, consistent error messages.
Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode, SourceSpan

__all__ = ["ErrorTemplate", "FailureLabel"]


class FailureLabel:
    """Context labels attached to Failure values by the built-in parsers.

    Labels are plain strings so grammar authors can compare them directly.
    """

    END_OF_INPUT = "end of input"
    CLOSING_QUOTE = "closing quote"

    @staticmethod
    def literal(text: object) -> str:
        """Label for an unmatched literal, e.g. ``'('``."""
        return f"'{text}'"

    @staticmethod
    def at_least(minimum: int) -> str:
        """Label for a list that collected too few elements."""
        return f"expected at least {minimum} items"

    @staticmethod
    def digit_count(expected: int, found: int) -> str:
        """Label for a fixed-length radix integer with the wrong digit count."""
        return f"expected exactly {expected} digits, found {found}"

    @staticmethod
    def out_of_range(text: str, minimum: int | float, maximum: int | float) -> str:
        """Label for a numeric literal outside its representable range."""
        return f"number '{text}' is outside the range [{minimum}, {maximum}]"


class ErrorTemplate:
    """Centralized error message templates.

    All error messages are created here. NO f-strings in exception constructors!
    This solves EM101/EM102 violations while providing:
        - Testable error messages
        - Consistent formatting
        - Documentation of all error cases
    """

    @staticmethod
    def parse_failed(
        label_path: tuple[str, ...],
        span: SourceSpan | None,
        excerpt: str | None,
        *,
        at_end: bool = False,
        rejected: bool = False,
    ) -> Diagnostic:
        """Input did not match the grammar.

        Args:
            label_path: Labels of the failure chain, outermost first
            span: Location of the innermost failure
            excerpt: Input rendered with a marker at the innermost failure
            at_end: True if the innermost failure sits at end of input
            rejected: True if the innermost failure is a semantic rejection

        Returns:
            Diagnostic for PARSE_FAILED, UNEXPECTED_EOF or VALUE_REJECTED
        """
        if rejected:
            code = DiagnosticCode.VALUE_REJECTED
            msg = label_path[-1] if label_path else "Value rejected"
            hint = "The input matched structurally but failed a validation rule"
        elif at_end:
            code = DiagnosticCode.UNEXPECTED_EOF
            msg = f"Unexpected end of input, expected {label_path[0]}" if label_path else (
                "Unexpected end of input"
            )
            hint = "Check for unclosed delimiters or incomplete input"
        else:
            code = DiagnosticCode.PARSE_FAILED
            msg = f"Expected {label_path[0]}" if label_path else "Unexpected input"
            hint = None
        return Diagnostic(
            code=code,
            message=msg,
            span=span,
            hint=hint,
            label_path=label_path,
            excerpt=excerpt,
        )

    @staticmethod
    def unbound_reference(name: str | None) -> Diagnostic:
        """DeferredParser invoked before being bound.

        Args:
            name: Optional name of the deferred rule

        Returns:
            Diagnostic for UNBOUND_REFERENCE
        """
        target = f"'{name}'" if name else "DeferredParser"
        msg = f"{target} was invoked before its implementation was bound"
        return Diagnostic(
            code=DiagnosticCode.UNBOUND_REFERENCE,
            message=msg,
            hint="Call bind() on every deferred rule before parsing",
        )

    @staticmethod
    def reference_already_bound(name: str | None) -> Diagnostic:
        """DeferredParser bound twice.

        Args:
            name: Optional name of the deferred rule

        Returns:
            Diagnostic for REFERENCE_ALREADY_BOUND
        """
        target = f"'{name}'" if name else "DeferredParser"
        msg = f"{target} is already bound"
        return Diagnostic(
            code=DiagnosticCode.REFERENCE_ALREADY_BOUND,
            message=msg,
            hint="A deferred rule is write-once; build a new DeferredParser instead",
        )

    @staticmethod
    def integer_overflow(text: str, minimum: int | float, maximum: int | float) -> Diagnostic:
        """Numeric literal outside its range in strict mode.

        Args:
            text: The literal that overflowed
            minimum: Smallest representable value
            maximum: Largest representable value

        Returns:
            Diagnostic for INTEGER_OVERFLOW
        """
        msg = FailureLabel.out_of_range(text, minimum, maximum)
        return Diagnostic(
            code=DiagnosticCode.INTEGER_OVERFLOW,
            message=msg,
            hint="Use strict=False to report out-of-range literals as parse failures",
        )

    @staticmethod
    def locale_unknown(locale_code: str) -> Diagnostic:
        """Locale not recognized by Babel.

        Args:
            locale_code: The unrecognized locale code

        Returns:
            Diagnostic for LOCALE_UNKNOWN
        """
        msg = f"Unknown locale '{locale_code}'"
        return Diagnostic(
            code=DiagnosticCode.LOCALE_UNKNOWN,
            message=msg,
            hint="Use a BCP 47 or POSIX locale code known to Babel, e.g. 'de_DE'",
            severity="warning",
        )
