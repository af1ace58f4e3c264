"""parsecraft exception hierarchy with structured diagnostics.

Two families:
    - ParseFailureError: the input did not match the grammar. Raised only by
      the top-level Parser.parse() entry points; combinators never raise it.
    - GrammarError: the grammar or its configuration is broken. Raised from
      inside a parse and never caught by any combinator.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .codes import Diagnostic

if TYPE_CHECKING:
    from parsecraft.syntax.cursor import Cursor
    from parsecraft.syntax.failure import Failure

__all__ = [
    "GrammarError",
    "IntegerOverflowError",
    "ParseFailureError",
    "ParsecraftError",
    "ReferenceAlreadyBoundError",
    "UnboundReferenceError",
]


class ParsecraftError(Exception):
    """Base exception for all parsecraft errors.

    Attributes:
        diagnostic: Structured diagnostic information (optional)
    """

    def __init__(self, message: str | Diagnostic) -> None:
        """Initialize ParsecraftError.

        Args:
            message: Error message string OR Diagnostic object
        """
        if isinstance(message, Diagnostic):
            self.diagnostic: Diagnostic | None = message
            super().__init__(message.format_error())
        else:
            self.diagnostic = None
            super().__init__(message)


class ParseFailureError(ParsecraftError):
    """Input did not match the grammar.

    Carries the complete Failure value so callers can walk the cause chain
    and build their own reports.

    Attributes:
        failure: The outermost Failure returned by the top-level parser
    """

    def __init__(self, failure: Failure) -> None:
        """Initialize ParseFailureError.

        Args:
            failure: Outermost failure of the parse
        """
        self.failure = failure
        super().__init__(failure.to_diagnostic())

    @property
    def position(self) -> Cursor:
        """Position recorded by the outermost failure layer."""
        return self.failure.position

    @property
    def labels(self) -> tuple[str, ...]:
        """Context labels of the outermost failure layer."""
        return self.failure.labels

    @property
    def cause(self) -> Failure | None:
        """The next, more specific failure layer."""
        return self.failure.cause


class GrammarError(ParsecraftError):
    """Grammar construction or configuration error.

    Indicates programmer misuse, not a problem with the input. Combinators
    never catch it, so it aborts the whole parse.
    """


class UnboundReferenceError(GrammarError):
    """A DeferredParser facade was invoked before its slot was bound."""


class ReferenceAlreadyBoundError(GrammarError):
    """A DeferredParser slot was bound a second time."""


class IntegerOverflowError(GrammarError):
    """A numeric literal does not fit its target range in strict mode.

    Attributes:
        text: The literal that overflowed
    """

    def __init__(self, message: str | Diagnostic, *, text: str = "") -> None:
        """Initialize IntegerOverflowError.

        Args:
            message: Error message string OR Diagnostic object
            text: The literal that overflowed
        """
        super().__init__(message)
        self.text = text
