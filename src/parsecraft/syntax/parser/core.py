"""Parser value type and the deferred reference for recursive grammars.

Architecture:
    A Parser wraps a body: a pure function from :class:`~parsecraft.syntax.cursor.Cursor`
    to either an :class:`~parsecraft.syntax.cursor.Outcome` (value plus advanced
    cursor) or a :class:`~parsecraft.syntax.failure.Failure`. Bodies never raise
    for unmatched input; failures are values that combinators inspect, wrap or
    discard.

    Only two things raise out of a parse:
        - Parser.parse() raises ParseFailureError when the top-level body fails
        - GrammarError subclasses (unbound references, strict overflow) abort
          the parse and are never caught by a combinator

Backtracking:
    Alternation re-runs the second branch from the original cursor with no
    memoization of partial results. Heavily ambiguous grammars can therefore
    take exponential time; use atomic() and label() at choice points to keep
    diagnostics bounded.

See Also:
    - :mod:`parsecraft.syntax.parser.combinators` - Sequencing, choice, repetition
    - :mod:`parsecraft.syntax.parser.primitives` - Literals, characters, numbers
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from typing import Any

from parsecraft.diagnostics import (
    ErrorTemplate,
    FailureKind,
    ParseFailureError,
    ReferenceAlreadyBoundError,
    UnboundReferenceError,
)
from parsecraft.syntax.cursor import Cursor, Outcome
from parsecraft.syntax.failure import Failure

__all__ = ["DeferredParser", "Parser", "ParserBody"]

logger = logging.getLogger(__name__)

type ParserBody[T] = Callable[[Cursor], Outcome[T] | Failure]


class Parser[T]:
    """Immutable parser: attempt a match at a cursor.

    Parsers are pure and reentrant. A grammar is assembled once and may be
    used for any number of parse calls, including concurrently.

    Example:
        >>> from parsecraft import integer, literal
        >>> pair = integer().first(literal(",")).both(integer())
        >>> pair.parse("3,4")
        (3, 4)
    """

    __slots__ = ("_body", "name")

    def __init__(self, body: ParserBody[T], name: str | None = None) -> None:
        """Initialize parser.

        Args:
            body: Function from Cursor to Outcome or Failure
            name: Optional name shown in repr()
        """
        self._body = body
        self.name = name

    @property
    def body(self) -> ParserBody[T]:
        """The wrapped matching function."""
        return self._body

    def __call__(self, cursor: Cursor) -> Outcome[T] | Failure:
        """Attempt a match at cursor."""
        return self._body(cursor)

    def run(self, cursor: Cursor) -> Outcome[T] | Failure:
        """Attempt a match at cursor. Alias of calling the parser."""
        return self._body(cursor)

    def __repr__(self) -> str:
        if self.name:
            return f"Parser({self.name!r})"
        return f"Parser({getattr(self._body, '__qualname__', self._body)!r})"

    # ========================================================================
    # ENTRY POINTS
    # ========================================================================

    def parse_partial(self, source: Sequence[Any]) -> Outcome[T]:
        """Run against a fresh cursor and return value plus remainder.

        Trailing input is not an error; combine with eof() to require
        full consumption.

        Raises:
            ParseFailureError: If the parser fails
        """
        result = self._body(Cursor(source))
        if isinstance(result, Failure):
            raise ParseFailureError(result)
        return result

    def parse(self, source: Sequence[Any]) -> T:
        """Run against a fresh cursor and return the parsed value.

        Args:
            source: Text or any random-access sequence

        Returns:
            The parsed value

        Raises:
            ParseFailureError: Carrying the complete Failure chain
        """
        return self.parse_partial(source).value

    # ========================================================================
    # TRANSFORMATION
    # ========================================================================

    def map[U](self, transform: Callable[[T], U]) -> Parser[U]:
        """Transform a successful value; failures pass through unchanged."""
        body = self._body

        def mapped(cursor: Cursor) -> Outcome[U] | Failure:
            result = body(cursor)
            if isinstance(result, Failure):
                return result
            return result.map(transform)

        return Parser(mapped, self.name)

    def producing[U](self, value: U) -> Parser[U]:
        """Replace a successful value with a constant."""
        return self.map(lambda _: value)

    def flat_map[U](self, transform: Callable[[T], Parser[U]]) -> Parser[U]:
        """Chain a parser built from this parser's value.

        The continuation runs on the remainder, so later structure can
        depend on earlier values (e.g. a length-prefixed field).
        """
        body = self._body

        def chained(cursor: Cursor) -> Outcome[U] | Failure:
            result = body(cursor)
            if isinstance(result, Failure):
                return result
            return transform(result.value)(result.cursor)

        return Parser(chained)

    # ========================================================================
    # FAILURE SHAPING
    # ========================================================================

    def label(self, name: str) -> Parser[T]:
        """Wrap any failure in a layer naming this grammar rule.

        The new layer keeps the original failure as its cause and reuses its
        position, so the deepest cause still points at the exact offset.
        """
        body = self._body

        def labeled(cursor: Cursor) -> Outcome[T] | Failure:
            result = body(cursor)
            if isinstance(result, Failure):
                return result.wrap(name)
            return result

        return Parser(labeled, name)

    def atomic(self) -> Parser[T]:
        """Collapse any failure to a contextless one at the entry cursor."""
        body = self._body

        def collapsed(cursor: Cursor) -> Outcome[T] | Failure:
            result = body(cursor)
            if isinstance(result, Failure):
                return Failure(cursor, kind=FailureKind.ATOMIC)
            return result

        return Parser(collapsed, self.name)

    def check(self, inspect: Callable[[T], str | None]) -> Parser[T]:
        """Reject a structural match when inspect() returns a message.

        Args:
            inspect: Returns None to accept the value, or a message to reject it

        Returns:
            Parser failing at the entry cursor with the message as its label
        """
        body = self._body

        def checked(cursor: Cursor) -> Outcome[T] | Failure:
            result = body(cursor)
            if isinstance(result, Failure):
                return result
            message = inspect(result.value)
            if message is not None:
                return Failure(cursor, (message,), kind=FailureKind.REJECTED)
            return result

        return Parser(checked, self.name)

    def validate(self, predicate: Callable[[T], bool], message: str | None = None) -> Parser[T]:
        """Reject a structural match unless predicate(value) holds.

        The inner parser runs once; rejection is positioned at the entry cursor.
        """
        labels = (message,) if message is not None else ()
        body = self._body

        def validated(cursor: Cursor) -> Outcome[T] | Failure:
            result = body(cursor)
            if isinstance(result, Failure):
                return result
            if not predicate(result.value):
                return Failure(cursor, labels, kind=FailureKind.REJECTED)
            return result

        return Parser(validated, self.name)

    def fail(self, message: str | Callable[[T], str]) -> Parser[Any]:
        """Turn every success into a failure at the entry cursor.

        Used to forbid patterns such as reserved words. The message is either
        fixed text or built from the matched value. Failures of the inner
        parser pass through unchanged.

        Example:
            >>> keyword = literal("else").fail("keyword 'else' is not allowed")
        """
        body = self._body

        def rejected(cursor: Cursor) -> Failure:
            result = body(cursor)
            if isinstance(result, Failure):
                return result
            text = message(result.value) if callable(message) else message
            return Failure(cursor, (text,), kind=FailureKind.REJECTED)

        return Parser(rejected, self.name)

    # ========================================================================
    # DEFAULTS AND DELIMITERS
    # ========================================================================

    def or_else[U](self, default: U) -> Parser[T | U]:
        """Succeed with default, consuming nothing, when this parser fails."""
        body = self._body

        def defaulted(cursor: Cursor) -> Outcome[T | U]:
            result = body(cursor)
            if isinstance(result, Failure):
                return Outcome(default, cursor)
            return result

        return Parser(defaulted, self.name)

    def optional(self) -> Parser[T | None]:
        """Succeed with None, consuming nothing, when this parser fails."""
        return self.or_else(None)

    def between(self, prefix: Parser[Any], suffix: Parser[Any] | None = None) -> Parser[T]:
        """Run delimiters around this parser and keep only its value.

        With one argument the same parser is used on both sides.
        Delimiter failures propagate unchanged.
        """
        closing = prefix if suffix is None else suffix
        body = self._body

        def enclosed(cursor: Cursor) -> Outcome[T] | Failure:
            opened = prefix(cursor)
            if isinstance(opened, Failure):
                return opened
            inner = body(opened.cursor)
            if isinstance(inner, Failure):
                return inner
            closed = closing(inner.cursor)
            if isinstance(closed, Failure):
                return closed
            return Outcome(inner.value, closed.cursor)

        return Parser(enclosed, self.name)

    # ========================================================================
    # SEQUENCING SUGAR
    # ========================================================================

    def both[U](self, other: Parser[U]) -> Parser[tuple[T, U]]:
        """Run self then other; produce both values as a pair."""
        from .combinators import both  # noqa: PLC0415 - circular

        return both(self, other)

    def first(self, other: Parser[Any]) -> Parser[T]:
        """Run self then other; keep self's value."""
        from .combinators import first  # noqa: PLC0415 - circular

        return first(self, other)

    def second[U](self, other: Parser[U]) -> Parser[U]:
        """Run self then other; keep other's value."""
        from .combinators import second  # noqa: PLC0415 - circular

        return second(self, other)

    def either[U](self, other: Parser[U]) -> Parser[T | U]:
        """Try self; on any failure try other from the same cursor."""
        from .combinators import either  # noqa: PLC0415 - circular

        return either(self, other)

    def __add__[U](self, other: Parser[U]) -> Parser[tuple[T, U]]:
        return self.both(other)

    def __lshift__(self, other: Parser[Any]) -> Parser[T]:
        return self.first(other)

    def __rshift__[U](self, other: Parser[U]) -> Parser[U]:
        return self.second(other)

    def __or__[U](self, other: Parser[U]) -> Parser[T | U]:
        return self.either(other)


class DeferredParser[T]:
    """Write-once indirection for self-referential grammars.

    The facade parser has a stable identity and can be embedded anywhere in
    the grammar before the real rule exists. Bind the rule exactly once,
    after the grammar is assembled and before any parse begins.

    States:
        unbound: invoking the facade raises UnboundReferenceError
        bound: the facade delegates to the bound parser

    Thread Safety:
        No internal locking. Binding must complete (and be published to other
        threads) before any parse reaches the facade. After binding, the
        facade is as shareable as any other parser.

    Example:
        >>> expression = DeferredParser[int]("expression")
        >>> group = expression.parser.between(literal("("), literal(")"))
        >>> expression.bind(group | integer())
        >>> expression.parser.parse("((7))")
        7
    """

    __slots__ = ("_implementation", "_parser", "name")

    def __init__(self, name: str | None = None) -> None:
        """Initialize an unbound reference.

        Args:
            name: Optional rule name used in error messages
        """
        self.name = name
        self._implementation: Parser[T] | None = None
        self._parser: Parser[T] = Parser(self._delegate, name)

    def _delegate(self, cursor: Cursor) -> Outcome[T] | Failure:
        implementation = self._implementation
        if implementation is None:
            raise UnboundReferenceError(ErrorTemplate.unbound_reference(self.name))
        return implementation(cursor)

    @property
    def parser(self) -> Parser[T]:
        """Stable facade parser delegating to the bound implementation."""
        return self._parser

    @property
    def is_bound(self) -> bool:
        """True once an implementation has been bound."""
        return self._implementation is not None

    @property
    def implementation(self) -> Parser[T] | None:
        """The bound parser, or None while unbound."""
        return self._implementation

    @implementation.setter
    def implementation(self, parser: Parser[T]) -> None:
        self.bind(parser)

    def bind(self, parser: Parser[T]) -> None:
        """Seal the slot with parser.

        Raises:
            ReferenceAlreadyBoundError: If the slot is already bound
        """
        if self._implementation is not None:
            raise ReferenceAlreadyBoundError(ErrorTemplate.reference_already_bound(self.name))
        self._implementation = parser
        logger.debug("Bound deferred parser %s", self.name or hex(id(self)))

    def __repr__(self) -> str:
        state = "bound" if self.is_bound else "unbound"
        return f"DeferredParser(name={self.name!r}, {state})"
