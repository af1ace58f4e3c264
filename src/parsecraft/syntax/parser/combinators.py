"""Sequencing, choice, repetition and reduction combinators.

Every function here is a stateless constructor returning a new Parser.
Failures propagate unchanged unless a combinator documents otherwise:

    - either / any_of discard a failed branch entirely and retry from the
      original cursor
    - list_of attempts separators atomically and reports a short list at
      the remainder
    - nothing here catches exceptions, so GrammarError aborts the parse

Repetition Hazard:
    A repetition over a parser that can succeed without consuming input
    (nothing(), optional(...), zero_or_more(...)) loops until ``maximum``
    is reached. With no maximum it never terminates. Grammars must not
    repeat zero-width parsers unbounded.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from parsecraft.diagnostics import FailureKind, FailureLabel
from parsecraft.syntax.cursor import Cursor, Outcome
from parsecraft.syntax.failure import Failure

from .core import Parser

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Terminals
    "eof",
    "nothing",
    "just",
    "always_fail",
    "error",
    # Sequencing and choice
    "both",
    "first",
    "second",
    "either",
    "any_of",
    "each",
    "zero_or_one",
    "optional",
    # Repetition
    "list_of",
    "list_with_separators",
    "one_or_more",
    "zero_or_more",
    # Reduction
    "reduce_left",
    "reduce_right",
]


# ============================================================================
# TERMINALS
# ============================================================================


def eof() -> Parser[None]:
    """Succeed only at end of input."""

    def at_end(cursor: Cursor) -> Outcome[None] | Failure:
        if cursor.is_eof:
            return Outcome(None, cursor)
        return Failure(cursor, (FailureLabel.END_OF_INPUT,))

    return Parser(at_end, "eof")


def nothing() -> Parser[None]:
    """Always succeed with None, consuming nothing."""
    return Parser(lambda cursor: Outcome(None, cursor), "nothing")


def just[T](value: T) -> Parser[T]:
    """Always succeed with value, consuming nothing."""
    return Parser(lambda cursor: Outcome(value, cursor), "just")


def always_fail(message: str | None = None) -> Parser[Any]:
    """Always fail at the current position."""
    labels = (message,) if message is not None else ()
    return Parser(lambda cursor: Failure(cursor, labels), "always_fail")


def error(exception: BaseException) -> Parser[Any]:
    """Always raise exception. The parse is aborted, not backtracked."""

    def abort(cursor: Cursor) -> Outcome[Any]:  # noqa: ARG001
        raise exception

    return Parser(abort, "error")


# ============================================================================
# SEQUENCING AND CHOICE
# ============================================================================


def both[T, U](a: Parser[T], b: Parser[U]) -> Parser[tuple[T, U]]:
    """Run a then b on the remainder; produce (a_value, b_value)."""

    def sequenced(cursor: Cursor) -> Outcome[tuple[T, U]] | Failure:
        left = a(cursor)
        if isinstance(left, Failure):
            return left
        right = b(left.cursor)
        if isinstance(right, Failure):
            return right
        return Outcome((left.value, right.value), right.cursor)

    return Parser(sequenced)


def first[T](a: Parser[T], b: Parser[Any]) -> Parser[T]:
    """Run a then b; keep a's value."""
    return both(a, b).map(lambda pair: pair[0])


def second[U](a: Parser[Any], b: Parser[U]) -> Parser[U]:
    """Run a then b; keep b's value."""
    return both(a, b).map(lambda pair: pair[1])


def either[T, U](a: Parser[T], b: Parser[U]) -> Parser[T | U]:
    """Try a; on any failure discard it and try b from the original cursor.

    The failure of a is dropped, not merged: if b fails, only b's failure
    is reported. Mark a atomic() to keep its diagnostics shallow.
    """

    def alternative(cursor: Cursor) -> Outcome[T | U] | Failure:
        result = a(cursor)
        if isinstance(result, Failure):
            return b(cursor)
        return result

    return Parser(alternative)


def any_of(*parsers: Parser[Any]) -> Parser[Any]:
    """First success wins; the last failure propagates.

    With no alternatives the parser fails at the entry cursor.
    """

    def alternatives(cursor: Cursor) -> Outcome[Any] | Failure:
        last: Outcome[Any] | Failure = Failure(cursor)
        for parser in parsers:
            last = parser(cursor)
            if not isinstance(last, Failure):
                return last
        return last

    return Parser(alternatives)


def each(*parsers: Parser[Any]) -> Parser[list[Any]]:
    """Apply all parsers in order and collect their values."""

    def sequence(cursor: Cursor) -> Outcome[list[Any]] | Failure:
        values: list[Any] = []
        remainder = cursor
        for parser in parsers:
            result = parser(remainder)
            if isinstance(result, Failure):
                return result
            values.append(result.value)
            remainder = result.cursor
        return Outcome(values, remainder)

    return Parser(sequence)


def zero_or_one[T](parser: Parser[T]) -> Parser[T | None]:
    """Match parser once or produce None without consuming."""
    return parser.optional()


optional = zero_or_one


# ============================================================================
# REPETITION
# ============================================================================


def _validate_counts(minimum: int, maximum: int | None) -> None:
    if minimum < 0:
        msg = f"minimum must be >= 0, got {minimum}"
        raise ValueError(msg)
    if maximum is not None and maximum < minimum:
        msg = f"maximum ({maximum}) must be >= minimum ({minimum})"
        raise ValueError(msg)


def _delimit[T](
    parser: Parser[T], prefix: Parser[Any] | None, suffix: Parser[Any] | None
) -> Parser[T]:
    if prefix is not None:
        parser = second(prefix, parser)
    if suffix is not None:
        parser = first(parser, suffix)
    return parser


def list_with_separators[T, S](
    element: Parser[T],
    separated_by: Parser[S] | None = None,
    *,
    minimum: int = 1,
    maximum: int | None = None,
    prefix: Parser[Any] | None = None,
    suffix: Parser[Any] | None = None,
) -> Parser[tuple[list[T], list[S]]]:
    """Bounded repetition producing the elements and the separator values.

    Rules:
        - A failed first element gives an empty list when minimum is 0,
          otherwise its failure propagates
        - A failed separator ends the list; this is not an error
        - The element after a matched separator is mandatory and its
          failure propagates (``"1,2,"`` is malformed)
        - Without a separator, repetition stops at the first failing element
        - Collection stops once maximum elements are matched
        - Fewer than minimum elements fail at the remainder with
          ``expected at least N items``

    Args:
        element: Parser for each element
        separated_by: Optional parser between elements
        minimum: Fewest elements accepted
        maximum: Most elements consumed (None for unbounded)
        prefix: Optional delimiter before the whole list
        suffix: Optional delimiter after the whole list

    Raises:
        ValueError: If minimum is negative or maximum < minimum
    """
    _validate_counts(minimum, maximum)
    separator = separated_by.atomic() if separated_by is not None else None

    def repeated(cursor: Cursor) -> Outcome[tuple[list[T], list[S]]] | Failure:
        elements: list[T] = []
        separators: list[S] = []
        if maximum == 0:
            return Outcome((elements, separators), cursor)

        head = element(cursor)
        if isinstance(head, Failure):
            if minimum == 0:
                return Outcome((elements, separators), cursor)
            return head
        elements.append(head.value)
        remainder = head.cursor

        while maximum is None or len(elements) < maximum:
            if separator is None:
                item = element(remainder)
                if isinstance(item, Failure):
                    if len(elements) < minimum:
                        return item
                    break
            else:
                matched = separator(remainder)
                if isinstance(matched, Failure):
                    break
                item = element(matched.cursor)
                if isinstance(item, Failure):
                    return item
                separators.append(matched.value)
            elements.append(item.value)
            remainder = item.cursor

        if len(elements) < minimum:
            return Failure(remainder, (FailureLabel.at_least(minimum),), kind=FailureKind.REJECTED)
        return Outcome((elements, separators), remainder)

    return _delimit(Parser(repeated), prefix, suffix)


def list_of[T](
    element: Parser[T],
    separated_by: Parser[Any] | None = None,
    *,
    minimum: int = 1,
    maximum: int | None = None,
    prefix: Parser[Any] | None = None,
    suffix: Parser[Any] | None = None,
) -> Parser[list[T]]:
    """Bounded repetition producing the list of element values.

    See list_with_separators() for the matching rules.

    Example:
        >>> list_of(integer(), literal(",")).parse("1,2,3")
        [1, 2, 3]
        >>> list_of(integer(), literal(","), prefix=literal("["), suffix=literal("]")).parse("[4]")
        [4]
    """
    return list_with_separators(
        element,
        separated_by,
        minimum=minimum,
        maximum=maximum,
        prefix=prefix,
        suffix=suffix,
    ).map(lambda pair: pair[0])


def one_or_more[T](element: Parser[T], separated_by: Parser[Any] | None = None) -> Parser[list[T]]:
    """At least one element."""
    return list_of(element, separated_by, minimum=1)


def zero_or_more[T](element: Parser[T], separated_by: Parser[Any] | None = None) -> Parser[list[T]]:
    """Any number of elements, including none."""
    return list_of(element, separated_by, minimum=0)


# ============================================================================
# REDUCTION
# ============================================================================


def reduce_left[T, O](
    elements: Parser[T],
    operators: Parser[O],
    combine: Callable[[T, O, T], T] | None = None,
) -> Parser[T]:
    """Fold ``e0 op0 e1 op1 e2 ...`` left to right.

    Without combine, operator values are binary functions:
    ``op1(op0(e0, e1), e2)``. With combine, each step calls
    ``combine(accumulated, operator_value, next_element)``.

    Stack one reduce_left per precedence level, lowest precedence outermost:

    Example:
        >>> add = token("+").producing(operator.add)
        >>> mul = token("*").producing(operator.mul)
        >>> term = reduce_left(integer(), mul)
        >>> reduce_left(term, add).parse("2 + 5 * 4")
        22
    """

    def fold(pair: tuple[list[T], list[O]]) -> T:
        values, ops = pair
        accumulated = values[0]
        for op, rhs in zip(ops, values[1:], strict=True):
            accumulated = combine(accumulated, op, rhs) if combine else op(accumulated, rhs)  # type: ignore[operator]
        return accumulated

    return list_with_separators(elements, operators, minimum=1).map(fold)


def reduce_right[T, O](
    elements: Parser[T],
    operators: Parser[O],
    combine: Callable[[T, O, T], T] | None = None,
) -> Parser[T]:
    """Fold ``e0 op0 e1 ... en`` right to left.

    Arguments keep source order: ``op0(e0, op1(e1, e2))``. With combine,
    each step calls ``combine(previous_element, operator_value, accumulated)``.
    """

    def fold(pair: tuple[list[T], list[O]]) -> T:
        values, ops = pair
        accumulated = values[-1]
        for op, lhs in zip(reversed(ops), reversed(values[:-1]), strict=True):
            accumulated = combine(lhs, op, accumulated) if combine else op(lhs, accumulated)  # type: ignore[operator]
        return accumulated

    return list_with_separators(elements, operators, minimum=1).map(fold)
