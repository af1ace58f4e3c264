"""Primitive parsers: elements, text, character classes, numbers, quoting.

Generic primitives (element, prefix, prefix_while, prefix_until) work over
any sequence. Text primitives assume str input.

Numeric Policy:
    Digits are ASCII only. str.isdigit() accepts characters like '²' that
    int() rejects, so it is never used for numeric literals.

    A syntactically valid literal outside its representable range is an
    ordinary REJECTED failure by default, so alternation can recover from
    it. Pass strict=True to raise IntegerOverflowError instead.
"""

from __future__ import annotations

import logging
import math
import sys
from collections.abc import Callable, Container, Sequence
from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from parsecraft.constants import (
    ASCII_DIGITS,
    DEFAULT_DECIMAL_SEPARATOR,
    DEFAULT_INTEGER_BITS,
    EXPONENT_MARKERS,
    INT64_MAX,
    MAX_RADIX,
    MIN_RADIX,
    RADIX_DIGITS,
    SUPPORTED_INTEGER_BITS,
)
from parsecraft.core.locale_utils import decimal_separator_for
from parsecraft.diagnostics import (
    ErrorTemplate,
    FailureKind,
    FailureLabel,
    IntegerOverflowError,
)
from parsecraft.syntax.cursor import Cursor, Outcome
from parsecraft.syntax.failure import Failure

from .core import Parser

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Generic sequences
    "element",
    "element_where",
    "prefix",
    "prefix_while",
    "prefix_until",
    # Text
    "literal",
    "token",
    "delimited_token",
    "whitespace",
    "letters",
    "numbers",
    "CharRange",
    "char_range",
    "characters",
    "characters_excluding",
    # Numbers
    "integer",
    "int32",
    "int64",
    "integer_radix",
    "hexadecimal",
    "floating",
    "double",
    "decimal",
    # Quoting
    "quoted",
    "unquoted",
    "enquote",
]

logger = logging.getLogger(__name__)


def _is_ascii_digit(element: object) -> bool:
    return isinstance(element, str) and len(element) == 1 and element in ASCII_DIGITS


# ============================================================================
# GENERIC SEQUENCES
# ============================================================================


def element[E](value: E) -> Parser[E]:
    """Match one element equal to value."""

    def single(cursor: Cursor) -> Outcome[E] | Failure:
        return cursor.take_element(value) or Failure(cursor)

    return Parser(single)


def element_where[E](predicate: Callable[[E], bool]) -> Parser[E]:
    """Match one element satisfying predicate."""

    def single(cursor: Cursor) -> Outcome[E] | Failure:
        return cursor.take_element_where(predicate) or Failure(cursor)

    return Parser(single)


def prefix[E](expected: Sequence[E]) -> Parser[Sequence[E]]:
    """Match an exact run of elements."""

    def run(cursor: Cursor) -> Outcome[Sequence[E]] | Failure:
        return cursor.take_literal(expected) or Failure(cursor)

    return Parser(run)


def prefix_while[E](predicate: Callable[[E], bool]) -> Parser[Sequence[E]]:
    """Match the longest non-empty run satisfying predicate."""

    def run(cursor: Cursor) -> Outcome[Sequence[E]] | Failure:
        return cursor.take_while(predicate) or Failure(cursor)

    return Parser(run)


def prefix_until[E](stop: Callable[[E], bool] | Parser[Any]) -> Parser[Sequence[E]]:
    """Match input up to a stop condition.

    With a predicate, matches the longest non-empty run of elements not
    satisfying it. With a parser, scans forward until the parser would
    match and returns everything before that point (possibly empty); the
    stop match itself is not consumed. Fails if the parser never matches.
    """
    if not isinstance(stop, Parser):
        predicate = stop

        def run(cursor: Cursor) -> Outcome[Sequence[E]] | Failure:
            return cursor.take_until(predicate) or Failure(cursor)

        return Parser(run)

    stop_parser = stop

    def scan(cursor: Cursor) -> Outcome[Sequence[E]] | Failure:
        ahead = cursor
        while not ahead.is_eof:
            if not isinstance(stop_parser(ahead), Failure):
                return cursor.take_up_to(ahead.pos)
            ahead = ahead.advance()
        return Failure(cursor)

    return Parser(scan)


# ============================================================================
# TEXT
# ============================================================================


def literal(text: str, *, case_insensitive: bool = False) -> Parser[str]:
    """Match text exactly, or ignoring case.

    The value is the matched slice of the input, so a case-insensitive match
    returns the input's spelling. Failures carry the label ``'text'``.
    """
    labels = (FailureLabel.literal(text),)

    def run(cursor: Cursor) -> Outcome[str] | Failure:
        return cursor.take_literal(text, case_insensitive=case_insensitive) or Failure(
            cursor, labels
        )

    return Parser(run, FailureLabel.literal(text))


def whitespace() -> Parser[str]:
    """Match a run of whitespace, including newlines."""
    return prefix_while(str.isspace)


def letters() -> Parser[str]:
    """Match a run of letters."""
    return prefix_while(str.isalpha)


def numbers() -> Parser[str]:
    """Match a run of decimal digit characters."""
    return prefix_while(str.isdecimal)


def token(text: str, *, case_insensitive: bool = False) -> Parser[str]:
    """Match text surrounded by optional whitespace."""
    return literal(text, case_insensitive=case_insensitive).between(whitespace().optional())


def delimited_token(delimiter: Parser[Any] | None = None) -> Parser[str]:
    """Match everything up to delimiter, surrounded by optional whitespace.

    The delimiter (whitespace by default) must occur after the token; it is
    not consumed beyond the optional trailing whitespace.

    Example:
        >>> delimited_token().parse_partial("  abc def").value
        'abc'
    """
    stop = delimiter if delimiter is not None else whitespace()
    return prefix_until(stop).between(whitespace().optional())


@dataclass(frozen=True, slots=True)
class CharRange:
    """Inclusive range of characters, e.g. ``CharRange("a", "z")``."""

    first: str
    last: str

    def __post_init__(self) -> None:
        if self.first > self.last:
            msg = f"CharRange first ({self.first!r}) must not exceed last ({self.last!r})"
            raise ValueError(msg)

    def __contains__(self, character: object) -> bool:
        return isinstance(character, str) and self.first <= character <= self.last


def char_range(first: str, last: str) -> CharRange:
    """Inclusive character range."""
    return CharRange(first, last)


def characters(*matching: Container[str]) -> Parser[str]:
    """Match a run of characters contained in any of matching.

    Containers may be strings, sets, CharRange values or anything
    supporting ``in``.

    Example:
        >>> characters(char_range("a", "f"), "_").parse("ab_c9")
        'ab_c'
    """
    return prefix_while(lambda character: any(character in group for group in matching))


def characters_excluding(*excluding: Container[str]) -> Parser[str]:
    """Match a run of characters contained in none of excluding."""
    return prefix_while(lambda character: not any(character in group for group in excluding))


# ============================================================================
# NUMBERS
# ============================================================================


def _out_of_range(
    cursor: Cursor, text: str, minimum: int | float, maximum: int | float, *, strict: bool
) -> Failure:
    diagnostic = ErrorTemplate.integer_overflow(text, minimum, maximum)
    if strict:
        logger.error("%s", diagnostic)
        raise IntegerOverflowError(diagnostic, text=text)
    logger.warning("%s", diagnostic)
    return Failure(
        cursor, (FailureLabel.out_of_range(text, minimum, maximum),), kind=FailureKind.REJECTED
    )


def _exceeds(digits: str, limit: int) -> bool:
    # Compare lengths first so huge runs never reach int().
    significant = digits.lstrip("0") or "0"
    limit_text = str(limit)
    if len(significant) != len(limit_text):
        return len(significant) > len(limit_text)
    return significant > limit_text


def integer(*, signed: bool = True, bits: int = DEFAULT_INTEGER_BITS, strict: bool = False) -> Parser[int]:
    """Match a decimal integer within a fixed-width range.

    Args:
        signed: Accept an optional leading ``+`` or ``-``
        bits: Width of the target range (32 or 64)
        strict: Raise IntegerOverflowError for out-of-range literals

    Raises:
        ValueError: If bits is not a supported width

    Example:
        >>> integer().parse("-42")
        -42
        >>> integer(signed=False).parse_partial("-42")
        Traceback (most recent call last):
        ...
        parsecraft.diagnostics.errors.ParseFailureError: ...
    """
    if bits not in SUPPORTED_INTEGER_BITS:
        msg = f"bits must be one of {sorted(SUPPORTED_INTEGER_BITS)}, got {bits}"
        raise ValueError(msg)
    minimum, maximum = SUPPORTED_INTEGER_BITS[bits]

    def run(cursor: Cursor) -> Outcome[int] | Failure:
        remainder = cursor
        negative = False
        if signed:
            sign = cursor.take_element_where(lambda c: c in ("+", "-"))
            if sign is not None:
                negative = sign.value == "-"
                remainder = sign.cursor

        digits = remainder.take_while(_is_ascii_digit)
        if digits is None:
            return Failure(remainder)

        digit_text = "".join(digits.value)
        limit = -minimum if negative else maximum
        if _exceeds(digit_text, limit):
            text = "".join(cursor.slice_to(digits.cursor.pos))
            return _out_of_range(cursor, text, minimum, maximum, strict=strict)

        value = int(digit_text)
        return Outcome(-value if negative else value, digits.cursor)

    return Parser(run, "integer")


def int32(*, signed: bool = True, strict: bool = False) -> Parser[int]:
    """Match a decimal integer in the 32-bit signed range."""
    return integer(signed=signed, bits=32, strict=strict)


def int64(*, signed: bool = True, strict: bool = False) -> Parser[int]:
    """Match a decimal integer in the 64-bit signed range."""
    return integer(signed=signed, bits=64, strict=strict)


def integer_radix(radix: int, length: int | None = None, *, strict: bool = False) -> Parser[int]:
    """Match an unsigned integer in the given radix.

    Digits are case-insensitive. Matching is greedy but never reads more
    than length digits; when length is given, a shorter run fails at the
    entry cursor.

    Args:
        radix: Base between 2 and 36
        length: Exact number of digits required, or None for any
        strict: Raise IntegerOverflowError above the 64-bit range

    Example:
        >>> integer_radix(16, 2).parse_partial("FF00").value
        255
        >>> integer_radix(16, 4).parse_partial("FFF")
        Traceback (most recent call last):
        ...
        parsecraft.diagnostics.errors.ParseFailureError: ...
    """
    if not MIN_RADIX <= radix <= MAX_RADIX:
        msg = f"radix must be within [{MIN_RADIX}, {MAX_RADIX}], got {radix}"
        raise ValueError(msg)
    if length is not None and length < 1:
        msg = f"length must be >= 1, got {length}"
        raise ValueError(msg)

    alphabet = RADIX_DIGITS[:radix]
    allowed = frozenset(alphabet) | frozenset(alphabet.upper())

    def run(cursor: Cursor) -> Outcome[int] | Failure:
        source = cursor.source
        limit = len(source) if length is None else min(len(source), cursor.pos + length)
        end = cursor.pos
        while end < limit and source[end] in allowed:
            end += 1

        if end == cursor.pos:
            return Failure(cursor)
        matched = cursor.take_up_to(end)
        text = "".join(matched.value)
        if length is not None and len(text) != length:
            return Failure(cursor, (FailureLabel.digit_count(length, len(text)),))

        value = int(text, radix)
        if value > INT64_MAX:
            return _out_of_range(cursor, text, 0, INT64_MAX, strict=strict)
        return Outcome(value, matched.cursor)

    return Parser(run, "integer_radix")


def hexadecimal() -> Parser[int]:
    """Match an unsigned hexadecimal integer."""
    return integer_radix(16)


def _resolve_separator(decimal_separator: str | None, locale: str | None) -> str:
    if decimal_separator is not None and locale is not None:
        msg = "Pass either decimal_separator or locale, not both"
        raise ValueError(msg)
    if locale is not None:
        return decimal_separator_for(locale)
    if decimal_separator == "":
        msg = "decimal_separator must not be empty"
        raise ValueError(msg)
    return decimal_separator or DEFAULT_DECIMAL_SEPARATOR


def floating(*, decimal_separator: str | None = None, locale: str | None = None) -> Parser[str]:
    """Match floating point text and return it normalized.

    Grammar: optional sign, digits, optional fraction (separator followed
    by digits), optional exponent (``e``/``E``, optional sign, digits).
    Optional parts that do not match consume nothing, so ``"1."`` yields
    ``"1"`` and leaves the separator in place.

    The returned text always uses ``.`` as decimal separator, so it can be
    handed to float() or Decimal().

    Args:
        decimal_separator: Separator between integer and fraction digits
        locale: Locale code whose CLDR separator to use (requires Babel)

    Example:
        >>> floating(decimal_separator=",").parse("-3,25e2")
        '-3.25e2'
    """
    separator = _resolve_separator(decimal_separator, locale)

    def signed_digits(cursor: Cursor) -> Outcome[str] | None:
        sign = cursor.take_element_where(lambda c: c in ("+", "-"))
        start = sign.cursor if sign is not None else cursor
        digits = start.take_while(_is_ascii_digit)
        if digits is None:
            return None
        return Outcome((sign.value if sign else "") + digits.value, digits.cursor)

    def run(cursor: Cursor) -> Outcome[str] | Failure:
        whole = signed_digits(cursor)
        if whole is None:
            return Failure(cursor)
        text = whole.value
        remainder = whole.cursor

        point = remainder.take_literal(separator)
        if point is not None:
            fraction = point.cursor.take_while(_is_ascii_digit)
            if fraction is not None:
                text += "." + fraction.value
                remainder = fraction.cursor

        marker = remainder.take_element_where(lambda c: c in EXPONENT_MARKERS)
        if marker is not None:
            exponent = signed_digits(marker.cursor)
            if exponent is not None:
                text += marker.value + exponent.value
                remainder = exponent.cursor

        return Outcome(text, remainder)

    return Parser(run, "floating")


def double(
    *, decimal_separator: str | None = None, locale: str | None = None, strict: bool = False
) -> Parser[float]:
    """Match floating point text and convert it to float.

    Finite text too large for a float follows the integer overflow policy.
    """
    text_parser = floating(decimal_separator=decimal_separator, locale=locale)

    def run(cursor: Cursor) -> Outcome[float] | Failure:
        result = text_parser(cursor)
        if isinstance(result, Failure):
            return result
        value = float(result.value)
        if math.isinf(value):
            limit = sys.float_info.max
            return _out_of_range(cursor, result.value, -limit, limit, strict=strict)
        return Outcome(value, result.cursor)

    return Parser(run, "double")


def decimal(*, decimal_separator: str | None = None, locale: str | None = None) -> Parser[Decimal]:
    """Match floating point text and convert it to Decimal."""
    return floating(decimal_separator=decimal_separator, locale=locale).map(Decimal)


# ============================================================================
# QUOTING
# ============================================================================


def _quoted_body(
    quote: Parser[str], escape: Parser[str], *, inclusive: bool
) -> Callable[[Cursor], Outcome[str] | Failure]:
    def escape_pair(cursor: Cursor) -> tuple[str, Outcome[str]] | None:
        escaped = escape(cursor)
        if isinstance(escaped, Failure):
            return None
        for follower in (quote, escape):
            pair = follower(escaped.cursor)
            if not isinstance(pair, Failure):
                return escaped.value, pair
        return None

    def scan(cursor: Cursor) -> Outcome[str] | Failure:
        opened = quote(cursor)
        if isinstance(opened, Failure):
            return opened
        pieces: list[str] = [opened.value] if inclusive else []
        remainder = opened.cursor

        while not remainder.is_eof:
            # Escape pairs take priority over the terminating quote.
            pair = escape_pair(remainder)
            if pair is not None:
                mark, escaped = pair
                if inclusive:
                    pieces.append(mark)
                pieces.append(escaped.value)
                remainder = escaped.cursor
                continue

            closed = quote(remainder)
            if not isinstance(closed, Failure):
                if inclusive:
                    pieces.append(closed.value)
                return Outcome("".join(pieces), closed.cursor)

            pieces.append(remainder.current)
            remainder = remainder.advance()

        return Failure(remainder, (FailureLabel.CLOSING_QUOTE,))

    return scan


def quoted(quote: Parser[str] | None = None, escape: Parser[str] | None = None) -> Parser[str]:
    """Match a quoted string, keeping quotes and escapes in the value.

    Inside the quotes, escape-quote and escape-escape pairs are consumed
    before the terminating quote is considered. Quote and escape may be
    the same mark (doubled-quote dialects). Input ending before a
    terminating quote is a failure.

    Args:
        quote: Quote mark parser (default ``"``)
        escape: Escape mark parser (default ``\\``)

    Example:
        >>> quoted(literal("'"), literal("'")).parse("'it''s' ok")
        "'it''s'"
    """
    quote = quote if quote is not None else literal('"')
    escape = escape if escape is not None else literal("\\")
    return Parser(_quoted_body(quote, escape, inclusive=True), "quoted")


def unquoted(quote: Parser[str] | None = None, escape: Parser[str] | None = None) -> Parser[str]:
    """Match a quoted string, stripping quotes and escape marks.

    Accepts the same input as quoted(). Applied to the output of quoted()
    (or enquote()) it recovers the original text.

    Example:
        >>> unquoted(literal("'"), literal("'")).parse("'it''s'")
        "it's"
    """
    quote = quote if quote is not None else literal('"')
    escape = escape if escape is not None else literal("\\")
    return Parser(_quoted_body(quote, escape, inclusive=False), "unquoted")


def enquote(text: str, *, quote_mark: str = '"', escape_mark: str = "\\") -> str:
    """Quote text so that unquoted() with the same marks reads it back.

    Example:
        >>> enquote("it's", quote_mark="'", escape_mark="'")
        "'it''s'"
    """
    if quote_mark == escape_mark:
        body = text.replace(quote_mark, quote_mark + quote_mark)
    else:
        body = text.replace(escape_mark, escape_mark + escape_mark)
        body = body.replace(quote_mark, escape_mark + quote_mark)
    return quote_mark + body + quote_mark
