"""Parser combinator module.

Module Organization:
- core.py: Parser value type and DeferredParser for recursive grammars
- combinators.py: Sequencing, choice, repetition and reduction
- primitives.py: Element, text, character-class, numeric and quoting parsers

Public API:
    Parser: Immutable parser wrapping a Cursor -> Outcome | Failure body
    DeferredParser: Write-once indirection for self-referential grammars
"""

from parsecraft.syntax.parser.combinators import (
    always_fail,
    any_of,
    both,
    each,
    either,
    eof,
    error,
    first,
    just,
    list_of,
    list_with_separators,
    nothing,
    one_or_more,
    optional,
    reduce_left,
    reduce_right,
    second,
    zero_or_more,
    zero_or_one,
)
from parsecraft.syntax.parser.core import DeferredParser, Parser, ParserBody
from parsecraft.syntax.parser.primitives import (
    CharRange,
    char_range,
    characters,
    characters_excluding,
    decimal,
    delimited_token,
    double,
    element,
    element_where,
    enquote,
    floating,
    hexadecimal,
    int32,
    int64,
    integer,
    integer_radix,
    letters,
    literal,
    numbers,
    prefix,
    prefix_until,
    prefix_while,
    quoted,
    token,
    unquoted,
    whitespace,
)

__all__ = [
    "CharRange",
    "DeferredParser",
    "Parser",
    "ParserBody",
    "always_fail",
    "any_of",
    "both",
    "char_range",
    "characters",
    "characters_excluding",
    "decimal",
    "delimited_token",
    "double",
    "each",
    "either",
    "element",
    "element_where",
    "enquote",
    "eof",
    "error",
    "first",
    "floating",
    "hexadecimal",
    "int32",
    "int64",
    "integer",
    "integer_radix",
    "just",
    "letters",
    "list_of",
    "list_with_separators",
    "literal",
    "nothing",
    "numbers",
    "one_or_more",
    "optional",
    "prefix",
    "prefix_until",
    "prefix_while",
    "quoted",
    "reduce_left",
    "reduce_right",
    "second",
    "token",
    "unquoted",
    "whitespace",
    "zero_or_more",
    "zero_or_one",
]
