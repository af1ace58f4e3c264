"""parsecraft - parser combinators with structured, hierarchical failures.

Build parsers for text or any random-access sequence by composing small
parsers into larger grammars. Failures are values that keep the chain of
active grammar rules and the exact input position.

Public API:
    Parser - Immutable parser value (map, flat_map, label, atomic, validate, ...)
    DeferredParser - Write-once indirection for recursive grammars
    Cursor / Outcome / Failure - Position, success and failure values
    Combinators - both, either, any_of, each, list_of, reduce_left, ...
    Primitives - literal, token, characters, integer, floating, quoted, ...

Exceptions:
    ParsecraftError - Base exception class
    ParseFailureError - Raised by Parser.parse() when input does not match
    GrammarError - Fatal grammar misuse (unbound references, strict overflow)

Submodules:
    parsecraft.syntax - Cursor, Failure and the parser combinator library
    parsecraft.diagnostics - Diagnostic codes, error types and formatting
    parsecraft.core - Optional Babel integration and locale utilities

Example:
    >>> from parsecraft import integer, token, reduce_left
    >>> import operator
    >>> add = token("+").producing(operator.add)
    >>> reduce_left(integer(), add).parse("1 + 2 + 3")
    6
"""

from .diagnostics import (
    DiagnosticFormatter,
    GrammarError,
    IntegerOverflowError,
    ParsecraftError,
    ParseFailureError,
    ReferenceAlreadyBoundError,
    UnboundReferenceError,
)
from .syntax import Cursor, Failure, LineOffsetCache, Outcome
from .syntax.parser import (
    CharRange,
    DeferredParser,
    Parser,
    always_fail,
    any_of,
    both,
    char_range,
    characters,
    characters_excluding,
    decimal,
    delimited_token,
    double,
    each,
    either,
    element,
    element_where,
    enquote,
    eof,
    error,
    first,
    floating,
    hexadecimal,
    int32,
    int64,
    integer,
    integer_radix,
    just,
    letters,
    list_of,
    list_with_separators,
    literal,
    nothing,
    numbers,
    one_or_more,
    optional,
    prefix,
    prefix_until,
    prefix_while,
    quoted,
    reduce_left,
    reduce_right,
    second,
    token,
    unquoted,
    whitespace,
    zero_or_more,
    zero_or_one,
)

# Version information - Auto-populated from package metadata
# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

try:
    __version__ = _get_version("parsecraft")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "CharRange",
    "Cursor",
    "DeferredParser",
    "DiagnosticFormatter",
    "Failure",
    "GrammarError",
    "IntegerOverflowError",
    "LineOffsetCache",
    "Outcome",
    "ParseFailureError",
    "ParsecraftError",
    "Parser",
    "ReferenceAlreadyBoundError",
    "UnboundReferenceError",
    "__version__",
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
