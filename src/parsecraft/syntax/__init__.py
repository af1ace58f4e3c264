"""Parsing engine package.

Provides the immutable cursor, the structured failure value and the parser
combinator library. Separate from diagnostics so error rendering can be
used on its own by tooling.

Python 3.13+.
"""

from .cursor import Cursor, LineOffsetCache, Outcome
from .failure import Failure
from .parser import DeferredParser, Parser

__all__ = [
    "Cursor",
    "DeferredParser",
    "Failure",
    "LineOffsetCache",
    "Outcome",
    "Parser",
]
