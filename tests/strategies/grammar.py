"""Hypothesis strategies for parser and cursor testing.

Usage:
    from hypothesis import given
    from tests.strategies.grammar import arithmetic_expressions

    @given(case=arithmetic_expressions())
    def test_evaluation(case):
        text, expected = case
        ...
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from hypothesis import event
from hypothesis import strategies as st
from hypothesis.strategies import composite

from parsecraft.constants import INT64_MAX, INT64_MIN
from parsecraft.syntax.cursor import Cursor

if TYPE_CHECKING:
    from hypothesis.strategies import DrawFn, SearchStrategy

# ============================================================================
# SOURCE TEXT AND CURSORS
# ============================================================================

source_text: SearchStrategy[str] = st.text(
    alphabet=st.characters(blacklist_categories=["Cs"]),
    min_size=0,
    max_size=200,
)

# Generic token sequences for non-text inputs
token_sequences: SearchStrategy[list[int]] = st.lists(
    st.integers(min_value=0, max_value=9), min_size=0, max_size=50
)


@composite
def cursors(draw: DrawFn, sources: SearchStrategy[str] = source_text) -> Cursor[str]:
    """Cursor at a valid position of a generated source."""
    source = draw(sources)
    pos = draw(st.integers(min_value=0, max_value=len(source)))
    if pos == 0:
        event("cursor_position=start")
    elif pos == len(source):
        event("cursor_position=end")
    else:
        event("cursor_position=middle")
    return Cursor(source, pos)


# ============================================================================
# NUMBERS
# ============================================================================

int64_values: SearchStrategy[int] = st.integers(min_value=INT64_MIN, max_value=INT64_MAX)


@composite
def float_literals(draw: DrawFn) -> tuple[str, str, float]:
    """Float literal pieces: (sign, body with '.' separator, expected value).

    Returns:
        (sign, unsigned text, float value of the signed text)
    """
    sign = draw(st.sampled_from(["", "+", "-"]))
    whole = draw(st.from_regex(r"[0-9]{1,6}", fullmatch=True))
    fraction = draw(st.one_of(st.just(""), st.from_regex(r"[0-9]{1,6}", fullmatch=True)))
    exponent = draw(
        st.one_of(st.just(""), st.from_regex(r"[eE][+-]?[0-9]{1,2}", fullmatch=True))
    )
    text = whole + ("." + fraction if fraction else "") + exponent
    return sign, text, float(sign + text)


# ============================================================================
# ARITHMETIC EXPRESSIONS
# ============================================================================


@composite
def arithmetic_expressions(draw: DrawFn) -> tuple[str, int]:
    """Sum-of-products expression text and its value.

    Example output: ("2 + 5 * 4", 22)
    """
    terms = draw(
        st.lists(
            st.lists(st.integers(min_value=0, max_value=99), min_size=1, max_size=4),
            min_size=1,
            max_size=5,
        )
    )
    if len(terms) == 1 and len(terms[0]) == 1:
        event("expression_shape=single")
    elif all(len(factors) == 1 for factors in terms):
        event("expression_shape=sum")
    elif len(terms) == 1:
        event("expression_shape=product")
    else:
        event("expression_shape=mixed")

    text = " + ".join(" * ".join(str(f) for f in factors) for factors in terms)
    return text, sum(math.prod(factors) for factors in terms)


# ============================================================================
# QUOTING
# ============================================================================

_DIALECTS: list[tuple[str, str]] = [
    ('"', "\\"),
    ("'", "\\"),
    ("'", "'"),
    ('"', '"'),
    ("|", "/"),
    ("`", "`"),
]


@composite
def quote_dialects(draw: DrawFn) -> tuple[str, str]:
    """(quote_mark, escape_mark) pair; same or distinct marks."""
    quote_mark, escape_mark = draw(st.sampled_from(_DIALECTS))
    event(f"quote_dialect={'same' if quote_mark == escape_mark else 'distinct'}")
    return quote_mark, escape_mark
