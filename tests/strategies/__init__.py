"""Hypothesis strategies for parsecraft property-based testing.

Strategies are organized by domain:

- grammar: source text, cursors, arithmetic expressions, numeric literals,
  quoting dialects

Usage:
    from tests.strategies import cursors, quote_dialects
    from tests.strategies.grammar import arithmetic_expressions

Event-Emitting Strategies (HypoFuzz-Optimized):
    These strategies emit hypothesis.event() calls for coverage-guided fuzzing:
    - cursor_position: start|middle|end
    - quote_dialect: same|distinct
    - expression_shape: single|sum|product|mixed
"""

from .grammar import (
    arithmetic_expressions,
    cursors,
    float_literals,
    int64_values,
    quote_dialects,
    source_text,
    token_sequences,
)

__all__ = [
    "arithmetic_expressions",
    "cursors",
    "float_literals",
    "int64_values",
    "quote_dialects",
    "source_text",
    "token_sequences",
]
