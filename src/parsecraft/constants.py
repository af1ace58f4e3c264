"""Shared constants for parsecraft.

This module provides centralized configuration constants used across the
syntax and diagnostics packages. Placing constants here avoids circular
imports and provides a single source of truth.

Constants are grouped by domain:
- Integer bounds: range limits for the fixed-width integer parsers
- Numeric syntax: defaults for radix and floating point parsing
- Rendering limits: bounds for failure reports and source excerpts

Python 3.13+. Zero external dependencies.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Integer bounds
    "INT32_MIN",
    "INT32_MAX",
    "INT64_MIN",
    "INT64_MAX",
    "DEFAULT_INTEGER_BITS",
    "SUPPORTED_INTEGER_BITS",
    # Numeric syntax
    "ASCII_DIGITS",
    "RADIX_DIGITS",
    "MIN_RADIX",
    "MAX_RADIX",
    "DEFAULT_DECIMAL_SEPARATOR",
    "EXPONENT_MARKERS",
    # Rendering limits
    "DEFAULT_CONTEXT_LINES",
    "MAX_EXCERPT_LENGTH",
]

# ============================================================================
# INTEGER BOUNDS
# ============================================================================

INT32_MIN: int = -(2**31)
INT32_MAX: int = 2**31 - 1

INT64_MIN: int = -(2**63)
INT64_MAX: int = 2**63 - 1

# Width used by integer() and integer_radix() when none is requested.
DEFAULT_INTEGER_BITS: int = 64

# Widths accepted by integer(bits=...). Values are (minimum, maximum).
SUPPORTED_INTEGER_BITS: dict[int, tuple[int, int]] = {
    32: (INT32_MIN, INT32_MAX),
    64: (INT64_MIN, INT64_MAX),
}

# ============================================================================
# NUMERIC SYNTAX
# ============================================================================

# ASCII digits only. str.isdigit() accepts characters like '²' that int()
# rejects, so numeric primitives never use it.
ASCII_DIGITS: str = "0123456789"

# Digit alphabet for radix parsing, lowercase. Index equals digit value.
RADIX_DIGITS: str = "0123456789abcdefghijklmnopqrstuvwxyz"

MIN_RADIX: int = 2
MAX_RADIX: int = len(RADIX_DIGITS)

DEFAULT_DECIMAL_SEPARATOR: str = "."

EXPONENT_MARKERS: str = "eE"

# ============================================================================
# RENDERING LIMITS
# ============================================================================

# Lines shown before/after the failing line in formatted reports.
DEFAULT_CONTEXT_LINES: int = 2

# Longest excerpt on either side of a position marker for non-text input.
MAX_EXCERPT_LENGTH: int = 40
