"""Core utilities shared by the parser primitives.

Keeps optional-dependency handling and locale lookups out of the syntax
package, maintaining a clean dependency graph:

    diagnostics <- core <- syntax

Exports:
    BabelImportError: Raised when a locale-aware feature needs Babel
    decimal_separator_for: CLDR decimal separator for a locale code
    is_babel_available: Check for the optional Babel dependency
    normalize_locale: BCP-47 to POSIX locale code conversion

Python 3.13+.
"""

from .babel_compat import BabelImportError, is_babel_available
from .locale_utils import decimal_separator_for, normalize_locale

__all__ = [
    "BabelImportError",
    "decimal_separator_for",
    "is_babel_available",
    "normalize_locale",
]
