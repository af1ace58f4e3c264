"""Locale utilities for locale-aware numeric primitives.

Centralizes locale normalization and CLDR symbol lookup so parsers can be
configured with a locale code instead of literal separators.

Python 3.13+.
"""

from __future__ import annotations

import functools
import logging
from typing import TYPE_CHECKING

from parsecraft.constants import DEFAULT_DECIMAL_SEPARATOR
from parsecraft.diagnostics.templates import ErrorTemplate

from .babel_compat import get_babel_numbers, get_locale_class, get_unknown_locale_error

if TYPE_CHECKING:
    from babel import Locale

__all__ = [
    "decimal_separator_for",
    "get_babel_locale",
    "normalize_locale",
]

logger = logging.getLogger(__name__)


def normalize_locale(locale_code: str) -> str:
    """Convert BCP-47 locale code to POSIX format for Babel.

    BCP-47 uses hyphens (en-US), while Babel/POSIX uses underscores (en_US).

    Args:
        locale_code: BCP-47 locale code (e.g., "en-US", "pt-BR")

    Returns:
        POSIX-formatted locale code (e.g., "en_US", "pt_BR")

    Example:
        >>> normalize_locale("en-US")
        'en_US'
        >>> normalize_locale("en")  # Already normalized
        'en'
    """
    return locale_code.replace("-", "_")


@functools.lru_cache(maxsize=128)
def get_babel_locale(locale_code: str) -> Locale:
    """Get a Babel Locale object with caching.

    Thread-safe via lru_cache internal locking.

    Args:
        locale_code: Locale code (BCP-47 or POSIX format accepted)

    Returns:
        Babel Locale object

    Raises:
        BabelImportError: If Babel is not installed
        babel.core.UnknownLocaleError: If locale is not recognized
        ValueError: If locale format is invalid
    """
    locale_class = get_locale_class()
    return locale_class.parse(normalize_locale(locale_code))


@functools.lru_cache(maxsize=128)
def decimal_separator_for(locale_code: str) -> str:
    """Return the CLDR decimal separator of a locale.

    Unknown or malformed locales fall back to ``"."`` with a logged warning,
    so a bad locale never turns into a parse-time crash.

    Args:
        locale_code: Locale code (BCP-47 or POSIX format accepted)

    Returns:
        Decimal separator, e.g. ``","`` for ``"de_DE"``

    Raises:
        BabelImportError: If Babel is not installed

    Example:
        >>> decimal_separator_for("de-DE")
        ','
        >>> decimal_separator_for("en_US")
        '.'
    """
    unknown_locale_error = get_unknown_locale_error()
    try:
        locale = get_babel_locale(locale_code)
    except (unknown_locale_error, ValueError) as e:
        logger.warning(
            "%s: %s. Falling back to '%s'",
            ErrorTemplate.locale_unknown(locale_code),
            e,
            DEFAULT_DECIMAL_SEPARATOR,
        )
        return DEFAULT_DECIMAL_SEPARATOR

    separator = get_babel_numbers().get_decimal_symbol(locale)
    logger.debug("Decimal separator for %s: %r", locale_code, separator)
    return separator
