"""Tests for locale_utils and locale-aware numeric primitives.

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from decimal import Decimal

import pytest

from parsecraft import decimal, double, floating
from parsecraft.core import decimal_separator_for, normalize_locale
from parsecraft.core.locale_utils import get_babel_locale

pytest.importorskip("babel")


@pytest.fixture(autouse=True)
def _clear_locale_caches() -> Iterator[None]:
    decimal_separator_for.cache_clear()
    get_babel_locale.cache_clear()
    yield
    decimal_separator_for.cache_clear()
    get_babel_locale.cache_clear()


class TestNormalizeLocale:
    """BCP-47 to POSIX conversion."""

    @pytest.mark.parametrize(
        ("code", "expected"),
        [("en-US", "en_US"), ("pt-BR", "pt_BR"), ("de", "de"), ("zh-Hant-TW", "zh_Hant_TW")],
    )
    def test_normalize(self, code: str, expected: str) -> None:
        """Hyphens become underscores."""
        assert normalize_locale(code) == expected


class TestDecimalSeparatorFor:
    """CLDR decimal separator lookup."""

    @pytest.mark.parametrize(
        ("code", "expected"),
        [("en_US", "."), ("de_DE", ","), ("de-DE", ","), ("fr_FR", ","), ("ja", ".")],
    )
    def test_known_locales(self, code: str, expected: str) -> None:
        """Separators come from CLDR data."""
        assert decimal_separator_for(code) == expected

    @pytest.mark.parametrize("code", ["zz_ZZ", "not a locale!"])
    def test_unknown_locale_falls_back(self, code: str, caplog: pytest.LogCaptureFixture) -> None:
        """Unknown or malformed locales fall back to '.' with a warning."""
        with caplog.at_level(logging.WARNING, logger="parsecraft.core.locale_utils"):
            assert decimal_separator_for(code) == "."
        assert any(code in record.getMessage() for record in caplog.records)

    def test_result_is_cached(self) -> None:
        """Repeated lookups hit the cache."""
        decimal_separator_for("de_DE")
        decimal_separator_for("de_DE")
        assert decimal_separator_for.cache_info().hits >= 1


class TestLocaleAwarePrimitives:
    """floating, double and decimal configured by locale."""

    def test_floating_german(self) -> None:
        """German input uses ',' and is normalized to '.'."""
        assert floating(locale="de_DE").parse("-1,5e3") == "-1.5e3"

    def test_floating_german_rejects_dot_fraction(self) -> None:
        """'.' is not a fraction separator in German."""
        assert floating(locale="de_DE").parse("1.5") == "1"

    def test_double_bcp47_code(self) -> None:
        """BCP-47 codes are accepted."""
        assert double(locale="de-DE").parse("2,25") == 2.25

    def test_decimal_english(self) -> None:
        """English keeps '.'."""
        assert decimal(locale="en_US").parse("0.1") == Decimal("0.1")

    def test_unknown_locale_uses_default_separator(self) -> None:
        """A bad locale still builds a working parser."""
        assert floating(locale="zz_ZZ").parse("3.5") == "3.5"
