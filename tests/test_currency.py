# =============================================================================
# tests/test_currency.py - Currency Formatting Tests
# =============================================================================

import math

import pytest

from lib.currency import CURRENCIES, format_currency, get_currency_symbol


class TestFormatCurrency:
    """Test money formatting."""

    @pytest.mark.parametrize(
        "amount, code, expected",
        [
            (1234.5, "USD", "$1,234.50"),
            (0, "EUR", "€0.00"),
            (19.999, "GBP", "£20.00"),
            (99, "SEK", "99.00 kr"),
            (1500, "CAD", "C$1,500.00"),
            (2.5, "INR", "₹2.50"),
        ],
    )
    def test_known_currencies(self, amount, code, expected):
        assert format_currency(amount, code) == expected

    def test_negative_amounts_lead_with_minus(self):
        assert format_currency(-3, "EUR") == "-€3.00"
        assert format_currency(-1200, "SEK") == "-1,200.00 kr"

    def test_nan_and_none_format_as_zero(self):
        assert format_currency(math.nan, "USD") == "$0.00"
        assert format_currency(None, "GBP") == "£0.00"
        assert format_currency("not a number", "USD") == "$0.00"

    def test_unknown_code_is_used_as_prefix(self):
        assert format_currency(1, "XYZ") == "XYZ 1.00"

    def test_lowercase_code_is_accepted(self):
        assert format_currency(5, "usd") == "$5.00"

    def test_tiny_negative_does_not_show_minus_zero(self):
        assert format_currency(-0.001, "USD") == "$0.00"


class TestCurrencySymbol:
    """Test symbol lookup."""

    def test_symbols(self):
        assert get_currency_symbol("USD") == "$"
        assert get_currency_symbol("SEK") == "kr"
        assert get_currency_symbol("chf") == "Fr"

    def test_unknown_and_blank(self):
        assert get_currency_symbol("XYZ") == "XYZ"
        assert get_currency_symbol(None) == ""

    def test_catalog_covers_supported_codes(self):
        codes = {currency["code"] for currency in CURRENCIES}
        assert codes == {"USD", "EUR", "GBP", "SEK", "JPY", "CAD", "AUD", "CHF", "CNY", "INR"}
