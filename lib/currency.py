# =============================================================================
# lib/currency.py - Currency Formatting
# =============================================================================
# Supported currencies and the money format used in API payloads and exports.
# =============================================================================

import math
from typing import Any

CURRENCIES: list[dict[str, str]] = [
    {"code": "USD", "symbol": "$", "name": "US Dollar"},
    {"code": "EUR", "symbol": "€", "name": "Euro"},
    {"code": "GBP", "symbol": "£", "name": "British Pound"},
    {"code": "SEK", "symbol": "kr", "name": "Swedish Krona"},
    {"code": "JPY", "symbol": "¥", "name": "Japanese Yen"},
    {"code": "CAD", "symbol": "C$", "name": "Canadian Dollar"},
    {"code": "AUD", "symbol": "A$", "name": "Australian Dollar"},
    {"code": "CHF", "symbol": "Fr", "name": "Swiss Franc"},
    {"code": "CNY", "symbol": "¥", "name": "Chinese Yuan"},
    {"code": "INR", "symbol": "₹", "name": "Indian Rupee"},
]

_BY_CODE = {currency["code"]: currency for currency in CURRENCIES}

# Currencies written after the amount ("1,234.50 kr")
SUFFIX_CURRENCIES = {"SEK"}


def get_currency_symbol(code: str | None) -> str:
    """Symbol for a currency code; unknown codes return the code itself."""
    if not code:
        return ""
    currency = _BY_CODE.get(code.upper())
    return currency["symbol"] if currency else code.upper()


def format_currency(amount: Any, code: str = "USD") -> str:
    """
    Format an amount as money.

    Examples:
        format_currency(1234.5, "USD")   # "$1,234.50"
        format_currency(-3, "EUR")       # "-€3.00"
        format_currency(99, "SEK")       # "99.00 kr"
        format_currency(None, "GBP")     # "£0.00"
        format_currency(1, "XYZ")        # "XYZ 1.00"
    """
    try:
        value = float(amount)
    except (TypeError, ValueError):
        value = 0.0
    if math.isnan(value) or math.isinf(value):
        value = 0.0

    code = (code or "USD").upper()
    sign = "-" if value < 0 and round(abs(value), 2) > 0 else ""
    number = f"{abs(value):,.2f}"

    if code in SUFFIX_CURRENCIES:
        return f"{sign}{number} {_BY_CODE[code]['symbol']}"
    if code in _BY_CODE:
        return f"{sign}{_BY_CODE[code]['symbol']}{number}"
    return f"{sign}{code} {number}"
