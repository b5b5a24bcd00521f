# =============================================================================
# lib/ - Standalone Utility Modules
# =============================================================================
# This package contains reusable utilities:
# - supabase_client.py: Supabase singleton and business profile resolution
# - filters.py: Search/equality/sort helpers for record lists
# - currency.py: Supported currencies and money formatting
#
# These modules are self-contained and can be tested in isolation.
# =============================================================================

from lib.currency import CURRENCIES, format_currency, get_currency_symbol
from lib.filters import filter_equals, search_records, sort_records
from lib.supabase_client import SupabaseClient, SupabaseClientError, is_no_rows_error

__all__ = [
    # Supabase
    "SupabaseClient",
    "SupabaseClientError",
    "is_no_rows_error",
    # Filters
    "search_records",
    "filter_equals",
    "sort_records",
    # Currency
    "CURRENCIES",
    "format_currency",
    "get_currency_symbol",
]
