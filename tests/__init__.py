# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the Restaurant Inventory API:
# - conftest.py: fake Supabase client and authenticated TestClient fixtures
# - test_filters.py, test_currency.py: pure helpers in lib/
# - test_export.py, test_models.py: spreadsheet exports and request schemas
# - test_<resource>.py: endpoint tests per router
#
# Run tests with: pytest
# =============================================================================
