# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up mock environment variables before any imports
# - A fake Supabase client that records every query and returns canned rows
# - A TestClient with auth and business profile resolution overridden
# =============================================================================

import os

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# This must happen before importing app.config which loads settings immediately

os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_ANON_KEY", "test-anon-key")
os.environ.setdefault("SUPABASE_SERVICE_KEY", "test-service-key")
os.environ.setdefault("SUPABASE_JWT_SECRET", "test-jwt-secret-with-enough-length-for-hs256")
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DEBUG", "true")

from types import SimpleNamespace
from typing import Any
from unittest.mock import MagicMock
from uuid import UUID

import pytest
from fastapi.testclient import TestClient

from app.auth import AuthUser, get_current_user
from app.dependencies import get_business_profile_id
from app.main import app
from lib.supabase_client import SupabaseClient

TEST_USER_ID = UUID("11111111-1111-1111-1111-111111111111")
TEST_PROFILE_ID = "bp-123"


# =============================================================================
# Fake Supabase
# =============================================================================

class FakeQuery:
    """
    Stand-in for the Supabase query builder.

    Chain methods record themselves and return self; execute() pops the next
    canned response queued for the table.
    """

    def __init__(self, db: "FakeSupabase", table: str):
        self.db = db
        self.table = table
        self.calls: list[tuple[str, tuple, dict]] = []
        self.is_single = False

    def _record(self, name: str, *args, **kwargs) -> "FakeQuery":
        self.calls.append((name, args, kwargs))
        return self

    def select(self, *args, **kwargs):
        return self._record("select", *args, **kwargs)

    def insert(self, *args, **kwargs):
        return self._record("insert", *args, **kwargs)

    def update(self, *args, **kwargs):
        return self._record("update", *args, **kwargs)

    def upsert(self, *args, **kwargs):
        return self._record("upsert", *args, **kwargs)

    def delete(self, *args, **kwargs):
        return self._record("delete", *args, **kwargs)

    def eq(self, *args):
        return self._record("eq", *args)

    def neq(self, *args):
        return self._record("neq", *args)

    def in_(self, *args):
        return self._record("in_", *args)

    def is_(self, *args):
        return self._record("is_", *args)

    def or_(self, *args):
        return self._record("or_", *args)

    def contains(self, *args):
        return self._record("contains", *args)

    def lte(self, *args):
        return self._record("lte", *args)

    def gte(self, *args):
        return self._record("gte", *args)

    def order(self, *args, **kwargs):
        return self._record("order", *args, **kwargs)

    def limit(self, *args):
        return self._record("limit", *args)

    @property
    def not_(self):
        return self._record("not_")

    def single(self):
        self.is_single = True
        return self._record("single")

    def args_of(self, name: str) -> list[tuple]:
        """Positional args of every call to `name`."""
        return [args for call, args, _ in self.calls if call == name]

    def kwargs_of(self, name: str) -> list[dict]:
        return [kwargs for call, _, kwargs in self.calls if call == name]

    def execute(self):
        data = self.db.next_response(self.table)
        if isinstance(data, Exception):
            raise data
        if self.is_single:
            if isinstance(data, list):
                if not data:
                    raise Exception(
                        "{'code': 'PGRST116', 'message': 'JSON object requested, multiple (or no) rows returned'}"
                    )
                data = data[0]
        return SimpleNamespace(data=data, count=None)


class FakeSupabase:
    """Records queries per table and serves queued responses."""

    def __init__(self):
        self.responses: dict[str, list[Any]] = {}
        self.queries: list[FakeQuery] = []
        self.storage = MagicMock()

    def queue(self, table: str, *responses: Any) -> "FakeSupabase":
        """Queue responses (row lists, single rows or exceptions) for a table."""
        self.responses.setdefault(table, []).extend(responses)
        return self

    def next_response(self, table: str) -> Any:
        pending = self.responses.get(table)
        if pending:
            return pending.pop(0)
        return []

    def table(self, name: str) -> FakeQuery:
        query = FakeQuery(self, name)
        self.queries.append(query)
        return query

    def rpc(self, name: str, params: dict | None = None) -> FakeQuery:
        query = FakeQuery(self, f"rpc:{name}")
        query.calls.append(("rpc", (name, params), {}))
        self.queries.append(query)
        return query

    def queries_for(self, table: str) -> list[FakeQuery]:
        return [query for query in self.queries if query.table == table]


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def fake_supabase(monkeypatch):
    """Install a FakeSupabase as the SupabaseClient singleton."""
    fake = FakeSupabase()
    monkeypatch.setattr(SupabaseClient, "_instance", fake)
    return fake


@pytest.fixture
def test_user():
    return AuthUser(id=TEST_USER_ID, email="chef@example.com")


@pytest.fixture
def client(fake_supabase, test_user):
    """
    TestClient with the caller and business profile fixed.

    Every request is made as `test_user` working in TEST_PROFILE_ID.
    """
    app.dependency_overrides[get_current_user] = lambda: test_user
    app.dependency_overrides[get_business_profile_id] = lambda: TEST_PROFILE_ID
    try:
        yield TestClient(app, raise_server_exceptions=False)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def anonymous_client(fake_supabase):
    """TestClient without any dependency overrides."""
    app.dependency_overrides.clear()
    return TestClient(app, raise_server_exceptions=False)


@pytest.fixture
def sample_inventory():
    """Inventory rows covering in-stock, low, out-of-stock and uncategorized items."""
    return [
        {"id": "i1", "name": "Tomatoes", "category": "Produce", "quantity": 20, "cost": 2.5,
         "reorder_point": 5, "expiry_date": "2024-03-05", "unit": "kg"},
        {"id": "i2", "name": "Mozzarella", "category": "Dairy", "quantity": 3, "cost": 8.0,
         "minimum_stock_level": 4, "unit": "kg"},
        {"id": "i3", "name": "Basil", "category": "Produce", "quantity": 0, "cost": 1.2, "unit": "bunch"},
        {"id": "i4", "name": "olive oil", "category": None, "quantity": 6, "cost": 10.0, "unit": "l"},
    ]


@pytest.fixture
def sample_sales():
    return [
        {"id": "s1", "dish_id": "d1", "dish_name": "Margherita", "quantity": 2, "total_amount": 23.0, "date": "2024-03-01"},
        {"id": "s2", "dish_id": "d2", "dish_name": "Carbonara", "quantity": 1, "total_amount": 14.0, "date": "2024-03-01"},
        {"id": "s3", "dish_id": "d1", "dish_name": "Margherita", "quantity": 3, "total_amount": 34.5, "date": "2024-03-03"},
        {"id": "s4", "dish_id": "d9", "dish_name": "", "quantity": 1, "total_amount": 5.0, "date": "2024-03-03"},
    ]


@pytest.fixture
def sample_dishes():
    return [
        {"id": "d1", "name": "Margherita", "price": 11.5, "category": "Pizza"},
        {"id": "d2", "name": "Carbonara", "price": 14.0, "category": None},
    ]
