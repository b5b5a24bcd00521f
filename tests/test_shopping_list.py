# =============================================================================
# tests/test_shopping_list.py - Shopping List Tests
# =============================================================================

import pytest

from core.services.shopping_list_service import DEFAULT_CATEGORIES, ShoppingListService
from tests.conftest import TEST_PROFILE_ID, TEST_USER_ID


@pytest.fixture
def sample_entries():
    return [
        {"id": "e1", "name": "Flour", "category": "Dry Goods", "estimated_cost": 8.5,
         "is_purchased": False, "added_at": "2024-03-02T09:00:00+00:00", "notes": None},
        {"id": "e2", "name": "Milk", "category": "Dairy", "estimated_cost": None,
         "is_purchased": True, "added_at": "2024-03-03T09:00:00+00:00", "notes": "2% only, no skim"},
        {"id": "e3", "name": "Eggs", "category": "Dairy", "estimated_cost": "3.25",
         "is_purchased": False, "added_at": "2024-03-01T09:00:00+00:00", "notes": None},
    ]


class TestShoppingListHelpers:
    """Test in-memory filters and totals."""

    def test_estimated_total_ignores_blank_costs(self, sample_entries):
        assert ShoppingListService.estimated_total(sample_entries) == 11.75

    def test_filter_purchased(self, sample_entries):
        assert [e["id"] for e in ShoppingListService.filter_items(sample_entries, purchased=False)] == ["e1", "e3"]
        assert [e["id"] for e in ShoppingListService.filter_items(sample_entries, purchased=True)] == ["e2"]

    def test_filter_category_and_search(self, sample_entries):
        """Test that "Milk" in "Dairy" has no "e" and drops out."""
        result = ShoppingListService.filter_items(sample_entries, search="e", category="Dairy")

        assert [e["id"] for e in result] == ["e3"]

    def test_search_matches_notes(self, sample_entries):
        result = ShoppingListService.filter_items(sample_entries, search="SKIM")

        assert [e["id"] for e in result] == ["e2"]

    def test_sort_by_name(self, sample_entries):
        result = ShoppingListService.filter_items(sample_entries, sort_field="name")

        assert [e["id"] for e in result] == ["e3", "e1", "e2"]

    def test_sort_by_date_descending(self, sample_entries):
        result = ShoppingListService.filter_items(
            sample_entries, sort_field="date", sort_direction="desc"
        )

        assert [e["id"] for e in result] == ["e2", "e1", "e3"]

    def test_sort_by_cost_counts_blank_as_zero(self, sample_entries):
        """Test that string costs sort numerically and a blank cost sorts as 0."""
        ascending = ShoppingListService.filter_items(sample_entries, sort_field="cost")
        descending = ShoppingListService.filter_items(
            sample_entries, sort_field="cost", sort_direction="desc"
        )

        assert [e["id"] for e in ascending] == ["e2", "e3", "e1"]
        assert [e["id"] for e in descending] == ["e1", "e3", "e2"]

    def test_sort_rejects_unknown_direction(self, sample_entries):
        with pytest.raises(ValueError):
            ShoppingListService.filter_items(sample_entries, sort_field="cost", sort_direction="up")


class TestShoppingListEndpoints:
    """Test /api/v1/shopping-list routes."""

    def test_list(self, client, fake_supabase, sample_entries):
        fake_supabase.queue("shopping_list", sample_entries)

        response = client.get("/api/v1/shopping-list", params={"purchased": False})

        assert response.json()["total"] == 2
        assert response.json()["estimated_total"] == 11.75
        query = fake_supabase.queries_for("shopping_list")[0]
        assert query.args_of("order") == [("added_at",)]
        assert query.kwargs_of("order") == [{"desc": True}]

    def test_categories_fall_back_to_defaults(self, client, fake_supabase):
        response = client.get("/api/v1/shopping-list/categories")

        assert response.json() == DEFAULT_CATEGORIES

    def test_categories_from_inventory(self, client, fake_supabase):
        fake_supabase.queue("ingredients", [{"category": "Produce"}, {"category": "Dairy"}])

        response = client.get("/api/v1/shopping-list/categories")

        assert response.json() == ["Dairy", "Produce"]

    def test_create(self, client, fake_supabase):
        fake_supabase.queue("shopping_list", [{"id": "e9", "name": "Salt"}])

        response = client.post("/api/v1/shopping-list", json={"name": "Salt"})

        assert response.status_code == 201
        (record,) = fake_supabase.queries_for("shopping_list")[0].args_of("insert")[0]
        assert record["business_profile_id"] == TEST_PROFILE_ID
        assert record["user_id"] == str(TEST_USER_ID)
        assert record["is_purchased"] is False
        assert record["quantity"] == 1
        assert "added_at" in record

    def test_generate_calls_database_function(self, client, fake_supabase, sample_entries):
        fake_supabase.queue("shopping_list", sample_entries)

        response = client.post("/api/v1/shopping-list/generate")

        assert response.status_code == 200
        assert response.json()["total"] == 3
        (rpc_query,) = fake_supabase.queries_for("rpc:generate_shopping_list")
        assert rpc_query.args_of("rpc") == [
            ("generate_shopping_list", {"business_profile_id": TEST_PROFILE_ID}),
        ]

    def test_generate_failure_is_500(self, client, fake_supabase):
        fake_supabase.queue("rpc:generate_shopping_list", Exception("function does not exist"))

        response = client.post("/api/v1/shopping-list/generate")

        assert response.status_code == 500
        assert response.json()["code"] == "DATABASE_ERROR"

    def test_mark_purchased_stamps_time(self, client, fake_supabase):
        fake_supabase.queue("shopping_list", [{"id": "e1", "is_purchased": True}])

        response = client.post("/api/v1/shopping-list/e1/purchased")

        assert response.status_code == 200
        (update,) = fake_supabase.queries_for("shopping_list")[0].args_of("update")[0]
        assert update["is_purchased"] is True
        assert update["purchased_at"] is not None

    def test_unmark_purchased_clears_time(self, client, fake_supabase):
        fake_supabase.queue("shopping_list", [{"id": "e1", "is_purchased": False}])

        client.post("/api/v1/shopping-list/e1/purchased", json={"is_purchased": False})

        (update,) = fake_supabase.queries_for("shopping_list")[0].args_of("update")[0]
        assert update == {"is_purchased": False, "purchased_at": None}

    def test_update_missing_entry_is_404(self, client, fake_supabase):
        response = client.patch("/api/v1/shopping-list/ghost", json={"quantity": 2})

        assert response.status_code == 404
        assert response.json()["code"] == "SHOPPING_LIST_ITEM_NOT_FOUND"

    def test_delete(self, client, fake_supabase):
        fake_supabase.queue("shopping_list", [{"id": "e1"}])

        assert client.delete("/api/v1/shopping-list/e1").status_code == 204

    def test_list_sorted_by_cost(self, client, fake_supabase, sample_entries):
        fake_supabase.queue("shopping_list", sample_entries)

        response = client.get(
            "/api/v1/shopping-list", params={"sort_field": "cost", "sort_direction": "desc"}
        )

        assert response.status_code == 200
        assert [e["id"] for e in response.json()["items"]] == ["e1", "e3", "e2"]

    def test_list_searches_notes(self, client, fake_supabase, sample_entries):
        fake_supabase.queue("shopping_list", sample_entries)

        response = client.get("/api/v1/shopping-list", params={"search": "skim"})

        assert [e["id"] for e in response.json()["items"]] == ["e2"]

    def test_list_rejects_unknown_sort_direction(self, client, fake_supabase):
        response = client.get("/api/v1/shopping-list", params={"sort_direction": "sideways"})

        assert response.status_code == 400

    def test_empty_update_returns_current_entry(self, client, fake_supabase):
        """Test that an empty PATCH reads the entry instead of writing."""
        fake_supabase.queue("shopping_list", [{"id": "e1", "name": "Flour"}])

        response = client.patch("/api/v1/shopping-list/e1", json={})

        assert response.status_code == 200
        assert response.json() == {"id": "e1", "name": "Flour"}
        (query,) = fake_supabase.queries_for("shopping_list")
        assert query.args_of("update") == []
        assert ("business_profile_id", TEST_PROFILE_ID) in query.args_of("eq")

    def test_empty_update_of_missing_entry_is_404(self, client, fake_supabase):
        response = client.patch("/api/v1/shopping-list/ghost", json={})

        assert response.status_code == 404
        assert response.json()["code"] == "SHOPPING_LIST_ITEM_NOT_FOUND"
