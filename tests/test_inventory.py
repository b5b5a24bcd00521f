# =============================================================================
# tests/test_inventory.py - Inventory Tests
# =============================================================================

from datetime import date

import pytest

from core.models.inventory import StockStatus
from core.services.inventory_service import InventoryService
from tests.conftest import TEST_PROFILE_ID


# =============================================================================
# Stock Classification
# =============================================================================

class TestStockStatus:
    """Test low/out-of-stock classification."""

    @pytest.mark.parametrize("item,expected", [
        ({"quantity": 0}, StockStatus.OUT),
        ({"quantity": -2}, StockStatus.OUT),
        ({"quantity": None}, StockStatus.OUT),
        ({"quantity": 5}, StockStatus.LOW),
        ({"quantity": 6}, StockStatus.IN_STOCK),
        ({"quantity": 10, "reorder_point": 10}, StockStatus.LOW),
        ({"quantity": 10, "minimum_stock_level": 12, "reorder_level": 2}, StockStatus.LOW),
        ({"quantity": 3, "reorder_level": 2}, StockStatus.IN_STOCK),
    ])
    def test_stock_status(self, item, expected):
        assert InventoryService.stock_status(item) == expected

    def test_zero_threshold_falls_through_to_default(self):
        assert InventoryService.reorder_threshold({"reorder_point": 0}) == 5

    def test_item_value(self):
        assert InventoryService.item_value({"quantity": "4", "cost": 2.5}) == 10.0
        assert InventoryService.item_value({"quantity": None, "cost": 2.5}) == 0.0


class TestCalculateStats:
    """Test the inventory header totals."""

    def test_totals(self, sample_inventory):
        stats = InventoryService.calculate_stats(sample_inventory, selected_ids=["i1", "i4"])

        assert stats == {
            "total_items": 4,
            "total_value": 134.0,
            "low_stock_items": 1,
            "out_of_stock_items": 1,
            "in_stock_items": 2,
            "categories": 2,
            "selected_items_count": 2,
            "selected_items_value": 110.0,
        }

    def test_empty(self):
        stats = InventoryService.calculate_stats([])

        assert stats["total_items"] == 0
        assert stats["total_value"] == 0
        assert stats["selected_items_count"] == 0


class TestFilterItems:
    """Test the inventory screen filters."""

    def test_search_matches_name_or_category(self, sample_inventory):
        result = InventoryService.filter_items(sample_inventory, search="produce")

        assert [item["id"] for item in result] == ["i1", "i3"]

    def test_category_all_disables_filter(self, sample_inventory):
        assert len(InventoryService.filter_items(sample_inventory, category="all")) == 4
        assert [i["id"] for i in InventoryService.filter_items(sample_inventory, category="Dairy")] == ["i2"]

    def test_low_stock_only_includes_out_of_stock(self, sample_inventory):
        result = InventoryService.filter_items(sample_inventory, low_stock_only=True)

        assert [item["id"] for item in result] == ["i2", "i3"]

    def test_sort_by_name_is_case_insensitive(self, sample_inventory):
        result = InventoryService.filter_items(sample_inventory, sort_field="name")

        assert [item["name"] for item in result] == ["Basil", "Mozzarella", "olive oil", "Tomatoes"]


# =============================================================================
# Endpoints
# =============================================================================

class TestInventoryEndpoints:
    """Test /api/v1/inventory routes."""

    def test_list_scoped_to_profile(self, client, fake_supabase, sample_inventory):
        fake_supabase.queue("ingredients", sample_inventory)

        response = client.get("/api/v1/inventory", params={"sort_field": "quantity", "sort_direction": "desc"})

        assert response.status_code == 200
        body = response.json()
        assert body["total"] == 4
        assert [item["id"] for item in body["items"]] == ["i1", "i4", "i2", "i3"]
        query = fake_supabase.queries_for("ingredients")[0]
        assert ("business_profile_id", TEST_PROFILE_ID) in query.args_of("eq")

    def test_invalid_sort_direction_is_400(self, client):
        response = client.get("/api/v1/inventory", params={"sort_direction": "sideways"})

        assert response.status_code == 400
        assert response.json()["code"] == "VALIDATION_ERROR"

    def test_categories(self, client, fake_supabase):
        fake_supabase.queue("ingredients", [
            {"category": "Produce"}, {"category": " Dairy "}, {"category": None}, {"category": "Produce"}, {"category": ""},
        ])

        response = client.get("/api/v1/inventory/categories")

        assert response.json() == ["Dairy", "Produce"]

    def test_expiring_uses_cutoff(self, client, fake_supabase, sample_inventory):
        fake_supabase.queue("ingredients", [sample_inventory[0]])

        response = client.get("/api/v1/inventory/expiring", params={"days": 3})

        assert response.status_code == 200
        assert response.json()["days"] == 3
        query = fake_supabase.queries_for("ingredients")[0]
        assert query.args_of("is_") == [("expiry_date", "null")]
        (field, cutoff), = query.args_of("lte")
        assert field == "expiry_date"
        assert (date.fromisoformat(cutoff) - date.today()).days == 3

    def test_stats_with_selection(self, client, fake_supabase, sample_inventory):
        fake_supabase.queue("ingredients", sample_inventory)

        response = client.get("/api/v1/inventory/stats", params=[("selected_ids", "i2"), ("selected_ids", "i3")])

        assert response.status_code == 200
        assert response.json()["selected_items_count"] == 2
        assert response.json()["selected_items_value"] == 24.0

    def test_create_applies_defaults_and_profile(self, client, fake_supabase):
        fake_supabase.queue("ingredients", [{"id": "new", "name": "Flour"}])

        response = client.post("/api/v1/inventory", json={"name": "Flour", "unit": "kg"})

        assert response.status_code == 201
        (record,) = fake_supabase.queries_for("ingredients")[0].args_of("insert")[0]
        assert record["business_profile_id"] == TEST_PROFILE_ID
        assert record["quantity"] == 0
        assert record["cost"] == 0
        assert record["reorder_level"] == 0
        assert "expiry_date" not in record

    def test_create_requires_name(self, client):
        response = client.post("/api/v1/inventory", json={"quantity": 3})

        assert response.status_code == 400
        assert "name" in response.json()["detail"]

    def test_create_rejects_negative_quantity(self, client):
        response = client.post("/api/v1/inventory", json={"name": "Flour", "quantity": -1})

        assert response.status_code == 400

    def test_get_missing_item_is_404(self, client, fake_supabase):
        response = client.get("/api/v1/inventory/nope")

        assert response.status_code == 404
        assert response.json()["code"] == "INVENTORY_ITEM_NOT_FOUND"

    def test_update_only_sent_fields(self, client, fake_supabase):
        fake_supabase.queue("ingredients", [{"id": "i1", "quantity": 7}])

        response = client.patch("/api/v1/inventory/i1", json={"quantity": 7})

        assert response.status_code == 200
        (update,) = fake_supabase.queries_for("ingredients")[0].args_of("update")[0]
        assert set(update) == {"quantity", "updated_at"}

    def test_delete(self, client, fake_supabase):
        fake_supabase.queue("ingredients", [{"id": "i1"}])

        response = client.delete("/api/v1/inventory/i1")

        assert response.status_code == 204

    def test_delete_missing_is_404(self, client, fake_supabase):
        response = client.delete("/api/v1/inventory/nope")

        assert response.status_code == 404

    def test_bulk_delete(self, client, fake_supabase):
        fake_supabase.queue("ingredients", [{"id": "i1"}, {"id": "i2"}])

        response = client.post("/api/v1/inventory/bulk-delete", json={"ids": ["i1", "i2", "ghost"]})

        assert response.json() == {"deleted_ids": ["i1", "i2"], "deleted_count": 2}
        query = fake_supabase.queries_for("ingredients")[0]
        assert query.args_of("in_") == [("id", ["i1", "i2", "ghost"])]

    def test_bulk_delete_requires_ids(self, client):
        response = client.post("/api/v1/inventory/bulk-delete", json={"ids": []})

        assert response.status_code == 400

    def test_export_csv(self, client, fake_supabase, sample_inventory):
        fake_supabase.queue("ingredients", sample_inventory)
        fake_supabase.queue("business_profiles", [{"default_currency": "EUR"}])

        response = client.get("/api/v1/inventory/export", params={"format": "csv"})

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/csv")
        disposition = response.headers["content-disposition"]
        assert disposition.startswith('attachment; filename="inventory-')
        assert disposition.endswith('.csv"')
        assert "€" in response.text

    def test_export_unknown_format_is_400(self, client, fake_supabase):
        fake_supabase.queue("business_profiles", [{"default_currency": "USD"}])

        response = client.get("/api/v1/inventory/export", params={"format": "pdf"})

        assert response.status_code == 400
        assert response.json()["details"]["allowed_formats"] == ["xlsx", "csv"]
