# =============================================================================
# tests/test_dishes.py - Dish Tests
# =============================================================================

from core.services.dish_service import food_cost_from_prices
from tests.conftest import TEST_PROFILE_ID


class TestFoodCost:
    """Test recipe costing."""

    def test_sum_of_price_times_quantity(self):
        lines = [
            {"ingredient_id": "i1", "quantity": 0.2},
            {"ingredient_id": "i2", "quantity": 0.125},
        ]

        assert food_cost_from_prices(lines, {"i1": 2.5, "i2": 8.0}) == 1.5

    def test_unknown_ingredient_costs_nothing(self):
        lines = [{"ingredient_id": "ghost", "quantity": 3}]

        assert food_cost_from_prices(lines, {}) == 0

    def test_rounded_to_cents(self):
        lines = [{"ingredient_id": "i1", "quantity": 1 / 3}]

        assert food_cost_from_prices(lines, {"i1": 1.0}) == 0.33


class TestDishEndpoints:
    """Test /api/v1/dishes routes."""

    def test_list_hides_archived_by_default(self, client, fake_supabase, sample_dishes):
        fake_supabase.queue("dishes", sample_dishes)

        response = client.get("/api/v1/dishes")

        assert response.json()["total"] == 2
        query = fake_supabase.queries_for("dishes")[0]
        assert query.args_of("or_") == [("is_archived.is.null,is_archived.eq.false",)]
        assert ("is_archived", False) not in query.args_of("eq")

    def test_list_including_archived(self, client, fake_supabase):
        client.get("/api/v1/dishes", params={"include_archived": True})

        query = fake_supabase.queries_for("dishes")[0]
        assert query.args_of("or_") == []
        assert ("is_archived", False) not in query.args_of("eq")

    def test_create_computes_food_cost_and_writes_recipe(self, client, fake_supabase):
        fake_supabase.queue("ingredients", [{"id": "i1", "cost": 2.5}, {"id": "i2", "cost": 8.0}])
        fake_supabase.queue("dishes", [{"id": "d5", "name": "Margherita", "price": 11.5}])

        response = client.post("/api/v1/dishes", json={
            "name": "Margherita",
            "price": 11.5,
            "ingredients": [
                {"ingredient_id": "i1", "quantity": 0.2, "unit": "kg"},
                {"ingredient_id": "i2", "quantity": 0.125, "unit": "kg"},
            ],
        })

        assert response.status_code == 201
        assert len(response.json()["ingredients"]) == 2

        (record,) = fake_supabase.queries_for("dishes")[0].args_of("insert")[0]
        assert record["food_cost"] == 1.5
        assert record["is_archived"] is False
        assert record["business_profile_id"] == TEST_PROFILE_ID
        assert "ingredients" not in record

        line_writes = fake_supabase.queries_for("dish_ingredients")
        (rows,) = line_writes[-1].args_of("insert")[0]
        assert {row["dish_id"] for row in rows} == {"d5"}

    def test_create_requires_price(self, client):
        response = client.post("/api/v1/dishes", json={"name": "Margherita"})

        assert response.status_code == 400
        assert "price" in response.json()["detail"]

    def test_get_includes_ingredients(self, client, fake_supabase):
        fake_supabase.queue("dishes", [{"id": "d1", "name": "Margherita"}])
        fake_supabase.queue("dish_ingredients", [{"ingredient_id": "i1", "quantity": 0.2, "unit": "kg"}])

        response = client.get("/api/v1/dishes/d1")

        assert response.json()["ingredients"] == [{"ingredient_id": "i1", "quantity": 0.2, "unit": "kg"}]

    def test_food_cost_preview(self, client, fake_supabase):
        fake_supabase.queue("ingredients", [{"id": "i1", "cost": 4}])

        response = client.post("/api/v1/dishes/food-cost", json={
            "ingredients": [{"ingredient_id": "i1", "quantity": 0.5}],
        })

        assert response.json() == {"food_cost": 2.0}
        assert fake_supabase.queries_for("dishes") == []

    def test_archive(self, client, fake_supabase):
        fake_supabase.queue("dishes", [{"id": "d1", "is_archived": True}])

        response = client.post("/api/v1/dishes/d1/archive")

        assert response.json()["is_archived"] is True
        (update,) = fake_supabase.queries_for("dishes")[0].args_of("update")[0]
        assert update["is_archived"] is True

    def test_delete_dish_with_sales_is_409(self, client, fake_supabase):
        fake_supabase.queue("dishes", [{"id": "d1"}])
        fake_supabase.queue("sales", [{"id": "s1"}])

        response = client.delete("/api/v1/dishes/d1")

        assert response.status_code == 409
        assert response.json()["code"] == "DISH_HAS_SALES"
        (sales_query,) = fake_supabase.queries_for("sales")
        assert sales_query.args_of("eq") == [
            ("business_profile_id", TEST_PROFILE_ID),
            ("dish_id", "d1"),
        ]
        assert all(q.args_of("delete") == [] for q in fake_supabase.queries)

    def test_delete_foreign_dish_is_404_even_with_sales(self, client, fake_supabase):
        """Test that another business's dish id never reaches the sales check."""
        fake_supabase.queue("sales", [{"id": "s1"}])

        response = client.delete("/api/v1/dishes/other-business-dish")

        assert response.status_code == 404
        assert response.json()["code"] == "DISH_NOT_FOUND"
        assert fake_supabase.queries_for("sales") == []

    def test_delete_dish_without_sales(self, client, fake_supabase):
        fake_supabase.queue("dishes", [{"id": "d2"}], [{"id": "d2"}])

        response = client.delete("/api/v1/dishes/d2")

        assert response.status_code == 204
        lines_delete = fake_supabase.queries_for("dish_ingredients")[-1]
        assert lines_delete.args_of("delete") == [()]
        assert lines_delete.args_of("eq") == [("dish_id", "d2")]

    def test_delete_removes_recipe_before_dish(self, client, fake_supabase):
        fake_supabase.queue("dishes", [{"id": "d2"}], [{"id": "d2"}])

        client.delete("/api/v1/dishes/d2")

        deletes = [q.table for q in fake_supabase.queries if q.args_of("delete")]
        assert deletes == ["dish_ingredients", "dishes"]

    def test_delete_missing_dish_is_404(self, client, fake_supabase):
        response = client.delete("/api/v1/dishes/ghost")

        assert response.status_code == 404
