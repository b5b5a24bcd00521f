# =============================================================================
# tests/test_sales.py - Sales Tests
# =============================================================================

from datetime import date

from core.services.sales_service import SalesService
from tests.conftest import TEST_PROFILE_ID, TEST_USER_ID


class TestSummarizeByDish:
    """Test per-dish sales summaries."""

    def test_grouped_and_ordered_by_amount(self, sample_sales, sample_dishes):
        summary = SalesService.summarize_by_dish(sample_sales, sample_dishes)

        assert summary == [
            {"dish_id": "d1", "dish_name": "Margherita", "quantity": 5.0, "amount": 57.5},
            {"dish_id": "d2", "dish_name": "Carbonara", "quantity": 1.0, "amount": 14.0},
            {"dish_id": "d9", "dish_name": "Unknown Dish", "quantity": 1.0, "amount": 5.0},
        ]

    def test_empty(self):
        assert SalesService.summarize_by_dish([], []) == []

    def test_total_amount(self, sample_sales):
        assert SalesService.total_amount(sample_sales) == 76.5


class TestFilterSales:
    """Test the sales screen filters."""

    def test_search_by_dish_name(self, sample_sales):
        result = SalesService.filter_sales(sample_sales, search="marg")

        assert [sale["id"] for sale in result] == ["s1", "s3"]

    def test_on_date_matches_timestamps_too(self, sample_sales):
        sales = sample_sales + [{"id": "s5", "dish_name": "Tiramisu", "date": "2024-03-03T19:30:00"}]

        result = SalesService.filter_sales(sales, on_date=date(2024, 3, 3))

        assert [sale["id"] for sale in result] == ["s3", "s4", "s5"]


class TestSalesEndpoints:
    """Test /api/v1/sales routes."""

    def test_list_with_totals(self, client, fake_supabase, sample_sales):
        fake_supabase.queue("sales", sample_sales)

        response = client.get("/api/v1/sales", params={"date": "2024-03-01"})

        body = response.json()
        assert body["total"] == 2
        assert body["total_amount"] == 37.0
        query = fake_supabase.queries_for("sales")[0]
        assert query.kwargs_of("order") == [{"desc": True}]

    def test_add_sales_batch(self, client, fake_supabase):
        fake_supabase.queue("sales", [{"id": "s10"}, {"id": "s11"}])

        response = client.post("/api/v1/sales", json=[
            {"dish_id": "d1", "dish_name": "Margherita", "quantity": 2, "total_amount": 23, "date": "2024-03-04"},
            {"dish_id": "d2", "quantity": 1, "total_amount": 14, "date": "2024-03-04", "shift": "Dinner"},
        ])

        assert response.status_code == 201
        assert response.json()["count"] == 2
        (rows,) = fake_supabase.queries_for("sales")[0].args_of("insert")[0]
        assert rows[0]["business_profile_id"] == TEST_PROFILE_ID
        assert rows[0]["user_id"] == str(TEST_USER_ID)
        assert rows[0]["date"] == "2024-03-04"
        assert rows[0]["shift"] == "All"
        assert rows[1]["shift"] == "Dinner"

    def test_empty_batch_writes_nothing(self, client, fake_supabase):
        response = client.post("/api/v1/sales", json=[])

        assert response.status_code == 201
        assert response.json() == {"sales": [], "count": 0}
        assert fake_supabase.queries_for("sales") == []

    def test_negative_quantity_is_400(self, client):
        response = client.post("/api/v1/sales", json=[
            {"dish_id": "d1", "quantity": -1, "total_amount": 5, "date": "2024-03-04"},
        ])

        assert response.status_code == 400

    def test_summary_applies_range(self, client, fake_supabase, sample_sales, sample_dishes):
        fake_supabase.queue("sales", sample_sales)
        fake_supabase.queue("dishes", sample_dishes)

        response = client.get("/api/v1/sales/summary", params={"start": "2024-03-01", "end": "2024-03-31"})

        assert response.json()["total_amount"] == 76.5
        assert response.json()["dishes"][0]["dish_name"] == "Margherita"
        query = fake_supabase.queries_for("sales")[0]
        assert query.args_of("gte") == [("date", "2024-03-01")]
        assert query.args_of("lte") == [("date", "2024-03-31")]

    def test_summary_keeps_sales_without_a_dish(self, client, fake_supabase):
        fake_supabase.queue("sales", [{"id": "s7", "dish_id": None, "quantity": 2, "total_amount": 9.0}])

        response = client.get("/api/v1/sales/summary")

        assert response.status_code == 200
        assert response.json() == {
            "dishes": [{"dish_id": None, "dish_name": "Unknown Dish", "quantity": 2.0, "amount": 9.0}],
            "total_amount": 9.0,
        }

    def test_by_date(self, client, fake_supabase, sample_sales):
        fake_supabase.queue("sales", sample_sales[2:])

        response = client.get("/api/v1/sales/by-date/2024-03-03")

        assert response.json() == {"date": "2024-03-03", "sales": sample_sales[2:], "total_amount": 39.5}
        assert ("date", "2024-03-03") in fake_supabase.queries_for("sales")[0].args_of("eq")

    def test_by_date_rejects_bad_date(self, client):
        response = client.get("/api/v1/sales/by-date/yesterday")

        assert response.status_code == 400

    def test_export_xlsx(self, client, fake_supabase, sample_sales, sample_dishes):
        fake_supabase.queue("sales", sample_sales)
        fake_supabase.queue("dishes", sample_dishes)
        fake_supabase.queue("business_profiles", [{"default_currency": "USD"}])

        response = client.get("/api/v1/sales/export")

        assert response.status_code == 200
        assert response.headers["content-type"] == (
            "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
        )
        assert response.content[:2] == b"PK"
