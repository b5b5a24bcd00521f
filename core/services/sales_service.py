# =============================================================================
# core/services/sales_service.py - Sales Business Logic
# =============================================================================
# Recorded sales live in the `sales` table, one row per dish per entry.
# =============================================================================

import logging
from datetime import date, datetime, timezone
from typing import Any

from app.exceptions import DatabaseOperationError
from lib.filters import search_records
from lib.supabase_client import SupabaseClient

logger = logging.getLogger(__name__)

TABLE = "sales"
UNKNOWN_DISH = "Unknown Dish"


class SalesService:
    """Service for sales operations, scoped to one business profile."""

    @staticmethod
    def list_sales(
        business_profile_id: str,
        start: date | None = None,
        end: date | None = None,
    ) -> list[dict[str, Any]]:
        """
        List sales, newest date first.

        Args:
            start: Earliest date to include (inclusive)
            end: Latest date to include (inclusive)
        """
        client = SupabaseClient.get_client()

        try:
            query = (
                client.table(TABLE)
                .select("*")
                .eq("business_profile_id", business_profile_id)
            )
            if start:
                query = query.gte("date", start.isoformat())
            if end:
                query = query.lte("date", end.isoformat())
            response = query.order("date", desc=True).execute()
        except Exception as e:
            logger.error(f"Failed to list sales for {business_profile_id}: {e}")
            raise DatabaseOperationError("list sales", str(e))

        return response.data or []

    @staticmethod
    def list_sales_by_date(business_profile_id: str, on_date: date) -> list[dict[str, Any]]:
        """Sales recorded on one day."""
        client = SupabaseClient.get_client()

        try:
            response = (
                client.table(TABLE)
                .select("*")
                .eq("business_profile_id", business_profile_id)
                .eq("date", on_date.isoformat())
                .order("created_at", desc=True)
                .execute()
            )
        except Exception as e:
            logger.error(f"Failed to list sales on {on_date} for {business_profile_id}: {e}")
            raise DatabaseOperationError("list sales by date", str(e))

        return response.data or []

    @staticmethod
    def add_sales(
        business_profile_id: str,
        user_id: str,
        entries: list[dict[str, Any]],
    ) -> list[dict[str, Any]]:
        """
        Record several sales in one insert.

        An empty list writes nothing and returns an empty list.
        """
        if not entries:
            return []

        client = SupabaseClient.get_client()
        now = datetime.now(timezone.utc).isoformat()
        rows = [
            {
                **entry,
                "business_profile_id": business_profile_id,
                "user_id": user_id,
                "created_at": now,
            }
            for entry in entries
        ]

        try:
            response = client.table(TABLE).insert(rows).execute()
        except Exception as e:
            logger.error(f"Failed to record {len(rows)} sales: {e}")
            raise DatabaseOperationError("record sales", str(e))

        saved = response.data or []
        logger.info(f"Recorded {len(saved)} sales for {business_profile_id}")
        return saved

    # -------------------------------------------------------------------------
    # In-memory helpers
    # -------------------------------------------------------------------------

    @staticmethod
    def filter_sales(
        sales: list[dict[str, Any]],
        search: str | None = None,
        on_date: date | None = None,
    ) -> list[dict[str, Any]]:
        """Keep sales whose dish name matches `search` and that fall on `on_date`."""
        result = search_records(sales, search, ("dish_name",))
        if on_date:
            day = on_date.isoformat()
            result = [sale for sale in result if str(sale.get("date", ""))[:10] == day]
        return result

    @staticmethod
    def summarize_by_dish(
        sales: list[dict[str, Any]],
        dishes: list[dict[str, Any]],
    ) -> list[dict[str, Any]]:
        """
        Quantity and amount sold per dish.

        Dish names come from `dishes`; ids with no dish are "Unknown Dish".
        Ordered by amount, highest first.
        """
        names = {dish["id"]: dish.get("name") for dish in dishes}
        summary: dict[str, dict[str, Any]] = {}

        for sale in sales:
            dish_id = sale.get("dish_id")
            entry = summary.setdefault(dish_id, {
                "dish_id": dish_id,
                "dish_name": names.get(dish_id) or UNKNOWN_DISH,
                "quantity": 0.0,
                "amount": 0.0,
            })
            entry["quantity"] += float(sale.get("quantity") or 0)
            entry["amount"] += float(sale.get("total_amount") or 0)

        for entry in summary.values():
            entry["amount"] = round(entry["amount"], 2)

        return sorted(summary.values(), key=lambda e: e["amount"], reverse=True)

    @staticmethod
    def total_amount(sales: list[dict[str, Any]]) -> float:
        return round(sum(float(sale.get("total_amount") or 0) for sale in sales), 2)
