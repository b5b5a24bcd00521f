# =============================================================================
# core/services/shopping_list_service.py - Shopping List Business Logic
# =============================================================================
# Entries in `shopping_list`, either added by hand or generated from
# low-stock inventory by the `generate_shopping_list` database function.
# =============================================================================

import logging
from datetime import datetime, timezone
from typing import Any

from app.exceptions import DatabaseOperationError, RecordNotFoundError
from lib.filters import SORT_DIRECTIONS, filter_equals, search_records, sort_records
from lib.supabase_client import SupabaseClient, is_no_rows_error

logger = logging.getLogger(__name__)

TABLE = "shopping_list"
RESOURCE = "shopping_list_item"

SEARCH_FIELDS = ("name", "category", "notes")

# Sort keys offered by the shopping list screen, by column
SORT_FIELDS = {
    "name": "name",
    "category": "category",
    "date": "added_at",
    "cost": "estimated_cost",
}

DEFAULT_CATEGORIES = [
    "Meat",
    "Seafood",
    "Produce",
    "Dairy",
    "Dry Goods",
    "Bakery",
    "Beverages",
    "Other",
]


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _cost(item: dict[str, Any]) -> float:
    try:
        return float(item.get("estimated_cost") or 0)
    except (TypeError, ValueError):
        return 0.0


class ShoppingListService:
    """Service for shopping list operations, scoped to one business profile."""

    @staticmethod
    def list_items(business_profile_id: str) -> list[dict[str, Any]]:
        """List entries, most recently added first."""
        client = SupabaseClient.get_client()

        try:
            response = (
                client.table(TABLE)
                .select("*")
                .eq("business_profile_id", business_profile_id)
                .order("added_at", desc=True)
                .execute()
            )
        except Exception as e:
            logger.error(f"Failed to list shopping list for {business_profile_id}: {e}")
            raise DatabaseOperationError("list shopping list", str(e))

        return response.data or []

    @staticmethod
    def get_item(business_profile_id: str, item_id: str) -> dict[str, Any]:
        """
        Get one entry.

        Raises:
            RecordNotFoundError: If the entry doesn't exist in this business
        """
        client = SupabaseClient.get_client()

        try:
            response = (
                client.table(TABLE)
                .select("*")
                .eq("id", item_id)
                .eq("business_profile_id", business_profile_id)
                .single()
                .execute()
            )
        except Exception as e:
            if is_no_rows_error(e):
                raise RecordNotFoundError(RESOURCE, item_id)
            logger.error(f"Failed to fetch shopping list item {item_id}: {e}")
            raise DatabaseOperationError("fetch shopping list item", str(e))

        if not response.data:
            raise RecordNotFoundError(RESOURCE, item_id)
        return response.data

    @staticmethod
    def create_item(
        business_profile_id: str,
        user_id: str,
        data: dict[str, Any],
    ) -> dict[str, Any]:
        client = SupabaseClient.get_client()
        record = {
            **data,
            "business_profile_id": business_profile_id,
            "user_id": user_id,
            "is_purchased": False,
            "added_at": _now(),
        }

        try:
            response = client.table(TABLE).insert(record).execute()
        except Exception as e:
            logger.error(f"Failed to add shopping list item: {e}")
            raise DatabaseOperationError("add shopping list item", str(e))

        if not response.data:
            raise DatabaseOperationError("add shopping list item", "Insert returned no data")

        item = response.data[0]
        logger.info(f"Added shopping list item {item.get('id')} to {business_profile_id}")
        return item

    @staticmethod
    def update_item(
        business_profile_id: str,
        item_id: str,
        data: dict[str, Any],
    ) -> dict[str, Any]:
        """
        Update an entry.

        Setting is_purchased to true stamps purchased_at; false clears it.
        An empty update returns the entry unchanged.

        Raises:
            RecordNotFoundError: If the entry doesn't exist in this business
        """
        if not data:
            return ShoppingListService.get_item(business_profile_id, item_id)

        update_data = dict(data)
        if "is_purchased" in update_data:
            update_data["purchased_at"] = _now() if update_data["is_purchased"] else None

        client = SupabaseClient.get_client()

        try:
            response = (
                client.table(TABLE)
                .update(update_data)
                .eq("id", item_id)
                .eq("business_profile_id", business_profile_id)
                .execute()
            )
        except Exception as e:
            logger.error(f"Failed to update shopping list item {item_id}: {e}")
            raise DatabaseOperationError("update shopping list item", str(e))

        if not response.data:
            raise RecordNotFoundError(RESOURCE, item_id)
        return response.data[0]

    @staticmethod
    def mark_purchased(business_profile_id: str, item_id: str, purchased: bool = True) -> dict[str, Any]:
        item = ShoppingListService.update_item(
            business_profile_id, item_id, {"is_purchased": purchased}
        )
        logger.info(f"Marked shopping list item {item_id} purchased={purchased}")
        return item

    @staticmethod
    def delete_item(business_profile_id: str, item_id: str) -> None:
        client = SupabaseClient.get_client()

        try:
            response = (
                client.table(TABLE)
                .delete()
                .eq("id", item_id)
                .eq("business_profile_id", business_profile_id)
                .execute()
            )
        except Exception as e:
            logger.error(f"Failed to delete shopping list item {item_id}: {e}")
            raise DatabaseOperationError("delete shopping list item", str(e))

        if not response.data:
            raise RecordNotFoundError(RESOURCE, item_id)
        logger.info(f"Deleted shopping list item {item_id}")

    @staticmethod
    def list_categories(business_profile_id: str) -> list[str]:
        """
        Categories to offer when adding an entry.

        The business's ingredient categories, or DEFAULT_CATEGORIES when it has none.
        """
        client = SupabaseClient.get_client()

        try:
            response = (
                client.table("ingredients")
                .select("category")
                .eq("business_profile_id", business_profile_id)
                .execute()
            )
        except Exception as e:
            logger.error(f"Failed to list shopping categories for {business_profile_id}: {e}")
            raise DatabaseOperationError("list shopping list categories", str(e))

        categories = sorted({
            row["category"].strip()
            for row in response.data or []
            if isinstance(row.get("category"), str) and row["category"].strip()
        })
        return categories or list(DEFAULT_CATEGORIES)

    @staticmethod
    def generate(business_profile_id: str) -> list[dict[str, Any]]:
        """
        Add entries for every low-stock ingredient.

        Runs the generate_shopping_list database function and returns the
        refreshed list.
        """
        client = SupabaseClient.get_client()

        try:
            client.rpc(
                "generate_shopping_list",
                {"business_profile_id": business_profile_id},
            ).execute()
        except Exception as e:
            logger.error(f"Failed to generate shopping list for {business_profile_id}: {e}")
            raise DatabaseOperationError("generate shopping list", str(e))

        logger.info(f"Generated shopping list for {business_profile_id}")
        return ShoppingListService.list_items(business_profile_id)

    # -------------------------------------------------------------------------
    # In-memory helpers
    # -------------------------------------------------------------------------

    @staticmethod
    def filter_items(
        items: list[dict[str, Any]],
        search: str | None = None,
        category: str | None = None,
        purchased: bool | None = None,
        sort_field: str | None = None,
        sort_direction: str = "asc",
    ) -> list[dict[str, Any]]:
        """
        Apply the shopping list screen's filters and sort.

        Search matches name, category or notes. sort_field takes a column
        name or one of the SORT_FIELDS keys; "cost" sorts blank costs as 0.

        Raises:
            ValueError: If sort_direction is not "asc" or "desc"
        """
        result = search_records(items, search, SEARCH_FIELDS)
        result = filter_equals(result, "category", category)
        if purchased is not None:
            result = [item for item in result if bool(item.get("is_purchased")) == purchased]

        field = SORT_FIELDS.get(sort_field, sort_field) if sort_field else None
        if field == "estimated_cost":
            if sort_direction not in SORT_DIRECTIONS:
                raise ValueError(
                    f"Invalid sort direction: {sort_direction!r} (expected 'asc' or 'desc')"
                )
            return sorted(result, key=_cost, reverse=(sort_direction == "desc"))
        return sort_records(result, field, sort_direction)

    @staticmethod
    def estimated_total(items: list[dict[str, Any]]) -> float:
        """Σ estimated_cost over entries; blank costs count as 0."""
        return round(sum(_cost(item) for item in items), 2)
