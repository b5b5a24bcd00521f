# =============================================================================
# core/services/inventory_service.py - Inventory Business Logic
# =============================================================================
# CRUD over the `ingredients` table plus the stock classification and list
# filters used by the inventory screen.
# =============================================================================

import logging
from datetime import date, datetime, timedelta, timezone
from typing import Any

from app.config import settings
from app.exceptions import DatabaseOperationError, RecordNotFoundError
from core.models.inventory import StockStatus
from lib.filters import filter_equals, search_records, sort_records
from lib.supabase_client import SupabaseClient, is_no_rows_error

logger = logging.getLogger(__name__)

TABLE = "ingredients"
RESOURCE = "inventory_item"

SEARCH_FIELDS = ("name", "category")


def _as_number(value: Any) -> float:
    try:
        return float(value or 0)
    except (TypeError, ValueError):
        return 0.0


class InventoryService:
    """
    Service for inventory item operations.

    Every query is scoped to one business profile.
    """

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    @staticmethod
    def list_items(business_profile_id: str) -> list[dict[str, Any]]:
        """List every inventory item of a business, alphabetically."""
        client = SupabaseClient.get_client()

        try:
            response = (
                client.table(TABLE)
                .select("*")
                .eq("business_profile_id", business_profile_id)
                .order("name")
                .execute()
            )
        except Exception as e:
            logger.error(f"Failed to list inventory for {business_profile_id}: {e}")
            raise DatabaseOperationError("list inventory items", str(e))

        return response.data or []

    @staticmethod
    def get_item(business_profile_id: str, item_id: str) -> dict[str, Any]:
        """
        Get one inventory item.

        Raises:
            RecordNotFoundError: If the item doesn't exist in this business
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
            logger.error(f"Failed to fetch inventory item {item_id}: {e}")
            raise DatabaseOperationError("fetch inventory item", str(e))

        if not response.data:
            raise RecordNotFoundError(RESOURCE, item_id)
        return response.data

    @staticmethod
    def list_categories(business_profile_id: str) -> list[str]:
        """Distinct, sorted, non-blank categories used by the business's items."""
        client = SupabaseClient.get_client()

        try:
            response = (
                client.table(TABLE)
                .select("category")
                .eq("business_profile_id", business_profile_id)
                .execute()
            )
        except Exception as e:
            logger.error(f"Failed to list categories for {business_profile_id}: {e}")
            raise DatabaseOperationError("list inventory categories", str(e))

        categories = {
            row["category"].strip()
            for row in response.data or []
            if isinstance(row.get("category"), str) and row["category"].strip()
        }
        return sorted(categories)

    @staticmethod
    def list_expiring(
        business_profile_id: str,
        days: int | None = None,
        today: date | None = None,
    ) -> list[dict[str, Any]]:
        """
        Items whose expiry date falls on or before today + `days`.

        Already expired items are included. Items without an expiry date never are.
        """
        days = settings.EXPIRY_WARNING_DAYS if days is None else days
        cutoff = (today or date.today()) + timedelta(days=days)
        client = SupabaseClient.get_client()

        try:
            response = (
                client.table(TABLE)
                .select("*")
                .eq("business_profile_id", business_profile_id)
                .not_.is_("expiry_date", "null")
                .lte("expiry_date", cutoff.isoformat())
                .order("expiry_date")
                .execute()
            )
        except Exception as e:
            logger.error(f"Failed to list expiring items for {business_profile_id}: {e}")
            raise DatabaseOperationError("list expiring items", str(e))

        return response.data or []

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------

    @staticmethod
    def create_item(business_profile_id: str, data: dict[str, Any]) -> dict[str, Any]:
        """
        Add an inventory item.

        quantity, cost and reorder_level default to 0.
        """
        client = SupabaseClient.get_client()
        now = datetime.now(timezone.utc).isoformat()

        record = {
            "quantity": 0,
            "cost": 0,
            "reorder_level": 0,
            **{key: value for key, value in data.items() if value is not None},
            "business_profile_id": business_profile_id,
            "created_at": now,
            "updated_at": now,
        }

        try:
            response = client.table(TABLE).insert(record).execute()
        except Exception as e:
            logger.error(f"Failed to create inventory item: {e}")
            raise DatabaseOperationError("create inventory item", str(e))

        if not response.data:
            raise DatabaseOperationError("create inventory item", "Insert returned no data")

        item = response.data[0]
        logger.info(f"Created inventory item {item.get('id')} in {business_profile_id}")
        return item

    @staticmethod
    def update_item(
        business_profile_id: str,
        item_id: str,
        data: dict[str, Any],
    ) -> dict[str, Any]:
        """
        Update the given fields of an inventory item.

        Raises:
            RecordNotFoundError: If the item doesn't exist in this business
        """
        if not data:
            return InventoryService.get_item(business_profile_id, item_id)

        client = SupabaseClient.get_client()
        update_data = {**data, "updated_at": datetime.now(timezone.utc).isoformat()}

        try:
            response = (
                client.table(TABLE)
                .update(update_data)
                .eq("id", item_id)
                .eq("business_profile_id", business_profile_id)
                .execute()
            )
        except Exception as e:
            logger.error(f"Failed to update inventory item {item_id}: {e}")
            raise DatabaseOperationError("update inventory item", str(e))

        if not response.data:
            raise RecordNotFoundError(RESOURCE, item_id)

        logger.info(f"Updated inventory item {item_id}")
        return response.data[0]

    @staticmethod
    def delete_item(business_profile_id: str, item_id: str) -> None:
        """
        Delete an inventory item.

        Raises:
            RecordNotFoundError: If nothing was deleted
        """
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
            logger.error(f"Failed to delete inventory item {item_id}: {e}")
            raise DatabaseOperationError("delete inventory item", str(e))

        if not response.data:
            raise RecordNotFoundError(RESOURCE, item_id)
        logger.info(f"Deleted inventory item {item_id}")

    @staticmethod
    def bulk_delete(business_profile_id: str, item_ids: list[str]) -> list[str]:
        """
        Delete several items in one statement.

        Returns:
            Ids that were actually deleted (unknown ids are ignored)
        """
        client = SupabaseClient.get_client()

        try:
            response = (
                client.table(TABLE)
                .delete()
                .in_("id", item_ids)
                .eq("business_profile_id", business_profile_id)
                .execute()
            )
        except Exception as e:
            logger.error(f"Failed to bulk delete inventory items: {e}")
            raise DatabaseOperationError("delete inventory items", str(e))

        deleted = [row["id"] for row in response.data or []]
        logger.info(f"Deleted {len(deleted)} inventory items from {business_profile_id}")
        return deleted

    # -------------------------------------------------------------------------
    # Stock Classification
    # -------------------------------------------------------------------------

    @staticmethod
    def reorder_threshold(item: dict[str, Any]) -> float:
        """
        Quantity at or below which an item counts as low.

        First non-empty of reorder_point, minimum_stock_level, reorder_level,
        then LOW_STOCK_DEFAULT_THRESHOLD.
        """
        for field in ("reorder_point", "minimum_stock_level", "reorder_level"):
            value = item.get(field)
            if value:
                return _as_number(value)
        return settings.LOW_STOCK_DEFAULT_THRESHOLD

    @staticmethod
    def is_out_of_stock(item: dict[str, Any]) -> bool:
        return _as_number(item.get("quantity")) <= 0

    @staticmethod
    def is_low_stock(item: dict[str, Any]) -> bool:
        quantity = _as_number(item.get("quantity"))
        return 0 < quantity <= InventoryService.reorder_threshold(item)

    @staticmethod
    def stock_status(item: dict[str, Any]) -> StockStatus:
        if InventoryService.is_out_of_stock(item):
            return StockStatus.OUT
        if InventoryService.is_low_stock(item):
            return StockStatus.LOW
        return StockStatus.IN_STOCK

    @staticmethod
    def item_value(item: dict[str, Any]) -> float:
        return _as_number(item.get("cost")) * _as_number(item.get("quantity"))

    @staticmethod
    def calculate_stats(
        items: list[dict[str, Any]],
        selected_ids: list[str] | None = None,
    ) -> dict[str, Any]:
        """
        Totals for a list of items.

        Args:
            items: Inventory rows
            selected_ids: Ids ticked in the table, for the selection totals

        Returns:
            Dict matching InventoryStats
        """
        statuses = [InventoryService.stock_status(item) for item in items]
        selected = set(selected_ids or [])
        selected_items = [item for item in items if item.get("id") in selected]
        categories = {item.get("category") for item in items if item.get("category")}

        return {
            "total_items": len(items),
            "total_value": round(sum(InventoryService.item_value(item) for item in items), 2),
            "low_stock_items": statuses.count(StockStatus.LOW),
            "out_of_stock_items": statuses.count(StockStatus.OUT),
            "in_stock_items": statuses.count(StockStatus.IN_STOCK),
            "categories": len(categories),
            "selected_items_count": len(selected_items),
            "selected_items_value": round(
                sum(InventoryService.item_value(item) for item in selected_items), 2
            ),
        }

    @staticmethod
    def filter_items(
        items: list[dict[str, Any]],
        search: str | None = None,
        category: str | None = None,
        low_stock_only: bool = False,
        sort_field: str | None = None,
        sort_direction: str = "asc",
    ) -> list[dict[str, Any]]:
        """
        Apply the inventory screen's filters.

        Search matches name or category. Category "all" disables the category
        filter. low_stock_only keeps low and out-of-stock items.
        """
        result = search_records(items, search, SEARCH_FIELDS)
        result = filter_equals(result, "category", category)
        if low_stock_only:
            result = [
                item for item in result
                if InventoryService.is_low_stock(item) or InventoryService.is_out_of_stock(item)
            ]
        return sort_records(result, sort_field, sort_direction)
