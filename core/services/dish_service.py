# =============================================================================
# core/services/dish_service.py - Dish (Menu Item) Business Logic
# =============================================================================
# Dishes are stored in `dishes`; their recipes in `dish_ingredients`.
# Dishes referenced by recorded sales are archived rather than deleted.
# =============================================================================

import logging
from datetime import datetime, timezone
from typing import Any

from app.exceptions import DatabaseOperationError, DishHasSalesError, RecordNotFoundError
from lib.supabase_client import SupabaseClient, is_no_rows_error

logger = logging.getLogger(__name__)

TABLE = "dishes"
LINES_TABLE = "dish_ingredients"
RESOURCE = "dish"


class DishService:
    """Service for dish operations, scoped to one business profile."""

    @staticmethod
    def list_dishes(business_profile_id: str, include_archived: bool = False) -> list[dict[str, Any]]:
        client = SupabaseClient.get_client()

        try:
            query = (
                client.table(TABLE)
                .select("*")
                .eq("business_profile_id", business_profile_id)
            )
            if not include_archived:
                query = query.or_("is_archived.is.null,is_archived.eq.false")
            response = query.order("name").execute()
        except Exception as e:
            logger.error(f"Failed to list dishes for {business_profile_id}: {e}")
            raise DatabaseOperationError("list dishes", str(e))

        return response.data or []

    @staticmethod
    def get_dish(business_profile_id: str, dish_id: str) -> dict[str, Any]:
        """
        Get a dish with its ingredient lines under "ingredients".

        Raises:
            RecordNotFoundError: If the dish doesn't exist in this business
        """
        client = SupabaseClient.get_client()

        try:
            response = (
                client.table(TABLE)
                .select("*")
                .eq("id", dish_id)
                .eq("business_profile_id", business_profile_id)
                .single()
                .execute()
            )
        except Exception as e:
            if is_no_rows_error(e):
                raise RecordNotFoundError(RESOURCE, dish_id)
            logger.error(f"Failed to fetch dish {dish_id}: {e}")
            raise DatabaseOperationError("fetch dish", str(e))

        if not response.data:
            raise RecordNotFoundError(RESOURCE, dish_id)

        try:
            lines = (
                client.table(LINES_TABLE)
                .select("ingredient_id, quantity, unit")
                .eq("dish_id", dish_id)
                .execute()
            )
        except Exception as e:
            logger.error(f"Failed to fetch ingredients of dish {dish_id}: {e}")
            raise DatabaseOperationError("fetch dish ingredients", str(e))

        return {**response.data, "ingredients": lines.data or []}

    @staticmethod
    def _write_lines(dish_id: str, lines: list[dict[str, Any]]) -> list[dict[str, Any]]:
        """Replace a dish's recipe with `lines`."""
        client = SupabaseClient.get_client()
        rows = [{**line, "dish_id": dish_id} for line in lines]

        try:
            client.table(LINES_TABLE).delete().eq("dish_id", dish_id).execute()
            if rows:
                client.table(LINES_TABLE).insert(rows).execute()
        except Exception as e:
            logger.error(f"Failed to write ingredients of dish {dish_id}: {e}")
            raise DatabaseOperationError("save dish ingredients", str(e))

        return rows

    @staticmethod
    def create_dish(business_profile_id: str, data: dict[str, Any]) -> dict[str, Any]:
        """
        Add a dish and its recipe.

        food_cost is computed from current ingredient costs.
        """
        lines = data.pop("ingredients", None) or []
        client = SupabaseClient.get_client()
        now = datetime.now(timezone.utc).isoformat()

        record = {
            **data,
            "business_profile_id": business_profile_id,
            "food_cost": DishService.calculate_food_cost(business_profile_id, lines),
            "is_archived": False,
            "created_at": now,
            "updated_at": now,
        }

        try:
            response = client.table(TABLE).insert(record).execute()
        except Exception as e:
            logger.error(f"Failed to create dish: {e}")
            raise DatabaseOperationError("create dish", str(e))

        if not response.data:
            raise DatabaseOperationError("create dish", "Insert returned no data")

        dish = response.data[0]
        dish["ingredients"] = DishService._write_lines(dish["id"], lines)
        logger.info(f"Created dish {dish['id']} with {len(lines)} ingredients")
        return dish

    @staticmethod
    def update_dish(business_profile_id: str, dish_id: str, data: dict[str, Any]) -> dict[str, Any]:
        """
        Update a dish. A given ingredient list replaces the recipe.

        Raises:
            RecordNotFoundError: If the dish doesn't exist in this business
        """
        lines = data.pop("ingredients", None)
        update_data = dict(data)
        if lines is not None:
            update_data["food_cost"] = DishService.calculate_food_cost(business_profile_id, lines)

        if not update_data:
            return DishService.get_dish(business_profile_id, dish_id)

        client = SupabaseClient.get_client()
        update_data["updated_at"] = datetime.now(timezone.utc).isoformat()

        try:
            response = (
                client.table(TABLE)
                .update(update_data)
                .eq("id", dish_id)
                .eq("business_profile_id", business_profile_id)
                .execute()
            )
        except Exception as e:
            logger.error(f"Failed to update dish {dish_id}: {e}")
            raise DatabaseOperationError("update dish", str(e))

        if not response.data:
            raise RecordNotFoundError(RESOURCE, dish_id)

        dish = response.data[0]
        if lines is not None:
            dish["ingredients"] = DishService._write_lines(dish_id, lines)
        logger.info(f"Updated dish {dish_id}")
        return dish

    @staticmethod
    def set_archived(business_profile_id: str, dish_id: str, archived: bool) -> dict[str, Any]:
        """Archive or unarchive a dish."""
        dish = DishService.update_dish(business_profile_id, dish_id, {"is_archived": archived})
        logger.info(f"{'Archived' if archived else 'Unarchived'} dish {dish_id}")
        return dish

    @staticmethod
    def delete_dish(business_profile_id: str, dish_id: str) -> None:
        """
        Delete a dish and its recipe.

        Recipe lines are deleted before the dish row.

        Raises:
            RecordNotFoundError: If the dish doesn't exist in this business
            DishHasSalesError: If sales reference the dish (archive it instead)
        """
        DishService.get_dish(business_profile_id, dish_id)
        client = SupabaseClient.get_client()

        try:
            sales = (
                client.table("sales")
                .select("id")
                .eq("business_profile_id", business_profile_id)
                .eq("dish_id", dish_id)
                .limit(1)
                .execute()
            )
        except Exception as e:
            logger.error(f"Failed to check sales of dish {dish_id}: {e}")
            raise DatabaseOperationError("check dish sales", str(e))

        if sales.data:
            raise DishHasSalesError(dish_id)

        try:
            client.table(LINES_TABLE).delete().eq("dish_id", dish_id).execute()
        except Exception as e:
            logger.error(f"Failed to delete ingredients of dish {dish_id}: {e}")
            raise DatabaseOperationError("delete dish ingredients", str(e))

        try:
            response = (
                client.table(TABLE)
                .delete()
                .eq("id", dish_id)
                .eq("business_profile_id", business_profile_id)
                .execute()
            )
        except Exception as e:
            logger.error(f"Failed to delete dish {dish_id}: {e}")
            raise DatabaseOperationError("delete dish", str(e))

        if not response.data:
            raise RecordNotFoundError(RESOURCE, dish_id)

        logger.info(f"Deleted dish {dish_id}")

    @staticmethod
    def calculate_food_cost(business_profile_id: str, lines: list[dict[str, Any]]) -> float:
        """
        Cost of a recipe at current ingredient prices.

        Σ ingredient cost × quantity, rounded to cents. Ingredients that are
        not in the business's inventory count as 0.
        """
        if not lines:
            return 0.0

        client = SupabaseClient.get_client()
        ingredient_ids = list({line["ingredient_id"] for line in lines})

        try:
            response = (
                client.table("ingredients")
                .select("id, cost")
                .eq("business_profile_id", business_profile_id)
                .in_("id", ingredient_ids)
                .execute()
            )
        except Exception as e:
            logger.error(f"Failed to fetch ingredient costs: {e}")
            raise DatabaseOperationError("fetch ingredient costs", str(e))

        return food_cost_from_prices(
            lines,
            {row["id"]: row.get("cost") or 0 for row in response.data or []},
        )


def food_cost_from_prices(lines: list[dict[str, Any]], prices: dict[str, float]) -> float:
    """Σ price × quantity over recipe lines; unknown ingredients cost 0."""
    total = sum(
        float(prices.get(line["ingredient_id"], 0)) * float(line.get("quantity") or 0)
        for line in lines
    )
    return round(total, 2)
