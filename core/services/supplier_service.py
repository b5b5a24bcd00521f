# =============================================================================
# core/services/supplier_service.py - Supplier Business Logic
# =============================================================================

import logging
from datetime import datetime, timezone
from typing import Any

from app.exceptions import DatabaseOperationError, RecordNotFoundError
from core.models.supplier import SupplierCategory, SupplierStatus
from lib.filters import filter_equals, search_records
from lib.supabase_client import SupabaseClient, is_no_rows_error

logger = logging.getLogger(__name__)

TABLE = "suppliers"
RESOURCE = "supplier"

SEARCH_FIELDS = ("name", "contact_name", "email")


def normalize_supplier(row: dict[str, Any]) -> dict[str, Any]:
    """Fill the defaults older supplier rows may lack."""
    return {
        **row,
        "categories": row.get("categories") or [SupplierCategory.OTHER.value],
        "is_preferred": bool(row.get("is_preferred")),
        "status": row.get("status") or SupplierStatus.ACTIVE.value,
        "rating": row.get("rating") or 0,
    }


class SupplierService:
    """Service for supplier operations, scoped to one business profile."""

    @staticmethod
    def list_suppliers(business_profile_id: str) -> list[dict[str, Any]]:
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
            logger.error(f"Failed to list suppliers for {business_profile_id}: {e}")
            raise DatabaseOperationError("list suppliers", str(e))

        return [normalize_supplier(row) for row in response.data or []]

    @staticmethod
    def get_supplier(business_profile_id: str, supplier_id: str) -> dict[str, Any]:
        """
        Get one supplier.

        Raises:
            RecordNotFoundError: If the supplier doesn't exist in this business
        """
        client = SupabaseClient.get_client()

        try:
            response = (
                client.table(TABLE)
                .select("*")
                .eq("id", supplier_id)
                .eq("business_profile_id", business_profile_id)
                .single()
                .execute()
            )
        except Exception as e:
            if is_no_rows_error(e):
                raise RecordNotFoundError(RESOURCE, supplier_id)
            logger.error(f"Failed to fetch supplier {supplier_id}: {e}")
            raise DatabaseOperationError("fetch supplier", str(e))

        if not response.data:
            raise RecordNotFoundError(RESOURCE, supplier_id)
        return normalize_supplier(response.data)

    @staticmethod
    def create_supplier(business_profile_id: str, data: dict[str, Any]) -> dict[str, Any]:
        client = SupabaseClient.get_client()
        now = datetime.now(timezone.utc).isoformat()
        record = {
            **normalize_supplier(data),
            "business_profile_id": business_profile_id,
            "created_at": now,
            "updated_at": now,
        }

        try:
            response = client.table(TABLE).insert(record).execute()
        except Exception as e:
            logger.error(f"Failed to create supplier: {e}")
            raise DatabaseOperationError("create supplier", str(e))

        if not response.data:
            raise DatabaseOperationError("create supplier", "Insert returned no data")

        supplier = response.data[0]
        logger.info(f"Created supplier {supplier.get('id')} in {business_profile_id}")
        return normalize_supplier(supplier)

    @staticmethod
    def update_supplier(
        business_profile_id: str,
        supplier_id: str,
        data: dict[str, Any],
    ) -> dict[str, Any]:
        """
        Update only the fields that were provided.

        Raises:
            RecordNotFoundError: If the supplier doesn't exist in this business
        """
        if not data:
            return SupplierService.get_supplier(business_profile_id, supplier_id)

        client = SupabaseClient.get_client()
        update_data = {**data, "updated_at": datetime.now(timezone.utc).isoformat()}

        try:
            response = (
                client.table(TABLE)
                .update(update_data)
                .eq("id", supplier_id)
                .eq("business_profile_id", business_profile_id)
                .execute()
            )
        except Exception as e:
            logger.error(f"Failed to update supplier {supplier_id}: {e}")
            raise DatabaseOperationError("update supplier", str(e))

        if not response.data:
            raise RecordNotFoundError(RESOURCE, supplier_id)

        logger.info(f"Updated supplier {supplier_id}")
        return normalize_supplier(response.data[0])

    @staticmethod
    def delete_supplier(business_profile_id: str, supplier_id: str) -> None:
        client = SupabaseClient.get_client()

        try:
            response = (
                client.table(TABLE)
                .delete()
                .eq("id", supplier_id)
                .eq("business_profile_id", business_profile_id)
                .execute()
            )
        except Exception as e:
            logger.error(f"Failed to delete supplier {supplier_id}: {e}")
            raise DatabaseOperationError("delete supplier", str(e))

        if not response.data:
            raise RecordNotFoundError(RESOURCE, supplier_id)
        logger.info(f"Deleted supplier {supplier_id}")

    @staticmethod
    def bulk_delete(business_profile_id: str, supplier_ids: list[str]) -> list[str]:
        client = SupabaseClient.get_client()

        try:
            response = (
                client.table(TABLE)
                .delete()
                .in_("id", supplier_ids)
                .eq("business_profile_id", business_profile_id)
                .execute()
            )
        except Exception as e:
            logger.error(f"Failed to bulk delete suppliers: {e}")
            raise DatabaseOperationError("delete suppliers", str(e))

        deleted = [row["id"] for row in response.data or []]
        logger.info(f"Deleted {len(deleted)} suppliers from {business_profile_id}")
        return deleted

    @staticmethod
    def list_items_for_supplier(business_profile_id: str, supplier_id: str) -> list[dict[str, Any]]:
        """Inventory items sourced from one supplier."""
        # 404 for suppliers outside the business rather than an empty list
        SupplierService.get_supplier(business_profile_id, supplier_id)
        client = SupabaseClient.get_client()

        try:
            response = (
                client.table("ingredients")
                .select("*")
                .eq("business_profile_id", business_profile_id)
                .eq("supplier_id", supplier_id)
                .order("name")
                .execute()
            )
        except Exception as e:
            logger.error(f"Failed to list items for supplier {supplier_id}: {e}")
            raise DatabaseOperationError("list supplier items", str(e))

        return response.data or []

    @staticmethod
    def filter_suppliers(
        suppliers: list[dict[str, Any]],
        search: str | None = None,
        category: str | None = None,
        preferred_only: bool = False,
        status: str | None = None,
    ) -> list[dict[str, Any]]:
        """
        Apply the supplier screen's filters.

        Search matches name, contact name or email. A category matches when it
        is one of the supplier's categories.
        """
        result = search_records(suppliers, search, SEARCH_FIELDS)
        if category and category != "all":
            result = [s for s in result if category in (s.get("categories") or [])]
        if preferred_only:
            result = [s for s in result if s.get("is_preferred")]
        return filter_equals(result, "status", status)
