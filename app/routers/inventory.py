# =============================================================================
# app/routers/inventory.py - Inventory Endpoints
# =============================================================================
# CRUD, filters, stats and export for the caller's inventory items.
# All endpoints require authentication and a business profile.
# =============================================================================

from typing import Annotated

from fastapi import APIRouter, Path, Query, status

from app.config import settings
from app.dependencies import BusinessProfileDep
from app.responses import spreadsheet_response
from core.models.common import BulkDeleteRequest, BulkDeleteResponse, ExportFormat, SortDirection
from core.models.inventory import InventoryItemCreate, InventoryItemUpdate, InventoryStats
from core.services.business_profile_service import BusinessProfileService
from core.services.export_service import INVENTORY_COLUMNS, ExportService
from core.services.inventory_service import InventoryService

router = APIRouter()

ItemId = Annotated[str, Path(description="Inventory item id")]


# =============================================================================
# Collection Endpoints
# =============================================================================

@router.get("")
async def list_inventory(
    business_profile_id: BusinessProfileDep,
    search: Annotated[str | None, Query(description="Matches name or category")] = None,
    category: Annotated[str | None, Query(description='Category, or "all"')] = None,
    low_stock_only: Annotated[bool, Query(description="Only low and out-of-stock items")] = False,
    sort_field: Annotated[str | None, Query(description="Field to sort by")] = None,
    sort_direction: Annotated[SortDirection, Query()] = SortDirection.ASC,
):
    """List inventory items with the inventory screen's filters applied."""
    items = InventoryService.list_items(business_profile_id)
    filtered = InventoryService.filter_items(
        items,
        search=search,
        category=category,
        low_stock_only=low_stock_only,
        sort_field=sort_field,
        sort_direction=sort_direction.value,
    )
    return {"items": filtered, "total": len(filtered)}


@router.get("/categories", response_model=list[str])
async def list_categories(business_profile_id: BusinessProfileDep):
    """Distinct categories used by the business's items."""
    return InventoryService.list_categories(business_profile_id)


@router.get("/expiring")
async def list_expiring(
    business_profile_id: BusinessProfileDep,
    days: Annotated[int | None, Query(ge=0, le=365, description="Look-ahead window in days")] = None,
):
    """Items expiring within `days` (default EXPIRY_WARNING_DAYS), soonest first."""
    window = settings.EXPIRY_WARNING_DAYS if days is None else days
    items = InventoryService.list_expiring(business_profile_id, days=window)
    return {"items": items, "days": window}


@router.get("/stats", response_model=InventoryStats)
async def inventory_stats(
    business_profile_id: BusinessProfileDep,
    selected_ids: Annotated[list[str] | None, Query(description="Ids selected in the table")] = None,
):
    """Totals for the inventory screen header."""
    items = InventoryService.list_items(business_profile_id)
    return InventoryService.calculate_stats(items, selected_ids=selected_ids)


@router.get("/export")
async def export_inventory(
    business_profile_id: BusinessProfileDep,
    format: Annotated[str, Query(description="xlsx or csv")] = ExportFormat.XLSX.value,
):
    """Download the inventory as a spreadsheet."""
    items = InventoryService.list_items(business_profile_id)
    currency = BusinessProfileService.get_currency(business_profile_id)["currency"]

    rows = ExportService.inventory_rows(items, currency)
    content, media_type = ExportService.render(rows, INVENTORY_COLUMNS, format, "Inventory")
    return spreadsheet_response(content, media_type, "inventory")


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_item(
    request: InventoryItemCreate,
    business_profile_id: BusinessProfileDep,
):
    """Add an inventory item."""
    return InventoryService.create_item(business_profile_id, request.model_dump(mode="json"))


@router.post("/bulk-delete", response_model=BulkDeleteResponse)
async def bulk_delete(
    request: BulkDeleteRequest,
    business_profile_id: BusinessProfileDep,
):
    """Delete several items; unknown ids are ignored."""
    deleted = InventoryService.bulk_delete(business_profile_id, request.ids)
    return BulkDeleteResponse(deleted_ids=deleted, deleted_count=len(deleted))


# =============================================================================
# Item Endpoints
# =============================================================================

@router.get("/{item_id}")
async def get_item(item_id: ItemId, business_profile_id: BusinessProfileDep):
    return InventoryService.get_item(business_profile_id, item_id)


@router.patch("/{item_id}")
async def update_item(
    item_id: ItemId,
    request: InventoryItemUpdate,
    business_profile_id: BusinessProfileDep,
):
    """Update only the fields present in the body."""
    return InventoryService.update_item(
        business_profile_id,
        item_id,
        request.model_dump(mode="json", exclude_unset=True),
    )


@router.delete("/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_item(item_id: ItemId, business_profile_id: BusinessProfileDep):
    InventoryService.delete_item(business_profile_id, item_id)
