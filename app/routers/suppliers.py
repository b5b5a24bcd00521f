# =============================================================================
# app/routers/suppliers.py - Supplier Endpoints
# =============================================================================
# All endpoints require authentication and a business profile.
# =============================================================================

from typing import Annotated

from fastapi import APIRouter, Path, Query, status

from app.dependencies import BusinessProfileDep
from core.models.common import BulkDeleteRequest, BulkDeleteResponse
from core.models.supplier import SupplierCategory, SupplierCreate, SupplierStatus, SupplierUpdate
from core.services.supplier_service import SupplierService

router = APIRouter()

SupplierId = Annotated[str, Path(description="Supplier id")]


@router.get("")
async def list_suppliers(
    business_profile_id: BusinessProfileDep,
    search: Annotated[str | None, Query(description="Matches name, contact name or email")] = None,
    category: Annotated[SupplierCategory | None, Query()] = None,
    preferred_only: bool = False,
    status_filter: Annotated[SupplierStatus | None, Query(alias="status")] = None,
):
    """List suppliers with the supplier screen's filters applied."""
    suppliers = SupplierService.list_suppliers(business_profile_id)
    filtered = SupplierService.filter_suppliers(
        suppliers,
        search=search,
        category=category.value if category else None,
        preferred_only=preferred_only,
        status=status_filter.value if status_filter else None,
    )
    return {"suppliers": filtered, "total": len(filtered)}


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_supplier(
    request: SupplierCreate,
    business_profile_id: BusinessProfileDep,
):
    return SupplierService.create_supplier(business_profile_id, request.model_dump(mode="json"))


@router.post("/bulk-delete", response_model=BulkDeleteResponse)
async def bulk_delete(
    request: BulkDeleteRequest,
    business_profile_id: BusinessProfileDep,
):
    deleted = SupplierService.bulk_delete(business_profile_id, request.ids)
    return BulkDeleteResponse(deleted_ids=deleted, deleted_count=len(deleted))


@router.get("/{supplier_id}")
async def get_supplier(supplier_id: SupplierId, business_profile_id: BusinessProfileDep):
    return SupplierService.get_supplier(business_profile_id, supplier_id)


@router.get("/{supplier_id}/items")
async def list_supplier_items(supplier_id: SupplierId, business_profile_id: BusinessProfileDep):
    """Inventory items sourced from this supplier."""
    items = SupplierService.list_items_for_supplier(business_profile_id, supplier_id)
    return {"items": items, "total": len(items)}


@router.patch("/{supplier_id}")
async def update_supplier(
    supplier_id: SupplierId,
    request: SupplierUpdate,
    business_profile_id: BusinessProfileDep,
):
    """Update only the fields present in the body."""
    return SupplierService.update_supplier(
        business_profile_id,
        supplier_id,
        request.model_dump(mode="json", exclude_unset=True),
    )


@router.delete("/{supplier_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_supplier(supplier_id: SupplierId, business_profile_id: BusinessProfileDep):
    SupplierService.delete_supplier(business_profile_id, supplier_id)
