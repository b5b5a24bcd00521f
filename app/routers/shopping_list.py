# =============================================================================
# app/routers/shopping_list.py - Shopping List Endpoints
# =============================================================================
# All endpoints require authentication and a business profile.
# =============================================================================

from typing import Annotated

from fastapi import APIRouter, Path, Query, status

from app.dependencies import BusinessProfileDep, CurrentUserDep
from core.models.common import SortDirection
from core.models.shopping_list import (
    PurchasedRequest,
    ShoppingListItemCreate,
    ShoppingListItemUpdate,
)
from core.services.shopping_list_service import ShoppingListService

router = APIRouter()

EntryId = Annotated[str, Path(description="Shopping list entry id")]


def _list_payload(items: list[dict]) -> dict:
    return {
        "items": items,
        "total": len(items),
        "estimated_total": ShoppingListService.estimated_total(items),
    }


@router.get("")
async def list_shopping_list(
    business_profile_id: BusinessProfileDep,
    search: Annotated[str | None, Query(description="Matches name, category or notes")] = None,
    category: Annotated[str | None, Query(description='Category, or "all"')] = None,
    purchased: Annotated[bool | None, Query(description="Filter on purchased state")] = None,
    sort_field: Annotated[
        str | None, Query(description="name, category, date, cost or a column name")
    ] = None,
    sort_direction: Annotated[SortDirection, Query()] = SortDirection.ASC,
):
    items = ShoppingListService.list_items(business_profile_id)
    filtered = ShoppingListService.filter_items(
        items,
        search=search,
        category=category,
        purchased=purchased,
        sort_field=sort_field,
        sort_direction=sort_direction.value,
    )
    return _list_payload(filtered)


@router.get("/categories", response_model=list[str])
async def list_categories(business_profile_id: BusinessProfileDep):
    return ShoppingListService.list_categories(business_profile_id)


@router.post("/generate")
async def generate_shopping_list(business_profile_id: BusinessProfileDep):
    """Add entries for every low-stock ingredient and return the list."""
    return _list_payload(ShoppingListService.generate(business_profile_id))


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_entry(
    request: ShoppingListItemCreate,
    business_profile_id: BusinessProfileDep,
    user: CurrentUserDep,
):
    return ShoppingListService.create_item(
        business_profile_id, str(user.id), request.model_dump(mode="json")
    )


@router.patch("/{entry_id}")
async def update_entry(
    entry_id: EntryId,
    request: ShoppingListItemUpdate,
    business_profile_id: BusinessProfileDep,
):
    return ShoppingListService.update_item(
        business_profile_id,
        entry_id,
        request.model_dump(mode="json", exclude_unset=True),
    )


@router.post("/{entry_id}/purchased")
async def mark_purchased(
    entry_id: EntryId,
    business_profile_id: BusinessProfileDep,
    request: PurchasedRequest | None = None,
):
    """Mark an entry purchased (or not, with {"is_purchased": false})."""
    purchased = request.is_purchased if request else True
    return ShoppingListService.mark_purchased(business_profile_id, entry_id, purchased)


@router.delete("/{entry_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_entry(entry_id: EntryId, business_profile_id: BusinessProfileDep):
    ShoppingListService.delete_item(business_profile_id, entry_id)
