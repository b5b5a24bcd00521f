# =============================================================================
# core/models/shopping_list.py - Shopping List Schemas
# =============================================================================

from typing import Optional

from pydantic import BaseModel, Field


class ShoppingListItemCreate(BaseModel):
    """
    Schema for adding a shopping list entry.

    Example:
        {"name": "Flour", "quantity": 10, "unit": "kg", "estimated_cost": 8.5, "category": "Dry Goods"}
    """

    name: str = Field(..., min_length=1, max_length=255)
    quantity: float = Field(default=1, ge=0)
    unit: Optional[str] = None
    estimated_cost: Optional[float] = Field(default=None, ge=0)
    category: Optional[str] = None
    notes: Optional[str] = None
    inventory_item_id: Optional[str] = None
    is_auto_generated: bool = False


class ShoppingListItemUpdate(BaseModel):
    """Partial update; setting is_purchased stamps purchased_at."""

    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    quantity: Optional[float] = Field(default=None, ge=0)
    unit: Optional[str] = None
    estimated_cost: Optional[float] = Field(default=None, ge=0)
    category: Optional[str] = None
    notes: Optional[str] = None
    is_purchased: Optional[bool] = None


class PurchasedRequest(BaseModel):
    """Body of POST /shopping-list/{id}/purchased."""
    is_purchased: bool = True
