# =============================================================================
# core/models/inventory.py - Inventory Item Schemas
# =============================================================================
# Inventory items live in the `ingredients` table, one row per stocked item.
# =============================================================================

from datetime import date
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class StockStatus(str, Enum):
    """
    Stock classification letter.

    - A: in stock
    - B: low (at or under the reorder threshold)
    - C: out of stock
    """
    IN_STOCK = "A"
    LOW = "B"
    OUT = "C"


class InventoryItemCreate(BaseModel):
    """
    Schema for adding an inventory item.

    Example:
        {"name": "Tomatoes", "category": "Produce", "quantity": 12, "unit": "kg", "cost": 2.4}
    """

    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    category: Optional[str] = None
    quantity: float = Field(default=0, ge=0)
    unit: Optional[str] = None
    cost: float = Field(default=0, ge=0, description="Cost per unit")
    reorder_level: float = Field(default=0, ge=0)
    reorder_point: Optional[float] = Field(default=None, ge=0)
    minimum_stock_level: Optional[float] = Field(default=None, ge=0)
    supplier_id: Optional[str] = None
    location: Optional[str] = None
    expiry_date: Optional[date] = None
    image_url: Optional[str] = None


class InventoryItemUpdate(BaseModel):
    """Partial update; only fields that are sent are written."""

    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = None
    category: Optional[str] = None
    quantity: Optional[float] = Field(default=None, ge=0)
    unit: Optional[str] = None
    cost: Optional[float] = Field(default=None, ge=0)
    reorder_level: Optional[float] = Field(default=None, ge=0)
    reorder_point: Optional[float] = Field(default=None, ge=0)
    minimum_stock_level: Optional[float] = Field(default=None, ge=0)
    supplier_id: Optional[str] = None
    location: Optional[str] = None
    expiry_date: Optional[date] = None
    image_url: Optional[str] = None


class InventoryStats(BaseModel):
    """Totals shown above the inventory table."""
    total_items: int
    total_value: float
    low_stock_items: int
    out_of_stock_items: int
    in_stock_items: int
    categories: int
    selected_items_count: int = 0
    selected_items_value: float = 0
