# =============================================================================
# core/models/sale.py - Sales Schemas
# =============================================================================

import datetime as dt
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class ShiftType(str, Enum):
    """Service period a sale was recorded in."""
    BREAKFAST = "Breakfast"
    LUNCH = "Lunch"
    DINNER = "Dinner"
    ALL = "All"


class SaleEntry(BaseModel):
    """
    One recorded sale line.

    Example:
        {"dish_id": "…", "dish_name": "Margherita", "quantity": 3, "total_amount": 34.5, "date": "2024-03-01"}
    """

    dish_id: str = Field(..., min_length=1)
    dish_name: Optional[str] = None
    quantity: float = Field(..., ge=0)
    total_amount: float = Field(..., ge=0)
    date: dt.date
    shift: ShiftType = ShiftType.ALL
    notes: Optional[str] = None


class DishSalesSummary(BaseModel):
    """Sales of one dish over the listed rows."""
    dish_id: Optional[str] = None
    dish_name: str
    quantity: float
    amount: float


class SalesSummaryResponse(BaseModel):
    """Response for GET /sales/summary; dishes ordered by amount, highest first."""
    dishes: list[DishSalesSummary]
    total_amount: float
