# =============================================================================
# core/models/supplier.py - Supplier Schemas
# =============================================================================

from datetime import date
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class SupplierCategory(str, Enum):
    """What a supplier delivers."""
    MEAT = "MEAT"
    DAIRY = "DAIRY"
    VEGETABLES = "VEGETABLES"
    FRUITS = "FRUITS"
    BEVERAGES = "BEVERAGES"
    BAKERY = "BAKERY"
    SEAFOOD = "SEAFOOD"
    DRY_GOODS = "DRY_GOODS"
    OTHER = "OTHER"


class SupplierStatus(str, Enum):
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"


class SupplierCreate(BaseModel):
    """
    Schema for adding a supplier.

    Example:
        {"name": "Green Farm", "categories": ["VEGETABLES"], "is_preferred": true}
    """

    name: str = Field(..., min_length=1, max_length=255)
    contact_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    notes: Optional[str] = None
    categories: list[SupplierCategory] = Field(default_factory=lambda: [SupplierCategory.OTHER])
    is_preferred: bool = False
    status: SupplierStatus = SupplierStatus.ACTIVE
    rating: float = Field(default=0, ge=0, le=5)
    last_order_date: Optional[date] = None
    logo: Optional[str] = None


class SupplierUpdate(BaseModel):
    """Partial update; only fields that are sent are written."""

    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    contact_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    notes: Optional[str] = None
    categories: Optional[list[SupplierCategory]] = None
    is_preferred: Optional[bool] = None
    status: Optional[SupplierStatus] = None
    rating: Optional[float] = Field(default=None, ge=0, le=5)
    last_order_date: Optional[date] = None
    logo: Optional[str] = None
