# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# This package contains Pydantic schemas for request validation:
# - common.py: Sort/export enums and bulk delete bodies
# - business_profile.py: Business profile upsert, enums, currency response
# - inventory.py: Inventory item create/update and stats
# - supplier.py: Supplier create/update
# - dish.py: Dishes and recipe lines
# - sale.py: Sale entries and per-dish summaries
# - shopping_list.py: Shopping list entries
# - billing.py: Subscription plans and subscription state
# - note.py: Entity notes and note tags
#
# These models define the "contract" between API and clients.
# =============================================================================

from .common import BulkDeleteRequest, BulkDeleteResponse, ExportFormat, SortDirection
from .business_profile import (
    BusinessProfileUpsert,
    BusinessType,
    CurrencyCode,
    CurrencyResponse,
    MemberAdd,
    MemberRoleUpdate,
    MembershipRole,
    TaxSettings,
)
from .inventory import InventoryItemCreate, InventoryItemUpdate, InventoryStats, StockStatus
from .supplier import SupplierCategory, SupplierCreate, SupplierStatus, SupplierUpdate
from .dish import DishCreate, DishIngredientLine, DishUpdate, FoodCostRequest
from .sale import DishSalesSummary, SaleEntry, SalesSummaryResponse, ShiftType
from .shopping_list import PurchasedRequest, ShoppingListItemCreate, ShoppingListItemUpdate
from .billing import BillingInterval, PlanPriceResponse, SubscriptionPlan, SubscriptionResponse
from .note import NoteCreate, NoteEntityType, NoteTagCreate, NoteUpdate

__all__ = [
    # Common
    "BulkDeleteRequest",
    "BulkDeleteResponse",
    "ExportFormat",
    "SortDirection",
    # Business profile
    "BusinessProfileUpsert",
    "BusinessType",
    "CurrencyCode",
    "CurrencyResponse",
    "MemberAdd",
    "MemberRoleUpdate",
    "MembershipRole",
    "TaxSettings",
    # Inventory
    "InventoryItemCreate",
    "InventoryItemUpdate",
    "InventoryStats",
    "StockStatus",
    # Suppliers
    "SupplierCategory",
    "SupplierCreate",
    "SupplierStatus",
    "SupplierUpdate",
    # Dishes
    "DishCreate",
    "DishIngredientLine",
    "DishUpdate",
    "FoodCostRequest",
    # Sales
    "DishSalesSummary",
    "SalesSummaryResponse",
    "SaleEntry",
    "ShiftType",
    # Shopping list
    "PurchasedRequest",
    "ShoppingListItemCreate",
    "ShoppingListItemUpdate",
    # Billing
    "BillingInterval",
    "PlanPriceResponse",
    "SubscriptionPlan",
    "SubscriptionResponse",
    # Notes
    "NoteCreate",
    "NoteEntityType",
    "NoteTagCreate",
    "NoteUpdate",
]
