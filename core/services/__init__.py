# =============================================================================
# core/services/__init__.py - Service Layer Exports
# =============================================================================

from .business_profile_service import BusinessProfileService
from .membership_service import MembershipService
from .inventory_service import InventoryService
from .supplier_service import SupplierService
from .dish_service import DishService
from .sales_service import SalesService
from .shopping_list_service import ShoppingListService
from .billing_service import BillingService
from .image_proxy_service import ImageProxyService
from .export_service import ExportService
from .report_service import ReportService
from .note_service import NoteService

__all__ = [
    "BusinessProfileService",
    "MembershipService",
    "InventoryService",
    "SupplierService",
    "DishService",
    "SalesService",
    "ShoppingListService",
    "BillingService",
    "ImageProxyService",
    "ExportService",
    "ReportService",
    "NoteService",
]
