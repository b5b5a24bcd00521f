# =============================================================================
# app/routers/ - API Route Definitions
# =============================================================================
# This package contains FastAPI routers organized by feature:
# - health.py: Health check endpoints
# - business_profile.py: Restaurant profile read/upsert and currency
# - members.py: Team membership of a business profile
# - inventory.py: Inventory CRUD, filters, stats, expiry and export
# - suppliers.py: Supplier CRUD and supplied items
# - dishes.py: Dishes, recipes, archive and food cost
# - sales.py: Sales recording, summaries and export
# - shopping_list.py: Shopping list entries and generation
# - notes.py: Entity notes and note tags
# - reports.py: Sales overview, top dishes and dashboard
# - billing.py: Subscription plans and subscription state
# - image_proxy.py: Remote image passthrough
#
# Each router is mounted in main.py with a URL prefix.
# =============================================================================

from . import health
from . import business_profile
from . import inventory
from . import suppliers
from . import dishes
from . import sales
from . import shopping_list
from . import members
from . import notes
from . import reports
from . import billing
from . import image_proxy

__all__ = [
    "health",
    "business_profile",
    "inventory",
    "suppliers",
    "dishes",
    "sales",
    "shopping_list",
    "members",
    "notes",
    "reports",
    "billing",
    "image_proxy",
]
