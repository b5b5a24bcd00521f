# =============================================================================
# core/models/billing.py - Subscription Plan Schemas
# =============================================================================
# Read-only views of the plan catalog and a business's subscription.
# =============================================================================

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field


class BillingInterval(str, Enum):
    MONTHLY = "monthly"
    YEARLY = "yearly"


class SubscriptionPlan(BaseModel):
    """A plan from the catalog."""
    id: str
    name: str
    description: Optional[str] = None
    features: list[str] = Field(default_factory=list)
    monthly_price: float = Field(..., ge=0)
    yearly_price: float = Field(..., ge=0)
    currency: str = "USD"
    is_popular: bool = False
    priority: int = 0


class PlanPriceResponse(BaseModel):
    """A plan with the price for one billing interval."""
    plan: SubscriptionPlan
    interval: BillingInterval
    price: float


class SubscriptionResponse(BaseModel):
    """Subscription state of a business profile."""
    business_profile_id: str
    plan: Optional[str] = None
    status: Optional[str] = None
    subscription_id: Optional[str] = None
    current_period_end: Optional[str] = None
    max_users: Optional[int] = None
    details: Optional[dict[str, Any]] = None
