# =============================================================================
# app/routers/billing.py - Subscription Plan Endpoints
# =============================================================================
# Read-only plan catalog and subscription state. Checkout, payment methods
# and invoices are handled by the payment provider's hosted pages.
# =============================================================================

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query

from app.auth import AuthUser, get_current_user
from core.models.billing import (
    BillingInterval,
    PlanPriceResponse,
    SubscriptionPlan,
    SubscriptionResponse,
)
from core.services.billing_service import BillingService
from core.services.business_profile_service import BusinessProfileService

router = APIRouter()


@router.get("/plans", response_model=list[SubscriptionPlan])
async def list_plans(user: AuthUser = Depends(get_current_user)):
    """Active plans, cheapest first."""
    return BillingService.list_plans()


@router.get("/plans/{plan_id}", response_model=PlanPriceResponse)
async def get_plan(
    plan_id: Annotated[str, Path(description="Plan id, e.g. plan_pro")],
    interval: Annotated[BillingInterval, Query()] = BillingInterval.YEARLY,
    user: AuthUser = Depends(get_current_user),
):
    """One plan with its price for the chosen billing interval."""
    plan = BillingService.get_plan(plan_id)
    return PlanPriceResponse(
        plan=plan,
        interval=interval,
        price=BillingService.price_for_interval(plan, interval),
    )


@router.get("/subscription", response_model=SubscriptionResponse)
async def get_subscription(
    business_profile_id: Annotated[str, Query(min_length=1, description="Business profile id")],
    user: AuthUser = Depends(get_current_user),
):
    """
    Subscription state of a business profile.

    Errors:
        400: business_profile_id is missing
        403: caller is not a member of the profile
        404: profile doesn't exist
    """
    BusinessProfileService.require_access(str(user.id), business_profile_id)
    return BillingService.get_subscription(business_profile_id)
