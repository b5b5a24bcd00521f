# =============================================================================
# core/services/billing_service.py - Subscription Plan Lookups
# =============================================================================
# Read-only access to the plan catalog and a business's subscription state.
# Checkout and payment processing happen with the payment provider, not here.
# =============================================================================

import json
import logging
from typing import Any

from app.exceptions import (
    BusinessProfileNotFoundError,
    DatabaseOperationError,
    PlanNotFoundError,
)
from core.models.billing import BillingInterval
from lib.supabase_client import SupabaseClient, is_no_rows_error

logger = logging.getLogger(__name__)

PLANS_TABLE = "subscription_plans"

# Served when the subscription_plans table is empty
DEFAULT_PLANS: list[dict[str, Any]] = [
    {
        "id": "plan_basic",
        "name": "Basic",
        "description": "Perfect for small restaurants just getting started",
        "features": [
            "Up to 500 inventory items",
            "Basic reporting",
            "1 user account",
            "Email support",
        ],
        "monthly_price": 29.99,
        "yearly_price": 299.99,
        "currency": "USD",
        "is_popular": False,
        "priority": 1,
    },
    {
        "id": "plan_pro",
        "name": "Professional",
        "description": "Ideal for growing restaurants with more needs",
        "features": [
            "Unlimited inventory items",
            "Advanced reporting & analytics",
            "Up to 5 user accounts",
            "Priority email support",
            "Menu planning tools",
            "Supplier management",
        ],
        "monthly_price": 59.99,
        "yearly_price": 599.99,
        "currency": "USD",
        "is_popular": True,
        "priority": 2,
    },
    {
        "id": "plan_enterprise",
        "name": "Enterprise",
        "description": "For restaurant chains and large operations",
        "features": [
            "Everything in Professional",
            "Unlimited user accounts",
            "Multi-location support",
            "API access",
            "Dedicated account manager",
            "Custom integrations",
            "24/7 phone support",
        ],
        "monthly_price": 119.99,
        "yearly_price": 1199.99,
        "currency": "USD",
        "is_popular": False,
        "priority": 3,
    },
]

SUBSCRIPTION_COLUMNS = (
    "id, subscription_plan, subscription_status, subscription_id, "
    "subscription_current_period_end, max_users"
)


def decode_features(value: Any) -> list[str]:
    """
    Features as a list.

    The column holds either a JSON array or a JSON-encoded string of one.
    Anything undecodable is treated as no features.
    """
    if isinstance(value, list):
        return [str(feature) for feature in value]
    if isinstance(value, str) and value.strip():
        try:
            decoded = json.loads(value)
        except json.JSONDecodeError:
            logger.warning(f"Could not decode plan features: {value[:80]}")
            return []
        if isinstance(decoded, list):
            return [str(feature) for feature in decoded]
    return []


def normalize_plan(row: dict[str, Any]) -> dict[str, Any]:
    """Shape a subscription_plans row like a SubscriptionPlan."""
    price = float(row.get("price") or 0)
    interval = row.get("interval")
    monthly = row.get("monthly_price")
    yearly = row.get("yearly_price")

    return {
        "id": str(row["id"]),
        "name": row.get("name") or "",
        "description": row.get("description"),
        "features": decode_features(row.get("features")),
        "monthly_price": float(monthly) if monthly is not None else (price if interval == "monthly" else 0.0),
        "yearly_price": float(yearly) if yearly is not None else (price if interval == "yearly" else 0.0),
        "currency": (row.get("currency") or "USD").upper(),
        "is_popular": bool(row.get("is_popular")),
        "priority": int(row.get("priority") or 0),
    }


class BillingService:
    """Service for plan and subscription lookups."""

    @staticmethod
    def list_plans() -> list[dict[str, Any]]:
        """
        Active plans ordered by price.

        Falls back to DEFAULT_PLANS when the table has no active rows.
        """
        client = SupabaseClient.get_client()

        try:
            response = (
                client.table(PLANS_TABLE)
                .select("*")
                .eq("active", True)
                .order("price")
                .execute()
            )
        except Exception as e:
            logger.error(f"Failed to list subscription plans: {e}")
            raise DatabaseOperationError("list subscription plans", str(e))

        if not response.data:
            logger.info("No subscription plans stored, serving the built-in catalog")
            return [dict(plan) for plan in DEFAULT_PLANS]

        return [normalize_plan(row) for row in response.data]

    @staticmethod
    def get_plan(plan_id: str) -> dict[str, Any]:
        """
        Raises:
            PlanNotFoundError: If no listed plan has this id
        """
        for plan in BillingService.list_plans():
            if plan["id"] == plan_id:
                return plan
        raise PlanNotFoundError(plan_id)

    @staticmethod
    def price_for_interval(plan: dict[str, Any], interval: BillingInterval | str) -> float:
        """Monthly or yearly price of a plan."""
        interval = BillingInterval(interval)
        if interval == BillingInterval.MONTHLY:
            return plan["monthly_price"]
        return plan["yearly_price"]

    @staticmethod
    def get_subscription(business_profile_id: str) -> dict[str, Any]:
        """
        Subscription state of a business.

        Profile columns carry the current plan and status; the newest
        `subscriptions` row, if any, is attached as "details".

        Raises:
            BusinessProfileNotFoundError: If the profile doesn't exist
        """
        client = SupabaseClient.get_client()

        try:
            response = (
                client.table("business_profiles")
                .select(SUBSCRIPTION_COLUMNS)
                .eq("id", business_profile_id)
                .single()
                .execute()
            )
        except Exception as e:
            if is_no_rows_error(e):
                raise BusinessProfileNotFoundError(business_profile_id)
            logger.error(f"Failed to fetch subscription of {business_profile_id}: {e}")
            raise DatabaseOperationError("fetch subscription", str(e))

        profile = response.data
        if not profile:
            raise BusinessProfileNotFoundError(business_profile_id)

        try:
            details = (
                client.table("subscriptions")
                .select("*")
                .eq("business_profile_id", business_profile_id)
                .order("created_at", desc=True)
                .limit(1)
                .execute()
            )
        except Exception as e:
            logger.error(f"Failed to fetch subscription details of {business_profile_id}: {e}")
            raise DatabaseOperationError("fetch subscription details", str(e))

        return {
            "business_profile_id": business_profile_id,
            "plan": profile.get("subscription_plan"),
            "status": profile.get("subscription_status"),
            "subscription_id": profile.get("subscription_id"),
            "current_period_end": profile.get("subscription_current_period_end"),
            "max_users": profile.get("max_users"),
            "details": (details.data or [None])[0],
        }
