# =============================================================================
# core/services/business_profile_service.py - Business Profile Logic
# =============================================================================
# Reads and upserts the restaurant tenant record and its owner membership.
# =============================================================================

import logging
from datetime import datetime, timezone
from typing import Any

from app.config import settings
from app.exceptions import (
    BusinessProfileAccessDeniedError,
    BusinessProfileNotFoundError,
    DatabaseOperationError,
)
from core.models.business_profile import MembershipRole
from lib.currency import get_currency_symbol
from lib.supabase_client import SupabaseClient, SupabaseClientError, is_no_rows_error

logger = logging.getLogger(__name__)

PROFILE_TABLE = "business_profiles"
MEMBERSHIP_TABLE = "business_profile_users"

# Tax columns filled from a nested `tax_settings` object
TAX_SETTINGS_COLUMNS = {
    "enabled": "tax_enabled",
    "rate": "tax_rate",
    "name": "tax_name",
}


def to_profile_columns(payload: dict[str, Any]) -> dict[str, Any]:
    """
    Convert an upsert payload to the business_profiles column layout.

    - `tax_settings` fills tax_enabled/tax_rate/tax_name unless those are given
    - empty strings become None so the database stores NULL
    """
    data = {key: value for key, value in payload.items() if key != "tax_settings"}

    tax_settings = payload.get("tax_settings") or {}
    for source, column in TAX_SETTINGS_COLUMNS.items():
        if data.get(column) is None and tax_settings.get(source) is not None:
            data[column] = tax_settings[source]

    for key, value in data.items():
        if isinstance(value, str) and value.strip() == "":
            data[key] = None

    return data


class BusinessProfileService:
    """
    Service for business profile operations.

    Every record in the app is scoped to a business profile id.
    """

    @staticmethod
    def get(profile_id: str) -> dict[str, Any]:
        """
        Get a business profile by id.

        Raises:
            BusinessProfileNotFoundError: If the profile doesn't exist
        """
        client = SupabaseClient.get_client()

        try:
            response = (
                client.table(PROFILE_TABLE)
                .select("*")
                .eq("id", profile_id)
                .single()
                .execute()
            )
        except Exception as e:
            if is_no_rows_error(e):
                raise BusinessProfileNotFoundError(profile_id)
            logger.error(f"Failed to fetch business profile {profile_id}: {e}")
            raise DatabaseOperationError("fetch business profile", str(e))

        if not response.data:
            raise BusinessProfileNotFoundError(profile_id)
        return response.data

    @staticmethod
    def get_for_user(user_id: str) -> dict[str, Any]:
        """
        Get the business profile the user works in.

        Raises:
            BusinessProfileNotFoundError: If the user has no profile
        """
        try:
            profile_id = SupabaseClient.fetch_business_profile_id(user_id)
        except SupabaseClientError as e:
            logger.error(f"Failed to resolve business profile for {user_id}: {e}")
            raise DatabaseOperationError("resolve business profile", str(e))

        if profile_id is None:
            raise BusinessProfileNotFoundError(f"user {user_id}")
        return BusinessProfileService.get(profile_id)

    @staticmethod
    def upsert(payload: dict[str, Any]) -> dict[str, Any]:
        """
        Create or update the caller's business profile.

        Upserts on user_id (one profile per owner), then makes sure the owner
        has a membership row.

        Args:
            payload: Profile fields including user_id

        Returns:
            The stored profile row

        Raises:
            ValueError: If user_id is missing
            DatabaseOperationError: If either write fails
        """
        if not payload.get("user_id"):
            raise ValueError("user_id is required")

        client = SupabaseClient.get_client()
        data = to_profile_columns(payload)
        data["updated_at"] = datetime.now(timezone.utc).isoformat()

        try:
            response = (
                client.table(PROFILE_TABLE)
                .upsert(data, on_conflict="user_id")
                .execute()
            )
        except Exception as e:
            logger.error(f"Failed to upsert business profile for {data['user_id']}: {e}")
            raise DatabaseOperationError("save business profile", str(e))

        if not response.data:
            raise DatabaseOperationError("save business profile", "Upsert returned no data")

        profile = response.data[0]

        try:
            (
                client.table(MEMBERSHIP_TABLE)
                .upsert(
                    {
                        "business_profile_id": profile["id"],
                        "user_id": data["user_id"],
                        "role": MembershipRole.OWNER.value,
                        "is_active": True,
                    },
                    on_conflict="business_profile_id,user_id",
                )
                .execute()
            )
        except Exception as e:
            logger.error(f"Failed to add owner membership for profile {profile['id']}: {e}")
            raise DatabaseOperationError("save owner membership", str(e))

        logger.info(f"Saved business profile {profile['id']} for user {data['user_id']}")
        return profile

    @staticmethod
    def require_access(user_id: str, profile_id: str) -> str:
        """
        Check that a user belongs to a business profile.

        Returns:
            The user's role in the profile

        Raises:
            BusinessProfileAccessDeniedError: If the user is not an active member
        """
        try:
            membership = SupabaseClient.fetch_profile_membership(user_id, profile_id)
        except SupabaseClientError as e:
            logger.error(f"Failed to check membership of {user_id} in {profile_id}: {e}")
            raise DatabaseOperationError("check business profile access", str(e))

        if not membership or membership.get("is_active") is False:
            raise BusinessProfileAccessDeniedError(profile_id)
        return membership.get("role") or MembershipRole.STAFF.value

    @staticmethod
    def get_currency(profile_id: str) -> dict[str, str]:
        """
        Currency a business prices in, with its symbol.

        Falls back to DEFAULT_CURRENCY when the profile has none set.
        """
        client = SupabaseClient.get_client()

        try:
            response = (
                client.table(PROFILE_TABLE)
                .select("default_currency")
                .eq("id", profile_id)
                .single()
                .execute()
            )
        except Exception as e:
            if is_no_rows_error(e):
                raise BusinessProfileNotFoundError(profile_id)
            logger.error(f"Failed to fetch currency for {profile_id}: {e}")
            raise DatabaseOperationError("fetch currency", str(e))

        currency = (response.data or {}).get("default_currency") or settings.DEFAULT_CURRENCY
        return {"currency": currency, "symbol": get_currency_symbol(currency)}
