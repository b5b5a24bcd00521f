# =============================================================================
# lib/supabase_client.py - Supabase Client Wrapper
# =============================================================================
# Singleton access to the Supabase service-role client, plus the handful of
# lookups every route needs before it can touch tenant data:
# - Which business profile does this user belong to?
# - Is this user a member of that business profile?
#
# Entity-specific queries live in core/services/, not here.
#
# Usage:
#   from lib.supabase_client import SupabaseClient
#   client = SupabaseClient.get_client()
#   profile_id = SupabaseClient.fetch_business_profile_id(user_id)
# =============================================================================

from __future__ import annotations

import logging
from typing import Any
from uuid import UUID

from supabase import create_client, Client

from app.config import settings

# Set up logging for this module
logger = logging.getLogger(__name__)

# PostgREST error code for ".single()" matching zero rows
NO_ROWS_ERROR_CODE = "PGRST116"


class SupabaseClientError(Exception):
    """
    Error during Supabase operations.

    Carries a code and a suggestion so callers can report how to fix it.
    """

    def __init__(
        self,
        message: str,
        code: str = "SUPABASE_ERROR",
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.suggestion = suggestion
        self.details = details or {}

    def __str__(self) -> str:
        result = f"[{self.code}] {self.message}"
        if self.suggestion:
            result += f" Suggestion: {self.suggestion}"
        return result


def is_no_rows_error(exc: Exception) -> bool:
    """Check whether an exception is PostgREST's "no rows returned" error."""
    return NO_ROWS_ERROR_CODE in str(exc)


class SupabaseClient:
    """
    Wrapper around the Supabase client.

    One client instance is shared across the application. All methods are
    class methods, so no instantiation is needed.

    Example:
        client = SupabaseClient.get_client()
        rows = client.table("ingredients").select("*").execute().data
    """

    _instance: Client | None = None

    @classmethod
    def get_client(cls) -> Client:
        """
        Get or create the singleton Supabase client.

        Uses service_role key which bypasses Row Level Security (RLS), so
        every service query must scope itself by business_profile_id.

        Returns:
            Client: Supabase client instance

        Raises:
            SupabaseClientError: If client creation fails
        """
        if cls._instance is None:
            try:
                cls._instance = create_client(
                    settings.SUPABASE_URL,
                    settings.SUPABASE_SERVICE_KEY
                )
                logger.info("Supabase client initialized successfully")
            except Exception as e:
                raise SupabaseClientError(
                    message=f"Failed to create Supabase client: {e}",
                    code="CLIENT_INIT_FAILED",
                    suggestion="Check SUPABASE_URL and SUPABASE_SERVICE_KEY in your .env file"
                )
        return cls._instance

    @classmethod
    def _normalize_uuid(cls, uuid_value: str | UUID) -> str:
        """Convert UUID to string for queries."""
        return str(uuid_value) if isinstance(uuid_value, UUID) else uuid_value

    # -------------------------------------------------------------------------
    # Business Profile Resolution
    # -------------------------------------------------------------------------

    @classmethod
    def fetch_business_profile_id(cls, user_id: str | UUID) -> str | None:
        """
        Resolve the business profile a user works in.

        Memberships win over ownership: a staff member added to someone
        else's restaurant sees that restaurant. Owners without a membership
        row fall back to the newest profile they created.

        Args:
            user_id: The authenticated user's UUID

        Returns:
            The business profile id, or None if the user has no profile

        Raises:
            SupabaseClientError: If either query fails
        """
        client = cls.get_client()
        user_id_str = cls._normalize_uuid(user_id)

        try:
            membership = (
                client.table("business_profile_users")
                .select("business_profile_id")
                .eq("user_id", user_id_str)
                .eq("is_active", True)
                .limit(1)
                .execute()
            )
            if membership.data:
                return membership.data[0]["business_profile_id"]

            owned = (
                client.table("business_profiles")
                .select("id")
                .eq("user_id", user_id_str)
                .order("created_at", desc=True)
                .limit(1)
                .execute()
            )
            if owned.data:
                return owned.data[0]["id"]

            logger.debug(f"No business profile for user {user_id_str}")
            return None

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to resolve business profile: {e}",
                code="FETCH_BUSINESS_PROFILE_FAILED",
                suggestion="Check that business_profiles and business_profile_users are accessible",
                details={"user_id": user_id_str}
            )

    @classmethod
    def fetch_profile_membership(
        cls,
        user_id: str | UUID,
        business_profile_id: str | UUID,
    ) -> dict[str, Any] | None:
        """
        Fetch a user's membership row for one business profile.

        Returns:
            Dict with business_profile_id, user_id, role and is_active,
            or None if the user is not a member
        """
        client = cls.get_client()
        user_id_str = cls._normalize_uuid(user_id)
        profile_id_str = cls._normalize_uuid(business_profile_id)

        try:
            response = (
                client.table("business_profile_users")
                .select("business_profile_id, user_id, role, is_active")
                .eq("user_id", user_id_str)
                .eq("business_profile_id", profile_id_str)
                .single()
                .execute()
            )
            return response.data

        except Exception as e:
            if is_no_rows_error(e):
                return None
            raise SupabaseClientError(
                message=f"Failed to fetch membership: {e}",
                code="FETCH_MEMBERSHIP_FAILED",
                details={"user_id": user_id_str, "business_profile_id": profile_id_str}
            )

    @classmethod
    def fetch_memberships(cls, user_id: str | UUID) -> list[dict[str, Any]]:
        """Fetch every active membership for a user, with the profile name."""
        client = cls.get_client()
        user_id_str = cls._normalize_uuid(user_id)

        try:
            response = (
                client.table("business_profile_users")
                .select("business_profile_id, role, business_profiles(name)")
                .eq("user_id", user_id_str)
                .eq("is_active", True)
                .execute()
            )
            return response.data or []

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to fetch memberships: {e}",
                code="FETCH_MEMBERSHIPS_FAILED",
                details={"user_id": user_id_str}
            )
