# =============================================================================
# core/services/membership_service.py - Team Membership Logic
# =============================================================================
# Who works in a business profile, and with which role. Rows live in
# `business_profile_users`; removing a member deactivates the row so it can
# be reactivated later.
#
# Rules:
# - Only owners and managers manage the team
# - Only owners grant, change or revoke the owner role
# - A profile always keeps at least one active owner
# - Active members never exceed the profile's max_users (NULL = unlimited)
# =============================================================================

import logging
from datetime import datetime, timezone
from typing import Any

from app.exceptions import (
    BusinessProfileNotFoundError,
    DatabaseOperationError,
    InsufficientRoleError,
    LastOwnerError,
    MemberLimitReachedError,
    RecordNotFoundError,
)
from core.models.business_profile import MembershipRole
from core.services.business_profile_service import BusinessProfileService
from lib.supabase_client import SupabaseClient, SupabaseClientError, is_no_rows_error

logger = logging.getLogger(__name__)

TABLE = "business_profile_users"
RESOURCE = "member"

MANAGING_ROLES = (MembershipRole.OWNER.value, MembershipRole.MANAGER.value)


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class MembershipService:
    """Service for business profile membership operations."""

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    @staticmethod
    def list_members(business_profile_id: str) -> list[dict[str, Any]]:
        """Active members of a business, newest first."""
        client = SupabaseClient.get_client()

        try:
            response = (
                client.table(TABLE)
                .select("*")
                .eq("business_profile_id", business_profile_id)
                .eq("is_active", True)
                .order("created_at", desc=True)
                .execute()
            )
        except Exception as e:
            logger.error(f"Failed to list members of {business_profile_id}: {e}")
            raise DatabaseOperationError("list business profile users", str(e))

        return response.data or []

    @staticmethod
    def get_membership(business_profile_id: str, user_id: str) -> dict[str, Any] | None:
        """A user's membership row in a business, active or not."""
        try:
            return SupabaseClient.fetch_profile_membership(user_id, business_profile_id)
        except SupabaseClientError as e:
            logger.error(f"Failed to fetch membership of {user_id} in {business_profile_id}: {e}")
            raise DatabaseOperationError("fetch business profile user", str(e))

    @staticmethod
    def get_member_limit(business_profile_id: str) -> int | None:
        """The profile's max_users, or None when unlimited."""
        client = SupabaseClient.get_client()

        try:
            response = (
                client.table("business_profiles")
                .select("max_users")
                .eq("id", business_profile_id)
                .single()
                .execute()
            )
        except Exception as e:
            if is_no_rows_error(e):
                raise BusinessProfileNotFoundError(business_profile_id)
            logger.error(f"Failed to fetch member limit of {business_profile_id}: {e}")
            raise DatabaseOperationError("fetch member limit", str(e))

        max_users = (response.data or {}).get("max_users")
        return int(max_users) if max_users is not None else None

    @staticmethod
    def count_owners(business_profile_id: str) -> int:
        client = SupabaseClient.get_client()

        try:
            response = (
                client.table(TABLE)
                .select("user_id")
                .eq("business_profile_id", business_profile_id)
                .eq("role", MembershipRole.OWNER.value)
                .eq("is_active", True)
                .execute()
            )
        except Exception as e:
            logger.error(f"Failed to count owners of {business_profile_id}: {e}")
            raise DatabaseOperationError("count business profile owners", str(e))

        return len(response.data or [])

    # -------------------------------------------------------------------------
    # Permission checks
    # -------------------------------------------------------------------------

    @staticmethod
    def require_manager(actor_id: str, business_profile_id: str) -> str:
        """
        Check that the actor may manage the team.

        Returns:
            The actor's role ("owner" or "manager")

        Raises:
            BusinessProfileAccessDeniedError: If the actor is not an active member
            InsufficientRoleError: If the actor is staff
        """
        role = BusinessProfileService.require_access(actor_id, business_profile_id)
        if role not in MANAGING_ROLES:
            logger.warning(f"User {actor_id} ({role}) tried to manage members of {business_profile_id}")
            raise InsufficientRoleError(business_profile_id, role, "manage business profile users")
        return role

    @staticmethod
    def _check_owner_change(
        business_profile_id: str,
        actor_role: str,
        current_role: str | None,
        new_role: str | None,
    ) -> None:
        owner = MembershipRole.OWNER.value
        if (current_role == owner or new_role == owner) and actor_role != owner:
            raise InsufficientRoleError(business_profile_id, actor_role, "change an owner membership")

    @staticmethod
    def _check_not_last_owner(business_profile_id: str, user_id: str) -> None:
        if MembershipService.count_owners(business_profile_id) <= 1:
            raise LastOwnerError(business_profile_id, user_id)

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    @staticmethod
    def add_member(
        actor_id: str,
        business_profile_id: str,
        user_id: str,
        role: str = MembershipRole.STAFF.value,
    ) -> dict[str, Any]:
        """
        Add a user to a business profile.

        An active member just has their role set. A former member is
        reactivated. Either new or reactivated members count against
        max_users.

        Raises:
            InsufficientRoleError: If the actor can't grant the role
            MemberLimitReachedError: If the profile is full
        """
        actor_role = MembershipService.require_manager(actor_id, business_profile_id)
        existing = MembershipService.get_membership(business_profile_id, user_id)

        if existing and existing.get("is_active") is not False:
            return MembershipService._change_role(
                business_profile_id, user_id, actor_role, existing, role
            )

        MembershipService._check_owner_change(business_profile_id, actor_role, None, role)

        max_users = MembershipService.get_member_limit(business_profile_id)
        if max_users is not None:
            active = len(MembershipService.list_members(business_profile_id))
            if active >= max_users:
                raise MemberLimitReachedError(business_profile_id, max_users)

        client = SupabaseClient.get_client()
        now = _now()

        try:
            if existing:
                response = (
                    client.table(TABLE)
                    .update({"role": role, "is_active": True, "updated_at": now})
                    .eq("business_profile_id", business_profile_id)
                    .eq("user_id", user_id)
                    .execute()
                )
            else:
                response = (
                    client.table(TABLE)
                    .insert({
                        "business_profile_id": business_profile_id,
                        "user_id": user_id,
                        "role": role,
                        "is_active": True,
                        "created_at": now,
                        "updated_at": now,
                    })
                    .execute()
                )
        except Exception as e:
            logger.error(f"Failed to add user {user_id} to {business_profile_id}: {e}")
            raise DatabaseOperationError("add business profile user", str(e))

        if not response.data:
            raise DatabaseOperationError("add business profile user", "Write returned no data")

        logger.info(
            f"{'Reactivated' if existing else 'Added'} user {user_id} as {role} in {business_profile_id}"
        )
        return response.data[0]

    @staticmethod
    def update_role(
        actor_id: str,
        business_profile_id: str,
        user_id: str,
        role: str,
    ) -> dict[str, Any]:
        """
        Change an active member's role.

        Raises:
            RecordNotFoundError: If the user is not an active member
            InsufficientRoleError: If an owner role is involved and the actor isn't an owner
            LastOwnerError: If this would demote the only owner
        """
        actor_role = MembershipService.require_manager(actor_id, business_profile_id)
        existing = MembershipService.get_membership(business_profile_id, user_id)
        if not existing or existing.get("is_active") is False:
            raise RecordNotFoundError(RESOURCE, user_id)

        return MembershipService._change_role(
            business_profile_id, user_id, actor_role, existing, role
        )

    @staticmethod
    def _change_role(
        business_profile_id: str,
        user_id: str,
        actor_role: str,
        existing: dict[str, Any],
        role: str,
    ) -> dict[str, Any]:
        current_role = existing.get("role")
        if current_role == role:
            return existing

        MembershipService._check_owner_change(business_profile_id, actor_role, current_role, role)
        if current_role == MembershipRole.OWNER.value:
            MembershipService._check_not_last_owner(business_profile_id, user_id)

        client = SupabaseClient.get_client()

        try:
            response = (
                client.table(TABLE)
                .update({"role": role, "updated_at": _now()})
                .eq("business_profile_id", business_profile_id)
                .eq("user_id", user_id)
                .eq("is_active", True)
                .execute()
            )
        except Exception as e:
            logger.error(f"Failed to update role of {user_id} in {business_profile_id}: {e}")
            raise DatabaseOperationError("update business profile user role", str(e))

        if not response.data:
            raise RecordNotFoundError(RESOURCE, user_id)

        logger.info(f"Changed role of {user_id} in {business_profile_id} from {current_role} to {role}")
        return response.data[0]

    @staticmethod
    def remove_member(actor_id: str, business_profile_id: str, user_id: str) -> None:
        """
        Deactivate a membership.

        Raises:
            RecordNotFoundError: If the user is not an active member
            InsufficientRoleError: If removing an owner and the actor isn't an owner
            LastOwnerError: If this is the only owner
        """
        actor_role = MembershipService.require_manager(actor_id, business_profile_id)
        existing = MembershipService.get_membership(business_profile_id, user_id)
        if not existing or existing.get("is_active") is False:
            raise RecordNotFoundError(RESOURCE, user_id)

        current_role = existing.get("role")
        MembershipService._check_owner_change(business_profile_id, actor_role, current_role, None)
        if current_role == MembershipRole.OWNER.value:
            MembershipService._check_not_last_owner(business_profile_id, user_id)

        client = SupabaseClient.get_client()

        try:
            response = (
                client.table(TABLE)
                .update({"is_active": False, "updated_at": _now()})
                .eq("business_profile_id", business_profile_id)
                .eq("user_id", user_id)
                .execute()
            )
        except Exception as e:
            logger.error(f"Failed to remove {user_id} from {business_profile_id}: {e}")
            raise DatabaseOperationError("remove business profile user", str(e))

        if not response.data:
            raise RecordNotFoundError(RESOURCE, user_id)
        logger.info(f"Removed user {user_id} from {business_profile_id}")
