# =============================================================================
# app/auth/routes.py - Authentication Routes
# =============================================================================
# API endpoints for authentication-related operations.
#
# Note: Signup, login and password reset are handled by Supabase Auth
# client-side. These routes only describe the token's owner.
# =============================================================================

import logging

from fastapi import APIRouter, Depends

from app.auth.dependencies import get_current_user
from app.auth.models import AuthUser, MembershipInfo, UserResponse
from app.exceptions import DatabaseOperationError
from lib.supabase_client import SupabaseClient, SupabaseClientError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.get("/me", response_model=UserResponse)
async def get_current_user_info(
    user: AuthUser = Depends(get_current_user)
) -> UserResponse:
    """
    Get the current user and the business profiles they belong to.

    Raises:
        401: If not authenticated
        500: If memberships cannot be read
    """
    try:
        rows = SupabaseClient.fetch_memberships(user.id)
    except SupabaseClientError as e:
        raise DatabaseOperationError("fetch memberships", str(e))

    memberships = [
        MembershipInfo(
            business_profile_id=row["business_profile_id"],
            business_name=(row.get("business_profiles") or {}).get("name"),
            role=row.get("role") or "staff",
        )
        for row in rows
    ]

    return UserResponse(id=user.id, email=user.email, memberships=memberships)


@router.get("/verify")
async def verify_token(
    user: AuthUser = Depends(get_current_user)
) -> dict:
    """
    Verify that the current token is valid.

    Raises:
        401: If token is invalid or expired
    """
    return {
        "valid": True,
        "user_id": str(user.id),
        "email": user.email
    }
