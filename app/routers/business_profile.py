# =============================================================================
# app/routers/business_profile.py - Business Profile Endpoints
# =============================================================================
# The caller's restaurant profile: read, upsert, and its pricing currency.
# All endpoints require authentication.
# =============================================================================

import logging
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Path, status

from app.auth import AuthUser, get_current_user
from core.models.business_profile import BusinessProfileUpsert, CurrencyResponse
from core.services.business_profile_service import BusinessProfileService

logger = logging.getLogger(__name__)

router = APIRouter()


def _is_caller(user_id: str, user: AuthUser) -> bool:
    """Compare a body user_id to the caller as UUIDs, so letter case is ignored."""
    try:
        return UUID(user_id) == user.id
    except ValueError:
        return False


@router.get("")
async def get_business_profile(
    user: AuthUser = Depends(get_current_user),
):
    """
    Get the caller's business profile.

    Members see the profile they were added to; owners see their own.
    """
    return BusinessProfileService.get_for_user(str(user.id))


@router.post("")
async def upsert_business_profile(
    request: BusinessProfileUpsert,
    user: AuthUser = Depends(get_current_user),
):
    """
    Create or update a business profile.

    The body's user_id is the upsert key and must be the caller.

    Errors:
        400: user_id or another required field is missing/invalid
        403: user_id is someone else
        500: the write failed
    """
    if not _is_caller(request.user_id, user):
        logger.warning(f"User {user.id} tried to save a profile for {request.user_id}")
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You can only save your own business profile",
        )

    payload = request.model_dump(mode="json", exclude_unset=True)
    payload["user_id"] = str(user.id)
    return BusinessProfileService.upsert(payload)


@router.get("/{profile_id}/currency", response_model=CurrencyResponse)
async def get_business_currency(
    profile_id: Annotated[str, Path(description="Business profile id")],
    user: AuthUser = Depends(get_current_user),
):
    """Currency the business prices in. Caller must be a member."""
    BusinessProfileService.require_access(str(user.id), profile_id)
    return BusinessProfileService.get_currency(profile_id)
