# =============================================================================
# app/dependencies.py - Shared Dependencies
# =============================================================================
# FastAPI dependency injection for shared resources.
# These are injected into route handlers using Depends().
# =============================================================================

import logging
from typing import Annotated

from fastapi import Depends

from app.auth import AuthUser, get_current_user
from app.exceptions import BusinessProfileNotFoundError, DatabaseOperationError
from lib.supabase_client import SupabaseClient, SupabaseClientError

logger = logging.getLogger(__name__)


def get_business_profile_id(
    user: AuthUser = Depends(get_current_user),
) -> str:
    """
    Resolve the business profile the caller works in.

    Raises:
        BusinessProfileNotFoundError: If the user has no profile yet
        DatabaseOperationError: If the lookup itself fails
    """
    try:
        profile_id = SupabaseClient.fetch_business_profile_id(user.id)
    except SupabaseClientError as e:
        raise DatabaseOperationError("resolve business profile", str(e))

    if profile_id is None:
        raise BusinessProfileNotFoundError(f"user {user.id}")
    return profile_id


# Type aliases for dependency injection
CurrentUserDep = Annotated[AuthUser, Depends(get_current_user)]
BusinessProfileDep = Annotated[str, Depends(get_business_profile_id)]
