# =============================================================================
# app/auth/__init__.py - Authentication Module
# =============================================================================
# Verifies bearer tokens issued by Supabase Auth.
#
# Usage:
#   from app.auth import get_current_user, AuthUser
#
#   @router.get("/inventory")
#   async def list_items(user: AuthUser = Depends(get_current_user)):
#       ...
# =============================================================================

from app.auth.dependencies import get_current_user, get_current_user_optional
from app.auth.models import AuthUser, MembershipInfo, UserResponse

__all__ = [
    "get_current_user",
    "get_current_user_optional",
    "AuthUser",
    "MembershipInfo",
    "UserResponse",
]
