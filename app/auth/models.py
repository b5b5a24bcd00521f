# =============================================================================
# app/auth/models.py - Authentication Models
# =============================================================================
# Pydantic models for the authenticated caller and /auth responses.
# =============================================================================

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict


class AuthUser(BaseModel):
    """
    Authenticated user extracted from a Supabase JWT.

    This is the minimal user info available from the token itself,
    without querying the database.
    """
    model_config = ConfigDict(frozen=True)

    id: UUID
    email: Optional[str] = None


class MembershipInfo(BaseModel):
    """One business profile the user belongs to."""
    business_profile_id: str
    business_name: Optional[str] = None
    role: str


class UserResponse(BaseModel):
    """
    Response for GET /auth/me.

    Token identity plus the business profiles the user is an active member of.
    """
    id: UUID
    email: Optional[str] = None
    memberships: list[MembershipInfo] = []
