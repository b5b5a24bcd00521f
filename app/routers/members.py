# =============================================================================
# app/routers/members.py - Team Membership Endpoints
# =============================================================================
# Users of a business profile, mounted under /business-profile/{id}/users.
# Any member can list the team; owners and managers change it.
# =============================================================================

from typing import Annotated

from fastapi import APIRouter, Path, status

from app.dependencies import CurrentUserDep
from core.models.business_profile import MemberAdd, MemberRoleUpdate
from core.services.business_profile_service import BusinessProfileService
from core.services.membership_service import MembershipService

router = APIRouter()

ProfileId = Annotated[str, Path(description="Business profile id")]
MemberUserId = Annotated[str, Path(description="User id of the member")]


@router.get("/{profile_id}/users")
async def list_members(profile_id: ProfileId, user: CurrentUserDep):
    """Active members of the business profile, newest first."""
    BusinessProfileService.require_access(str(user.id), profile_id)
    members = MembershipService.list_members(profile_id)
    return {"users": members, "total": len(members)}


@router.post("/{profile_id}/users", status_code=status.HTTP_201_CREATED)
async def add_member(profile_id: ProfileId, request: MemberAdd, user: CurrentUserDep):
    """
    Add a user to the business profile (or reactivate a former member).

    Errors:
        403: caller is staff, or a manager granting the owner role
        409: the profile already has max_users active members
    """
    return MembershipService.add_member(
        str(user.id), profile_id, str(request.user_id), request.role.value
    )


@router.patch("/{profile_id}/users/{member_user_id}")
async def update_member_role(
    profile_id: ProfileId,
    member_user_id: MemberUserId,
    request: MemberRoleUpdate,
    user: CurrentUserDep,
):
    return MembershipService.update_role(
        str(user.id), profile_id, member_user_id, request.role.value
    )


@router.delete("/{profile_id}/users/{member_user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_member(
    profile_id: ProfileId,
    member_user_id: MemberUserId,
    user: CurrentUserDep,
):
    """Deactivate a membership. The last owner cannot be removed."""
    MembershipService.remove_member(str(user.id), profile_id, member_user_id)
