# =============================================================================
# app/routers/profile.py - Own Profile Endpoints
# =============================================================================
# Update or delete the authenticated user's own account.
# All endpoints require a bearer token.
# =============================================================================

from fastapi import APIRouter
from pydantic import BaseModel

from app.auth import CurrentUser
from app.dependencies import ProfileServiceDep
from core.models import ApiResponse, Profile, ProfileUpdate

router = APIRouter()


class DeleteResponse(BaseModel):
    """Confirmation after deleting an account."""
    message: str


@router.put("", response_model=ApiResponse[Profile], response_model_exclude_none=True)
async def update_profile(
    request: ProfileUpdate,
    user: CurrentUser,
    profiles: ProfileServiceDep,
):
    """
    Update the caller's profile.

    Only the fields sent are changed. Sending `links` replaces all links;
    an empty string clears a link or the avatar.
    """
    return ApiResponse.ok(profiles.update(user.id, request))


@router.delete("", response_model=ApiResponse[DeleteResponse], response_model_exclude_none=True)
async def delete_profile(user: CurrentUser, profiles: ProfileServiceDep):
    """
    Delete the caller's account, profile, links and seals.

    Existing tokens for the account stop working immediately because
    the user no longer resolves.
    """
    profiles.delete(user.id)
    return ApiResponse.ok(DeleteResponse(message="Account deleted successfully"))
