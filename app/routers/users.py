# =============================================================================
# app/routers/users.py - Public Profile Endpoints
# =============================================================================
# Browse profiles without authentication.
# =============================================================================

from typing import Annotated

from fastapi import APIRouter, Path

from app.dependencies import ProfileServiceDep
from core.models import ApiResponse, Profile

router = APIRouter()


@router.get("", response_model=ApiResponse[list[Profile]], response_model_exclude_none=True)
async def list_users(profiles: ProfileServiceDep):
    """
    List public profiles (at most 100).

    Only verified seals are included.
    """
    return ApiResponse.ok(profiles.list_all())


@router.get("/{username}", response_model=ApiResponse[Profile], response_model_exclude_none=True)
async def get_user(
    username: Annotated[str, Path(min_length=1, description="Username of the profile")],
    profiles: ProfileServiceDep,
):
    """
    Get one public profile.

    Raises:
        404: If the username doesn't exist
    """
    return ApiResponse.ok(profiles.get(username))
