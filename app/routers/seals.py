# =============================================================================
# app/routers/seals.py - Seal (Attestation) Endpoints
# =============================================================================
# POST /api/seals                     - issue a seal for a person
# GET  /api/seals/mine                - caller's seals, pending included
# POST /api/seals/{seal_id}/confirm   - caller accepts a pending seal
#
# Whether issuing needs a token depends on SEAL_MODE. In authorized mode an
# anonymous caller is rejected before the request body is validated.
# =============================================================================

from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Path, status

from app.auth import CurrentUser, OptionalUser
from app.dependencies import SealServiceDep
from app.exceptions import UnauthorizedError
from core.models import ApiResponse, Experience, SealMode, SealRequest, UserRecord

router = APIRouter()


async def get_seal_caller(caller: OptionalUser, seals: SealServiceDep) -> Optional[UserRecord]:
    """Resolve the issuing caller, requiring a token unless seals are open."""
    if caller is None and seals.mode == SealMode.AUTHORIZED:
        raise UnauthorizedError()
    return caller


SealCaller = Annotated[Optional[UserRecord], Depends(get_seal_caller)]


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=ApiResponse[Experience],
    response_model_exclude_none=True,
)
async def create_seal(
    request: SealRequest,
    caller: SealCaller,
    seals: SealServiceDep,
):
    """
    Seal a person's work experience.

    In authorized mode the caller must be a company and the seal starts
    pending. In open (demo) mode anyone may call and the seal is verified.

    Raises:
        401: Authorized mode without a valid token
        403: Caller isn't a company, or target isn't a person
        404: Target username doesn't exist
    """
    return ApiResponse.ok(seals.request_seal(caller, request))


@router.get("/mine", response_model=ApiResponse[list[Experience]], response_model_exclude_none=True)
async def list_my_seals(user: CurrentUser, seals: SealServiceDep):
    """List seals on the caller's profile, including pending ones."""
    return ApiResponse.ok(seals.list_own_seals(user))


@router.post(
    "/{seal_id}/confirm",
    response_model=ApiResponse[Experience],
    response_model_exclude_none=True,
)
async def confirm_seal(
    seal_id: Annotated[str, Path(min_length=1, description="Seal id")],
    user: CurrentUser,
    seals: SealServiceDep,
):
    """
    Confirm a pending seal on the caller's own profile.

    Raises:
        404: If the seal isn't on the caller's profile
    """
    return ApiResponse.ok(seals.confirm_seal(user, seal_id))
