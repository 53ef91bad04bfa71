# =============================================================================
# app/auth/routes.py - Authentication Routes
# =============================================================================
# Signup and login (public) plus token introspection (bearer).
# =============================================================================

import logging

from fastapi import APIRouter

from app.auth.dependencies import CurrentUser
from app.auth.models import TokenCheck
from app.dependencies import AuthServiceDep
from core.models import ApiResponse, AuthResult, LoginRequest, PublicUser, SignupRequest

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/signup",
    response_model=ApiResponse[AuthResult],
    response_model_exclude_none=True,
)
async def signup(request: SignupRequest, auth: AuthServiceDep):
    """
    Create an account.

    Returns the new user (without credentials) and a session token.

    Raises:
        400: Invalid or reserved username, weak password, or username taken
    """
    return ApiResponse.ok(auth.signup(request))


@router.post(
    "/login",
    response_model=ApiResponse[AuthResult],
    response_model_exclude_none=True,
)
async def login(request: LoginRequest, auth: AuthServiceDep):
    """
    Log in with username and password.

    Raises:
        404: Unknown username
        401: Wrong password
    """
    return ApiResponse.ok(auth.login(request))


@router.get(
    "/auth/me",
    response_model=ApiResponse[PublicUser],
    response_model_exclude_none=True,
)
async def get_current_user_info(user: CurrentUser):
    """
    Get the current authenticated user.

    Raises:
        401: If not authenticated
    """
    return ApiResponse.ok(user.to_public())


@router.get(
    "/auth/verify",
    response_model=ApiResponse[TokenCheck],
    response_model_exclude_none=True,
)
async def verify_token(user: CurrentUser):
    """
    Verify that the current token is valid.

    Useful for checking if a stored token is still valid.

    Raises:
        401: If token is invalid or expired
    """
    return ApiResponse.ok(TokenCheck(valid=True, user_id=user.id, username=user.username))
