# =============================================================================
# app/auth/dependencies.py - FastAPI Auth Dependencies
# =============================================================================
# Bearer-token gate for protected routes.
#
# The token is verified and resolved to a user by id before the route runs,
# so a request with a bad token never reaches the services.
#
# Usage:
#   from app.auth import CurrentUser
#
#   @router.put("/profile")
#   async def update(user: CurrentUser):
#       return {"user_id": user.id}
# =============================================================================

import logging
from typing import Annotated, Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.dependencies import AuthServiceDep
from app.exceptions import UnauthorizedError
from core.models.user import UserRecord

logger = logging.getLogger(__name__)

# HTTP Bearer token extractor (we raise our own 401 in the envelope format)
security = HTTPBearer(auto_error=False)


async def get_current_user(
    auth: AuthServiceDep,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> UserRecord:
    """
    Extract and validate the user from the Authorization header.

    This dependency:
    1. Extracts the Bearer token from the Authorization header
    2. Verifies the JWT signature and expiry
    3. Loads the user by the token's id

    Raises:
        UnauthorizedError: 401 if the token is missing, invalid or expired
    """
    if credentials is None or not credentials.credentials:
        raise UnauthorizedError()

    user = auth.authenticate_token(credentials.credentials)
    logger.debug(f"Authenticated user: {user.id}")
    return user


async def get_current_user_optional(
    auth: AuthServiceDep,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Optional[UserRecord]:
    """
    Optionally get the current user from the bearer token.

    Returns None if no token is provided or the token is invalid,
    instead of raising an error.
    """
    if credentials is None:
        return None

    try:
        return await get_current_user(auth, credentials)
    except UnauthorizedError:
        # If token is invalid, treat as no auth rather than error
        return None


CurrentUser = Annotated[UserRecord, Depends(get_current_user)]
OptionalUser = Annotated[Optional[UserRecord], Depends(get_current_user_optional)]
