# =============================================================================
# app/dependencies.py - Shared Dependencies
# =============================================================================
# FastAPI dependency injection for shared resources.
# These are injected into route handlers using Depends() and can be
# replaced in tests through app.dependency_overrides.
# =============================================================================

import logging
from datetime import timedelta
from functools import lru_cache
from typing import Annotated

from fastapi import Depends

from app.config import settings
from core.services import AuthService, IssuerIdentity, ProfileService, SealService
from lib.seed_data import demo_users
from lib.tokens import TokenIssuer
from lib.user_store import InMemoryUserStore, UserStore

logger = logging.getLogger(__name__)


@lru_cache
def get_user_store() -> UserStore:
    """
    Get the process-wide user store.

    Backend is chosen by STORAGE_BACKEND.
    """
    if settings.STORAGE_BACKEND == "supabase":
        from lib.supabase_client import SupabaseClient, SupabaseUserStore

        logger.info("Using Supabase user store")
        return SupabaseUserStore(SupabaseClient.get_client())

    seed = demo_users() if settings.SEED_DEMO_USERS else None
    logger.info(f"Using in-memory user store ({len(seed or [])} demo users)")
    return InMemoryUserStore(seed=seed)


@lru_cache
def get_token_issuer() -> TokenIssuer:
    """Get the session token issuer built from settings."""
    if not settings.JWT_SECRET:
        logger.warning("JWT_SECRET is not set: logins and protected routes will be rejected")
    return TokenIssuer(
        secret=settings.JWT_SECRET,
        ttl=timedelta(days=settings.TOKEN_TTL_DAYS),
        algorithm=settings.JWT_ALGORITHM,
    )


# Type aliases for dependency injection
StoreDep = Annotated[UserStore, Depends(get_user_store)]
TokenIssuerDep = Annotated[TokenIssuer, Depends(get_token_issuer)]


def get_auth_service(store: StoreDep, tokens: TokenIssuerDep) -> AuthService:
    return AuthService(store, tokens, reserved_usernames=settings.reserved_usernames)


def get_seal_service(store: StoreDep) -> SealService:
    return SealService(
        store,
        mode=settings.SEAL_MODE,
        demo_issuer=IssuerIdentity(
            id=settings.DEMO_ISSUER_ID,
            name=settings.DEMO_ISSUER_NAME,
            avatar_url=settings.DEMO_ISSUER_AVATAR_URL,
        ),
    )


def get_profile_service(store: StoreDep) -> ProfileService:
    return ProfileService(store, list_limit=settings.USER_LIST_LIMIT)


AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]
SealServiceDep = Annotated[SealService, Depends(get_seal_service)]
ProfileServiceDep = Annotated[ProfileService, Depends(get_profile_service)]
