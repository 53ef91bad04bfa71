# =============================================================================
# core/services/__init__.py - Service Layer Exports
# =============================================================================

from .auth_service import AuthService
from .profile_service import ProfileService
from .seal_service import IssuerIdentity, SealService

__all__ = [
    "AuthService",
    "IssuerIdentity",
    "ProfileService",
    "SealService",
]
