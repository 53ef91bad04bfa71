# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# This package contains Pydantic schemas for data validation:
# - user.py: Stored user record, seals (experiences) and public profile
# - auth.py: Signup/login schemas
# - seal.py: Seal request schema and trust mode
# - envelope.py: Standard API response envelope
#
# These models define the "contract" between API and clients.
# =============================================================================

# -----------------------------------------------------------------------------
# User Models - Accounts, profiles and seals
# -----------------------------------------------------------------------------
from .user import (
    AccountType,
    CamelModel,
    Experience,
    Profile,
    ProfileUpdate,
    PublicUser,
    SealStatus,
    SocialLinks,
    UserRecord,
)

# -----------------------------------------------------------------------------
# Auth Models - Signup and login
# -----------------------------------------------------------------------------
from .auth import (
    AuthResult,
    LoginRequest,
    SignupRequest,
)

# -----------------------------------------------------------------------------
# Seal Models - Attestation requests
# -----------------------------------------------------------------------------
from .seal import (
    SealMode,
    SealRequest,
)

# -----------------------------------------------------------------------------
# Envelope - Response wrapper
# -----------------------------------------------------------------------------
from .envelope import (
    ApiResponse,
    ErrorBody,
)

__all__ = [
    # User
    "AccountType",
    "CamelModel",
    "Experience",
    "Profile",
    "ProfileUpdate",
    "PublicUser",
    "SealStatus",
    "SocialLinks",
    "UserRecord",
    # Auth
    "AuthResult",
    "LoginRequest",
    "SignupRequest",
    # Seal
    "SealMode",
    "SealRequest",
    # Envelope
    "ApiResponse",
    "ErrorBody",
]
