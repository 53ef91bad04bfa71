# =============================================================================
# app/auth/models.py - Authentication Response Models
# =============================================================================

from core.models.user import CamelModel


class TokenCheck(CamelModel):
    """
    Result of GET /api/auth/verify.

    Example:
        {"valid": true, "userId": "550e8400-...", "username": "alice"}
    """
    valid: bool
    user_id: str
    username: str
