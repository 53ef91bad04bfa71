# =============================================================================
# core/models/seal.py - Seal (Attestation) Schemas
# =============================================================================
# - SealMode: Which trust model the deployment runs
# - SealRequest: An issuer vouching for a person's work experience
#
# The created seal itself is core.models.user.Experience.
# =============================================================================

from enum import Enum

from pydantic import Field

from .user import CamelModel


class SealMode(str, Enum):
    """
    Trust model for seal creation.

    - authorized: Bearer token required, only company accounts issue,
                  new seals start pending until the person confirms them
    - open: Public demo mode, anyone may seal with a fixed demo issuer
            and seals are verified immediately
    """
    AUTHORIZED = "authorized"
    OPEN = "open"


class SealRequest(CamelModel):
    """
    Request to seal a person's work experience.

    Example:
        {
            "personHandle": "alice",
            "role": "Engineer",
            "period": "2023-2024",
            "description": "Backend platform team"
        }
    """
    person_handle: str = Field(..., min_length=1, description="Username of the person being sealed")
    role: str = Field(..., min_length=1, max_length=100)
    period: str = Field(..., min_length=1, max_length=50)
    description: str | None = Field(default=None, max_length=280)
