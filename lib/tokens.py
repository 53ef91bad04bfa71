# =============================================================================
# lib/tokens.py - Session Token Issuer/Verifier
# =============================================================================
# Issues and verifies stateless session tokens (HS256 JWTs).
#
# Claims:
#   sub       - user id (stable key)
#   username  - handle at issuance time (informational)
#   iat / exp - issued-at and expiry, exp = iat + ttl (7 days by default)
#
# Tokens are never stored server-side and cannot be revoked before expiry.
# Without a secret every operation fails closed: issue() raises and
# verify() rejects everything.
#
# Usage:
#   issuer = TokenIssuer(secret=settings.JWT_SECRET)
#   token = issuer.issue(TokenClaims(sub=user.id, username=user.username))
#   claims = issuer.verify(token)  # TokenClaims | None
# =============================================================================

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone

from jose import ExpiredSignatureError, JWTError, jwt
from pydantic import BaseModel, ValidationError

logger = logging.getLogger(__name__)

DEFAULT_TOKEN_TTL = timedelta(days=7)


class TokenConfigurationError(Exception):
    """Raised when a token is requested but no signing secret is configured."""


class TokenClaims(BaseModel):
    """Identity carried by a session token."""
    sub: str
    username: str
    iat: int | None = None
    exp: int | None = None

    model_config = {"frozen": True}

    @property
    def user_id(self) -> str:
        return self.sub


class TokenIssuer:
    """
    Signs and verifies session tokens with a process-wide secret.
    """

    def __init__(
        self,
        secret: str | None,
        ttl: timedelta = DEFAULT_TOKEN_TTL,
        algorithm: str = "HS256",
    ):
        self._secret = secret or None
        self.ttl = ttl
        self.algorithm = algorithm

    @property
    def is_configured(self) -> bool:
        return self._secret is not None

    def issue(self, claims: TokenClaims, issued_at: datetime | None = None) -> str:
        """
        Sign a token for the given identity.

        Args:
            claims: Identity to embed (sub + username)
            issued_at: Issue time, defaults to now (UTC)

        Raises:
            TokenConfigurationError: If no secret is configured
        """
        if not self.is_configured:
            raise TokenConfigurationError("JWT secret is not configured")

        issued_at = issued_at or datetime.now(timezone.utc)
        payload = {
            "sub": claims.sub,
            "username": claims.username,
            "iat": int(issued_at.timestamp()),
            "exp": int((issued_at + self.ttl).timestamp()),
        }
        return jwt.encode(payload, self._secret, algorithm=self.algorithm)

    def verify(self, token: str) -> TokenClaims | None:
        """
        Verify signature and expiry.

        Returns:
            TokenClaims if the token is valid, None otherwise
        """
        if not self.is_configured:
            logger.warning("Rejecting token: JWT secret is not configured")
            return None

        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self.algorithm],
                options={"require_exp": True, "require_sub": True},
            )
            return TokenClaims(**payload)

        except ExpiredSignatureError:
            logger.debug("Token has expired")
            return None

        except JWTError as e:
            logger.debug(f"Token validation failed: {e}")
            return None

        except ValidationError as e:
            logger.debug(f"Token claims malformed: {e}")
            return None
