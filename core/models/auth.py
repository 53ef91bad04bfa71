# =============================================================================
# core/models/auth.py - Authentication Schemas
# =============================================================================
# Request/response contract for signup and login:
# - SignupRequest: New account (username, password, accountType)
# - LoginRequest: Existing account credentials
# - AuthResult: Sanitized user plus a fresh session token
# =============================================================================

import re

from pydantic import Field, field_validator
from pydantic_core import PydanticCustomError

from .user import AccountType, CamelModel, PublicUser

USERNAME_MIN_LENGTH = 3
USERNAME_MAX_LENGTH = 20
USERNAME_PATTERN = re.compile(r"^[A-Za-z0-9_]+$")

PASSWORD_MIN_LENGTH = 8
PASSWORD_MAX_LENGTH = 128


class SignupRequest(CamelModel):
    """
    Schema for creating an account.

    The reserved-name check depends on configuration and is done by
    AuthService, everything else is validated here.

    Example:
        {"username": "alice", "password": "s3cretpass", "accountType": "person"}
    """
    username: str
    password: str
    account_type: AccountType

    @field_validator("username")
    @classmethod
    def check_username(cls, value: str) -> str:
        value = value.strip()
        if len(value) < USERNAME_MIN_LENGTH:
            raise PydanticCustomError(
                "username_too_short",
                f"Username must be at least {USERNAME_MIN_LENGTH} characters",
            )
        if len(value) > USERNAME_MAX_LENGTH:
            raise PydanticCustomError(
                "username_too_long",
                f"Username must be at most {USERNAME_MAX_LENGTH} characters",
            )
        if not USERNAME_PATTERN.match(value):
            raise PydanticCustomError(
                "username_invalid",
                "Username can only contain letters, numbers, and underscores",
            )
        return value

    @field_validator("password")
    @classmethod
    def check_password(cls, value: str) -> str:
        if len(value) < PASSWORD_MIN_LENGTH:
            raise PydanticCustomError(
                "password_too_short",
                f"Password must be at least {PASSWORD_MIN_LENGTH} characters",
            )
        if len(value) > PASSWORD_MAX_LENGTH:
            raise PydanticCustomError(
                "password_too_long",
                f"Password must be at most {PASSWORD_MAX_LENGTH} characters",
            )
        return value


class LoginRequest(CamelModel):
    """Credentials for an existing account."""
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)

    @field_validator("username")
    @classmethod
    def strip_username(cls, value: str) -> str:
        return value.strip()


class AuthResult(CamelModel):
    """Returned by signup and login."""
    user: PublicUser
    token: str
