# =============================================================================
# app/exceptions.py - Custom Exceptions & Handlers
# =============================================================================
# Centralized exception handling for the API.
#
# Every error leaves the API in the standard envelope:
#   {"success": false, "error": {"code": "...", "message": "..."}}
# =============================================================================

import logging
from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class TheirBioException(Exception):
    """
    Base exception for the theirBio API.

    All custom exceptions inherit from this class and carry the HTTP
    status and machine-readable code they map to.
    """

    def __init__(
        self,
        message: str,
        code: str = "THEIRBIO_ERROR",
        status_code: int = 500,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response dict."""
        return error_envelope(self.code, self.message)


def error_envelope(code: str, message: str) -> dict[str, Any]:
    return {
        "success": False,
        "error": {"code": code, "message": message},
    }


def field_message(field: str, message: str) -> str:
    """Format a field error the way clients display it."""
    return f"'{field}' field: {message}."


# =============================================================================
# Request Exceptions
# =============================================================================

class ValidationFailedError(TheirBioException):
    """Raised when input passes schema validation but breaks a business rule."""

    def __init__(self, field: str, message: str):
        super().__init__(
            message=field_message(field, message),
            code="VALIDATION_ERROR",
            status_code=400,
            details={"field": field},
        )


class UsernameTakenError(TheirBioException):
    """Raised when signing up with a username that already exists."""

    def __init__(self, username: str):
        super().__init__(
            message="Username already taken",
            code="CONFLICT",
            status_code=400,
            details={"username": username},
        )


class NotFoundError(TheirBioException):
    """Raised when a requested resource doesn't exist."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(
            message=message,
            code="NOT_FOUND",
            status_code=404,
            details=details,
        )


class UserNotFoundError(NotFoundError):
    """Raised when a username or id doesn't resolve to a user."""

    def __init__(self, username: str | None = None, message: str = "User not found"):
        super().__init__(message=message, details={"username": username} if username else None)


class SealNotFoundError(NotFoundError):
    """Raised when a seal id isn't on the caller's profile."""

    def __init__(self, seal_id: str):
        super().__init__(message="Seal not found", details={"seal_id": seal_id})


# =============================================================================
# Auth Exceptions
# =============================================================================

class UnauthorizedError(TheirBioException):
    """Raised when a bearer token is missing, invalid or expired."""

    def __init__(self, message: str = "Authentication required"):
        super().__init__(
            message=message,
            code="UNAUTHORIZED",
            status_code=401,
        )


class InvalidCredentialsError(TheirBioException):
    """Raised when a login password doesn't match."""

    def __init__(self):
        super().__init__(
            message="Invalid credentials",
            code="INVALID_CREDENTIALS",
            status_code=401,
        )


class PolicyError(TheirBioException):
    """Raised when an account kind isn't allowed to perform an action."""

    def __init__(self, message: str):
        super().__init__(
            message=message,
            code="FORBIDDEN",
            status_code=403,
        )


class ConfigurationError(TheirBioException):
    """Raised when the server is missing required configuration."""

    def __init__(self, message: str):
        super().__init__(
            message=message,
            code="CONFIGURATION_ERROR",
            status_code=500,
        )


# =============================================================================
# Exception Handlers
# =============================================================================

async def theirbio_exception_handler(
    request: Request,
    exc: TheirBioException
) -> JSONResponse:
    """Convert TheirBioException to an envelope response."""
    if exc.status_code >= 500:
        logger.error(f"{exc.code} on {request.method} {request.url.path}: {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError
) -> JSONResponse:
    """
    Handle Pydantic validation errors.

    Reports the first failing field as "'<field>' field: <message>."
    """
    errors = exc.errors()
    if not errors:
        message = "Invalid request."
    elif errors[0].get("type") == "json_invalid":
        # loc holds a character offset here, not a field
        message = "Invalid JSON body."
    else:
        first = errors[0]
        location = [str(part) for part in first.get("loc", ()) if part not in ("body", "query", "path")]
        field = ".".join(location) or "body"
        message = field_message(field, first.get("msg", "Invalid value"))

    return JSONResponse(
        status_code=400,
        content=error_envelope("VALIDATION_ERROR", message)
    )


async def http_exception_handler(
    request: Request,
    exc: StarletteHTTPException
) -> JSONResponse:
    """Wrap framework HTTP errors (unknown route, wrong method) in the envelope."""
    codes = {404: "NOT_FOUND", 405: "METHOD_NOT_ALLOWED", 401: "UNAUTHORIZED", 403: "FORBIDDEN"}
    message = exc.detail if isinstance(exc.detail, str) else "Request failed"
    return JSONResponse(
        status_code=exc.status_code,
        content=error_envelope(codes.get(exc.status_code, "HTTP_ERROR"), message),
        headers=getattr(exc, "headers", None),
    )


async def unhandled_exception_handler(
    request: Request,
    exc: Exception
) -> JSONResponse:
    """Log the full traceback and return a generic error."""
    logger.exception(f"Unexpected error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=500,
        content=error_envelope("INTERNAL_ERROR", "Something went wrong")
    )
