# =============================================================================
# core/models/envelope.py - Response Envelope
# =============================================================================
# Every API response, success or error, is wrapped as:
#   {"success": true, "data": {...}}
#   {"success": false, "error": {"code": "NOT_FOUND", "message": "..."}}
# =============================================================================

from typing import Generic, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class ErrorBody(BaseModel):
    """Machine-readable code plus a human-readable message."""
    code: str
    message: str


class ApiResponse(BaseModel, Generic[T]):
    """Standard response envelope."""
    success: bool = True
    data: T | None = None
    error: ErrorBody | None = None

    @classmethod
    def ok(cls, data: T) -> "ApiResponse[T]":
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, code: str, message: str) -> "ApiResponse[T]":
        return cls(success=False, error=ErrorBody(code=code, message=message))
