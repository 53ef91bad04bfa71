# =============================================================================
# app/routers/health.py - Health Check Endpoints
# =============================================================================
# Provides health check endpoints for monitoring and load balancers.
# =============================================================================

from datetime import datetime, timezone

from fastapi import APIRouter
from pydantic import BaseModel

from app.config import settings
from app.dependencies import StoreDep
from core.models import ApiResponse

router = APIRouter()

API_VERSION = "1.0.0"


# =============================================================================
# Response Models
# =============================================================================

class HealthResponse(BaseModel):
    """Basic health check response."""
    status: str
    timestamp: str
    environment: str
    version: str


class ReadinessResponse(BaseModel):
    """Readiness check response."""
    status: str
    storage: str
    auth: str
    timestamp: str


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


# =============================================================================
# Endpoints
# =============================================================================

@router.get("/health", response_model=ApiResponse[HealthResponse], response_model_exclude_none=True)
async def health_check():
    """
    Liveness probe.

    Returns basic health status for load balancers and monitoring.
    """
    return ApiResponse.ok(HealthResponse(
        status="healthy",
        timestamp=_now(),
        environment=settings.ENVIRONMENT,
        version=API_VERSION,
    ))


@router.get("/health/ready", response_model=ApiResponse[ReadinessResponse], response_model_exclude_none=True)
async def readiness_check(store: StoreDep):
    """
    Readiness check endpoint.

    Checks that the user store answers and a signing secret is set.
    """
    try:
        store.list_all(limit=1)
        storage = "healthy"
    except Exception as e:
        storage = f"unhealthy: {str(e)[:50]}"

    auth = "configured" if settings.JWT_SECRET else "missing secret"
    ready = storage == "healthy" and settings.JWT_SECRET is not None

    return ApiResponse.ok(ReadinessResponse(
        status="ready" if ready else "degraded",
        storage=storage,
        auth=auth,
        timestamp=_now(),
    ))
