# =============================================================================
# app/routers/client_errors.py - Frontend Error Reports
# =============================================================================
# The web client posts uncaught errors here so they land in server logs.
# =============================================================================

import logging
from typing import Any

from fastapi import APIRouter
from pydantic import BaseModel, ConfigDict, Field

from core.models import ApiResponse, CamelModel

router = APIRouter()
logger = logging.getLogger(__name__)


class ClientErrorReport(CamelModel):
    """Error reported by the browser. Unknown keys are kept for the log."""
    model_config = ConfigDict(extra="allow")

    message: str = Field(..., min_length=1)
    url: str | None = None
    user_agent: str | None = None
    timestamp: str | None = None
    stack: str | None = None
    component_stack: str | None = None


class ReportAck(BaseModel):
    received: bool = True


@router.post("", response_model=ApiResponse[ReportAck], response_model_exclude_none=True)
async def report_client_error(report: ClientErrorReport):
    """Log a client-side error report."""
    details: dict[str, Any] = report.model_dump(by_alias=True, exclude_none=True)
    logger.error(f"[CLIENT ERROR] {report.message}", extra={"client_error": details})
    return ApiResponse.ok(ReportAck())
