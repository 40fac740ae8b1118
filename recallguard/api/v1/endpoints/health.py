"""Health and readiness endpoints."""

from typing import Literal

from fastapi import APIRouter, Depends, Request, status
from pydantic import BaseModel
from sqlalchemy import text
from sqlalchemy.orm import Session

from recallguard.core.errors import get_request_id
from recallguard.core.logging import get_logger
from recallguard.db.session import get_db

router = APIRouter(tags=["Health"])
logger = get_logger(__name__)


class HealthResponse(BaseModel):
    """Health check response."""

    status: Literal["ok"] = "ok"


class ReadinessCheck(BaseModel):
    """Individual readiness check result."""

    status: Literal["ok", "down"]
    message: str | None = None


class ReadinessResponse(BaseModel):
    """Readiness check response."""

    status: Literal["ok", "down"]
    checks: dict[str, ReadinessCheck]
    request_id: str


@router.get(
    "/health",
    response_model=HealthResponse,
    status_code=status.HTTP_200_OK,
    summary="Health check",
)
def health_check() -> HealthResponse:
    """Liveness probe; does not touch the database."""
    return HealthResponse(status="ok")


@router.get(
    "/ready",
    response_model=ReadinessResponse,
    status_code=status.HTTP_200_OK,
    summary="Readiness check",
    description="Verifies database connectivity.",
)
def readiness_check(
    request: Request,
    db: Session = Depends(get_db),
) -> ReadinessResponse:
    request_id = get_request_id(request)
    checks: dict[str, ReadinessCheck] = {}
    overall_status: Literal["ok", "down"] = "ok"

    try:
        db.execute(text("SELECT 1"))
        checks["db"] = ReadinessCheck(status="ok")
    except Exception as e:
        logger.warning(f"Database readiness check failed: {e}")
        checks["db"] = ReadinessCheck(status="down", message=str(e))
        overall_status = "down"

    return ReadinessResponse(status=overall_status, checks=checks, request_id=request_id)
