"""Error handlers producing one response envelope for every failure.

Format: ``{error_code, message, details, request_id}``.
"""

import uuid
from typing import Any

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from starlette.exceptions import HTTPException as StarletteHTTPException

from recallguard.core.logging import get_logger
from recallguard.learning_engine.srs.errors import SchedulingError

logger = get_logger(__name__)

# Default error codes for plain HTTPExceptions (auth dependency, routing)
_STATUS_CODES: dict[int, str] = {
    status.HTTP_400_BAD_REQUEST: "BAD_REQUEST",
    status.HTTP_401_UNAUTHORIZED: "UNAUTHORIZED",
    status.HTTP_403_FORBIDDEN: "FORBIDDEN",
    status.HTTP_404_NOT_FOUND: "NOT_FOUND",
    status.HTTP_405_METHOD_NOT_ALLOWED: "METHOD_NOT_ALLOWED",
    status.HTTP_409_CONFLICT: "CONFLICT",
}


class ErrorResponse(BaseModel):
    """Error response envelope."""

    error_code: str
    message: str
    details: Any | None = None
    request_id: str | None = None


def get_request_id(request: Request) -> str:
    """Request id set by RequestIDMiddleware, or a fresh one."""
    return getattr(request.state, "request_id", None) or str(uuid.uuid4())


def error_response(
    request: Request,
    status_code: int,
    error_code: str,
    message: str,
    details: Any | None = None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    body = ErrorResponse(
        error_code=error_code,
        message=message,
        details=details,
        request_id=get_request_id(request),
    )
    return JSONResponse(status_code=status_code, content=body.model_dump(), headers=headers)


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Request body/query validation failures (422)."""
    details: list[dict[str, Any]] = []
    limit_exceeded = False
    for error in exc.errors():
        ctx = error.get("ctx") or {}
        item: dict[str, Any] = {
            "field": ".".join(str(loc) for loc in error.get("loc", [])),
            "issue": error.get("msg", "Validation error"),
            "type": error.get("type", "validation_error"),
        }
        if "max_length" in ctx:
            item["limit"] = ctx["max_length"]
        if "too_long" in item["type"]:
            limit_exceeded = True
        details.append(item)

    if limit_exceeded:
        return error_response(
            request,
            status.HTTP_422_UNPROCESSABLE_ENTITY,
            "VALIDATION_LIMIT_EXCEEDED",
            "Validation limit exceeded",
            details,
        )
    return error_response(
        request,
        status.HTTP_422_UNPROCESSABLE_ENTITY,
        "VALIDATION_ERROR",
        "Invalid request data",
        details,
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """AppError and plain HTTPExceptions, including routing 404/405."""
    from recallguard.core.app_exceptions import AppError

    headers = getattr(exc, "headers", None)
    if isinstance(exc, AppError):
        return error_response(
            request, exc.status_code, exc.code, exc.message, exc.details, headers
        )

    code = _STATUS_CODES.get(exc.status_code, "HTTP_ERROR")
    message = exc.detail if isinstance(exc.detail, str) else str(exc.detail)
    return error_response(request, exc.status_code, code, message, None, headers)


async def scheduling_exception_handler(request: Request, exc: SchedulingError) -> JSONResponse:
    """Core scheduling errors that escaped an endpoint."""
    from recallguard.core.app_exceptions import app_error_from_scheduling_error

    return await http_exception_handler(request, app_error_from_scheduling_error(exc))


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Unhandled exceptions (500). Details are hidden in production."""
    from recallguard.core.config import settings

    logger.error(
        f"Unhandled error: {exc}",
        extra={"path": request.url.path, "error_type": type(exc).__name__},
        exc_info=exc,
    )

    if settings.ENV == "prod":
        return error_response(
            request,
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "INTERNAL_ERROR",
            "An internal server error occurred",
        )
    return error_response(
        request,
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "INTERNAL_ERROR",
        str(exc),
        {"type": type(exc).__name__},
    )
