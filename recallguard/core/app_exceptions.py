"""Application-specific exceptions for consistent error handling."""

from typing import Any

from fastapi import HTTPException, status

from recallguard.learning_engine.srs.errors import (
    ConcurrentUpdateError,
    NotFoundError,
    SchedulingError,
    ValidationError,
)


class AppError(HTTPException):
    """Application error with standardized error code."""

    def __init__(
        self,
        status_code: int,
        code: str,
        message: str,
        details: dict[str, Any] | list[Any] | None = None,
    ):
        """Initialize application error."""
        super().__init__(
            status_code=status_code,
            detail={
                "code": code,
                "message": message,
                "details": details,
            },
        )
        self.code = code
        self.message = message
        self.details = details


# Scheduling errors are raised by the core without any HTTP knowledge.
_SCHEDULING_ERROR_STATUS: list[tuple[type[SchedulingError], int, str]] = [
    (ValidationError, status.HTTP_400_BAD_REQUEST, "VALIDATION_ERROR"),
    (NotFoundError, status.HTTP_404_NOT_FOUND, "NOT_FOUND"),
    (ConcurrentUpdateError, status.HTTP_409_CONFLICT, "CONFLICT"),
]


def app_error_from_scheduling_error(exc: SchedulingError) -> AppError:
    """Translate a core scheduling error into an AppError."""
    for error_type, status_code, code in _SCHEDULING_ERROR_STATUS:
        if isinstance(exc, error_type):
            return AppError(
                status_code=status_code,
                code=code,
                message=str(exc),
                details=getattr(exc, "details", None),
            )
    return AppError(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        code="INTERNAL_ERROR",
        message=str(exc),
    )
