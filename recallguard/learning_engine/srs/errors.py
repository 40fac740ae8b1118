"""Typed errors raised by the review scheduling engine."""

from typing import Any


class SchedulingError(Exception):
    """Base class for scheduling engine errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.details = details


class ValidationError(SchedulingError):
    """Quality score or scheduling state is out of range."""


class NotFoundError(SchedulingError):
    """Question does not exist or is not owned by the requesting user."""

    def __init__(self, question_id: int, user_id: int):
        super().__init__(
            f"Question {question_id} not found",
            details={"question_id": question_id},
        )
        self.question_id = question_id
        self.user_id = user_id


class ConcurrentUpdateError(SchedulingError):
    """A review write lost an optimistic concurrency race."""

    def __init__(self, question_id: int, expected_version: int | None):
        super().__init__(
            f"Question {question_id} was modified concurrently",
            details={"question_id": question_id, "expected_version": expected_version},
        )
        self.question_id = question_id
        self.expected_version = expected_version
