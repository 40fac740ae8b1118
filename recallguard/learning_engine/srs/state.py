"""Shared data model for the review scheduling engine."""

import math
from dataclasses import dataclass, replace
from datetime import datetime

from recallguard.learning_engine.constants import (
    DEFAULT_EASE_FACTOR,
    DEFAULT_INTERVAL_DAYS,
    MAX_QUALITY,
    MIN_EASE_FACTOR,
    MIN_QUALITY,
)
from recallguard.learning_engine.srs.errors import ValidationError


@dataclass(frozen=True)
class SchedulingState:
    """Mutable-by-replacement scheduling fields of a question."""

    interval: int
    ease_factor: float
    repetitions: int
    next_review_date: datetime

    @classmethod
    def initial(cls, now: datetime) -> "SchedulingState":
        """State of a freshly ingested question: due immediately."""
        return cls(
            interval=DEFAULT_INTERVAL_DAYS,
            ease_factor=DEFAULT_EASE_FACTOR,
            repetitions=0,
            next_review_date=now,
        )

    def is_due(self, now: datetime) -> bool:
        return self.next_review_date <= now


@dataclass(frozen=True)
class Question:
    """A schedulable recall question owned by one user."""

    id: int
    user_id: int
    note_id: int
    question_text: str
    answer_text: str
    state: SchedulingState
    version: int = 1

    @property
    def interval(self) -> int:
        return self.state.interval

    @property
    def ease_factor(self) -> float:
        return self.state.ease_factor

    @property
    def repetitions(self) -> int:
        return self.state.repetitions

    @property
    def next_review_date(self) -> datetime:
        return self.state.next_review_date

    def with_state(self, state: SchedulingState) -> "Question":
        return replace(self, state=state, version=self.version + 1)


@dataclass(frozen=True)
class NewQuestion:
    """Input to QuestionRepository.create_questions."""

    note_id: int
    user_id: int
    question_text: str
    answer_text: str
    state: SchedulingState | None = None


@dataclass(frozen=True)
class Note:
    """A free-text note submitted by a user."""

    id: int
    user_id: int
    content: str
    created_at: datetime


@dataclass(frozen=True)
class MemoryStatus:
    """Safe (not due) vs unstable (due) question counts."""

    safe: int
    unstable: int

    @property
    def total(self) -> int:
        return self.safe + self.unstable


def validate_quality(quality: int) -> int:
    """Return quality unchanged, or raise ValidationError if it is not an int in [0, 5]."""
    # bool is an int subclass; True/False are not quality grades
    if isinstance(quality, bool) or not isinstance(quality, int):
        raise ValidationError(
            f"Quality must be an integer between {MIN_QUALITY} and {MAX_QUALITY}",
            details={"quality": repr(quality)},
        )
    if not MIN_QUALITY <= quality <= MAX_QUALITY:
        raise ValidationError(
            f"Quality must be between {MIN_QUALITY} and {MAX_QUALITY}, got {quality}",
            details={"quality": quality},
        )
    return quality


def validate_state(state: SchedulingState) -> SchedulingState:
    """
    Reject malformed scheduling state.

    An ease factor below the floor is accepted here; the scheduler clamps it.
    """
    if state.interval < 0:
        raise ValidationError(
            f"Interval must be non-negative, got {state.interval}",
            details={"interval": state.interval},
        )
    if state.repetitions < 0:
        raise ValidationError(
            f"Repetitions must be non-negative, got {state.repetitions}",
            details={"repetitions": state.repetitions},
        )
    if not math.isfinite(state.ease_factor):
        raise ValidationError(
            "Ease factor must be a finite number",
            details={"ease_factor": repr(state.ease_factor)},
        )
    return state


def validate_new_state(state: SchedulingState) -> SchedulingState:
    """
    Validate a state supplied when a question is created.

    Stored questions must respect the ease floor; only the scheduler's
    input tolerates a lower value.
    """
    validate_state(state)
    if state.ease_factor < MIN_EASE_FACTOR:
        raise ValidationError(
            f"Ease factor must be at least {MIN_EASE_FACTOR}, got {state.ease_factor}",
            details={"ease_factor": state.ease_factor},
        )
    return state
