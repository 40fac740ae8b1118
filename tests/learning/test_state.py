"""Tests for scheduling state records and validators."""

from datetime import UTC, datetime, timedelta

import pytest

from recallguard.learning_engine.constants import (
    DEFAULT_EASE_FACTOR,
    DEFAULT_INTERVAL_DAYS,
    Quality,
)
from recallguard.learning_engine.srs.errors import ValidationError
from recallguard.learning_engine.srs.state import (
    SchedulingState,
    validate_new_state,
    validate_quality,
    validate_state,
)
from tests.helpers.seed import make_question, make_state

NOW = datetime(2024, 3, 1, 9, 0, tzinfo=UTC)


def test_initial_state_is_due_immediately() -> None:
    state = SchedulingState.initial(NOW)

    assert state.interval == DEFAULT_INTERVAL_DAYS
    assert state.ease_factor == DEFAULT_EASE_FACTOR
    assert state.repetitions == 0
    assert state.next_review_date == NOW
    assert state.is_due(NOW)


def test_is_due_boundary() -> None:
    state = make_state(NOW + timedelta(microseconds=1))

    assert not state.is_due(NOW)
    assert state.is_due(NOW + timedelta(microseconds=1))


def test_with_state_bumps_version() -> None:
    question = make_question(1, NOW)
    new_state = make_state(NOW + timedelta(days=6), interval=6, repetitions=2)

    updated = question.with_state(new_state)

    assert updated.version == question.version + 1
    assert updated.interval == 6
    assert updated.repetitions == 2
    assert question.interval == 1


@pytest.mark.parametrize("quality", list(Quality))
def test_every_named_grade_is_valid(quality: Quality) -> None:
    assert validate_quality(quality) == quality


def test_validate_state_accepts_low_ease() -> None:
    # The scheduler clamps ease; validation only rejects malformed values
    state = make_state(NOW, ease_factor=0.5)

    assert validate_state(state) is state


def test_validation_error_carries_details() -> None:
    with pytest.raises(ValidationError) as exc_info:
        validate_state(make_state(NOW, interval=-3))

    assert exc_info.value.details == {"interval": -3}


def test_new_state_must_respect_ease_floor() -> None:
    with pytest.raises(ValidationError, match="at least 1.3"):
        validate_new_state(make_state(NOW, ease_factor=0.5))

    state = make_state(NOW, ease_factor=1.3)
    assert validate_new_state(state) is state
