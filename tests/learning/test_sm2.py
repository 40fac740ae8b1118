"""Tests for the SM-2 scheduler."""

import math
from datetime import UTC, datetime, timedelta

import pytest

from recallguard.learning_engine.constants import MIN_EASE_FACTOR, Quality
from recallguard.learning_engine.srs.errors import ValidationError
from recallguard.learning_engine.srs.sm2 import (
    compute_next_state,
    next_ease_factor,
    next_interval,
    round_half_away_from_zero,
)
from tests.helpers.seed import make_state

NOW = datetime(2024, 3, 1, 9, 0, tzinfo=UTC)


def expected_ease(ease: float, quality: int) -> float:
    return ease + (0.1 - (5 - quality) * (0.08 + (5 - quality) * 0.02))


# ============================================================================
# Reference scenarios
# ============================================================================


def test_first_successful_review_schedules_one_day() -> None:
    state = make_state(NOW, interval=1, ease_factor=2.5, repetitions=0)

    result = compute_next_state(state, 4, NOW)

    assert result.interval == 1
    assert result.repetitions == 1
    assert result.ease_factor == pytest.approx(expected_ease(2.5, 4))
    assert result.next_review_date == NOW + timedelta(days=1)


def test_second_successful_review_schedules_six_days() -> None:
    state = make_state(NOW, interval=1, ease_factor=2.5, repetitions=1)

    result = compute_next_state(state, 4, NOW)

    assert result.interval == 6
    assert result.repetitions == 2
    assert result.ease_factor == expected_ease(2.5, 4)
    assert result.next_review_date == NOW + timedelta(days=6)


def test_third_review_multiplies_interval_by_ease() -> None:
    state = make_state(NOW, interval=6, ease_factor=2.5, repetitions=2)

    result = compute_next_state(state, 5, NOW)

    assert result.interval == 15
    assert result.repetitions == 3
    assert result.ease_factor == pytest.approx(2.6)
    assert result.next_review_date == NOW + timedelta(days=15)


def test_blackout_resets_streak_and_floors_ease() -> None:
    state = make_state(NOW, interval=15, ease_factor=1.3, repetitions=3)

    result = compute_next_state(state, 0, NOW)

    assert result.interval == 1
    assert result.repetitions == 0
    assert result.ease_factor == MIN_EASE_FACTOR
    assert result.next_review_date == NOW + timedelta(days=1)


def test_hard_pass_lowers_ease_but_keeps_streak() -> None:
    state = make_state(NOW, interval=6, ease_factor=2.5, repetitions=2)

    result = compute_next_state(state, Quality.HARD, NOW)

    assert result.repetitions == 3
    assert result.ease_factor == pytest.approx(2.36)
    # Interval uses the ease factor from before this review
    assert result.interval == 15


@pytest.mark.parametrize("quality", [0, 1, 2])
def test_lapse_always_returns_after_one_day(quality: int) -> None:
    state = make_state(NOW, interval=40, ease_factor=2.8, repetitions=7)

    result = compute_next_state(state, quality, NOW)

    assert result.interval == 1
    assert result.repetitions == 0
    assert result.ease_factor == pytest.approx(max(MIN_EASE_FACTOR, expected_ease(2.8, quality)))


def test_ease_below_floor_is_clamped_even_on_perfect_recall() -> None:
    state = make_state(NOW, interval=3, ease_factor=1.0, repetitions=2)

    result = compute_next_state(state, 5, NOW)

    assert result.ease_factor == MIN_EASE_FACTOR


def test_input_state_is_not_modified() -> None:
    state = make_state(NOW, interval=6, ease_factor=2.5, repetitions=2)

    compute_next_state(state, 1, NOW)

    assert state == make_state(NOW, interval=6, ease_factor=2.5, repetitions=2)


def test_now_defaults_to_current_time() -> None:
    state = make_state(NOW)
    before = datetime.now(UTC)

    result = compute_next_state(state, 4)

    assert result.next_review_date >= before + timedelta(days=1)


# ============================================================================
# Rounding
# ============================================================================


@pytest.mark.parametrize(
    "value,expected",
    [
        (12.5, 13),
        (4.5, 5),
        (2.5, 3),
        (14.9, 15),
        (15.4, 15),
        (0.0, 0),
    ],
)
def test_round_half_away_from_zero(value: float, expected: int) -> None:
    assert round_half_away_from_zero(value) == expected


def test_interval_rounds_half_up_not_to_even() -> None:
    # 5 * 2.5 = 12.5; banker's rounding would give 12
    assert next_interval(5, 2.5, 2, 4) == 13
    # 3 * 1.5 = 4.5; banker's rounding would give 4
    assert next_interval(3, 1.5, 2, 4) == 5


def test_next_ease_factor_matches_formula() -> None:
    for quality in range(6):
        assert next_ease_factor(2.5, quality) == max(MIN_EASE_FACTOR, expected_ease(2.5, quality))


# ============================================================================
# Validation
# ============================================================================


@pytest.mark.parametrize("quality", [-1, 6, 100])
def test_out_of_range_quality_rejected(quality: int) -> None:
    with pytest.raises(ValidationError) as exc_info:
        compute_next_state(make_state(NOW), quality, NOW)

    assert exc_info.value.details == {"quality": quality}


@pytest.mark.parametrize("quality", [3.5, "4", None, True])
def test_non_integer_quality_rejected(quality) -> None:
    with pytest.raises(ValidationError):
        compute_next_state(make_state(NOW), quality, NOW)


def test_negative_interval_rejected() -> None:
    with pytest.raises(ValidationError, match="Interval"):
        compute_next_state(make_state(NOW, interval=-1), 4, NOW)


def test_negative_repetitions_rejected() -> None:
    with pytest.raises(ValidationError, match="Repetitions"):
        compute_next_state(make_state(NOW, repetitions=-2), 4, NOW)


@pytest.mark.parametrize("ease", [math.nan, math.inf])
def test_non_finite_ease_rejected(ease: float) -> None:
    with pytest.raises(ValidationError, match="Ease factor"):
        compute_next_state(make_state(NOW, ease_factor=ease), 4, NOW)
