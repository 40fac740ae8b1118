"""
SM-2 review scheduler.

Given a question's current scheduling state and a 0-5 quality grade,
computes the next interval, ease factor, repetition streak and due date.

Quality grades:
  0 - Complete blackout
  1 - Incorrect, remembered upon seeing answer
  2 - Incorrect, but easy to recall once seen
  3 - Correct with serious difficulty
  4 - Correct with some hesitation
  5 - Perfect recall

Grades below 3 are lapses: the streak resets and the question comes back
the next day. The ease factor is always updated from the grade, and never
falls below 1.3.
"""

from datetime import UTC, datetime, timedelta
from decimal import ROUND_HALF_UP, Decimal

from recallguard.learning_engine.constants import (
    FIRST_INTERVAL_DAYS,
    MIN_EASE_FACTOR,
    PASSING_QUALITY,
    SECOND_INTERVAL_DAYS,
)
from recallguard.learning_engine.srs.state import (
    SchedulingState,
    validate_quality,
    validate_state,
)


def round_half_away_from_zero(value: float) -> int:
    """Round to the nearest integer, ties away from zero (2.5 -> 3, not 2)."""
    # Decimal(float) is exact, so no error is introduced before rounding
    return int(Decimal(value).to_integral_value(rounding=ROUND_HALF_UP))


def next_interval(interval: int, ease_factor: float, repetitions: int, quality: int) -> int:
    """Interval in days after a review with the given grade."""
    if quality < PASSING_QUALITY:
        return FIRST_INTERVAL_DAYS
    if repetitions == 0:
        return FIRST_INTERVAL_DAYS
    if repetitions == 1:
        return SECOND_INTERVAL_DAYS
    return round_half_away_from_zero(interval * ease_factor)


def next_ease_factor(ease_factor: float, quality: int) -> float:
    """
    SM-2 ease update: EF' = EF + (0.1 - (5-q) * (0.08 + (5-q) * 0.02)), floor 1.3.

    Float results depend on the evaluation order; keep it as written.
    """
    new_ease = ease_factor + (0.1 - (5 - quality) * (0.08 + (5 - quality) * 0.02))
    if new_ease < MIN_EASE_FACTOR:
        new_ease = MIN_EASE_FACTOR
    return new_ease


def compute_next_state(
    state: SchedulingState,
    quality: int,
    now: datetime | None = None,
) -> SchedulingState:
    """
    Compute the scheduling state that follows a review.

    Pure: the input state is not modified and nothing is persisted.

    Args:
        state: Current scheduling state
        quality: Review grade, an integer in [0, 5]
        now: Evaluation time (defaults to the current UTC time)

    Returns:
        New SchedulingState with next_review_date = now + interval days

    Raises:
        ValidationError: quality out of range or malformed state
    """
    validate_quality(quality)
    validate_state(state)

    if now is None:
        now = datetime.now(UTC)

    interval = next_interval(state.interval, state.ease_factor, state.repetitions, quality)
    repetitions = state.repetitions + 1 if quality >= PASSING_QUALITY else 0

    return SchedulingState(
        interval=interval,
        ease_factor=next_ease_factor(state.ease_factor, quality),
        repetitions=repetitions,
        next_review_date=now + timedelta(days=interval),
    )
