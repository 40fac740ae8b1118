"""Tests for memory status aggregation."""

from datetime import UTC, datetime, timedelta

from recallguard.learning_engine.srs.state import MemoryStatus
from recallguard.learning_engine.srs.status import compute_status
from tests.helpers.seed import make_question

NOW = datetime(2024, 3, 1, 9, 0, tzinfo=UTC)


def test_empty_set_is_all_zero() -> None:
    status = compute_status([], NOW)

    assert status == MemoryStatus(safe=0, unstable=0)
    assert status.total == 0


def test_partitions_due_and_future_questions() -> None:
    questions = [
        make_question(1, NOW - timedelta(days=2)),
        make_question(2, NOW + timedelta(days=1)),
        make_question(3, NOW + timedelta(days=10)),
        make_question(4, NOW - timedelta(minutes=1)),
        make_question(5, NOW + timedelta(days=3)),
    ]

    status = compute_status(questions, NOW)

    assert status.safe == 3
    assert status.unstable == 2
    assert status.total == len(questions)


def test_question_due_exactly_now_is_unstable() -> None:
    status = compute_status([make_question(1, NOW)], NOW)

    assert status == MemoryStatus(safe=0, unstable=1)


def test_repeated_calls_agree() -> None:
    questions = [make_question(i, NOW + timedelta(days=i - 2)) for i in range(5)]

    assert compute_status(questions, NOW) == compute_status(questions, NOW)
