"""Due-question selection: which question to show next."""

from collections.abc import Iterable
from datetime import datetime

from recallguard.learning_engine.srs.state import Question


def due_sort_key(question: Question) -> tuple[datetime, int]:
    """Most overdue first; lowest id breaks ties."""
    return (question.next_review_date, question.id)


def select_due_question(questions: Iterable[Question], now: datetime) -> Question | None:
    """
    Pick the next question to present.

    Among questions due at or before ``now``, returns the one with the
    earliest next_review_date (lowest id on ties). Returns None when
    nothing is due, which callers treat as "caught up".
    """
    due = [q for q in questions if q.state.is_due(now)]
    if not due:
        return None
    return min(due, key=due_sort_key)
