"""Memory status aggregation over a user's question set."""

from collections.abc import Iterable
from datetime import datetime

from recallguard.learning_engine.srs.state import MemoryStatus, Question


def compute_status(questions: Iterable[Question], now: datetime) -> MemoryStatus:
    """
    Partition questions into safe (not yet due) and unstable (due).

    A question due exactly at ``now`` is unstable, matching the selector.
    """
    safe = 0
    unstable = 0
    for question in questions:
        if question.state.is_due(now):
            unstable += 1
        else:
            safe += 1
    return MemoryStatus(safe=safe, unstable=unstable)
