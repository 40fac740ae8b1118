"""
Review scheduling engine (SM-2).

Quick start:
    from recallguard.learning_engine.srs import (
        SchedulingState, compute_next_state, select_due_question, compute_status,
    )

    state = SchedulingState.initial(now)
    state = compute_next_state(state, quality=4, now=now)
"""

from recallguard.learning_engine.srs.errors import (
    ConcurrentUpdateError,
    NotFoundError,
    SchedulingError,
    ValidationError,
)
from recallguard.learning_engine.srs.repository import NoteRepository, QuestionRepository
from recallguard.learning_engine.srs.selector import select_due_question
from recallguard.learning_engine.srs.sm2 import compute_next_state
from recallguard.learning_engine.srs.state import (
    MemoryStatus,
    NewQuestion,
    Note,
    Question,
    SchedulingState,
    validate_new_state,
    validate_quality,
    validate_state,
)
from recallguard.learning_engine.srs.status import compute_status

__all__ = [
    # Core algorithm
    "compute_next_state",
    "select_due_question",
    "compute_status",
    # Data model
    "SchedulingState",
    "Question",
    "NewQuestion",
    "Note",
    "MemoryStatus",
    "validate_new_state",
    "validate_quality",
    "validate_state",
    # Repositories
    "QuestionRepository",
    "NoteRepository",
    # Errors
    "SchedulingError",
    "ValidationError",
    "NotFoundError",
    "ConcurrentUpdateError",
]
