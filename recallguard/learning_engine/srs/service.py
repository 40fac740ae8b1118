"""
Review service - connects the SM-2 engine to a question repository.

Main responsibilities:
- Submit a review: read state, compute next state, write it back atomically
- Pick today's question for a user
- Report the user's memory status
"""

import logging
from datetime import UTC, datetime

from recallguard.learning_engine.srs.errors import ConcurrentUpdateError, NotFoundError
from recallguard.learning_engine.srs.repository import QuestionRepository
from recallguard.learning_engine.srs.selector import select_due_question
from recallguard.learning_engine.srs.sm2 import compute_next_state
from recallguard.learning_engine.srs.state import MemoryStatus, Question, validate_quality
from recallguard.learning_engine.srs.status import compute_status

logger = logging.getLogger(__name__)

DEFAULT_CONFLICT_RETRIES = 3


def submit_review(
    repo: QuestionRepository,
    user_id: int,
    question_id: int,
    quality: int,
    now: datetime | None = None,
    max_attempts: int = DEFAULT_CONFLICT_RETRIES,
) -> Question:
    """
    Apply a review to a question owned by user_id.

    The write is conditional on the version that was read. If another
    review landed in between, the state is re-read and recomputed so no
    review is lost; after max_attempts conflicts the error propagates.

    Args:
        repo: Question repository
        user_id: Requesting user
        question_id: Question being reviewed
        quality: Review grade 0-5
        now: Evaluation time (defaults to current UTC time)
        max_attempts: Read-compute-write attempts before giving up

    Returns:
        The updated question

    Raises:
        ValidationError: quality out of range
        NotFoundError: question missing or owned by someone else
        ConcurrentUpdateError: still conflicting after max_attempts
    """
    # Validate before touching the repository
    validate_quality(quality)
    if now is None:
        now = datetime.now(UTC)

    last_conflict: ConcurrentUpdateError | None = None
    for attempt in range(1, max_attempts + 1):
        question = repo.get_question(user_id, question_id)
        if question is None:
            raise NotFoundError(question_id, user_id)

        new_state = compute_next_state(question.state, quality, now)
        try:
            updated = repo.update_question_review(
                user_id,
                question_id,
                new_state,
                expected_version=question.version,
            )
        except ConcurrentUpdateError as e:
            last_conflict = e
            logger.warning(
                "Review write conflict",
                extra={
                    "question_id": question_id,
                    "user_id": user_id,
                    "attempt": attempt,
                    "expected_version": question.version,
                },
            )
            continue

        logger.info(
            "Review recorded",
            extra={
                "question_id": question_id,
                "user_id": user_id,
                "quality": quality,
                "interval": updated.interval,
                "repetitions": updated.repetitions,
                "ease_factor": round(updated.ease_factor, 4),
            },
        )
        return updated

    raise last_conflict or ConcurrentUpdateError(question_id, None)


def get_daily_question(
    repo: QuestionRepository,
    user_id: int,
    now: datetime | None = None,
) -> Question | None:
    """Next question due for user_id, or None when caught up."""
    if now is None:
        now = datetime.now(UTC)
    return select_due_question(repo.list_due_candidates(user_id, now), now)


def get_memory_status(
    repo: QuestionRepository,
    user_id: int,
    now: datetime | None = None,
) -> MemoryStatus:
    """Safe/unstable split over all of user_id's questions."""
    if now is None:
        now = datetime.now(UTC)
    return compute_status(repo.list_all(user_id), now)
