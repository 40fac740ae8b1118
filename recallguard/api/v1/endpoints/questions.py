"""Question endpoints: daily question, reviews, memory status."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from recallguard.core.app_exceptions import app_error_from_scheduling_error
from recallguard.core.config import settings
from recallguard.core.dependencies import CurrentUserId, get_question_repository
from recallguard.db.session import get_db
from recallguard.learning_engine.srs.errors import SchedulingError
from recallguard.learning_engine.srs.repository import QuestionRepository
from recallguard.learning_engine.srs.service import (
    get_daily_question,
    get_memory_status,
    submit_review,
)
from recallguard.schemas.question import MemoryStatusOut, QuestionOut, ReviewRequest

router = APIRouter()


@router.get("/questions/daily", response_model=QuestionOut | None)
def daily_question(
    user_id: CurrentUserId,
    repo: QuestionRepository = Depends(get_question_repository),
):
    """
    Get the next question due for review.

    Returns the most overdue question (lowest id on ties), or null when
    nothing is due.
    """
    question = get_daily_question(repo, user_id)
    if question is None:
        return None
    return QuestionOut.model_validate(question)


@router.post("/questions/{question_id}/review", response_model=QuestionOut)
def review_question(
    question_id: int,
    payload: ReviewRequest,
    user_id: CurrentUserId,
    db: Session = Depends(get_db),
    repo: QuestionRepository = Depends(get_question_repository),
):
    """
    Submit a recall grade for a question.

    Errors:
    - 400 VALIDATION_ERROR: quality outside 0-5
    - 404 NOT_FOUND: question missing or owned by another user
    - 409 CONFLICT: concurrent reviews kept colliding
    """
    try:
        question = submit_review(
            repo,
            user_id,
            question_id,
            payload.quality,
            max_attempts=settings.REVIEW_CONFLICT_RETRIES,
        )
    except SchedulingError as e:
        db.rollback()
        raise app_error_from_scheduling_error(e) from e

    db.commit()
    return QuestionOut.model_validate(question)


@router.get("/questions/status", response_model=MemoryStatusOut)
def memory_status(
    user_id: CurrentUserId,
    repo: QuestionRepository = Depends(get_question_repository),
):
    """Count the user's questions as safe (not yet due) or unstable (due)."""
    return MemoryStatusOut.model_validate(get_memory_status(repo, user_id))
