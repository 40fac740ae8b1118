"""Pydantic schemas for recall questions and reviews."""

from datetime import datetime

from pydantic import BaseModel, Field

# ============================================================================
# Question Schemas
# ============================================================================


class QuestionOut(BaseModel):
    """Question with its scheduling state."""

    id: int
    note_id: int
    question_text: str
    answer_text: str
    interval: int
    ease_factor: float
    repetitions: int
    next_review_date: datetime

    class Config:
        from_attributes = True


# ============================================================================
# Review Schemas
# ============================================================================


class ReviewRequest(BaseModel):
    """
    Review submission.

    Range checking happens in the scheduler so that an out-of-range grade
    is reported as a 400 VALIDATION_ERROR rather than a 422.
    """

    quality: int = Field(..., description="Recall quality grade 0-5 (3+ is a pass)")


class MemoryStatusOut(BaseModel):
    """Counts of safe (not yet due) and unstable (due) questions."""

    safe: int
    unstable: int

    class Config:
        from_attributes = True
