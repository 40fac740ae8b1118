"""Pydantic schemas for notes."""

from datetime import datetime

from pydantic import BaseModel, Field

from recallguard.core.config import settings

# ============================================================================
# Note Schemas
# ============================================================================


class NoteCreate(BaseModel):
    """Request to submit a note for ingestion."""

    content: str = Field(
        ...,
        min_length=1,
        max_length=settings.NOTE_MAX_CHARS,
        description="Free-text note to derive recall questions from",
    )


class NoteOut(BaseModel):
    """Note response."""

    id: int
    user_id: int
    content: str
    created_at: datetime

    class Config:
        from_attributes = True


class NoteCreatedOut(NoteOut):
    """Note response after ingestion."""

    questions_created: int
