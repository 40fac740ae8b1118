"""Note endpoints: submit notes for question generation and list them."""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from recallguard.core.dependencies import (
    CurrentUserId,
    get_note_repository,
    get_question_repository,
)
from recallguard.db.session import get_db
from recallguard.ingestion.llm_client import QuestionGenerator, get_question_generator
from recallguard.ingestion.service import ingest_note
from recallguard.learning_engine.srs.repository import NoteRepository, QuestionRepository
from recallguard.schemas.note import NoteCreate, NoteCreatedOut, NoteOut

router = APIRouter()


# ============================================================================
# Endpoints
# ============================================================================


@router.post("/notes", response_model=NoteCreatedOut, status_code=status.HTTP_201_CREATED)
def create_note(
    payload: NoteCreate,
    user_id: CurrentUserId,
    db: Session = Depends(get_db),
    notes: NoteRepository = Depends(get_note_repository),
    questions: QuestionRepository = Depends(get_question_repository),
    generator: QuestionGenerator = Depends(get_question_generator),
):
    """
    Store a note and generate its recall questions.

    Question generation never fails the request: when the generator is
    unavailable or returns nothing, a single fallback question is created.
    """
    result = ingest_note(notes, questions, generator, user_id, payload.content)
    db.commit()

    return NoteCreatedOut(
        id=result.note.id,
        user_id=result.note.user_id,
        content=result.note.content,
        created_at=result.note.created_at,
        questions_created=len(result.questions),
    )


@router.get("/notes", response_model=list[NoteOut])
def list_notes(
    user_id: CurrentUserId,
    notes: NoteRepository = Depends(get_note_repository),
):
    """List the current user's notes, oldest first."""
    return [NoteOut.model_validate(note) for note in notes.list_notes(user_id)]
