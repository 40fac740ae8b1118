"""
Note ingestion - stores a note and derives its recall questions.

Every note yields at least one schedulable question: when generation
fails or returns nothing, a fallback question is created whose answer is
the note itself.
"""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime

from recallguard.ingestion.llm_client import QuestionGenerator
from recallguard.ingestion.parsing import GeneratedQuestion
from recallguard.learning_engine.constants import FALLBACK_QUESTION_TEXT
from recallguard.learning_engine.srs.repository import NoteRepository, QuestionRepository
from recallguard.learning_engine.srs.state import NewQuestion, Note, Question

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IngestionResult:
    """Note plus the questions created for it."""

    note: Note
    questions: list[Question]
    used_fallback: bool


def fallback_question(content: str) -> GeneratedQuestion:
    """Generic prompt whose answer is the note content."""
    return GeneratedQuestion(question_text=FALLBACK_QUESTION_TEXT, answer_text=content)


def generate_questions_safely(generator: QuestionGenerator, content: str) -> list[GeneratedQuestion]:
    """Run the generator, treating any failure as an empty result."""
    try:
        return list(generator.generate(content))
    except Exception as e:
        logger.warning(
            f"Question generation failed: {e}",
            extra={"generator": type(generator).__name__, "error_type": type(e).__name__},
        )
        return []


def ingest_note(
    notes: NoteRepository,
    questions: QuestionRepository,
    generator: QuestionGenerator,
    user_id: int,
    content: str,
    now: datetime | None = None,
) -> IngestionResult:
    """
    Create a note and its questions with initial scheduling state.

    Args:
        notes: Note repository
        questions: Question repository
        generator: Question generator (LLM or null)
        user_id: Owner of the note and questions
        content: Note text
        now: Creation time; new questions are due at this instant

    Returns:
        IngestionResult with at least one question
    """
    if now is None:
        now = datetime.now(UTC)

    note = notes.create_note(user_id, content, now)

    generated = generate_questions_safely(generator, content)
    used_fallback = not generated
    if used_fallback:
        logger.info("Using fallback question", extra={"note_id": note.id, "user_id": user_id})
        generated = [fallback_question(content)]

    created = questions.create_questions(
        [
            NewQuestion(
                note_id=note.id,
                user_id=user_id,
                question_text=g.question_text,
                answer_text=g.answer_text,
            )
            for g in generated
        ],
        now,
    )

    logger.info(
        "Note ingested",
        extra={
            "note_id": note.id,
            "user_id": user_id,
            "question_count": len(created),
            "used_fallback": used_fallback,
        },
    )
    return IngestionResult(note=note, questions=created, used_fallback=used_fallback)
