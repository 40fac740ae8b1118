"""Seed a demo note for development."""

from datetime import UTC, datetime

from sqlalchemy.orm import Session, sessionmaker

from recallguard.core.config import settings
from recallguard.core.logging import get_logger
from recallguard.db.session import SessionLocal
from recallguard.learning_engine.srs.sql_repository import SqlNoteRepository, SqlQuestionRepository
from recallguard.learning_engine.srs.state import NewQuestion

logger = get_logger(__name__)

DEMO_NOTE_CONTENT = (
    "The mitochondria is the powerhouse of the cell. It generates most of the "
    "chemical energy needed to power the cell's biochemical reactions."
)
DEMO_QUESTION_TEXT = "What is the function of the mitochondria?"
DEMO_ANSWER_TEXT = (
    "It generates most of the chemical energy needed to power the cell's biochemical reactions."
)


def seed_demo_notes(session_factory: sessionmaker[Session] | None = None) -> bool:
    """
    Seed the demo note if enabled in dev environment.

    Returns True when a note was created.
    """
    if settings.ENV != "dev" or not settings.SEED_DEMO_NOTES:
        logger.info("Demo note seeding skipped (ENV != dev or SEED_DEMO_NOTES=false)")
        return False

    user_id = settings.SEED_DEMO_USER_ID
    db = (session_factory or SessionLocal)()
    try:
        notes = SqlNoteRepository(db)
        if notes.list_notes(user_id):
            logger.info("Demo user already has notes, skipping seed", extra={"user_id": user_id})
            return False

        now = datetime.now(UTC)
        note = notes.create_note(user_id, DEMO_NOTE_CONTENT, now)
        SqlQuestionRepository(db).create_questions(
            [
                NewQuestion(
                    note_id=note.id,
                    user_id=user_id,
                    question_text=DEMO_QUESTION_TEXT,
                    answer_text=DEMO_ANSWER_TEXT,
                )
            ],
            now,
        )
        db.commit()
        logger.info("Demo note seeded", extra={"user_id": user_id, "note_id": note.id})
        return True

    except Exception as e:
        db.rollback()
        logger.error(f"Error seeding demo note: {e}", exc_info=True)
        raise
    finally:
        db.close()
