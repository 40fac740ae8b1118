"""SQLAlchemy-backed repositories.

Repositories flush but never commit; the request handler owns the
transaction.
"""

from datetime import UTC, datetime

from sqlalchemy import and_, select, update
from sqlalchemy.orm import Session

from recallguard.learning_engine.srs.errors import ConcurrentUpdateError, NotFoundError
from recallguard.learning_engine.srs.repository import NoteRepository, QuestionRepository
from recallguard.learning_engine.srs.state import (
    NewQuestion,
    Note,
    Question,
    SchedulingState,
    validate_new_state,
)
from recallguard.models.note import NoteModel
from recallguard.models.question import QuestionModel


def _as_utc(value: datetime) -> datetime:
    """SQLite drops tzinfo on the way back; stored values are always UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def question_from_row(row: QuestionModel) -> Question:
    """Map an ORM row to the engine's Question record."""
    return Question(
        id=row.id,
        user_id=row.user_id,
        note_id=row.note_id,
        question_text=row.question_text,
        answer_text=row.answer_text,
        state=SchedulingState(
            interval=row.interval,
            ease_factor=row.ease_factor,
            repetitions=row.repetitions,
            next_review_date=_as_utc(row.next_review_date),
        ),
        version=row.version,
    )


def note_from_row(row: NoteModel) -> Note:
    return Note(
        id=row.id,
        user_id=row.user_id,
        content=row.content,
        created_at=_as_utc(row.created_at),
    )


class SqlQuestionRepository(QuestionRepository):
    """Question repository over a SQLAlchemy session."""

    def __init__(self, db: Session):
        self.db = db

    def create_questions(self, items: list[NewQuestion], now: datetime) -> list[Question]:
        if not items:
            return []

        # Validate the whole batch before inserting anything
        states = [validate_new_state(item.state or SchedulingState.initial(now)) for item in items]

        rows = []
        for item, state in zip(items, states):
            row = QuestionModel(
                user_id=item.user_id,
                note_id=item.note_id,
                question_text=item.question_text,
                answer_text=item.answer_text,
                interval=state.interval,
                ease_factor=state.ease_factor,
                repetitions=state.repetitions,
                next_review_date=state.next_review_date,
                version=1,
            )
            self.db.add(row)
            rows.append(row)
        self.db.flush()

        return [question_from_row(row) for row in rows]

    def get_question(self, user_id: int, question_id: int) -> Question | None:
        result = self.db.execute(
            select(QuestionModel)
            .where(
                and_(
                    QuestionModel.id == question_id,
                    QuestionModel.user_id == user_id,
                )
            )
            .execution_options(populate_existing=True)
        )
        row = result.scalar_one_or_none()
        return question_from_row(row) if row else None

    def update_question_review(
        self,
        user_id: int,
        question_id: int,
        new_state: SchedulingState,
        expected_version: int | None = None,
    ) -> Question:
        conditions = [
            QuestionModel.id == question_id,
            QuestionModel.user_id == user_id,
        ]
        if expected_version is not None:
            conditions.append(QuestionModel.version == expected_version)

        # Single conditional UPDATE: the version check and the write are atomic
        stmt = (
            update(QuestionModel)
            .where(and_(*conditions))
            .values(
                {
                    QuestionModel.interval: new_state.interval,
                    QuestionModel.ease_factor: new_state.ease_factor,
                    QuestionModel.repetitions: new_state.repetitions,
                    QuestionModel.next_review_date: new_state.next_review_date,
                    QuestionModel.version: QuestionModel.version + 1,
                }
            )
            .execution_options(synchronize_session=False)
        )
        result = self.db.execute(stmt)
        self.db.flush()

        if result.rowcount == 0:
            if self.get_question(user_id, question_id) is None:
                raise NotFoundError(question_id, user_id)
            raise ConcurrentUpdateError(question_id, expected_version)

        updated = self.get_question(user_id, question_id)
        if updated is None:
            # Deleted between our UPDATE and re-read
            raise NotFoundError(question_id, user_id)
        return updated

    def list_due_candidates(self, user_id: int, now: datetime) -> list[Question]:
        result = self.db.execute(
            select(QuestionModel)
            .where(
                and_(
                    QuestionModel.user_id == user_id,
                    QuestionModel.next_review_date <= now,
                )
            )
            .order_by(QuestionModel.next_review_date.asc(), QuestionModel.id.asc())
        )
        return [question_from_row(row) for row in result.scalars().all()]

    def list_all(self, user_id: int) -> list[Question]:
        result = self.db.execute(
            select(QuestionModel)
            .where(QuestionModel.user_id == user_id)
            .order_by(QuestionModel.id.asc())
        )
        return [question_from_row(row) for row in result.scalars().all()]


class SqlNoteRepository(NoteRepository):
    """Note repository over a SQLAlchemy session."""

    def __init__(self, db: Session):
        self.db = db

    def create_note(self, user_id: int, content: str, now: datetime) -> Note:
        row = NoteModel(user_id=user_id, content=content, created_at=now)
        self.db.add(row)
        self.db.flush()
        return note_from_row(row)

    def list_notes(self, user_id: int) -> list[Note]:
        result = self.db.execute(
            select(NoteModel)
            .where(NoteModel.user_id == user_id)
            .order_by(NoteModel.created_at.asc(), NoteModel.id.asc())
        )
        return [note_from_row(row) for row in result.scalars().all()]
