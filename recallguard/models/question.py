"""Question model with SM-2 scheduling state."""

from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, Float, ForeignKey, Index, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from recallguard.db.base import Base
from recallguard.learning_engine.constants import (
    DEFAULT_EASE_FACTOR,
    DEFAULT_INTERVAL_DAYS,
    MIN_EASE_FACTOR,
)


class QuestionModel(Base):
    """
    Recall question derived from a note.

    Scheduling columns are written only by review submission; ``version``
    increments on every such write for optimistic concurrency.
    """

    __tablename__ = "questions"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(Integer, nullable=False)
    note_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("notes.id", ondelete="CASCADE"), nullable=False
    )
    question_text: Mapped[str] = mapped_column(Text, nullable=False)
    answer_text: Mapped[str] = mapped_column(Text, nullable=False)

    # Scheduling state
    interval: Mapped[int] = mapped_column(
        "interval_days", Integer, nullable=False, default=DEFAULT_INTERVAL_DAYS
    )
    ease_factor: Mapped[float] = mapped_column(Float, nullable=False, default=DEFAULT_EASE_FACTOR)
    repetitions: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    next_review_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    version: Mapped[int] = mapped_column(Integer, nullable=False, default=1)

    note = relationship("NoteModel", back_populates="questions")

    __table_args__ = (
        CheckConstraint("interval_days >= 0", name="ck_questions_interval_non_negative"),
        CheckConstraint("repetitions >= 0", name="ck_questions_repetitions_non_negative"),
        CheckConstraint(f"ease_factor >= {MIN_EASE_FACTOR}", name="ck_questions_ease_factor_floor"),
        Index("idx_questions_user_due", "user_id", "next_review_date"),
        Index("idx_questions_note", "note_id"),
    )
