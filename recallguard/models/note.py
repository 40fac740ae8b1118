"""Note model."""

from datetime import UTC, datetime

from sqlalchemy import DateTime, Index, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from recallguard.db.base import Base


class NoteModel(Base):
    """Free-text note a user submitted for question generation."""

    __tablename__ = "notes"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(Integer, nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=lambda: datetime.now(UTC)
    )

    questions = relationship("QuestionModel", back_populates="note", cascade="all, delete-orphan")

    __table_args__ = (Index("idx_notes_user_created", "user_id", "created_at"),)
