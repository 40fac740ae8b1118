"""Database models."""

# Import all models here so metadata.create_all sees them
from recallguard.models.note import NoteModel
from recallguard.models.question import QuestionModel

__all__ = [
    "NoteModel",
    "QuestionModel",
]
