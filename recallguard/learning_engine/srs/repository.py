"""Repository interfaces the scheduling engine depends on.

Every read and update is scoped by ``user_id``: a question owned by
another user behaves exactly like a missing one.
"""

from abc import ABC, abstractmethod
from datetime import datetime

from recallguard.learning_engine.srs.state import NewQuestion, Note, Question, SchedulingState


class QuestionRepository(ABC):
    """Storage for questions and their scheduling state."""

    @abstractmethod
    def create_questions(self, items: list[NewQuestion], now: datetime) -> list[Question]:
        """
        Insert questions.

        Items without a state get interval=1, ease_factor=2.5,
        repetitions=0, next_review_date=now.
        A supplied state must have ease_factor >= 1.3; nothing is stored
        when any item is invalid.

        Returns:
            The created questions, in input order

        Raises:
            ValidationError: an item carries a malformed or below-floor state
        """

    @abstractmethod
    def get_question(self, user_id: int, question_id: int) -> Question | None:
        """Get a question owned by user_id, or None."""

    @abstractmethod
    def update_question_review(
        self,
        user_id: int,
        question_id: int,
        new_state: SchedulingState,
        expected_version: int | None = None,
    ) -> Question:
        """
        Write a new scheduling state.

        When expected_version is given the write only applies if the stored
        version still matches.

        Raises:
            NotFoundError: question missing or not owned by user_id
            ConcurrentUpdateError: stored version differs from expected_version
        """

    @abstractmethod
    def list_due_candidates(self, user_id: int, now: datetime) -> list[Question]:
        """Questions due at or before now, earliest next_review_date first, then id."""

    @abstractmethod
    def list_all(self, user_id: int) -> list[Question]:
        """All questions owned by user_id."""


class NoteRepository(ABC):
    """Storage for user notes."""

    @abstractmethod
    def create_note(self, user_id: int, content: str, now: datetime) -> Note:
        """Insert a note and return it."""

    @abstractmethod
    def list_notes(self, user_id: int) -> list[Note]:
        """Notes owned by user_id, oldest first."""
