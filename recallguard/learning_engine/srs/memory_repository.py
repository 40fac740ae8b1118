"""In-process repositories for tests and local experiments."""

import threading
from datetime import datetime

from recallguard.learning_engine.srs.errors import ConcurrentUpdateError, NotFoundError
from recallguard.learning_engine.srs.repository import NoteRepository, QuestionRepository
from recallguard.learning_engine.srs.selector import due_sort_key
from recallguard.learning_engine.srs.state import (
    NewQuestion,
    Note,
    Question,
    SchedulingState,
    validate_new_state,
)


class InMemoryQuestionRepository(QuestionRepository):
    """Dict-backed question store guarded by a lock."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._questions: dict[int, Question] = {}
        self._next_id = 1

    def create_questions(self, items: list[NewQuestion], now: datetime) -> list[Question]:
        # Validate the whole batch before storing anything
        states = [validate_new_state(item.state or SchedulingState.initial(now)) for item in items]
        created = []
        with self._lock:
            for item, state in zip(items, states):
                question = Question(
                    id=self._next_id,
                    user_id=item.user_id,
                    note_id=item.note_id,
                    question_text=item.question_text,
                    answer_text=item.answer_text,
                    state=state,
                )
                self._questions[question.id] = question
                self._next_id += 1
                created.append(question)
        return created

    def _get(self, user_id: int, question_id: int) -> Question | None:
        # Caller holds the lock
        question = self._questions.get(question_id)
        if question is None or question.user_id != user_id:
            return None
        return question

    def get_question(self, user_id: int, question_id: int) -> Question | None:
        with self._lock:
            return self._get(user_id, question_id)

    def update_question_review(
        self,
        user_id: int,
        question_id: int,
        new_state: SchedulingState,
        expected_version: int | None = None,
    ) -> Question:
        # Check-and-set under the lock so concurrent reviews cannot interleave
        with self._lock:
            current = self._get(user_id, question_id)
            if current is None:
                raise NotFoundError(question_id, user_id)
            if expected_version is not None and current.version != expected_version:
                raise ConcurrentUpdateError(question_id, expected_version)
            updated = current.with_state(new_state)
            self._questions[question_id] = updated
            return updated

    def list_due_candidates(self, user_id: int, now: datetime) -> list[Question]:
        due = [q for q in self.list_all(user_id) if q.state.is_due(now)]
        return sorted(due, key=due_sort_key)

    def list_all(self, user_id: int) -> list[Question]:
        with self._lock:
            return [q for q in self._questions.values() if q.user_id == user_id]


class InMemoryNoteRepository(NoteRepository):
    """List-backed note store."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._notes: list[Note] = []

    def create_note(self, user_id: int, content: str, now: datetime) -> Note:
        with self._lock:
            note = Note(id=len(self._notes) + 1, user_id=user_id, content=content, created_at=now)
            self._notes.append(note)
        return note

    def list_notes(self, user_id: int) -> list[Note]:
        with self._lock:
            notes = [n for n in self._notes if n.user_id == user_id]
        return sorted(notes, key=lambda n: (n.created_at, n.id))
