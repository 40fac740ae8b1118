"""Pytest configuration and shared fixtures."""

import os

# Settings are read at import time; configure before importing the app
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["ENV"] = "test"
os.environ["JWT_SECRET"] = "test-secret-for-recallguard-tests-0123456789"
os.environ.pop("LLM_API_KEY", None)

from collections.abc import Generator
from datetime import UTC, datetime

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

import recallguard.models  # noqa: F401
from recallguard.core.security import create_access_token
from recallguard.db.base import Base
from recallguard.db.engine import engine
from recallguard.db.session import SessionLocal, get_db
from recallguard.ingestion.llm_client import NullQuestionGenerator, get_question_generator
from recallguard.learning_engine.srs.memory_repository import (
    InMemoryNoteRepository,
    InMemoryQuestionRepository,
)
from recallguard.main import app

TEST_USER_ID = 1
OTHER_USER_ID = 2


@pytest.fixture
def now() -> datetime:
    """Fixed evaluation time."""
    return datetime(2024, 3, 1, 9, 0, tzinfo=UTC)


@pytest.fixture(scope="function")
def db() -> Generator[Session, None, None]:
    """Fresh in-memory SQLite schema per test."""
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def question_repo() -> InMemoryQuestionRepository:
    return InMemoryQuestionRepository()


@pytest.fixture
def note_repo() -> InMemoryNoteRepository:
    return InMemoryNoteRepository()


@pytest.fixture
def client(db) -> Generator[TestClient, None, None]:
    """FastAPI test client with database and generator overrides."""

    def override_get_db():
        try:
            yield db
        finally:
            pass  # Don't close the session, it's managed by the db fixture

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_question_generator] = NullQuestionGenerator
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def auth_headers() -> dict[str, str]:
    """Bearer headers for the primary test user."""
    return {"Authorization": f"Bearer {create_access_token(TEST_USER_ID)}"}


@pytest.fixture
def other_auth_headers() -> dict[str, str]:
    """Bearer headers for a second user."""
    return {"Authorization": f"Bearer {create_access_token(OTHER_USER_ID)}"}
