"""API tests for the daily question, reviews and memory status."""

from datetime import UTC, datetime, timedelta

from fastapi.testclient import TestClient

from recallguard.core.config import settings
from recallguard.learning_engine.srs.sql_repository import SqlNoteRepository, SqlQuestionRepository
from tests.helpers.seed import create_test_questions

PREFIX = settings.API_PREFIX
USER_ID = 1


def seed(db, offsets, user_id=USER_ID):
    now = datetime.now(UTC)
    created = create_test_questions(
        SqlNoteRepository(db), SqlQuestionRepository(db), user_id, now, offsets
    )
    db.commit()
    return created


def test_daily_question_null_when_nothing_exists(client: TestClient, auth_headers) -> None:
    response = client.get(f"{PREFIX}/questions/daily", headers=auth_headers)

    assert response.status_code == 200
    assert response.json() is None


def test_daily_question_is_most_overdue(client: TestClient, db, auth_headers) -> None:
    created = seed(db, [-1, -5, 2])

    response = client.get(f"{PREFIX}/questions/daily", headers=auth_headers)

    assert response.status_code == 200
    data = response.json()
    assert data["id"] == created[1].id
    assert data["interval"] == 1
    assert data["ease_factor"] == 2.5
    assert data["repetitions"] == 0
    assert set(data) == {
        "id",
        "note_id",
        "question_text",
        "answer_text",
        "interval",
        "ease_factor",
        "repetitions",
        "next_review_date",
    }


def test_daily_question_ignores_other_users(client: TestClient, db, auth_headers) -> None:
    seed(db, [-3], user_id=2)

    assert client.get(f"{PREFIX}/questions/daily", headers=auth_headers).json() is None


def test_review_updates_schedule(client: TestClient, db, auth_headers) -> None:
    [question] = seed(db, [-1])

    response = client.post(
        f"{PREFIX}/questions/{question.id}/review", json={"quality": 5}, headers=auth_headers
    )

    assert response.status_code == 200
    data = response.json()
    assert data["id"] == question.id
    assert data["interval"] == 1
    assert data["repetitions"] == 1
    assert abs(data["ease_factor"] - 2.6) < 1e-9
    next_review = datetime.fromisoformat(data["next_review_date"])
    assert next_review > datetime.now(UTC) + timedelta(hours=23)

    # Reviewed question is no longer due
    assert client.get(f"{PREFIX}/questions/daily", headers=auth_headers).json() is None
    status = client.get(f"{PREFIX}/questions/status", headers=auth_headers).json()
    assert status == {"safe": 1, "unstable": 0}


def test_failed_review_returns_next_day(client: TestClient, db, auth_headers) -> None:
    [question] = seed(db, [-1])
    client.post(f"{PREFIX}/questions/{question.id}/review", json={"quality": 5}, headers=auth_headers)

    response = client.post(
        f"{PREFIX}/questions/{question.id}/review", json={"quality": 1}, headers=auth_headers
    )

    data = response.json()
    assert data["repetitions"] == 0
    assert data["interval"] == 1
    assert data["ease_factor"] >= 1.3


def test_review_quality_out_of_range(client: TestClient, db, auth_headers) -> None:
    [question] = seed(db, [-1])

    response = client.post(
        f"{PREFIX}/questions/{question.id}/review", json={"quality": 6}, headers=auth_headers
    )

    assert response.status_code == 400
    data = response.json()
    assert data["error_code"] == "VALIDATION_ERROR"
    assert data["details"] == {"quality": 6}
    assert data["request_id"]


def test_review_quality_must_be_an_integer(client: TestClient, db, auth_headers) -> None:
    [question] = seed(db, [-1])

    response = client.post(
        f"{PREFIX}/questions/{question.id}/review", json={"quality": "great"}, headers=auth_headers
    )

    assert response.status_code == 422


def test_review_unknown_question(client: TestClient, auth_headers) -> None:
    response = client.post(
        f"{PREFIX}/questions/9999/review", json={"quality": 4}, headers=auth_headers
    )

    assert response.status_code == 404
    assert response.json()["error_code"] == "NOT_FOUND"


def test_review_other_users_question_is_not_found(
    client: TestClient, db, other_auth_headers
) -> None:
    [question] = seed(db, [-1])

    response = client.post(
        f"{PREFIX}/questions/{question.id}/review", json={"quality": 4}, headers=other_auth_headers
    )

    assert response.status_code == 404


def test_memory_status(client: TestClient, db, auth_headers) -> None:
    seed(db, [-2, -1, 1, 3, 7])

    response = client.get(f"{PREFIX}/questions/status", headers=auth_headers)

    assert response.status_code == 200
    assert response.json() == {"safe": 3, "unstable": 2}
