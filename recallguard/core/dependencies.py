"""FastAPI dependencies for authentication and repository wiring."""

from typing import Annotated

import jwt
from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.orm import Session

from recallguard.core.security import user_id_from_payload, verify_access_token
from recallguard.db.session import get_db
from recallguard.learning_engine.srs.repository import NoteRepository, QuestionRepository
from recallguard.learning_engine.srs.sql_repository import SqlNoteRepository, SqlQuestionRepository


def get_current_user_id(
    authorization: Annotated[str | None, Header()] = None,
) -> int:
    """Dependency to get the authenticated user id from a bearer JWT."""
    if not authorization:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authorization header missing",
        )

    # Extract token from "Bearer <token>"
    try:
        scheme, token = authorization.split()
        if scheme.lower() != "bearer":
            raise ValueError("Invalid authorization scheme")
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authorization header format. Expected: Bearer <token>",
        ) from None

    try:
        payload = verify_access_token(token)
        return user_id_from_payload(payload)
    except jwt.InvalidTokenError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Invalid or expired token: {str(e)}",
        ) from e


def get_question_repository(db: Session = Depends(get_db)) -> QuestionRepository:
    """Dependency: question repository bound to the request session."""
    return SqlQuestionRepository(db)


def get_note_repository(db: Session = Depends(get_db)) -> NoteRepository:
    """Dependency: note repository bound to the request session."""
    return SqlNoteRepository(db)


CurrentUserId = Annotated[int, Depends(get_current_user_id)]
