"""Database session management.

Repositories flush; the request handler commits. A request that fails
before committing is rolled back here.
"""

from collections.abc import Generator

from sqlalchemy.orm import Session, sessionmaker

from recallguard.db.engine import engine

SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
    expire_on_commit=False,  # Domain records are built from rows after commit
)


def get_db() -> Generator[Session, None, None]:
    """Dependency: one session per request."""
    db = SessionLocal()
    try:
        yield db
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()
