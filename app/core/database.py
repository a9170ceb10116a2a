"""Database connection and session management."""

import logging
from collections.abc import Generator

from sqlalchemy import create_engine, text
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from app.core.config import settings
from app.core.errors import InternalError, ValidationError

logger = logging.getLogger(__name__)

_connect_args = (
    {"check_same_thread": False} if settings.DATABASE_URL.startswith("sqlite") else {}
)

engine = create_engine(
    settings.DATABASE_URL,
    pool_pre_ping=True,
    echo=settings.DEBUG,
    connect_args=_connect_args,
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Generator[Session, None, None]:
    """Dependency that yields a DB session and closes it when done."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def check_db_connected(db: Session) -> bool:
    """Run a trivial query to verify the database is reachable."""
    try:
        db.execute(text("SELECT 1"))
        return True
    except Exception:
        return False


def commit_or_raise(db: Session, failure_message: str, duplicate_message: str | None = None) -> None:
    """
    Commit the session; on failure roll back and raise an application error.

    Unique-constraint violations become ValidationError(duplicate_message) when one is given;
    every other database error is logged and surfaced as a generic InternalError.
    """
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        if duplicate_message is not None:
            raise ValidationError(duplicate_message) from e
        logger.exception("%s: integrity error", failure_message)
        raise InternalError(failure_message) from e
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("%s: database error", failure_message)
        raise InternalError(failure_message) from e
