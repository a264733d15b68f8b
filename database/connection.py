"""SQLite engine and session handling for the campus advisor store.

The database file lives at ``data/campus_advisor.db`` unless ``DATABASE_PATH``
points elsewhere (tests point it at a temp file and reload this module).
"""
import logging
import os
from pathlib import Path
from contextlib import contextmanager
from typing import Generator

from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker, Session

from .models import Base

logger = logging.getLogger("campus_advisor.db")

DEFAULT_DB_PATH = Path(__file__).parent.parent / "data" / "campus_advisor.db"


def _resolve_db_path() -> Path:
    override = os.getenv("DATABASE_PATH")
    path = Path(override) if override else DEFAULT_DB_PATH
    path.parent.mkdir(parents=True, exist_ok=True)
    return path


DB_PATH = _resolve_db_path()
DATABASE_URL = f"sqlite:///{DB_PATH}"

engine = create_engine(
    DATABASE_URL,
    echo=os.getenv("SQL_ECHO", "").lower() in ("1", "true", "yes"),
    # Sessions are opened from FastAPI's threadpool
    connect_args={"check_same_thread": False},
)


@event.listens_for(engine, "connect")
def _enable_foreign_keys(dbapi_connection, connection_record) -> None:
    # Turns, advice logs and profiles must belong to an existing user
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db() -> None:
    """Create any missing tables."""
    Base.metadata.create_all(bind=engine)
    logger.info("Database initialized at: %s", DB_PATH)


@contextmanager
def get_db_session() -> Generator[Session, None, None]:
    """Session that commits on success and rolls back on any error.

    Usage:
        with get_db_session() as db:
            user = db.query(User).filter_by(id=user_id).first()
    """
    session = SessionLocal()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def get_db_path() -> Path:
    return DB_PATH
