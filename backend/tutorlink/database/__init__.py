"""
Database engine, session factory, and metadata shared across the application.
"""

from __future__ import annotations

from datetime import datetime
import logging
from typing import Any, Callable, Generator

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeMeta, Session, declarative_base, sessionmaker

from tutorlink.core.config import settings

logger = logging.getLogger(__name__)

_DEFAULT_POOL_KWARGS: dict[str, Any] = {
    "pool_size": 5,
    "max_overflow": 10,
    "pool_timeout": 5,
    "pool_recycle": 300,
    "pool_pre_ping": True,
}


def _is_sqlite(db_url: str) -> bool:
    return db_url.startswith("sqlite")


def _build_engine_kwargs(db_url: str) -> dict[str, Any]:
    """Engine options for the configured backend."""

    if _is_sqlite(db_url):
        # Sessions are used from worker threads (asyncio.to_thread, websocket handlers).
        return {"connect_args": {"check_same_thread": False}, "echo": settings.sql_echo}

    kwargs = dict(_DEFAULT_POOL_KWARGS)
    kwargs["connect_args"] = {"application_name": "tutorlink_api"}
    kwargs["echo"] = settings.sql_echo
    return kwargs


def create_db_engine(db_url: str) -> Engine:
    """Create an engine; SQLite connections get foreign key enforcement."""
    new_engine = create_engine(db_url, **_build_engine_kwargs(db_url))
    if _is_sqlite(db_url):
        event.listen(new_engine, "connect", _enable_sqlite_foreign_keys)
    return new_engine


def _enable_sqlite_foreign_keys(dbapi_connection: Any, connection_record: Any) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


db_url = settings.get_database_url()
engine: Engine = create_db_engine(db_url)


@event.listens_for(engine, "connect")
def receive_connect(dbapi_connection: Any, connection_record: Any) -> None:
    connection_record.info["connect_time"] = datetime.now()
    logger.debug("Database connection established")


SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine, expire_on_commit=False)

Base: DeclarativeMeta = declarative_base()


def get_db() -> Generator[Session, None, None]:
    """Get database session with proper cleanup."""
    db = SessionLocal()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


def get_session_factory() -> Callable[[], Session]:
    """
    Session factory for code that outlives a single request.

    The websocket gateway opens one short-lived session per client frame.
    Overridable through FastAPI dependency overrides in tests.
    """
    return SessionLocal
