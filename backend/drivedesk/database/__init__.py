"""
Engine, session factory and declarative base.

Production runs against Postgres through a transaction pooler; local
development and the test suite run against SQLite.
"""

from __future__ import annotations

import logging
from typing import Any, Generator

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeMeta, Session, declarative_base, sessionmaker

from drivedesk.core.config import settings

logger = logging.getLogger(__name__)

# Small pool, recycled before the pooler drops idle connections.
POSTGRES_POOL_OPTIONS: dict[str, Any] = {
    "pool_size": 3,
    "max_overflow": 5,
    "pool_timeout": 2,
    "pool_recycle": 30,
    "pool_pre_ping": True,
}


def _sqlite_pragmas(dbapi_connection: Any, connection_record: Any) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def build_engine(db_url: str) -> Engine:
    """Create an engine for ``db_url``; SQLite gets foreign keys switched on."""
    options: dict[str, Any] = {"echo": settings.database_echo, "future": True}
    if db_url.startswith("sqlite"):
        options["connect_args"] = {"check_same_thread": False}
        built = create_engine(db_url, **options)
        event.listen(built, "connect", _sqlite_pragmas)
        return built
    options.update(POSTGRES_POOL_OPTIONS)
    return create_engine(db_url, **options)


engine: Engine = build_engine(settings.database_url)

SessionLocal = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)

Base: DeclarativeMeta = declarative_base()


def get_db() -> Generator[Session, None, None]:
    """One session per request; committed when the handler returns cleanly."""
    session = SessionLocal()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def init_db(bind: Engine | None = None) -> None:
    """Create any missing tables."""
    import drivedesk.models  # noqa: F401  registers mappers on Base.metadata

    target = bind or engine
    Base.metadata.create_all(bind=target)
    logger.info("Schema ensured on %s", target.url.render_as_string(hide_password=True))


__all__ = ["Base", "SessionLocal", "build_engine", "engine", "get_db", "init_db"]
