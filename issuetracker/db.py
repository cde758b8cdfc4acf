"""
Engine and session handling for the issue tracker store.

The process-wide ``db`` owns one engine. The web app initializes it at
startup and every request gets its own session through ``get_db``.

Usage:
    from issuetracker.db import db

    db.initialize("sqlite:///issue_tracker.db")
    db.create_all_tables()
    with db.session() as session:
        issue = session.get(Issue, issue_id)
"""

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from sqlalchemy import Engine, create_engine, event, inspect
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from sqlalchemy.pool import QueuePool, StaticPool

from .config import Settings, get_settings


class Base(DeclarativeBase):
    """Declarative base shared by users, projects, issues and comments."""


def enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    """SQLite leaves foreign key enforcement off unless asked per connection."""
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def engine_options(url: str, settings: Settings) -> dict[str, Any]:
    """
    Pool arguments for ``create_engine``.

    SQLite keeps one shared connection, which is what lets an in-memory
    store outlive a single session. Server databases get a sized QueuePool.
    """
    if url.startswith("sqlite"):
        return {"poolclass": StaticPool, "connect_args": {"check_same_thread": False}}
    return {
        "poolclass": QueuePool,
        "pool_size": settings.db_pool_size,
        "max_overflow": settings.db_max_overflow,
        "pool_pre_ping": settings.db_pool_pre_ping,
    }


def _tracker_tables() -> set[str]:
    # Importing the models registers their tables on Base.metadata
    from . import models  # noqa: F401

    return set(Base.metadata.tables)


class DatabaseManager:
    """Owns the engine and session factory of the tracker store."""

    def __init__(self) -> None:
        self._engine: Engine | None = None
        self._sessions: sessionmaker[Session] | None = None

    def initialize(self, database_url: str | None = None) -> None:
        """Create the engine. Later calls are ignored until ``reset``."""
        if self._engine is not None:
            return

        settings = get_settings()
        url = database_url or settings.database_url
        engine = create_engine(url, echo=settings.debug, **engine_options(url, settings))
        if engine.dialect.name == "sqlite":
            event.listen(engine, "connect", enable_sqlite_foreign_keys)

        self._engine = engine
        self._sessions = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)

    @property
    def engine(self) -> Engine:
        if self._engine is None:
            raise RuntimeError("Database not initialized; call db.initialize() first")
        return self._engine

    def create_all_tables(self) -> None:
        """Create any missing tracker tables. Existing tables are left alone."""
        _tracker_tables()
        Base.metadata.create_all(bind=self.engine)

    @contextmanager
    def session(self) -> Iterator[Session]:
        """Yield a session that commits on success and rolls back on error."""
        if self._sessions is None:
            raise RuntimeError("Database not initialized; call db.initialize() first")

        session = self._sessions()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def health_check(self) -> dict[str, Any]:
        """
        Report whether the store can serve issue requests.

        Healthy means the database answers and every tracker table exists.

        Returns:
            dict with 'healthy' (bool), 'missing_tables' (sorted list of
            table names) and 'error' (str or None)
        """
        if self._engine is None:
            return {"healthy": False, "missing_tables": [], "error": "Database not initialized"}

        expected = _tracker_tables()
        try:
            with self._engine.connect() as conn:
                present = set(inspect(conn).get_table_names())
        except SQLAlchemyError as e:
            return {"healthy": False, "missing_tables": [], "error": str(e)}

        missing = sorted(expected - present)
        return {"healthy": not missing, "missing_tables": missing, "error": None}

    def reset(self) -> None:
        """Dispose the engine so the next ``initialize`` starts over."""
        if self._engine is not None:
            self._engine.dispose()
        self._engine = None
        self._sessions = None


db = DatabaseManager()


def get_db() -> Iterator[Session]:
    """FastAPI dependency yielding the request's session."""
    with db.session() as session:
        yield session


__all__ = ["Base", "DatabaseManager", "db", "enable_sqlite_foreign_keys", "engine_options", "get_db"]
