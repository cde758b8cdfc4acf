"""Tests for the process-wide database manager."""

import pytest
from sqlalchemy.pool import QueuePool, StaticPool

from issuetracker.config import Settings
from issuetracker.db import db, engine_options
from issuetracker.models import User
from issuetracker.roles import Role


@pytest.fixture
def fresh_db():
    db.reset()
    db.initialize("sqlite://")
    db.create_all_tables()
    yield db
    db.reset()


def test_initialize_is_idempotent(fresh_db):
    engine = fresh_db.engine
    fresh_db.initialize("sqlite:///ignored.db")
    assert fresh_db.engine is engine


def test_uninitialized_session_raises():
    db.reset()
    with pytest.raises(RuntimeError, match="not initialized"):
        with db.session():
            pass


def test_uninitialized_engine_raises():
    db.reset()
    with pytest.raises(RuntimeError, match="not initialized"):
        db.engine


def test_session_commits(fresh_db):
    with fresh_db.session() as session:
        session.add(User(username="alice", role=Role.TESTER))

    with fresh_db.session() as session:
        assert session.query(User).filter(User.username == "alice").count() == 1


def test_session_rolls_back_on_error(fresh_db):
    with pytest.raises(ValueError):
        with fresh_db.session() as session:
            session.add(User(username="bob", role=Role.USER))
            session.flush()
            raise ValueError("boom")

    with fresh_db.session() as session:
        assert session.query(User).count() == 0


def test_health_check(fresh_db):
    result = fresh_db.health_check()
    assert result == {"healthy": True, "missing_tables": [], "error": None}


def test_health_check_reports_missing_tables():
    db.reset()
    db.initialize("sqlite://")
    try:
        result = db.health_check()
    finally:
        db.reset()

    assert result["healthy"] is False
    assert {"issues", "users", "projects", "comments"} <= set(result["missing_tables"])


def test_health_check_uninitialized():
    db.reset()
    assert db.health_check()["healthy"] is False


def test_engine_options_per_backend():
    settings = Settings(_env_file=None, db_pool_size=3)
    assert engine_options("sqlite://", settings)["poolclass"] is StaticPool

    server = engine_options("postgresql://tracker@localhost/tracker", settings)
    assert server["poolclass"] is QueuePool
    assert server["pool_size"] == 3
