"""
Pytest fixtures for Issue Tracker tests.

Uses an in-memory SQLite database through the ORM. Each test gets a fresh
schema.
"""

import pytest
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from issuetracker.db import Base, enable_sqlite_foreign_keys
from issuetracker.models import Comment, Issue, IssueStatus, Priority, Project, User
from issuetracker.roles import Role


@pytest.fixture(scope="function")
def test_db():
    """Create a fresh test database for each test using ORM."""
    db_url = "sqlite://"
    engine = create_engine(
        db_url,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    event.listen(engine, "connect", enable_sqlite_foreign_keys)

    # Create tables
    Base.metadata.create_all(bind=engine)

    # Create session factory
    TestingSessionLocal = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)

    yield db_url, TestingSessionLocal, engine

    # Cleanup
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def test_session(test_db):
    """Get a test session from the test database."""
    _, TestingSessionLocal, _ = test_db
    session = TestingSessionLocal()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


# =============================================================================
# Factories
# =============================================================================


@pytest.fixture
def make_user(test_session):
    """Factory creating a persisted user with a role."""
    counter = {"n": 0}

    def _make_user(role: Role = Role.USER, username: str | None = None) -> User:
        counter["n"] += 1
        user = User(username=username or f"{role.value.lower()}{counter['n']}", role=role)
        test_session.add(user)
        test_session.flush()
        return user

    return _make_user


@pytest.fixture
def make_project(test_session, make_user):
    """Factory creating a persisted project, optionally with contributors."""

    def _make_project(title: str = "Tracker", admin: User | None = None, contributors=()) -> Project:
        project = Project(title=title, admin=admin or make_user(Role.ADMIN))
        for contributor in contributors:
            project.add_contributor(contributor)
        test_session.add(project)
        test_session.flush()
        return project

    return _make_project


@pytest.fixture
def make_issue(test_session):
    """Factory creating a persisted issue with explicit fields."""

    def _make_issue(
        project: Project,
        title: str = "Issue",
        description: str = "",
        status: IssueStatus = IssueStatus.NEW,
        reporter: User | None = None,
        assignee: User | None = None,
        fixer: User | None = None,
        priority: Priority | None = Priority.MAJOR,
        comments: int = 0,
    ) -> Issue:
        issue = Issue(
            project=project,
            title=title,
            description=description,
            status=status,
            reporter=reporter,
            assignee=assignee,
            fixer=fixer,
            priority=priority,
        )
        for n in range(comments):
            issue.comments.append(Comment(message=f"comment {n}", author=reporter))
        test_session.add(issue)
        test_session.flush()
        return issue

    return _make_issue


@pytest.fixture
def team(make_user):
    """One user of every role."""
    return {
        "admin": make_user(Role.ADMIN, "admin"),
        "leader": make_user(Role.PROJECT_LEADER, "leader"),
        "dev": make_user(Role.DEVELOPER, "dev"),
        "tester": make_user(Role.TESTER, "tester"),
        "user": make_user(Role.USER, "user"),
    }


@pytest.fixture
def project(make_project, team):
    """A project administered by the team admin, with the developer contributing."""
    return make_project("Tracker", admin=team["admin"], contributors=[team["dev"]])
