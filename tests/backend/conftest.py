from collections.abc import Iterator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session, sessionmaker

from backend.app.main import create_app
from issuetracker.db import get_db
from issuetracker.models import Project, User
from issuetracker.roles import Role


@pytest.fixture
def test_app_client(test_db) -> Iterator[tuple[TestClient, sessionmaker]]:
    _, TestingSessionLocal, _ = test_db

    app = create_app()

    def override_get_db() -> Iterator[Session]:
        db = TestingSessionLocal()
        try:
            yield db
            db.commit()  # Auto-commit on success like production
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db

    # Startup events are not run; the test database is already created
    client = TestClient(app, raise_server_exceptions=False)
    yield client, TestingSessionLocal
    app.dependency_overrides.clear()


@pytest.fixture
def seeded(test_app_client) -> tuple[TestClient, dict]:
    """A project with one user of every role; the developer contributes."""
    client, TestingSessionLocal = test_app_client
    session = TestingSessionLocal()
    users = {
        "admin": User(username="admin", role=Role.ADMIN),
        "leader": User(username="leader", role=Role.PROJECT_LEADER),
        "dev": User(username="dev", role=Role.DEVELOPER),
        "tester": User(username="tester", role=Role.TESTER),
        "user": User(username="user", role=Role.USER),
    }
    session.add_all(users.values())
    project = Project(title="Tracker", admin=users["admin"])
    project.add_contributor(users["dev"])
    session.add(project)
    session.commit()

    ids = {key: user.id for key, user in users.items()}
    ids["project"] = project.id
    session.close()
    return client, ids
