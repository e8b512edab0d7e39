"""Pytest fixtures and configuration for TaskMaster tests."""

import os

# Keep the module-level engine off the filesystem during tests
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")

import pytest
from datetime import datetime, timedelta
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool
from fastapi.testclient import TestClient
import uuid

from taskmaster.database.database import Base
from taskmaster.database import models  # noqa: F401  (registers TaskDB)
from taskmaster.database.repository import TaskRepository
from taskmaster.models.task import Task, Priority, TaskCategory


# Use in-memory SQLite database for tests
TEST_DATABASE_URL = "sqlite:///:memory:"


@pytest.fixture(scope="function")
def db_session():
    """Create a database session for testing.

    Uses an in-memory SQLite database that is created fresh for each test.
    """
    engine = create_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False
    )

    Base.metadata.create_all(bind=engine)

    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSessionLocal()

    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def task_repository(db_session: Session):
    """Create a TaskRepository instance for testing."""
    return TaskRepository(db_session)


@pytest.fixture
def now():
    """Fixed reference time for deterministic ranking tests."""
    return datetime(2026, 3, 2, 12, 0, 0)


@pytest.fixture
def sample_task_base(now):
    """Base task data for creating test tasks.

    Returns a dict with default task attributes that can be overridden.
    """
    return {
        "id": str(uuid.uuid4()),
        "title": "Test Task",
        "description": "Test description",
        "scheduled_time": now,
        "deadline": now + timedelta(days=1),
        "priority": Priority.MEDIUM,
        "is_completed": False,
        "tags": [],
        "category": TaskCategory.OTHER,
        "created_at": now,
        "updated_at": now,
    }


@pytest.fixture
def make_task(sample_task_base):
    """Factory fixture: build a Task from the base data plus overrides."""
    def _make(**overrides) -> Task:
        return Task(**{**sample_task_base, "id": str(uuid.uuid4()), **overrides})
    return _make


@pytest.fixture
def sample_task(sample_task_base):
    """Create a sample Task object for testing."""
    return Task(**sample_task_base)


@pytest.fixture
def work_task(make_task):
    """Create a work category task."""
    return make_task(title="Write report", category=TaskCategory.WORK, tags=["office"])


@pytest.fixture
def shopping_task(make_task):
    """Create a shopping category task."""
    return make_task(title="Buy groceries", category=TaskCategory.SHOPPING, tags=["food", "weekly"])


@pytest.fixture
def health_task(make_task):
    """Create a health category task."""
    return make_task(title="Morning run", description="5k around the park at work pace", category=TaskCategory.HEALTH)


@pytest.fixture
def test_client(db_session: Session):
    """Create a FastAPI test client with overridden database dependency."""
    from taskmaster.api.app import app
    from taskmaster.database.database import get_db

    # Override the get_db dependency to use our test database session
    def override_get_db():
        try:
            yield db_session
        finally:
            pass  # Don't close the session here, let the fixture handle it

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture
def task_payload():
    """Valid JSON payload for POST /tasks."""
    scheduled = datetime.utcnow() + timedelta(hours=1)
    return {
        "title": "Complete project report",
        "description": "Write the final section of the report",
        "scheduled_time": scheduled.isoformat(),
        "deadline": (scheduled + timedelta(days=2)).isoformat(),
        "priority": "High",
        "tags": ["urgent", "important"],
        "category": "Work",
    }
