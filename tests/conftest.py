import sys
import os

# Add the current directory to Python path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

# Settings are read on import; keep the app away from the on-disk database
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("STORAGE_BACKEND", "sqlalchemy")
os.environ.setdefault("LOG_JSON", "false")

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.db.base_class import Base
# Import all models to ensure their tables are created
import app.db.base  # noqa: F401
from app.repositories import InMemoryStudentRepository
from app.schemas.students import Student


class RecordingStudentRepository(InMemoryStudentRepository):
    """In-memory repository that records every call and can be told to fault.

    ``faults`` maps an operation name to the exception it should raise, e.g.
    ``repository.faults["save"] = PersistenceError()``.
    """

    def __init__(self, students=None):
        self.calls = []
        self.faults = {}
        super().__init__(students)
        self.calls.clear()

    def _record(self, operation, argument=None):
        self.calls.append((operation, argument))
        fault = self.faults.get(operation)
        if fault is not None:
            raise fault

    def count(self, operation):
        return sum(1 for name, _ in self.calls if name == operation)

    def arguments(self, operation):
        return [arg for name, arg in self.calls if name == operation]

    def find_all(self):
        self._record("find_all")
        return super().find_all()

    def find_by_id(self, student_id):
        self._record("find_by_id", student_id)
        return super().find_by_id(student_id)

    def save(self, student):
        self._record("save", student)
        return super().save(student)

    def delete_by_id(self, student_id):
        self._record("delete_by_id", student_id)
        return super().delete_by_id(student_id)


@pytest.fixture
def repository():
    return RecordingStudentRepository()


@pytest.fixture
def add_student(repository):
    """Store a student directly, without leaving a trace in ``repository.calls``."""
    def _add_student(name, passport_number):
        student = repository.save(Student(name=name, passport_number=passport_number))
        repository.calls.clear()
        return student
    return _add_student


@pytest.fixture
def client(repository):
    """Create a test client whose handlers talk to the recording repository."""
    from fastapi.testclient import TestClient
    from app.main import app
    from app.deps import get_student_repository

    app.dependency_overrides[get_student_repository] = lambda: repository

    with TestClient(app) as client:
        yield client

    # Clear overrides after test
    app.dependency_overrides.clear()


# Create an in-memory SQLite database for testing
@pytest.fixture
def engine():
    """Create a fresh in-memory SQLite database for each test."""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def TestingSessionLocal(engine):
    """Create a session factory for the test database."""
    return sessionmaker(bind=engine, autoflush=False, autocommit=False, expire_on_commit=False)


@pytest.fixture
def db_session(TestingSessionLocal):
    """Create a database session for each test."""
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def sql_client(TestingSessionLocal):
    """Test client wired end to end: handlers -> SQLAlchemy repository -> SQLite."""
    from fastapi.testclient import TestClient
    from app.main import app
    from app.db import get_db

    def _override_get_db():
        session = TestingSessionLocal()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = _override_get_db

    with TestClient(app) as client:
        yield client

    app.dependency_overrides.clear()
