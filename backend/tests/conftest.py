# backend/tests/conftest.py
"""
Pytest configuration.

Every test gets its own SQLite database file, created from the models'
metadata. The FastAPI app is pointed at it through dependency overrides:
HTTP requests share the test's ``db`` session, the websocket gateway opens
its own sessions from ``session_factory``.
"""

import os
import sys

# Set testing mode BEFORE any app imports
os.environ["IS_TESTING"] = "true"
os.environ.setdefault("SECRET_KEY", "test-secret-key-not-for-production")

# Add the backend directory to Python path so imports work
backend_dir = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, backend_dir)

from tutorlink.core.config import settings

settings.is_testing = True

from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session, sessionmaker

from tutorlink.api.dependencies.database import get_db, get_session_factory
from tutorlink.auth import create_access_token, get_password_hash
from tutorlink.core.enums import UserRole
from tutorlink.database import Base, create_db_engine
from tutorlink.main import app
from tutorlink.models.student_profile import StudentProfile
from tutorlink.models.subject import Subject
from tutorlink.models.teacher_profile import TeacherProfile
from tutorlink.models.user import User
from tutorlink.services.contact_request_service import ContactRequestService
from tutorlink.services.subject_service import SubjectService


@pytest.fixture(scope="function")
def engine(tmp_path):
    test_engine = create_db_engine(f"sqlite:///{tmp_path / 'tutorlink_test.db'}")
    Base.metadata.create_all(bind=test_engine)
    yield test_engine
    Base.metadata.drop_all(bind=test_engine)
    test_engine.dispose()


@pytest.fixture(scope="function")
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine, expire_on_commit=False)


@pytest.fixture(scope="function")
def db(session_factory) -> Session:
    """Fresh database session for each test."""
    session = session_factory()
    yield session
    session.rollback()
    session.close()


@pytest.fixture
def client(db: Session, session_factory):
    """Test client bound to the per-test database; runs the app lifespan."""

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_session_factory] = lambda: session_factory

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


# ============================================================================
# USERS
# ============================================================================


@pytest.fixture
def test_password():
    """Standard test password for all test users."""
    return "TestPassword123!"


def _create_user(db: Session, *, email: str, name: str, surname: str, role: UserRole, password: str) -> User:
    user = User(
        name=name,
        surname=surname,
        email=email,
        hashed_password=get_password_hash(password),
        role=role.value,
    )
    db.add(user)
    db.flush()
    return user


@pytest.fixture
def test_student(db: Session, test_password: str) -> User:
    """Create a test student user with an empty profile."""
    student = _create_user(
        db,
        email="test.student@example.com",
        name="Test",
        surname="Student",
        role=UserRole.STUDENT,
        password=test_password,
    )
    db.add(StudentProfile(user_id=student.id))
    db.commit()
    return student


@pytest.fixture
def test_student_2(db: Session, test_password: str) -> User:
    student = _create_user(
        db,
        email="second.student@example.com",
        name="Second",
        surname="Student",
        role=UserRole.STUDENT,
        password=test_password,
    )
    db.add(StudentProfile(user_id=student.id))
    db.commit()
    return student


@pytest.fixture
def test_teacher(db: Session, test_password: str) -> User:
    """Create a test teacher in Paris charging 40.00 an hour."""
    teacher = _create_user(
        db,
        email="test.teacher@example.com",
        name="Test",
        surname="Teacher",
        role=UserRole.TEACHER,
        password=test_password,
    )
    db.add(
        TeacherProfile(
            user_id=teacher.id, bio="Maths and physics", city="Paris", hourly_rate=Decimal("40.00")
        )
    )
    db.commit()
    return teacher


@pytest.fixture
def test_teacher_2(db: Session, test_password: str) -> User:
    teacher = _create_user(
        db,
        email="second.teacher@example.com",
        name="Second",
        surname="Teacher",
        role=UserRole.TEACHER,
        password=test_password,
    )
    db.add(TeacherProfile(user_id=teacher.id, city="Lyon", hourly_rate=Decimal("30.00")))
    db.commit()
    return teacher


@pytest.fixture
def subjects(db: Session) -> dict[str, Subject]:
    """Seeded subject catalogue keyed by name."""
    service = SubjectService(db)
    service.seed_defaults()
    return {subject.name: subject for subject in service.list_subjects()}


# ============================================================================
# AUTH HEADERS
# ============================================================================


def _auth_headers(user: User) -> dict:
    token = create_access_token(user.id, user.role)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def auth_headers_student(test_student: User) -> dict:
    """Get auth headers for test student."""
    return _auth_headers(test_student)


@pytest.fixture
def auth_headers_student_2(test_student_2: User) -> dict:
    return _auth_headers(test_student_2)


@pytest.fixture
def auth_headers_teacher(test_teacher: User) -> dict:
    """Get auth headers for test teacher."""
    return _auth_headers(test_teacher)


@pytest.fixture
def auth_headers_teacher_2(test_teacher_2: User) -> dict:
    return _auth_headers(test_teacher_2)


# ============================================================================
# DOMAIN STATE
# ============================================================================


@pytest.fixture
def accepted_request(db: Session, test_student: User, test_teacher: User):
    """An ACCEPTED contact request and the conversation it opened."""
    service = ContactRequestService(db)
    request = service.create(test_student.id, test_teacher.id, "Hello, I need help with algebra")
    request, conversation = service.update_status(request.id, test_teacher.id, "ACCEPTED")
    return request, conversation


@pytest.fixture
def future_start() -> datetime:
    return (datetime.now(timezone.utc) + timedelta(days=3)).replace(microsecond=0)
