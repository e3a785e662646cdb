"""
Schema produced by ``alembic upgrade head`` on SQLite, exercised through the
services instead of ``Base.metadata.create_all``.
"""

from pathlib import Path

from alembic import command
from alembic.config import Config
import pytest
from sqlalchemy import inspect
from sqlalchemy.orm import Session, sessionmaker

from tutorlink.auth import get_password_hash
from tutorlink.core.enums import ContactRequestStatus, UserRole
from tutorlink.core.exceptions import PendingRequestExistsException
from tutorlink.database import Base, create_db_engine
from tutorlink.models.user import User
from tutorlink.services.contact_request_service import ContactRequestService

ALEMBIC_DIR = Path(__file__).resolve().parents[2] / "alembic"


@pytest.fixture
def migrated_engine(tmp_path):
    url = f"sqlite:///{tmp_path / 'migrated.db'}"
    config = Config()
    config.set_main_option("script_location", str(ALEMBIC_DIR))
    config.set_main_option("sqlalchemy.url", url)
    command.upgrade(config, "head")

    engine = create_db_engine(url)
    yield engine
    engine.dispose()


@pytest.fixture
def migrated_db(migrated_engine) -> Session:
    session = sessionmaker(bind=migrated_engine, expire_on_commit=False)()
    yield session
    session.rollback()
    session.close()


def _user(db: Session, email: str, role: UserRole) -> User:
    user = User(
        name="Migrated",
        surname=role.value.title(),
        email=email,
        hashed_password=get_password_hash("TestPassword123!"),
        role=role.value,
    )
    db.add(user)
    db.commit()
    return user


def test_upgrade_creates_every_model_table(migrated_engine):
    tables = set(inspect(migrated_engine).get_table_names()) - {"alembic_version"}
    assert tables == set(Base.metadata.tables)


def test_rejected_request_does_not_block_a_new_one(migrated_db):
    student = _user(migrated_db, "student@example.com", UserRole.STUDENT)
    teacher = _user(migrated_db, "teacher@example.com", UserRole.TEACHER)
    service = ContactRequestService(migrated_db)

    first = service.create(student.id, teacher.id, "First try")
    service.update_status(first.id, teacher.id, "REJECTED")

    second = service.create(student.id, teacher.id, "Second try")
    assert second.id != first.id
    assert second.status == ContactRequestStatus.PENDING.value

    with pytest.raises(PendingRequestExistsException):
        service.create(student.id, teacher.id, "Third try")
