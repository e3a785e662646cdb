# backend/tutorlink/models/user.py
"""
User model for the TutorLink platform.

A user is either a student, a teacher or an admin. The role is fixed at
registration; students and teachers own exactly one matching profile row
(see StudentProfile and TeacherProfile).
"""

from datetime import datetime, timezone

from sqlalchemy import CheckConstraint, Column, DateTime, String
import ulid

from ..core.enums import UserRole
from ..database import Base


class User(Base):
    """
    Authentication identity and role.

    Attributes:
        id: ULID primary key
        name: Given name
        surname: Family name
        email: Unique, stored lowercase
        hashed_password: bcrypt hash
        role: STUDENT, TEACHER or ADMIN
    """

    __tablename__ = "users"

    id = Column(String(26), primary_key=True, default=lambda: str(ulid.ULID()))
    name = Column(String(100), nullable=False)
    surname = Column(String(100), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    hashed_password = Column(String(255), nullable=False)
    role = Column(String(20), nullable=False)
    created_at = Column(
        DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc)
    )
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    __table_args__ = (
        CheckConstraint("role IN ('STUDENT', 'TEACHER', 'ADMIN')", name="ck_users_role"),
    )

    def __repr__(self) -> str:
        return f"<User {self.id} {self.email} ({self.role})>"

    @property
    def is_teacher(self) -> bool:
        return self.role == UserRole.TEACHER.value

    @property
    def is_student(self) -> bool:
        return self.role == UserRole.STUDENT.value
