# backend/tutorlink/core/enums.py
"""
Enum values persisted as VARCHAR columns.

Columns store the ``.value`` string so the database stays free of native
enum types and values can be compared directly against request input.
"""

from enum import Enum


class UserRole(str, Enum):
    """Account role, fixed at registration."""

    STUDENT = "STUDENT"
    TEACHER = "TEACHER"
    ADMIN = "ADMIN"


class ContactRequestStatus(str, Enum):
    PENDING = "PENDING"
    ACCEPTED = "ACCEPTED"
    REJECTED = "REJECTED"

    @property
    def is_terminal(self) -> bool:
        return self is not ContactRequestStatus.PENDING


class LessonStatus(str, Enum):
    """Per-participant lesson status."""

    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    CANCELLED = "CANCELLED"


class StudentLevel(str, Enum):
    MIDDLE_SCHOOL = "MIDDLE_SCHOOL"
    HIGH_SCHOOL = "HIGH_SCHOOL"
    UNIVERSITY = "UNIVERSITY"
    OTHER = "OTHER"


REGISTRABLE_ROLES = frozenset({UserRole.STUDENT, UserRole.TEACHER})
ACTIVE_LESSON_STATUSES = frozenset({LessonStatus.PENDING, LessonStatus.CONFIRMED})
