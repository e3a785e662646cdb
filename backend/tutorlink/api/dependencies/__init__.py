# backend/tutorlink/api/dependencies/__init__.py
"""
Central export point for all dependencies.
"""

from .auth import get_current_student, get_current_teacher, get_current_user, require_role
from .database import get_db, get_session_factory
from .services import (
    get_auth_service,
    get_availability_service,
    get_contact_request_service,
    get_conversation_service,
    get_event_publisher,
    get_lesson_service,
    get_review_service,
    get_student_service,
    get_subject_service,
    get_teacher_service,
)

__all__ = [
    # Auth
    "get_current_user",
    "get_current_student",
    "get_current_teacher",
    "require_role",
    # Database
    "get_db",
    "get_session_factory",
    # Services
    "get_auth_service",
    "get_availability_service",
    "get_contact_request_service",
    "get_conversation_service",
    "get_event_publisher",
    "get_lesson_service",
    "get_review_service",
    "get_student_service",
    "get_subject_service",
    "get_teacher_service",
]
