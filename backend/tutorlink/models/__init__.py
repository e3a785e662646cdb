# backend/tutorlink/models/__init__.py
"""
SQLAlchemy models.

Importing this package registers every table on ``Base.metadata``.
"""

from .availability import AvailabilitySlot
from .contact_request import ContactRequest
from .conversation import Conversation
from .lesson import Lesson
from .message import Message
from .review import Review
from .student_profile import StudentProfile
from .subject import Subject
from .teacher_profile import TeacherProfile, TeacherSubject
from .user import User

__all__ = [
    "AvailabilitySlot",
    "ContactRequest",
    "Conversation",
    "Lesson",
    "Message",
    "Review",
    "StudentProfile",
    "Subject",
    "TeacherProfile",
    "TeacherSubject",
    "User",
]
