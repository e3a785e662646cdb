# backend/tutorlink/api/dependencies/services.py
"""
Service layer dependencies for dependency injection.

Services that emit real-time events get a RoomEventPublisher bound to the
process-wide connection registry.
"""

from fastapi import Depends
from sqlalchemy.orm import Session

from ...services.auth_service import AuthService
from ...services.availability_service import AvailabilityService
from ...services.contact_request_service import ContactRequestService
from ...services.conversation_service import ConversationService
from ...services.lesson_service import LessonService
from ...services.messaging import EventPublisher, RoomEventPublisher, connection_manager
from ...services.review_service import ReviewService
from ...services.student_service import StudentService
from ...services.subject_service import SubjectService
from ...services.teacher_service import TeacherService
from .database import get_db


def get_event_publisher() -> EventPublisher:
    return RoomEventPublisher(connection_manager)


def get_auth_service(db: Session = Depends(get_db)) -> AuthService:
    return AuthService(db)


def get_availability_service(db: Session = Depends(get_db)) -> AvailabilityService:
    return AvailabilityService(db)


def get_contact_request_service(
    db: Session = Depends(get_db), publisher: EventPublisher = Depends(get_event_publisher)
) -> ContactRequestService:
    return ContactRequestService(db, publisher)


def get_conversation_service(
    db: Session = Depends(get_db), publisher: EventPublisher = Depends(get_event_publisher)
) -> ConversationService:
    return ConversationService(db, publisher)


def get_lesson_service(db: Session = Depends(get_db)) -> LessonService:
    return LessonService(db)


def get_review_service(db: Session = Depends(get_db)) -> ReviewService:
    return ReviewService(db)


def get_teacher_service(db: Session = Depends(get_db)) -> TeacherService:
    return TeacherService(db)


def get_student_service(db: Session = Depends(get_db)) -> StudentService:
    return StudentService(db)


def get_subject_service(db: Session = Depends(get_db)) -> SubjectService:
    return SubjectService(db)
