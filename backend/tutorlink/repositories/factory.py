# backend/tutorlink/repositories/factory.py
"""
Repository Factory for the TutorLink platform.

Provides centralized creation of repository instances,
ensuring consistent initialization and dependency injection.
"""

from sqlalchemy.orm import Session

from .availability_repository import AvailabilityRepository
from .contact_request_repository import ContactRequestRepository
from .conversation_repository import ConversationRepository
from .lesson_repository import LessonRepository
from .message_repository import MessageRepository
from .review_repository import ReviewRepository
from .student_profile_repository import StudentProfileRepository
from .subject_repository import SubjectRepository
from .teacher_profile_repository import TeacherProfileRepository
from .user_repository import UserRepository


class RepositoryFactory:
    """
    Factory class for creating repository instances.

    Centralizes repository creation to ensure consistent initialization
    and makes it easy to swap implementations if needed.
    """

    @staticmethod
    def create_user_repository(db: Session) -> UserRepository:
        return UserRepository(db)

    @staticmethod
    def create_teacher_profile_repository(db: Session) -> TeacherProfileRepository:
        return TeacherProfileRepository(db)

    @staticmethod
    def create_student_profile_repository(db: Session) -> StudentProfileRepository:
        return StudentProfileRepository(db)

    @staticmethod
    def create_subject_repository(db: Session) -> SubjectRepository:
        return SubjectRepository(db)

    @staticmethod
    def create_availability_repository(db: Session) -> AvailabilityRepository:
        """Create repository for availability operations."""
        return AvailabilityRepository(db)

    @staticmethod
    def create_contact_request_repository(db: Session) -> ContactRequestRepository:
        return ContactRequestRepository(db)

    @staticmethod
    def create_conversation_repository(db: Session) -> ConversationRepository:
        return ConversationRepository(db)

    @staticmethod
    def create_message_repository(db: Session) -> MessageRepository:
        return MessageRepository(db)

    @staticmethod
    def create_lesson_repository(db: Session) -> LessonRepository:
        return LessonRepository(db)

    @staticmethod
    def create_review_repository(db: Session) -> ReviewRepository:
        return ReviewRepository(db)
