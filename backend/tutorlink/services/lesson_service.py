# backend/tutorlink/services/lesson_service.py
"""
Lesson Service with per-participant statuses.

Each lesson carries ``status_for_teacher`` and ``status_for_student``. A
participant can only ever write their own side; the other side's status is
left untouched.
"""

from datetime import datetime, timezone
import logging
from typing import Any, List, Optional

from sqlalchemy.orm import Session

from ..core.constants import UPCOMING_LESSONS_LIMIT
from ..core.enums import ACTIVE_LESSON_STATUSES, LessonStatus, UserRole
from ..core.exceptions import ForbiddenException, NotFoundException, ValidationException
from ..models.lesson import Lesson
from ..repositories.factory import RepositoryFactory
from ..utils.pagination import clamp_page, clamp_page_size
from .base import BaseService

logger = logging.getLogger(__name__)


def parse_lesson_status(value: Optional[str]) -> LessonStatus:
    try:
        return LessonStatus(value)
    except ValueError:
        raise ValidationException(
            "Invalid status", details={"allowed": [s.value for s in LessonStatus]}
        )


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _viewer_role(role: str) -> UserRole:
    if role == UserRole.TEACHER.value:
        return UserRole.TEACHER
    if role == UserRole.STUDENT.value:
        return UserRole.STUDENT
    raise ForbiddenException("Only teachers and students have lessons")


class LessonService(BaseService):
    def __init__(self, db: Session):
        super().__init__(db)
        self.repository = RepositoryFactory.create_lesson_repository(db)
        self.user_repository = RepositoryFactory.create_user_repository(db)
        self.subject_repository = RepositoryFactory.create_subject_repository(db)

    def _get_for_participant(self, lesson_id: str, user_id: str, action: str) -> Lesson:
        lesson = self.repository.get_by_id(lesson_id)
        if lesson is None:
            raise NotFoundException("Lesson not found")
        if not lesson.is_participant(user_id):
            raise ForbiddenException(f"You do not have permission to {action} this lesson")
        return lesson

    @BaseService.measure_operation("create_lesson")
    def create_lesson(
        self,
        *,
        teacher_id: str,
        student_id: str,
        subject_id: str,
        start_at: datetime,
        duration_min: Any,
    ) -> Lesson:
        """
        Schedule a lesson; both statuses start as PENDING.

        Raises:
            ValidationException: Same user twice, non-positive duration, or a
                start time that is not in the future
            NotFoundException: Unknown teacher, student or subject
        """
        if teacher_id == student_id:
            raise ValidationException("Teacher and student IDs must be different")
        if self.user_repository.get_teacher(teacher_id) is None:
            raise NotFoundException("Teacher not found")
        if self.user_repository.get_by_id(student_id) is None:
            raise NotFoundException("Student not found")
        if self.subject_repository.get_by_id(subject_id) is None:
            raise NotFoundException("Subject not found")
        if isinstance(duration_min, bool) or not isinstance(duration_min, int) or duration_min <= 0:
            raise ValidationException("Duration must be a positive integer")

        start = _as_utc(start_at)
        if start <= datetime.now(timezone.utc):
            raise ValidationException("Start time must be in the future")

        with self.transaction():
            lesson = self.repository.create(
                teacher_id=teacher_id,
                student_id=student_id,
                subject_id=subject_id,
                start_at=start,
                duration_min=duration_min,
                status_for_teacher=LessonStatus.PENDING.value,
                status_for_student=LessonStatus.PENDING.value,
            )

        self.logger.info(f"Lesson {lesson.id} scheduled for {start.isoformat()}")
        return lesson

    def list_for_user(
        self,
        user_id: str,
        role: str,
        *,
        status: Optional[str] = None,
        page: Optional[int] = None,
        page_size: Optional[int] = None,
    ) -> tuple[List[Lesson], int, int, int]:
        """
        Lessons on the caller's side, latest start first.

        An unknown ``status`` filter is ignored rather than rejected.

        Returns:
            (items, page, page_size, total)
        """
        side = _viewer_role(role)
        status_filter = None
        if status in {s.value for s in LessonStatus}:
            status_filter = LessonStatus(status)
        page_num = clamp_page(page)
        size = clamp_page_size(page_size)
        items, total = self.repository.page_for_user(
            user_id, side, status=status_filter, page=page_num, page_size=size
        )
        return items, page_num, size, total

    def list_upcoming(self, user_id: str, role: str) -> List[Lesson]:
        """Next lessons not cancelled on the caller's side, soonest first."""
        return self.repository.upcoming_for_user(
            user_id,
            _viewer_role(role),
            now=datetime.now(timezone.utc),
            statuses=ACTIVE_LESSON_STATUSES,
            limit=UPCOMING_LESSONS_LIMIT,
        )

    def get_lesson(self, lesson_id: str, user_id: str) -> Lesson:
        lesson = self.repository.get_by_id(lesson_id)
        if lesson is None:
            raise NotFoundException("Lesson not found")
        if not lesson.is_participant(user_id):
            raise ForbiddenException("You do not have access to this lesson")
        return lesson

    @BaseService.measure_operation("update_lesson_status")
    def update_status(self, lesson_id: str, user_id: str, status: Optional[str]) -> Lesson:
        """
        Set the caller's own status field.

        Raises:
            ValidationException: Status not in PENDING/CONFIRMED/CANCELLED
            NotFoundException: Unknown lesson
            ForbiddenException: Caller is not a participant
        """
        new_status = parse_lesson_status(status)
        lesson = self._get_for_participant(lesson_id, user_id, "update")

        field = "status_for_teacher" if lesson.teacher_id == user_id else "status_for_student"
        with self.transaction():
            self.repository.update(lesson, **{field: new_status.value})

        self.logger.info(f"Lesson {lesson.id}: {field} set to {new_status.value}")
        return lesson

    @BaseService.measure_operation("delete_lesson")
    def delete_lesson(self, lesson_id: str, user_id: str) -> None:
        lesson = self._get_for_participant(lesson_id, user_id, "delete")
        with self.transaction():
            self.repository.delete(lesson.id)
        self.logger.info(f"Lesson {lesson_id} deleted by {user_id}")
