# backend/tutorlink/repositories/lesson_repository.py
from datetime import datetime
from typing import Iterable, List, Optional

from sqlalchemy.orm import Session

from ..core.enums import LessonStatus, UserRole
from ..models.lesson import Lesson
from .base_repository import BaseRepository


class LessonRepository(BaseRepository[Lesson]):
    """Lesson queries scoped by the viewer's side (teacher or student)."""

    def __init__(self, db: Session):
        super().__init__(db, Lesson)

    @staticmethod
    def _side_columns(role: UserRole):
        if role == UserRole.TEACHER:
            return Lesson.teacher_id, Lesson.status_for_teacher
        return Lesson.student_id, Lesson.status_for_student

    def page_for_user(
        self,
        user_id: str,
        role: UserRole,
        *,
        status: Optional[LessonStatus],
        page: int,
        page_size: int,
    ) -> tuple[List[Lesson], int]:
        owner_column, status_column = self._side_columns(role)
        query = self._build_query().filter(owner_column == user_id)
        if status is not None:
            query = query.filter(status_column == status.value)
        query = query.order_by(Lesson.start_at.desc(), Lesson.id.desc())
        return self._paginate(query, page, page_size)

    def upcoming_for_user(
        self,
        user_id: str,
        role: UserRole,
        *,
        now: datetime,
        statuses: Iterable[LessonStatus],
        limit: int,
    ) -> List[Lesson]:
        owner_column, status_column = self._side_columns(role)
        query = (
            self._build_query()
            .filter(
                owner_column == user_id,
                Lesson.start_at >= now,
                status_column.in_([s.value for s in statuses]),
            )
            .order_by(Lesson.start_at.asc(), Lesson.id.asc())
            .limit(limit)
        )
        return self._execute_query(query)
