# backend/tutorlink/models/lesson.py
"""
Lesson model with one status field per participant.

The teacher writes ``status_for_teacher`` and the student writes
``status_for_student``; neither side can alter the other's field. There is no
single authoritative "confirmed" flag: consumers derive it from the pair.
"""

from datetime import datetime, timezone

from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Index, Integer, String
import ulid

from ..core.enums import LessonStatus
from ..database import Base


class Lesson(Base):
    __tablename__ = "lessons"

    id = Column(String(26), primary_key=True, default=lambda: str(ulid.ULID()))
    teacher_id = Column(String(26), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    student_id = Column(String(26), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    subject_id = Column(String(26), ForeignKey("subjects.id", ondelete="CASCADE"), nullable=False)
    start_at = Column(DateTime(timezone=True), nullable=False)
    duration_min = Column(Integer, nullable=False)
    status_for_teacher = Column(String(20), nullable=False, default=LessonStatus.PENDING.value)
    status_for_student = Column(String(20), nullable=False, default=LessonStatus.PENDING.value)
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
        CheckConstraint("duration_min > 0", name="ck_lessons_duration_positive"),
        CheckConstraint("teacher_id <> student_id", name="ck_lessons_distinct_users"),
        Index("idx_lessons_teacher_start", "teacher_id", "start_at"),
        Index("idx_lessons_student_start", "student_id", "start_at"),
    )

    def is_participant(self, user_id: str) -> bool:
        return user_id in (self.teacher_id, self.student_id)

    @property
    def is_confirmed(self) -> bool:
        """Both sides confirmed."""
        return (
            self.status_for_teacher == LessonStatus.CONFIRMED.value
            and self.status_for_student == LessonStatus.CONFIRMED.value
        )
