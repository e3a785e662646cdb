# backend/tutorlink/models/teacher_profile.py
"""
Teacher profile and the teacher/subject join table.

``rating_avg`` and ``reviews_count`` are derived from the reviews table and
written only by ReviewService.
"""

from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, ForeignKey, Index, Integer, Numeric, String, Text
import ulid

from ..database import Base


class TeacherProfile(Base):
    __tablename__ = "teacher_profiles"

    id = Column(String(26), primary_key=True, default=lambda: str(ulid.ULID()))
    user_id = Column(
        String(26), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, unique=True
    )
    bio = Column(Text, nullable=True)
    city = Column(String(100), nullable=True)
    hourly_rate = Column(Numeric(10, 2), nullable=True)
    rating_avg = Column(Numeric(3, 2), nullable=True)
    reviews_count = Column(Integer, nullable=False, default=0)
    created_at = Column(
        DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc)
    )
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    __table_args__ = (Index("idx_teacher_profiles_city", "city"),)

    def __repr__(self) -> str:
        return f"<TeacherProfile user={self.user_id} rating={self.rating_avg}>"


class TeacherSubject(Base):
    """Many-to-many link between a teacher profile and a subject."""

    __tablename__ = "teacher_subjects"

    teacher_profile_id = Column(
        String(26), ForeignKey("teacher_profiles.id", ondelete="CASCADE"), primary_key=True
    )
    subject_id = Column(
        String(26), ForeignKey("subjects.id", ondelete="CASCADE"), primary_key=True
    )

    __table_args__ = (Index("idx_teacher_subjects_subject", "subject_id"),)
