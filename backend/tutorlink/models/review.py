# backend/tutorlink/models/review.py
"""
Reviews & ratings.

Design notes:
- One review per (teacher, student) pair, enforced by a unique constraint
- Rating is an integer 1..5; comment is optional and at most 1000 chars
- Every mutation recomputes the teacher's rating_avg / reviews_count
"""

from datetime import datetime, timezone

from sqlalchemy import (
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
import ulid

from ..database import Base


class Review(Base):
    """Review left by a student for a teacher."""

    __tablename__ = "reviews"

    id = Column(String(26), primary_key=True, default=lambda: str(ulid.ULID()))
    teacher_id = Column(String(26), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    student_id = Column(String(26), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    rating = Column(Integer, nullable=False)
    comment = Column(Text, nullable=True)
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
        UniqueConstraint("teacher_id", "student_id", name="uq_reviews_teacher_student"),
        CheckConstraint("rating >= 1 AND rating <= 5", name="ck_reviews_rating_range"),
        CheckConstraint(
            "(comment IS NULL) OR (length(comment) <= 1000)",
            name="ck_reviews_comment_length",
        ),
        Index("idx_reviews_teacher_created", "teacher_id", "created_at"),
        Index("idx_reviews_student_created", "student_id", "created_at"),
    )
