# backend/tutorlink/models/availability.py
"""
Weekly recurring availability for teachers.

Each slot is a (day_of_week, start_time, end_time) triple interpreted as the
half-open interval [start_time, end_time). Day 0 is Sunday, 6 is Saturday.
Two slots of one teacher on the same day never intersect; slots that only
touch (one ends exactly when the other starts) are allowed.
"""

from datetime import datetime, timezone

from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Index, Integer, String, Time
import ulid

from ..database import Base


class AvailabilitySlot(Base):
    """
    One recurring weekly window in which a teacher can be booked.

    Attributes:
        id: ULID primary key
        teacher_id: Owning teacher (users.id)
        day_of_week: 0..6, Sunday first
        start_time: Inclusive start, wall-clock time of day
        end_time: Exclusive end, wall-clock time of day
    """

    __tablename__ = "availability_slots"

    id = Column(String(26), primary_key=True, default=lambda: str(ulid.ULID()))
    teacher_id = Column(String(26), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    day_of_week = Column(Integer, nullable=False)
    start_time = Column(Time, nullable=False)
    end_time = Column(Time, nullable=False)
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
        Index("idx_availability_teacher_day", "teacher_id", "day_of_week", "start_time"),
        CheckConstraint("day_of_week >= 0 AND day_of_week <= 6", name="ck_availability_day"),
        CheckConstraint("start_time < end_time", name="ck_availability_time_order"),
    )

    def overlaps(self, start, end) -> bool:
        """Half-open interval intersection; touching edges do not overlap."""
        return self.start_time < end and start < self.end_time

    def __repr__(self) -> str:
        return (
            f"<AvailabilitySlot {self.teacher_id} day={self.day_of_week} "
            f"{self.start_time}-{self.end_time}>"
        )
