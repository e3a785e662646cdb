# backend/tutorlink/models/student_profile.py
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, ForeignKey, String
import ulid

from ..database import Base


class StudentProfile(Base):
    """Optional study details for a student account."""

    __tablename__ = "student_profiles"

    id = Column(String(26), primary_key=True, default=lambda: str(ulid.ULID()))
    user_id = Column(
        String(26), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, unique=True
    )
    city = Column(String(255), nullable=True)
    level = Column(String(20), nullable=True)
    track = Column(String(255), nullable=True)
    created_at = Column(
        DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc)
    )
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )
