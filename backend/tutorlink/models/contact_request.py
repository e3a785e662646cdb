# backend/tutorlink/models/contact_request.py
"""
Contact request from a student to a teacher.

Lifecycle: PENDING -> ACCEPTED | REJECTED. Both outcomes are terminal.
A partial unique index guarantees at most one PENDING request per
(student, teacher) pair, so concurrent creates cannot both succeed.
"""

from datetime import datetime, timezone

from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Index, String, Text, text
import ulid

from ..core.enums import ContactRequestStatus
from ..database import Base


class ContactRequest(Base):
    __tablename__ = "contact_requests"

    id = Column(String(26), primary_key=True, default=lambda: str(ulid.ULID()))
    student_id = Column(String(26), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    teacher_id = Column(String(26), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    message = Column(Text, nullable=False, default="")
    status = Column(String(20), nullable=False, default=ContactRequestStatus.PENDING.value)
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
        CheckConstraint(
            "status IN ('PENDING', 'ACCEPTED', 'REJECTED')", name="ck_contact_requests_status"
        ),
        CheckConstraint("student_id <> teacher_id", name="ck_contact_requests_distinct_users"),
        Index(
            "uq_contact_requests_pending_pair",
            "student_id",
            "teacher_id",
            unique=True,
            postgresql_where=text("status = 'PENDING'"),
            sqlite_where=text("status = 'PENDING'"),
        ),
        Index("idx_contact_requests_teacher_created", "teacher_id", "created_at"),
        Index("idx_contact_requests_student_created", "student_id", "created_at"),
    )

    def is_participant(self, user_id: str) -> bool:
        return user_id in (self.student_id, self.teacher_id)

    @property
    def is_accepted(self) -> bool:
        return self.status == ContactRequestStatus.ACCEPTED.value
