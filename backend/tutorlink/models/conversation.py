# backend/tutorlink/models/conversation.py
"""
Conversation model.

A conversation is created exactly once, when a contact request is accepted,
and pairs that request's student and teacher. ``request_id`` is unique so a
repeated acceptance can never produce a second conversation.

A conversation is *active* while its originating request is ACCEPTED. If the
request is cancelled (deleted) ``request_id`` becomes NULL and the
conversation becomes inactive.
"""

from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, ForeignKey, Index, String
import ulid

from ..database import Base


class Conversation(Base):
    """
    Conversation between a student and a teacher.

    Attributes:
        id: ULID primary key
        student_id: Foreign key to the student (User)
        teacher_id: Foreign key to the teacher (User)
        request_id: Originating contact request, unique
        created_at: When the conversation was created
        updated_at: Recency marker, bumped on every new message
    """

    __tablename__ = "conversations"

    id = Column(String(26), primary_key=True, default=lambda: str(ulid.ULID()))
    student_id = Column(String(26), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    teacher_id = Column(String(26), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    request_id = Column(
        String(26),
        ForeignKey("contact_requests.id", ondelete="SET NULL"),
        nullable=True,
        unique=True,
    )
    created_at = Column(
        DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc)
    )
    updated_at = Column(
        DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc)
    )

    __table_args__ = (
        Index("idx_conversations_student_updated", "student_id", "updated_at"),
        Index("idx_conversations_teacher_updated", "teacher_id", "updated_at"),
    )

    def is_participant(self, user_id: str) -> bool:
        """Check if a user is a participant in this conversation."""
        return user_id in (self.student_id, self.teacher_id)

    def get_other_user_id(self, user_id: str) -> str:
        """Get the ID of the other participant."""
        if user_id == self.student_id:
            return self.teacher_id
        return self.student_id

    def __repr__(self) -> str:
        return f"<Conversation {self.id}: {self.student_id} <-> {self.teacher_id}>"
