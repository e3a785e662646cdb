# backend/tutorlink/repositories/conversation_repository.py
"""
Conversation Repository.

Provides data access methods for conversations between students and teachers,
including the recency-ordered listing used by the inbox.
"""

from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session

from ..core.enums import ContactRequestStatus
from ..models.contact_request import ContactRequest
from ..models.conversation import Conversation
from .base_repository import BaseRepository


class ConversationRepository(BaseRepository[Conversation]):
    """
    Repository for Conversation entity operations.

    Handles:
    - Lookup by originating contact request
    - Listing conversations for a participant
    - Bumping the recency timestamp when a message arrives
    """

    def __init__(self, db: Session):
        """Initialize with database session."""
        super().__init__(db, Conversation)

    def get_by_request_id(self, request_id: str) -> Optional[Conversation]:
        return self.find_one_by(request_id=request_id)

    def list_for_user(self, user_id: str, *, limit: int, offset: int) -> List[Conversation]:
        """Conversations the user takes part in, most recently active first."""
        query = (
            self._build_query()
            .filter(or_(Conversation.student_id == user_id, Conversation.teacher_id == user_id))
            .order_by(Conversation.updated_at.desc(), Conversation.id.desc())
            .offset(offset)
            .limit(limit)
        )
        return self._execute_query(query)

    def is_active(self, conversation: Conversation) -> bool:
        """True when the originating contact request exists and is ACCEPTED."""
        if not conversation.request_id:
            return False
        status = (
            self.db.query(ContactRequest.status)
            .filter(ContactRequest.id == conversation.request_id)
            .scalar()
        )
        return status == ContactRequestStatus.ACCEPTED.value

    def touch(self, conversation: Conversation, when: Optional[datetime] = None) -> None:
        conversation.updated_at = when or datetime.now(timezone.utc)
        self.db.flush()
