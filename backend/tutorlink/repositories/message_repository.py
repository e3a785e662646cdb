# backend/tutorlink/repositories/message_repository.py
from typing import Dict, Iterable, List

from sqlalchemy import func
from sqlalchemy.orm import Session

from ..models.message import Message
from .base_repository import BaseRepository


class MessageRepository(BaseRepository[Message]):
    def __init__(self, db: Session):
        super().__init__(db, Message)

    def page_for_conversation(
        self, conversation_id: str, *, page: int, page_size: int
    ) -> tuple[List[Message], int]:
        """Newest first."""
        query = (
            self._build_query()
            .filter(Message.conversation_id == conversation_id)
            .order_by(Message.created_at.desc(), Message.id.desc())
        )
        return self._paginate(query, page, page_size)

    def latest_for_conversations(self, conversation_ids: Iterable[str]) -> Dict[str, Message]:
        """Most recent message per conversation, in one query."""
        ids = list(set(conversation_ids))
        if not ids:
            return {}
        ranked = (
            self.db.query(
                Message.id.label("message_id"),
                func.row_number()
                .over(
                    partition_by=Message.conversation_id,
                    order_by=(Message.created_at.desc(), Message.id.desc()),
                )
                .label("rn"),
            )
            .filter(Message.conversation_id.in_(ids))
            .subquery()
        )
        rows = self._execute_query(
            self._build_query()
            .join(ranked, ranked.c.message_id == Message.id)
            .filter(ranked.c.rn == 1)
        )
        return {message.conversation_id: message for message in rows}
