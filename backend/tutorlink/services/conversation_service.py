# backend/tutorlink/services/conversation_service.py
"""
Conversation & messaging service.

A conversation is *active* while its originating contact request is
ACCEPTED. Sending and reading messages go through the same gates, in order:

1. the conversation exists (NOT_FOUND)
2. the caller is one of its two participants (FORBIDDEN)
3. the conversation is active (CONFLICT)

Used by both the HTTP routes and the websocket gateway.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from ..core.constants import (
    CONVERSATION_LIST_DEFAULT_LIMIT,
    CONVERSATION_LIST_MAX_LIMIT,
    MESSAGE_MAX_LENGTH,
)
from ..core.exceptions import (
    ConversationInactiveException,
    ForbiddenException,
    NotFoundException,
    ValidationException,
)
from ..models.conversation import Conversation
from ..models.message import Message
from ..repositories.factory import RepositoryFactory
from ..schemas.auth import UserPublic
from ..schemas.conversation import (
    ContactRequestSummary,
    ConversationListItem,
    ConversationListResponse,
    LastMessagePreview,
    MessageResponse,
)
from ..utils.pagination import clamp_int, clamp_page, clamp_page_size
from .base import BaseService
from .messaging.events import EventPublisher, EventType, NullEventPublisher, conversation_room

logger = logging.getLogger(__name__)


@dataclass
class MessagePage:
    messages: List[Message]
    page: int
    page_size: int
    total: int


def normalize_message_content(content: Optional[str]) -> str:
    """Trim and length-check message text."""
    if content is not None and not isinstance(content, str):
        raise ValidationException("Message content must be a string")
    text = (content or "").strip()
    if not text:
        raise ValidationException("Message content cannot be empty")
    if len(text) > MESSAGE_MAX_LENGTH:
        raise ValidationException(
            f"Message content must be at most {MESSAGE_MAX_LENGTH} characters",
            details={"maxLength": MESSAGE_MAX_LENGTH},
        )
    return text


class ConversationService(BaseService):
    """
    Service for conversation listing and message operations.
    """

    def __init__(self, db: Session, publisher: Optional[EventPublisher] = None):
        super().__init__(db)
        self.publisher: EventPublisher = publisher or NullEventPublisher()
        self.conversation_repository = RepositoryFactory.create_conversation_repository(db)
        self.message_repository = RepositoryFactory.create_message_repository(db)
        self.contact_request_repository = RepositoryFactory.create_contact_request_repository(db)
        self.user_repository = RepositoryFactory.create_user_repository(db)

    def get_active_conversation_for_participant(
        self, conversation_id: str, user_id: str
    ) -> Conversation:
        """
        Load a conversation the user may message in.

        Raises:
            NotFoundException: Conversation absent
            ForbiddenException: User is not a participant
            ConversationInactiveException: Originating request is not ACCEPTED
        """
        conversation = self.get_conversation_for_participant(conversation_id, user_id)
        if not self.conversation_repository.is_active(conversation):
            raise ConversationInactiveException(conversation.id)
        return conversation

    def get_conversation_for_participant(
        self, conversation_id: str, user_id: str
    ) -> Conversation:
        conversation = self.conversation_repository.get_by_id(conversation_id)
        if conversation is None:
            raise NotFoundException("Conversation not found")
        if not conversation.is_participant(user_id):
            raise ForbiddenException("User is not a participant of the conversation")
        return conversation

    @BaseService.measure_operation("list_conversations")
    def list_conversations(
        self, user_id: str, limit: Optional[int] = None, offset: Optional[int] = None
    ) -> ConversationListResponse:
        """
        Inbox for a user, most recently active conversation first.

        Each row carries the other participant's public profile, the latest
        message (if any) and the originating request summary.
        """
        limit = clamp_int(limit, CONVERSATION_LIST_DEFAULT_LIMIT, 1, CONVERSATION_LIST_MAX_LIMIT)
        offset = clamp_int(offset, 0, 0, 1_000_000)

        conversations = self.conversation_repository.list_for_user(
            user_id, limit=limit, offset=offset
        )
        partners = self.user_repository.get_many_by_ids(
            c.get_other_user_id(user_id) for c in conversations
        )
        latest = self.message_repository.latest_for_conversations(c.id for c in conversations)
        requests = self.contact_request_repository.get_many_by_ids(
            c.request_id for c in conversations
        )

        items: List[ConversationListItem] = []
        for conversation in conversations:
            partner = partners.get(conversation.get_other_user_id(user_id))
            message = latest.get(conversation.id)
            request = requests.get(conversation.request_id) if conversation.request_id else None
            items.append(
                ConversationListItem(
                    id=conversation.id,
                    partner=UserPublic.model_validate(partner) if partner else None,
                    last_message=LastMessagePreview.model_validate(message) if message else None,
                    contact_request=(
                        ContactRequestSummary.model_validate(request) if request else None
                    ),
                    is_active=bool(request and request.is_accepted),
                    created_at=conversation.created_at,
                    updated_at=conversation.updated_at,
                )
            )
        return ConversationListResponse(conversations=items, limit=limit, offset=offset)

    @BaseService.measure_operation("send_message")
    def send_message(self, conversation_id: str, sender_id: str, content: Optional[str]) -> Message:
        """
        Persist a message and bump the conversation's recency.

        Publishes ``message:new`` to the conversation room after commit.

        Raises:
            NotFoundException, ForbiddenException, ConversationInactiveException,
            ValidationException (empty or over 2000 characters after trim)
        """
        conversation = self.get_active_conversation_for_participant(conversation_id, sender_id)
        text = normalize_message_content(content)

        with self.transaction():
            now = datetime.now(timezone.utc)
            message = self.message_repository.create(
                conversation_id=conversation.id,
                sender_id=sender_id,
                content=text,
                created_at=now,
            )
            self.conversation_repository.touch(conversation, now)

        self.logger.debug(f"Message {message.id} stored in conversation {conversation.id}")
        self.publisher.publish(
            [conversation_room(conversation.id)],
            EventType.MESSAGE_NEW,
            {
                "conversationId": conversation.id,
                "message": MessageResponse.model_validate(message).to_wire(),
            },
        )
        return message

    @BaseService.measure_operation("list_messages")
    def list_messages(
        self,
        conversation_id: str,
        user_id: str,
        page: Optional[int] = None,
        page_size: Optional[int] = None,
    ) -> MessagePage:
        """Newest-first page of messages, behind the same gates as sending."""
        conversation = self.get_active_conversation_for_participant(conversation_id, user_id)
        page = clamp_page(page)
        page_size = clamp_page_size(page_size)
        messages, total = self.message_repository.page_for_conversation(
            conversation.id, page=page, page_size=page_size
        )
        return MessagePage(messages=messages, page=page, page_size=page_size, total=total)
