# backend/tutorlink/routes/v1/conversations.py
"""
Conversation routes.

Endpoints:
    GET /                         → Caller's inbox (?limit&offset)
    POST /{id}/messages           → Send a message
    GET /{id}/messages            → Newest-first message page (?page&pageSize)

Messages sent here are also fanned out to the conversation's websocket room.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from ...api.dependencies import get_conversation_service, get_current_user
from ...core.exceptions import DomainException
from ...models.user import User
from ...schemas.conversation import (
    ConversationListResponse,
    MessageResponse,
    MessagesPage,
    SendMessageRequest,
)
from ...services.conversation_service import ConversationService
from .. import handle_domain_exception

logger = logging.getLogger(__name__)

router = APIRouter(tags=["conversations"])


@router.get("", response_model=ConversationListResponse)
def list_conversations(
    limit: Optional[str] = Query(None),
    offset: Optional[str] = Query(None),
    current_user: User = Depends(get_current_user),
    service: ConversationService = Depends(get_conversation_service),
) -> ConversationListResponse:
    try:
        return service.list_conversations(current_user.id, limit=limit, offset=offset)
    except DomainException as e:
        handle_domain_exception(e)


@router.post(
    "/{conversation_id}/messages",
    response_model=MessageResponse,
    status_code=status.HTTP_201_CREATED,
)
def send_message(
    conversation_id: str,
    payload: SendMessageRequest,
    current_user: User = Depends(get_current_user),
    service: ConversationService = Depends(get_conversation_service),
) -> MessageResponse:
    try:
        message = service.send_message(conversation_id, current_user.id, payload.content)
        return MessageResponse.model_validate(message)
    except DomainException as e:
        handle_domain_exception(e)


@router.get("/{conversation_id}/messages", response_model=MessagesPage)
def list_messages(
    conversation_id: str,
    page: Optional[str] = Query(None),
    page_size: Optional[str] = Query(None, alias="pageSize"),
    current_user: User = Depends(get_current_user),
    service: ConversationService = Depends(get_conversation_service),
) -> MessagesPage:
    try:
        result = service.list_messages(conversation_id, current_user.id, page, page_size)
        return MessagesPage(
            messages=[MessageResponse.model_validate(m) for m in result.messages],
            page=result.page,
            page_size=result.page_size,
            total=result.total,
        )
    except DomainException as e:
        handle_domain_exception(e)
