# backend/tutorlink/schemas/conversation.py
"""
Pydantic schemas for conversations and messages.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import Field

from .auth import UserPublic
from .base import ApiModel, StrictRequestModel, wire_field


class ConversationResponse(ApiModel):
    id: str
    student_user_id: str = wire_field("student_id", "studentUserId")
    teacher_user_id: str = wire_field("teacher_id", "teacherUserId")
    request_id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class MessageResponse(ApiModel):
    id: str
    conversation_id: str
    sender_user_id: str = wire_field("sender_id", "senderUserId")
    content: str
    created_at: Optional[datetime] = None


class LastMessagePreview(ApiModel):
    id: str
    sender_user_id: str = wire_field("sender_id", "senderUserId")
    content: str
    created_at: Optional[datetime] = None


class ContactRequestSummary(ApiModel):
    id: str
    status: str
    message: str


class ConversationListItem(ApiModel):
    """Inbox row: the other participant plus the latest message, if any."""

    id: str
    partner: Optional[UserPublic] = None
    last_message: Optional[LastMessagePreview] = None
    contact_request: Optional[ContactRequestSummary] = None
    is_active: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ConversationListResponse(ApiModel):
    conversations: List[ConversationListItem]
    limit: int
    offset: int


class SendMessageRequest(StrictRequestModel):
    # Length is checked after trimming by the service.
    content: Optional[str] = Field(default=None)


class MessagesPage(ApiModel):
    messages: List[MessageResponse]
    page: int
    page_size: int
    total: int
