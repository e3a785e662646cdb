from datetime import datetime
from typing import List, Optional


from .auth import UserPublic
from .base import ApiModel, StrictRequestModel, wire_field
from .conversation import ConversationResponse


class ContactRequestCreate(StrictRequestModel):
    teacher_user_id: Optional[str] = None
    message: Optional[str] = None


class ContactRequestStatusUpdate(StrictRequestModel):
    status: str


class ContactRequestResponse(ApiModel):
    id: str
    student_user_id: str = wire_field("student_id", "studentUserId")
    teacher_user_id: str = wire_field("teacher_id", "teacherUserId")
    message: str
    status: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ContactRequestListItem(ContactRequestResponse):
    student: Optional[UserPublic] = None
    teacher: Optional[UserPublic] = None


class ContactRequestEnvelope(ApiModel):
    contact_request: ContactRequestResponse


class ContactRequestListEnvelope(ApiModel):
    contact_requests: List[ContactRequestListItem]


class ContactRequestStatusResult(ContactRequestResponse):
    """PATCH response: the request plus the conversation opened on acceptance."""

    conversation: Optional[ConversationResponse] = None
