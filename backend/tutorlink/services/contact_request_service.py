# backend/tutorlink/services/contact_request_service.py
"""
Contact-request state machine.

    PENDING ──> ACCEPTED   (opens exactly one Conversation)
       └──────> REJECTED

ACCEPTED and REJECTED are terminal: any further transition fails with
CONFLICT. Setting PENDING on a PENDING request is a no-op.

Race safety comes from the storage layer: a partial unique index allows one
PENDING request per (student, teacher) pair, and ``conversations.request_id``
is unique. Constraint violations surface as ConflictException.

Real-time notifications go out through the injected EventPublisher after
the transaction commits.
"""

import logging
from typing import List, Optional, Tuple

from sqlalchemy.orm import Session

from ..core.constants import CONTACT_REQUEST_MESSAGE_MAX_LENGTH
from ..core.enums import ContactRequestStatus, UserRole
from ..core.exceptions import (
    ConflictException,
    ForbiddenException,
    IntegrityConflictError,
    NotFoundException,
    PendingRequestExistsException,
    ValidationException,
)
from ..models.contact_request import ContactRequest
from ..models.conversation import Conversation
from ..repositories.factory import RepositoryFactory
from ..schemas.auth import UserPublic
from ..schemas.contact_request import ContactRequestListItem
from ..schemas.conversation import ConversationResponse
from .base import BaseService
from .messaging.events import EventPublisher, EventType, NullEventPublisher, user_room

logger = logging.getLogger(__name__)


def parse_request_status(value: Optional[str]) -> ContactRequestStatus:
    try:
        return ContactRequestStatus(value)
    except ValueError:
        raise ValidationException(
            "Invalid status value",
            details={"allowed": [s.value for s in ContactRequestStatus]},
        )


class ContactRequestService(BaseService):
    def __init__(self, db: Session, publisher: Optional[EventPublisher] = None):
        super().__init__(db)
        self.publisher: EventPublisher = publisher or NullEventPublisher()
        self.repository = RepositoryFactory.create_contact_request_repository(db)
        self.conversation_repository = RepositoryFactory.create_conversation_repository(db)
        self.user_repository = RepositoryFactory.create_user_repository(db)

    # Serialization helpers for event payloads and list responses

    def _with_participants(self, request: ContactRequest) -> ContactRequestListItem:
        users = self.user_repository.get_many_by_ids([request.student_id, request.teacher_id])
        item = ContactRequestListItem.model_validate(request)
        student = users.get(request.student_id)
        teacher = users.get(request.teacher_id)
        item.student = UserPublic.model_validate(student) if student else None
        item.teacher = UserPublic.model_validate(teacher) if teacher else None
        return item

    def _notify_pair(self, request: ContactRequest, event: EventType, data: dict) -> None:
        self.publisher.publish(
            [user_room(request.teacher_id), user_room(request.student_id)], event, data
        )

    @BaseService.measure_operation("create_contact_request")
    def create(
        self, student_id: str, teacher_id: Optional[str], message: Optional[str]
    ) -> ContactRequest:
        """
        Open a PENDING request from a student to a teacher.

        Raises:
            ValidationException: Missing teacher id, same user, or message too long
            NotFoundException: Teacher does not exist
            PendingRequestExistsException: A PENDING request already links the pair
        """
        if not teacher_id:
            raise ValidationException("Teacher user ID is required")
        if student_id == teacher_id:
            raise ValidationException("Student and teacher IDs must be different")
        if self.user_repository.get_teacher(teacher_id) is None:
            raise NotFoundException("Teacher not found")

        text = (message or "").strip()
        if len(text) > CONTACT_REQUEST_MESSAGE_MAX_LENGTH:
            raise ValidationException(
                f"Message must be at most {CONTACT_REQUEST_MESSAGE_MAX_LENGTH} characters"
            )
        if self.repository.find_pending(student_id, teacher_id) is not None:
            raise PendingRequestExistsException()

        try:
            with self.transaction():
                request = self.repository.create(
                    student_id=student_id,
                    teacher_id=teacher_id,
                    message=text,
                    status=ContactRequestStatus.PENDING.value,
                )
        except IntegrityConflictError:
            raise PendingRequestExistsException()

        self.logger.info(f"Contact request {request.id} created: {student_id} -> {teacher_id}")
        self._notify_pair(
            request,
            EventType.CONTACT_REQUEST_CREATED,
            {"contactRequest": self._with_participants(request).to_wire()},
        )
        return request

    def list_mine(
        self, user_id: str, role: str, status_filter: Optional[str] = None
    ) -> List[ContactRequestListItem]:
        """
        Sent requests for a student, received requests for a teacher.

        Newest first, optionally filtered by status.
        """
        status = parse_request_status(status_filter) if status_filter else None
        if role == UserRole.STUDENT.value:
            requests = self.repository.list_sent(user_id, status)
        elif role == UserRole.TEACHER.value:
            requests = self.repository.list_received(user_id, status)
        else:
            raise ForbiddenException("Only students and teachers have contact requests")
        return [self._with_participants(request) for request in requests]

    @BaseService.measure_operation("update_contact_request_status")
    def update_status(
        self, request_id: str, acting_user_id: str, new_status: Optional[str]
    ) -> Tuple[ContactRequest, Optional[Conversation]]:
        """
        Move a request out of PENDING.

        Only the addressed teacher may act. Accepting creates the paired
        conversation in the same transaction.

        Returns:
            The request and the conversation created by this call (or None)

        Raises:
            NotFoundException: Unknown request
            ValidationException: Unknown status value
            ForbiddenException: Caller is not the addressed teacher
            ConflictException: Request already ACCEPTED or REJECTED
        """
        request = self.repository.get_by_id(request_id)
        if request is None:
            raise NotFoundException("Contact request not found")
        target = parse_request_status(new_status)
        if acting_user_id != request.teacher_id:
            raise ForbiddenException("You are not authorized to update this contact request")

        current = ContactRequestStatus(request.status)
        if current.is_terminal:
            raise ConflictException(
                f"Contact request is already {current.value}",
                details={"status": current.value},
            )
        if target is ContactRequestStatus.PENDING:
            return request, None

        conversation: Optional[Conversation] = None
        try:
            with self.transaction():
                # Row lock so two concurrent decisions cannot both pass the PENDING check.
                locked = self.repository.get_by_id(request_id, for_update=True)
                if locked is None or locked.status != ContactRequestStatus.PENDING.value:
                    raise ConflictException("Contact request was already decided")
                self.repository.update(locked, status=target.value)
                if target is ContactRequestStatus.ACCEPTED:
                    conversation = self.conversation_repository.create(
                        student_id=locked.student_id,
                        teacher_id=locked.teacher_id,
                        request_id=locked.id,
                    )
        except IntegrityConflictError:
            raise ConflictException("A conversation already exists for this contact request")

        self.logger.info(f"Contact request {request.id} moved {current.value} -> {target.value}")
        self._notify_pair(
            request,
            EventType.CONTACT_REQUEST_STATUS_UPDATED,
            {
                "contactRequest": self._with_participants(request).to_wire(),
                "conversation": (
                    ConversationResponse.model_validate(conversation).to_wire()
                    if conversation
                    else None
                ),
            },
        )
        return request, conversation

    @BaseService.measure_operation("cancel_contact_request")
    def cancel(self, request_id: str, acting_user_id: str) -> None:
        """
        Delete a request. Either participant may cancel.

        A conversation opened from this request loses its link and becomes
        inactive.
        """
        request = self.repository.get_by_id(request_id)
        if request is None:
            raise NotFoundException("Contact request not found")
        if not request.is_participant(acting_user_id):
            raise ForbiddenException("You are not authorized to cancel this contact request")
        with self.transaction():
            conversation = self.conversation_repository.get_by_request_id(request.id)
            if conversation is not None:
                self.conversation_repository.update(conversation, request_id=None)
            self.repository.delete(request.id)
        self.logger.info(f"Contact request {request_id} cancelled by {acting_user_id}")
