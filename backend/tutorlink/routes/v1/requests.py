# backend/tutorlink/routes/v1/requests.py
"""
Contact request routes.

Endpoints:
    POST /            → Student opens a request to a teacher
    GET /me           → Sent (student) or received (teacher) requests
    PATCH /{id}       → Teacher accepts or rejects
    DELETE /{id}      → Either participant cancels
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, Response, status

from ...api.dependencies import (
    get_contact_request_service,
    get_current_student,
    get_current_teacher,
    get_current_user,
)
from ...core.exceptions import DomainException
from ...models.user import User
from ...schemas.contact_request import (
    ContactRequestCreate,
    ContactRequestEnvelope,
    ContactRequestListEnvelope,
    ContactRequestResponse,
    ContactRequestStatusResult,
    ContactRequestStatusUpdate,
)
from ...schemas.conversation import ConversationResponse
from ...services.contact_request_service import ContactRequestService
from .. import handle_domain_exception

logger = logging.getLogger(__name__)

router = APIRouter(tags=["contact-requests"])


@router.post("", response_model=ContactRequestEnvelope, status_code=status.HTTP_201_CREATED)
def create_contact_request(
    payload: ContactRequestCreate,
    current_user: User = Depends(get_current_student),
    service: ContactRequestService = Depends(get_contact_request_service),
) -> ContactRequestEnvelope:
    try:
        request = service.create(current_user.id, payload.teacher_user_id, payload.message)
        return ContactRequestEnvelope(contact_request=ContactRequestResponse.model_validate(request))
    except DomainException as e:
        handle_domain_exception(e)


@router.get("/me", response_model=ContactRequestListEnvelope)
def list_my_contact_requests(
    status_filter: Optional[str] = Query(None, alias="status"),
    current_user: User = Depends(get_current_user),
    service: ContactRequestService = Depends(get_contact_request_service),
) -> ContactRequestListEnvelope:
    try:
        items = service.list_mine(current_user.id, current_user.role, status_filter)
        return ContactRequestListEnvelope(contact_requests=items)
    except DomainException as e:
        handle_domain_exception(e)


@router.patch("/{request_id}", response_model=ContactRequestStatusResult)
def update_contact_request_status(
    request_id: str,
    payload: ContactRequestStatusUpdate,
    current_user: User = Depends(get_current_teacher),
    service: ContactRequestService = Depends(get_contact_request_service),
) -> ContactRequestStatusResult:
    """
    Move a PENDING request to ACCEPTED or REJECTED.

    On acceptance the response carries the newly opened conversation.
    """
    try:
        request, conversation = service.update_status(request_id, current_user.id, payload.status)
        result = ContactRequestStatusResult.model_validate(request)
        if conversation is not None:
            result.conversation = ConversationResponse.model_validate(conversation)
        return result
    except DomainException as e:
        handle_domain_exception(e)


@router.delete("/{request_id}", status_code=status.HTTP_204_NO_CONTENT)
def cancel_contact_request(
    request_id: str,
    current_user: User = Depends(get_current_user),
    service: ContactRequestService = Depends(get_contact_request_service),
) -> Response:
    try:
        service.cancel(request_id, current_user.id)
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    except DomainException as e:
        handle_domain_exception(e)
