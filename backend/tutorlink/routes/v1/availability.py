# backend/tutorlink/routes/v1/availability.py
"""
Availability routes.

Weekly recurring slots of a teacher. Writes are TEACHER-only and act on the
caller's own slots; the per-teacher listing is public.

Endpoints:
    POST /                      → Create a slot
    GET /me                     → Caller's slots
    GET /teacher/{teacher_id}   → A teacher's slots (optional ?dayOfWeek)
    GET /{slot_id}              → One of the caller's slots
    PATCH /{slot_id}            → Partial update
    DELETE /{slot_id}           → Delete one slot
    DELETE /                    → Delete all of the caller's slots
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, Response, status

from ...api.dependencies import get_availability_service, get_current_teacher
from ...core.exceptions import DomainException
from ...models.user import User
from ...schemas.availability import (
    AvailabilitySlotCreate,
    AvailabilitySlotResponse,
    AvailabilitySlotUpdate,
    DeletedCountResponse,
    SlotEnvelope,
    SlotListEnvelope,
)
from ...services.availability_service import AvailabilityService
from .. import handle_domain_exception

logger = logging.getLogger(__name__)

router = APIRouter(tags=["availability"])


def _slot_list(slots) -> SlotListEnvelope:
    return SlotListEnvelope(slots=[AvailabilitySlotResponse.model_validate(s) for s in slots])


@router.post("", response_model=SlotEnvelope, status_code=status.HTTP_201_CREATED)
def create_slot(
    payload: AvailabilitySlotCreate,
    current_user: User = Depends(get_current_teacher),
    service: AvailabilityService = Depends(get_availability_service),
) -> SlotEnvelope:
    try:
        slot = service.create_slot(
            current_user.id, payload.day_of_week, payload.start_time, payload.end_time
        )
        return SlotEnvelope(slot=AvailabilitySlotResponse.model_validate(slot))
    except DomainException as e:
        handle_domain_exception(e)


@router.get("/me", response_model=SlotListEnvelope)
def list_my_slots(
    current_user: User = Depends(get_current_teacher),
    service: AvailabilityService = Depends(get_availability_service),
) -> SlotListEnvelope:
    return _slot_list(service.list_mine(current_user.id))


@router.get("/teacher/{teacher_user_id}", response_model=SlotListEnvelope)
def list_teacher_slots(
    teacher_user_id: str,
    day_of_week: Optional[int] = Query(None, alias="dayOfWeek"),
    service: AvailabilityService = Depends(get_availability_service),
) -> SlotListEnvelope:
    """Public weekly availability of a teacher."""
    try:
        return _slot_list(service.list_for_teacher(teacher_user_id, day_of_week))
    except DomainException as e:
        handle_domain_exception(e)


@router.get("/{slot_id}", response_model=SlotEnvelope)
def get_slot(
    slot_id: str,
    current_user: User = Depends(get_current_teacher),
    service: AvailabilityService = Depends(get_availability_service),
) -> SlotEnvelope:
    try:
        slot = service.get_slot(slot_id, current_user.id)
        return SlotEnvelope(slot=AvailabilitySlotResponse.model_validate(slot))
    except DomainException as e:
        handle_domain_exception(e)


@router.patch("/{slot_id}", response_model=SlotEnvelope)
def update_slot(
    slot_id: str,
    payload: AvailabilitySlotUpdate,
    current_user: User = Depends(get_current_teacher),
    service: AvailabilityService = Depends(get_availability_service),
) -> SlotEnvelope:
    try:
        slot = service.update_slot(
            slot_id,
            current_user.id,
            day_of_week=payload.day_of_week,
            start_time=payload.start_time,
            end_time=payload.end_time,
        )
        return SlotEnvelope(slot=AvailabilitySlotResponse.model_validate(slot))
    except DomainException as e:
        handle_domain_exception(e)


@router.delete("/{slot_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_slot(
    slot_id: str,
    current_user: User = Depends(get_current_teacher),
    service: AvailabilityService = Depends(get_availability_service),
) -> Response:
    try:
        service.delete_slot(slot_id, current_user.id)
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    except DomainException as e:
        handle_domain_exception(e)


@router.delete("", response_model=DeletedCountResponse)
def delete_all_slots(
    current_user: User = Depends(get_current_teacher),
    service: AvailabilityService = Depends(get_availability_service),
) -> DeletedCountResponse:
    try:
        return DeletedCountResponse(deleted_count=service.delete_all(current_user.id))
    except DomainException as e:
        handle_domain_exception(e)
