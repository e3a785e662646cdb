# backend/tutorlink/routes/v1/students.py
"""
Student profile routes.

Endpoints:
    GET /me         → Caller's student profile
    PATCH /me       → Edit city, level, track
    GET /{user_id}  → A student's profile (public)
"""

import logging

from fastapi import APIRouter, Depends

from ...api.dependencies import get_current_user, get_student_service
from ...core.exceptions import DomainException
from ...models.user import User
from ...schemas.student import StudentProfileEnvelope, StudentProfileResponse, StudentProfileUpdate
from ...services.student_service import StudentService
from .. import handle_domain_exception

logger = logging.getLogger(__name__)

router = APIRouter(tags=["students"])


@router.get("/me", response_model=StudentProfileEnvelope)
def get_my_profile(
    current_user: User = Depends(get_current_user),
    service: StudentService = Depends(get_student_service),
) -> StudentProfileEnvelope:
    try:
        profile = service.get_profile(current_user.id)
        return StudentProfileEnvelope(profile=StudentProfileResponse.model_validate(profile))
    except DomainException as e:
        handle_domain_exception(e)


@router.patch("/me", response_model=StudentProfileEnvelope)
def update_my_profile(
    payload: StudentProfileUpdate,
    current_user: User = Depends(get_current_user),
    service: StudentService = Depends(get_student_service),
) -> StudentProfileEnvelope:
    try:
        profile = service.update_profile(current_user.id, **payload.model_dump(exclude_unset=True))
        return StudentProfileEnvelope(profile=StudentProfileResponse.model_validate(profile))
    except DomainException as e:
        handle_domain_exception(e)


@router.get("/{user_id}", response_model=StudentProfileEnvelope)
def get_student_profile(
    user_id: str,
    service: StudentService = Depends(get_student_service),
) -> StudentProfileEnvelope:
    try:
        profile = service.get_profile(user_id)
        return StudentProfileEnvelope(profile=StudentProfileResponse.model_validate(profile))
    except DomainException as e:
        handle_domain_exception(e)
