# backend/tutorlink/routes/v1/teachers.py
"""
Teacher routes.

Endpoints:
    GET /                          → Search (?city&subjectId&page&pageSize)
    GET /me                        → Caller's teacher profile
    PATCH /me                      → Edit bio, city, hourlyRate
    PUT /me/subjects               → Replace the subject set
    GET /{user_id}                 → A teacher's profile
    GET /{user_id}/reviews         → A teacher's reviews (public)
    GET /{user_id}/availability    → A teacher's weekly slots (public)
    GET /{user_id}/lessons         → The caller's own lessons as teacher
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query

from ...api.dependencies import (
    get_availability_service,
    get_current_teacher,
    get_current_user,
    get_lesson_service,
    get_review_service,
    get_teacher_service,
)
from ...core.enums import UserRole
from ...core.exceptions import DomainException, ForbiddenException
from ...models.user import User
from ...schemas.availability import AvailabilitySlotResponse, SlotListEnvelope
from ...schemas.lesson import LessonPage
from ...schemas.review import ReviewPage
from ...schemas.teacher import (
    TeacherProfileEnvelope,
    TeacherProfileUpdate,
    TeacherSearchPage,
    TeacherSubjectsUpdate,
)
from ...services.availability_service import AvailabilityService
from ...services.lesson_service import LessonService
from ...services.review_service import ReviewService
from ...services.teacher_service import TeacherService
from .. import handle_domain_exception
from .lessons import lesson_page
from .reviews import review_page

logger = logging.getLogger(__name__)

router = APIRouter(tags=["teachers"])


@router.get("", response_model=TeacherSearchPage)
def search_teachers(
    city: Optional[str] = Query(None),
    subject_id: Optional[str] = Query(None, alias="subjectId"),
    page: Optional[str] = Query(None),
    page_size: Optional[str] = Query(None, alias="pageSize"),
    service: TeacherService = Depends(get_teacher_service),
) -> TeacherSearchPage:
    """Public search with exact city/subject filters."""
    return service.search(city=city, subject_id=subject_id, page=page, page_size=page_size)


@router.get("/me", response_model=TeacherProfileEnvelope)
def get_my_profile(
    current_user: User = Depends(get_current_user),
    service: TeacherService = Depends(get_teacher_service),
) -> TeacherProfileEnvelope:
    try:
        return TeacherProfileEnvelope(profile=service.get_profile(current_user.id))
    except DomainException as e:
        handle_domain_exception(e)


@router.patch("/me", response_model=TeacherProfileEnvelope)
def update_my_profile(
    payload: TeacherProfileUpdate,
    current_user: User = Depends(get_current_user),
    service: TeacherService = Depends(get_teacher_service),
) -> TeacherProfileEnvelope:
    try:
        profile = service.update_profile(
            current_user.id, **payload.model_dump(exclude_unset=True)
        )
        return TeacherProfileEnvelope(profile=profile)
    except DomainException as e:
        handle_domain_exception(e)


@router.put("/me/subjects", response_model=TeacherProfileEnvelope)
def replace_my_subjects(
    payload: TeacherSubjectsUpdate,
    current_user: User = Depends(get_current_teacher),
    service: TeacherService = Depends(get_teacher_service),
) -> TeacherProfileEnvelope:
    try:
        profile = service.replace_subjects(current_user.id, payload.subject_ids)
        return TeacherProfileEnvelope(profile=profile)
    except DomainException as e:
        handle_domain_exception(e)


@router.get("/{user_id}", response_model=TeacherProfileEnvelope)
def get_teacher_profile(
    user_id: str,
    current_user: User = Depends(get_current_user),
    service: TeacherService = Depends(get_teacher_service),
) -> TeacherProfileEnvelope:
    try:
        return TeacherProfileEnvelope(profile=service.get_profile(user_id))
    except DomainException as e:
        handle_domain_exception(e)


@router.get("/{user_id}/reviews", response_model=ReviewPage)
def list_teacher_reviews(
    user_id: str,
    page: Optional[str] = Query(None),
    page_size: Optional[str] = Query(None, alias="pageSize"),
    service: ReviewService = Depends(get_review_service),
) -> ReviewPage:
    try:
        return review_page(service.list_for_teacher(user_id, page, page_size))
    except DomainException as e:
        handle_domain_exception(e)


@router.get("/{user_id}/availability", response_model=SlotListEnvelope)
def list_teacher_availability(
    user_id: str,
    day_of_week: Optional[int] = Query(None, alias="dayOfWeek"),
    service: AvailabilityService = Depends(get_availability_service),
) -> SlotListEnvelope:
    try:
        slots = service.list_for_teacher(user_id, day_of_week)
        return SlotListEnvelope(slots=[AvailabilitySlotResponse.model_validate(s) for s in slots])
    except DomainException as e:
        handle_domain_exception(e)


@router.get("/{user_id}/lessons", response_model=LessonPage)
def list_teacher_lessons(
    user_id: str,
    status_filter: Optional[str] = Query(None, alias="status"),
    page: Optional[str] = Query(None),
    page_size: Optional[str] = Query(None, alias="pageSize"),
    current_user: User = Depends(get_current_user),
    service: LessonService = Depends(get_lesson_service),
) -> LessonPage:
    try:
        if current_user.id != user_id:
            raise ForbiddenException("You can only view your own lessons")
        return lesson_page(
            service.list_for_user(
                user_id,
                UserRole.TEACHER.value,
                status=status_filter,
                page=page,
                page_size=page_size,
            )
        )
    except DomainException as e:
        handle_domain_exception(e)
