# backend/tutorlink/routes/v1/lessons.py
"""
Lesson routes.

Endpoints:
    POST /                → Schedule a lesson (caller must be its teacher or student)
    GET /me               → Caller's lessons (?status&page&pageSize)
    GET /upcoming         → Next lessons not cancelled on the caller's side
    GET /{id}             → One lesson (participants only)
    PATCH /{id}/status    → Set the caller's own status
    DELETE /{id}          → Delete (participants only)
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, Response, status

from ...api.dependencies import get_current_user, get_lesson_service
from ...core.exceptions import DomainException, ForbiddenException
from ...models.user import User
from ...schemas.lesson import (
    LessonCreate,
    LessonEnvelope,
    LessonPage,
    LessonResponse,
    LessonStatusUpdate,
    UpcomingLessonsResponse,
)
from ...services.lesson_service import LessonService
from .. import handle_domain_exception

logger = logging.getLogger(__name__)

router = APIRouter(tags=["lessons"])


def lesson_page(result) -> LessonPage:
    items, page, page_size, total = result
    return LessonPage(
        items=[LessonResponse.model_validate(lesson) for lesson in items],
        page=page,
        page_size=page_size,
        total=total,
    )


@router.post("", response_model=LessonEnvelope, status_code=status.HTTP_201_CREATED)
def create_lesson(
    payload: LessonCreate,
    current_user: User = Depends(get_current_user),
    service: LessonService = Depends(get_lesson_service),
) -> LessonEnvelope:
    try:
        if current_user.id not in (payload.teacher_user_id, payload.student_user_id):
            raise ForbiddenException("You can only create lessons for yourself")
        lesson = service.create_lesson(
            teacher_id=payload.teacher_user_id,
            student_id=payload.student_user_id,
            subject_id=payload.subject_id,
            start_at=payload.start_at,
            duration_min=payload.duration_min,
        )
        return LessonEnvelope(lesson=LessonResponse.model_validate(lesson))
    except DomainException as e:
        handle_domain_exception(e)


@router.get("/me", response_model=LessonPage)
def list_my_lessons(
    status_filter: Optional[str] = Query(None, alias="status"),
    page: Optional[str] = Query(None),
    page_size: Optional[str] = Query(None, alias="pageSize"),
    current_user: User = Depends(get_current_user),
    service: LessonService = Depends(get_lesson_service),
) -> LessonPage:
    try:
        return lesson_page(
            service.list_for_user(
                current_user.id,
                current_user.role,
                status=status_filter,
                page=page,
                page_size=page_size,
            )
        )
    except DomainException as e:
        handle_domain_exception(e)


@router.get("/upcoming", response_model=UpcomingLessonsResponse)
def list_upcoming_lessons(
    current_user: User = Depends(get_current_user),
    service: LessonService = Depends(get_lesson_service),
) -> UpcomingLessonsResponse:
    try:
        lessons = service.list_upcoming(current_user.id, current_user.role)
        return UpcomingLessonsResponse(
            lessons=[LessonResponse.model_validate(lesson) for lesson in lessons]
        )
    except DomainException as e:
        handle_domain_exception(e)


@router.get("/{lesson_id}", response_model=LessonEnvelope)
def get_lesson(
    lesson_id: str,
    current_user: User = Depends(get_current_user),
    service: LessonService = Depends(get_lesson_service),
) -> LessonEnvelope:
    try:
        lesson = service.get_lesson(lesson_id, current_user.id)
        return LessonEnvelope(lesson=LessonResponse.model_validate(lesson))
    except DomainException as e:
        handle_domain_exception(e)


@router.patch("/{lesson_id}/status", response_model=LessonEnvelope)
def update_lesson_status(
    lesson_id: str,
    payload: LessonStatusUpdate,
    current_user: User = Depends(get_current_user),
    service: LessonService = Depends(get_lesson_service),
) -> LessonEnvelope:
    try:
        lesson = service.update_status(lesson_id, current_user.id, payload.status)
        return LessonEnvelope(lesson=LessonResponse.model_validate(lesson))
    except DomainException as e:
        handle_domain_exception(e)


@router.delete("/{lesson_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_lesson(
    lesson_id: str,
    current_user: User = Depends(get_current_user),
    service: LessonService = Depends(get_lesson_service),
) -> Response:
    try:
        service.delete_lesson(lesson_id, current_user.id)
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    except DomainException as e:
        handle_domain_exception(e)
