# backend/tutorlink/routes/v1/reviews.py
"""
Review routes.

Endpoints:
    POST /                     → Student reviews a teacher
    GET /me                    → Caller's reviews (student)
    GET /teacher/{teacher_id}  → A teacher's reviews (public)
    GET /{id}                  → One review
    PATCH /{id}                → Author edits rating and/or comment
    DELETE /{id}               → Author deletes
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, Response, status

from ...api.dependencies import get_current_student, get_current_user, get_review_service
from ...core.exceptions import DomainException
from ...models.user import User
from ...schemas.review import (
    ReviewCreate,
    ReviewEnvelope,
    ReviewPage,
    ReviewResponse,
    ReviewUpdate,
)
from ...services.review_service import ReviewService
from .. import handle_domain_exception

logger = logging.getLogger(__name__)

router = APIRouter(tags=["reviews"])


def review_page(result) -> ReviewPage:
    items, page, page_size, total = result
    return ReviewPage(
        items=[ReviewResponse.model_validate(review) for review in items],
        page=page,
        page_size=page_size,
        total=total,
    )


# Static routes first (before dynamic routes with path parameters)


@router.post("", response_model=ReviewEnvelope, status_code=status.HTTP_201_CREATED)
def create_review(
    payload: ReviewCreate,
    current_user: User = Depends(get_current_student),
    service: ReviewService = Depends(get_review_service),
) -> ReviewEnvelope:
    try:
        review = service.create_review(
            teacher_id=payload.teacher_user_id,
            student_id=current_user.id,
            rating=payload.rating,
            comment=payload.comment,
        )
        return ReviewEnvelope(review=ReviewResponse.model_validate(review))
    except DomainException as e:
        handle_domain_exception(e)


@router.get("/me", response_model=ReviewPage)
def list_my_reviews(
    page: Optional[str] = Query(None),
    page_size: Optional[str] = Query(None, alias="pageSize"),
    current_user: User = Depends(get_current_student),
    service: ReviewService = Depends(get_review_service),
) -> ReviewPage:
    return review_page(service.list_for_student(current_user.id, page, page_size))


@router.get("/teacher/{teacher_user_id}", response_model=ReviewPage)
def list_teacher_reviews(
    teacher_user_id: str,
    page: Optional[str] = Query(None),
    page_size: Optional[str] = Query(None, alias="pageSize"),
    service: ReviewService = Depends(get_review_service),
) -> ReviewPage:
    try:
        return review_page(service.list_for_teacher(teacher_user_id, page, page_size))
    except DomainException as e:
        handle_domain_exception(e)


@router.get("/{review_id}", response_model=ReviewEnvelope)
def get_review(
    review_id: str,
    current_user: User = Depends(get_current_user),
    service: ReviewService = Depends(get_review_service),
) -> ReviewEnvelope:
    try:
        return ReviewEnvelope(review=ReviewResponse.model_validate(service.get_review(review_id)))
    except DomainException as e:
        handle_domain_exception(e)


@router.patch("/{review_id}", response_model=ReviewEnvelope)
def update_review(
    review_id: str,
    payload: ReviewUpdate,
    current_user: User = Depends(get_current_student),
    service: ReviewService = Depends(get_review_service),
) -> ReviewEnvelope:
    try:
        review = service.update_review(
            review_id, current_user.id, **payload.model_dump(exclude_unset=True)
        )
        return ReviewEnvelope(review=ReviewResponse.model_validate(review))
    except DomainException as e:
        handle_domain_exception(e)


@router.delete("/{review_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_review(
    review_id: str,
    current_user: User = Depends(get_current_student),
    service: ReviewService = Depends(get_review_service),
) -> Response:
    try:
        service.delete_review(review_id, current_user.id)
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    except DomainException as e:
        handle_domain_exception(e)
