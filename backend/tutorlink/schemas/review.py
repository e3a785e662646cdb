from datetime import datetime
from typing import Optional

from .base import ApiModel, Page, StrictRequestModel, wire_field


class ReviewCreate(StrictRequestModel):
    teacher_user_id: Optional[str] = None
    rating: int
    comment: Optional[str] = None


class ReviewUpdate(StrictRequestModel):
    """Partial update; an explicit ``comment: null`` or ``""`` clears the comment."""

    rating: Optional[int] = None
    comment: Optional[str] = None


class ReviewResponse(ApiModel):
    id: str
    teacher_user_id: str = wire_field("teacher_id", "teacherUserId")
    student_user_id: str = wire_field("student_id", "studentUserId")
    rating: int
    comment: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ReviewEnvelope(ApiModel):
    review: ReviewResponse


ReviewPage = Page[ReviewResponse]
