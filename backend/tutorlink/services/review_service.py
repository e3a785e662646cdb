# backend/tutorlink/services/review_service.py
"""
Review Service.

A student reviews a teacher at most once. After every create, update or
delete the teacher profile's ``rating_avg`` and ``reviews_count`` are
recomputed from scratch, inside the same transaction as the mutation.
"""

from decimal import ROUND_HALF_UP, Decimal
import logging
from typing import Any, List, Optional

from sqlalchemy.orm import Session

from ..core.constants import RATING_MAX, RATING_MIN, REVIEW_COMMENT_MAX_LENGTH
from ..core.exceptions import (
    DuplicateReviewException,
    ForbiddenException,
    IntegrityConflictError,
    NotFoundException,
    ValidationException,
)
from ..models.review import Review
from ..repositories.factory import RepositoryFactory
from ..utils.pagination import clamp_page, clamp_page_size
from .base import BaseService

logger = logging.getLogger(__name__)

_UNSET: Any = object()


def average_rating(ratings: List[int]) -> Optional[Decimal]:
    """Mean rating rounded half-up to two places, or None without reviews."""
    if not ratings:
        return None
    mean = Decimal(sum(ratings)) / Decimal(len(ratings))
    return mean.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


def validate_rating(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or not RATING_MIN <= value <= RATING_MAX:
        raise ValidationException(
            f"Rating must be an integer between {RATING_MIN} and {RATING_MAX}"
        )
    return value


def normalize_comment(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    if len(text) > REVIEW_COMMENT_MAX_LENGTH:
        raise ValidationException(
            f"Comment must be at most {REVIEW_COMMENT_MAX_LENGTH} characters long"
        )
    return text or None


class ReviewService(BaseService):
    def __init__(self, db: Session):
        super().__init__(db)
        self.repository = RepositoryFactory.create_review_repository(db)
        self.user_repository = RepositoryFactory.create_user_repository(db)
        self.teacher_profile_repository = RepositoryFactory.create_teacher_profile_repository(db)

    def _refresh_teacher_rating(self, teacher_id: str) -> None:
        profile = self.teacher_profile_repository.get_by_user_id(teacher_id)
        if profile is None:
            return
        ratings = self.repository.ratings_for_teacher(teacher_id)
        self.teacher_profile_repository.update(
            profile, rating_avg=average_rating(ratings), reviews_count=len(ratings)
        )

    def _get_owned(self, review_id: str, student_id: str, action: str) -> Review:
        review = self.repository.get_by_id(review_id)
        if review is None:
            raise NotFoundException("Review not found")
        if review.student_id != student_id:
            raise ForbiddenException(f"You do not have permission to {action} this review")
        return review

    @BaseService.measure_operation("create_review")
    def create_review(
        self,
        *,
        teacher_id: Optional[str],
        student_id: str,
        rating: Any,
        comment: Optional[str] = None,
    ) -> Review:
        """
        Raises:
            ValidationException: Missing teacher, same user, bad rating or comment
            NotFoundException: Teacher or student does not exist
            DuplicateReviewException: The student already reviewed this teacher
        """
        if not teacher_id:
            raise ValidationException("teacherUserId is required")
        if teacher_id == student_id:
            raise ValidationException("Teacher and student IDs must be different")
        if self.user_repository.get_teacher(teacher_id) is None:
            raise NotFoundException("Teacher not found")
        if self.user_repository.get_by_id(student_id) is None:
            raise NotFoundException("Student not found")
        rating = validate_rating(rating)
        if self.repository.find_for_pair(teacher_id, student_id) is not None:
            raise DuplicateReviewException()
        text = normalize_comment(comment)

        try:
            with self.transaction():
                review = self.repository.create(
                    teacher_id=teacher_id, student_id=student_id, rating=rating, comment=text
                )
                self._refresh_teacher_rating(teacher_id)
        except IntegrityConflictError:
            raise DuplicateReviewException()

        self.logger.info(f"Review {review.id} created for teacher {teacher_id}")
        return review

    def get_review(self, review_id: str) -> Review:
        review = self.repository.get_by_id(review_id)
        if review is None:
            raise NotFoundException("Review not found")
        return review

    @BaseService.measure_operation("update_review")
    def update_review(
        self,
        review_id: str,
        student_id: str,
        *,
        rating: Any = _UNSET,
        comment: Any = _UNSET,
    ) -> Review:
        """
        Partial update by the author.

        An explicit ``None`` or empty ``comment`` clears it; omitted fields
        stay as they are.
        """
        review = self._get_owned(review_id, student_id, "update")

        updates: dict[str, Any] = {}
        if rating is not _UNSET and rating is not None:
            updates["rating"] = validate_rating(rating)
        if comment is not _UNSET:
            updates["comment"] = normalize_comment(comment)
        if not updates:
            raise ValidationException("At least one field must be provided")

        with self.transaction():
            self.repository.update(review, **updates)
            self._refresh_teacher_rating(review.teacher_id)
        return review

    @BaseService.measure_operation("delete_review")
    def delete_review(self, review_id: str, student_id: str) -> None:
        review = self._get_owned(review_id, student_id, "delete")
        teacher_id = review.teacher_id
        with self.transaction():
            self.repository.delete(review.id)
            self._refresh_teacher_rating(teacher_id)
        self.logger.info(f"Review {review_id} deleted")

    def list_for_teacher(
        self, teacher_id: str, page: Optional[int] = None, page_size: Optional[int] = None
    ) -> tuple[List[Review], int, int, int]:
        if self.user_repository.get_teacher(teacher_id) is None:
            raise NotFoundException("Teacher not found")
        page_num, size = clamp_page(page), clamp_page_size(page_size)
        items, total = self.repository.page_for_teacher(teacher_id, page=page_num, page_size=size)
        return items, page_num, size, total

    def list_for_student(
        self, student_id: str, page: Optional[int] = None, page_size: Optional[int] = None
    ) -> tuple[List[Review], int, int, int]:
        page_num, size = clamp_page(page), clamp_page_size(page_size)
        items, total = self.repository.page_for_student(student_id, page=page_num, page_size=size)
        return items, page_num, size, total
