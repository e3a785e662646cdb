# backend/tutorlink/services/teacher_service.py
"""
Teacher profile service: own profile, public profile, subjects, search.
"""

from datetime import datetime, timezone
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
import logging
from typing import Any, List, Optional, Sequence

from sqlalchemy.orm import Session

from ..core.constants import TEACHER_BIO_MAX_LENGTH, TEACHER_CITY_MAX_LENGTH
from ..core.exceptions import ForbiddenException, NotFoundException, ValidationException
from ..models.teacher_profile import TeacherProfile
from ..models.user import User
from ..repositories.factory import RepositoryFactory
from ..schemas.auth import UserResponse
from ..schemas.subject import SubjectResponse
from ..schemas.teacher import TeacherProfileResponse, TeacherSearchItem, TeacherSearchPage
from ..utils.pagination import clamp_page, clamp_page_size
from .base import BaseService

logger = logging.getLogger(__name__)


def _bounded_text(value: Any, label: str, max_length: int) -> str:
    if not isinstance(value, str):
        raise ValidationException(f"{label} must be a string")
    text = value.strip()
    if not text:
        raise ValidationException(f"{label} must be at least 1 character long")
    if len(text) > max_length:
        raise ValidationException(f"{label} must be at most {max_length} characters long")
    return text


def parse_hourly_rate(value: Any) -> Decimal:
    """Positive amount rounded half-up to cents."""
    if isinstance(value, bool) or value is None:
        raise ValidationException("Hourly rate must be a valid number")
    try:
        rate = Decimal(str(value).strip())
    except InvalidOperation:
        raise ValidationException("Hourly rate must be a valid number")
    if not rate.is_finite():
        raise ValidationException("Hourly rate must be a valid number")
    if rate <= 0:
        raise ValidationException("Hourly rate must be a positive number")
    return rate.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


class TeacherService(BaseService):
    def __init__(self, db: Session):
        super().__init__(db)
        self.repository = RepositoryFactory.create_teacher_profile_repository(db)
        self.user_repository = RepositoryFactory.create_user_repository(db)
        self.subject_repository = RepositoryFactory.create_subject_repository(db)

    def _load(self, user_id: str) -> tuple[User, TeacherProfile]:
        user = self.user_repository.get_by_id(user_id)
        if user is None or not user.is_teacher:
            raise ForbiddenException("User is not a teacher")
        profile = self.repository.get_by_user_id(user_id)
        if profile is None:
            raise NotFoundException("Teacher profile not found")
        return user, profile

    def _compose(self, user: User, profile: TeacherProfile) -> TeacherProfileResponse:
        subjects = self.subject_repository.list_for_teacher_profile(profile.id)
        return TeacherProfileResponse(
            user_id=user.id,
            name=user.name,
            surname=user.surname,
            role=user.role,
            bio=profile.bio,
            city=profile.city,
            hourly_rate=profile.hourly_rate,
            rating_avg=profile.rating_avg,
            reviews_count=profile.reviews_count or 0,
            user=UserResponse.model_validate(user),
            subjects=[SubjectResponse.model_validate(s) for s in subjects],
            created_at=profile.created_at,
            updated_at=profile.updated_at,
        )

    def get_profile(self, user_id: str) -> TeacherProfileResponse:
        """
        Profile of a teacher joined with its account and subjects.

        Raises:
            ForbiddenException: The user does not exist or is not a teacher
            NotFoundException: The teacher has no profile row
        """
        user, profile = self._load(user_id)
        return self._compose(user, profile)

    @BaseService.measure_operation("update_teacher_profile")
    def update_profile(self, user_id: str, **fields: Any) -> TeacherProfileResponse:
        """
        Partially update ``bio``, ``city`` and ``hourly_rate``.

        Only keys present in ``fields`` are considered.
        """
        user, profile = self._load(user_id)

        updates: dict[str, Any] = {}
        if "bio" in fields:
            updates["bio"] = _bounded_text(fields["bio"], "Bio", TEACHER_BIO_MAX_LENGTH)
        if "city" in fields:
            updates["city"] = _bounded_text(fields["city"], "City", TEACHER_CITY_MAX_LENGTH)
        if "hourly_rate" in fields:
            updates["hourly_rate"] = parse_hourly_rate(fields["hourly_rate"])
        if not updates:
            raise ValidationException("At least one field must be provided")

        with self.transaction():
            self.repository.update(profile, **updates)

        self.logger.info(f"Teacher profile {profile.id} updated: {sorted(updates)}")
        return self._compose(user, profile)

    @BaseService.measure_operation("replace_teacher_subjects")
    def replace_subjects(self, user_id: str, subject_ids: Sequence[str]) -> TeacherProfileResponse:
        """
        Replace the teacher's subject set.

        Duplicates are collapsed; any unknown id rejects the whole call.
        """
        if not isinstance(subject_ids, (list, tuple)):
            raise ValidationException("subjectIds must be an array")
        unique_ids = list(dict.fromkeys(subject_ids))
        user, profile = self._load(user_id)

        with self.transaction():
            found = self.subject_repository.get_by_ids(unique_ids)
            if len(found) != len(unique_ids):
                known = {s.id for s in found}
                raise ValidationException(
                    "One or more subject IDs are invalid",
                    details={"invalidIds": [i for i in unique_ids if i not in known]},
                )
            self.repository.replace_subjects(profile.id, unique_ids)
            self.repository.update(profile, updated_at=datetime.now(timezone.utc))

        return self._compose(user, profile)

    def search(
        self,
        *,
        city: Optional[str] = None,
        subject_id: Optional[str] = None,
        page: Optional[int] = None,
        page_size: Optional[int] = None,
    ) -> TeacherSearchPage:
        """Exact-match search by city and/or subject, most recently updated first."""
        page_num, size = clamp_page(page), clamp_page_size(page_size)
        profiles, total = self.repository.search(
            city=city or None, subject_id=subject_id or None, page=page_num, page_size=size
        )
        users = self.user_repository.get_many_by_ids(p.user_id for p in profiles)

        items: List[TeacherSearchItem] = []
        for profile in profiles:
            user = users.get(profile.user_id)
            if user is None:
                continue
            subjects = self.subject_repository.list_for_teacher_profile(profile.id)
            items.append(
                TeacherSearchItem(
                    id=user.id,
                    name=user.name,
                    surname=user.surname,
                    email=user.email,
                    city=profile.city,
                    hourly_rate=profile.hourly_rate,
                    rating_avg=profile.rating_avg,
                    reviews_count=profile.reviews_count or 0,
                    bio=profile.bio,
                    subjects=[SubjectResponse.model_validate(s) for s in subjects],
                )
            )
        return TeacherSearchPage(items=items, page=page_num, page_size=size, total=total)
