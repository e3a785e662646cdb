# backend/tutorlink/services/student_service.py
import logging
from typing import Any

from sqlalchemy.orm import Session

from ..core.constants import STUDENT_FIELD_MAX_LENGTH
from ..core.enums import StudentLevel
from ..core.exceptions import NotFoundException, ValidationException
from ..models.student_profile import StudentProfile
from ..repositories.factory import RepositoryFactory
from .base import BaseService

logger = logging.getLogger(__name__)


def _profile_text(value: Any, label: str) -> str:
    if not isinstance(value, str):
        raise ValidationException(f"{label} must be a string")
    text = value.strip()
    if not text:
        raise ValidationException(f"{label} must be at least 1 character long")
    if len(text) > STUDENT_FIELD_MAX_LENGTH:
        raise ValidationException(
            f"{label} must be at most {STUDENT_FIELD_MAX_LENGTH} characters long"
        )
    return text


class StudentService(BaseService):
    """Read and edit the caller's own student profile."""

    def __init__(self, db: Session):
        super().__init__(db)
        self.repository = RepositoryFactory.create_student_profile_repository(db)

    def get_profile(self, user_id: str) -> StudentProfile:
        profile = self.repository.get_by_user_id(user_id)
        if profile is None:
            raise NotFoundException("Student profile not found")
        return profile

    @BaseService.measure_operation("update_student_profile")
    def update_profile(self, user_id: str, **fields: Any) -> StudentProfile:
        """
        Partially update ``city``, ``level`` and ``track``.

        ``level`` must be one of the StudentLevel values.
        """
        profile = self.get_profile(user_id)

        updates: dict[str, Any] = {}
        if "city" in fields:
            updates["city"] = _profile_text(fields["city"], "City")
        if "level" in fields:
            allowed = [level.value for level in StudentLevel]
            if fields["level"] not in allowed:
                raise ValidationException(f"Level must be one of: {', '.join(allowed)}")
            updates["level"] = fields["level"]
        if "track" in fields:
            updates["track"] = _profile_text(fields["track"], "Track")
        if not updates:
            raise ValidationException("At least one field must be provided")

        with self.transaction():
            self.repository.update(profile, **updates)
        return profile
