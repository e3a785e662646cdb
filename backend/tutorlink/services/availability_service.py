# backend/tutorlink/services/availability_service.py
"""
Availability Service for the TutorLink platform.

Maintains each teacher's weekly recurring slots and enforces that slots of
one teacher on one weekday never intersect. Intervals are half-open
[start, end), so a slot ending at 10:00 and another starting at 10:00 are
both allowed.

Overlap checks run inside the write transaction after locking the teacher's
profile row, which serialises concurrent writers for the same teacher on
PostgreSQL.
"""

from datetime import time
import logging
from typing import Any, List, Optional

from sqlalchemy.orm import Session

from ..core.constants import DAY_OF_WEEK_MAX, DAY_OF_WEEK_MIN
from ..core.exceptions import (
    AvailabilityOverlapException,
    ForbiddenException,
    NotFoundException,
    ValidationException,
)
from ..models.availability import AvailabilitySlot
from ..repositories.factory import RepositoryFactory
from ..utils.time_of_day import parse_time_of_day
from .base import BaseService

logger = logging.getLogger(__name__)


def validate_day_of_week(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationException("Day of week must be an integer between 0 and 6")
    if not DAY_OF_WEEK_MIN <= value <= DAY_OF_WEEK_MAX:
        raise ValidationException("Day of week must be an integer between 0 and 6")
    return value


def parse_slot_time(value: Any, field_name: str) -> time:
    if value is None or value == "":
        raise ValidationException(f"{field_name} is required")
    try:
        return parse_time_of_day(value)
    except ValueError:
        raise ValidationException(
            f"{field_name} must be a time of day in HH:MM or HH:MM:SS format",
            details={"field": field_name, "value": value},
        )


class AvailabilityService(BaseService):
    """
    Service layer for weekly availability slots.

    All list operations return slots ordered by (day_of_week, start_time).
    """

    def __init__(self, db: Session):
        super().__init__(db)
        self.repository = RepositoryFactory.create_availability_repository(db)
        self.user_repository = RepositoryFactory.create_user_repository(db)
        self.teacher_profile_repository = RepositoryFactory.create_teacher_profile_repository(db)

    def _require_teacher(self, teacher_id: str) -> None:
        if self.user_repository.get_teacher(teacher_id) is None:
            raise NotFoundException("Teacher not found")

    def _lock_teacher(self, teacher_id: str) -> None:
        self.teacher_profile_repository.get_by_user_id(teacher_id, for_update=True)

    def _ensure_no_overlap(
        self,
        teacher_id: str,
        day_of_week: int,
        start: time,
        end: time,
        exclude_slot_id: Optional[str] = None,
    ) -> None:
        conflict = self.repository.find_overlapping(
            teacher_id, day_of_week, start, end, exclude_slot_id=exclude_slot_id
        )
        if conflict is not None:
            raise AvailabilityOverlapException(
                day_of_week=day_of_week, conflicting_slot_id=conflict.id
            )

    @BaseService.measure_operation("create_slot")
    def create_slot(
        self, teacher_id: str, day_of_week: Any, start_time: Any, end_time: Any
    ) -> AvailabilitySlot:
        """
        Create a slot for a teacher.

        Raises:
            NotFoundException: The user is not a teacher
            ValidationException: Bad day, bad time format, or start >= end
            AvailabilityOverlapException: Intersects an existing slot that day
        """
        self._require_teacher(teacher_id)
        day = validate_day_of_week(day_of_week)
        start = parse_slot_time(start_time, "startTime")
        end = parse_slot_time(end_time, "endTime")
        if start >= end:
            raise ValidationException("Start time must be before end time")

        with self.transaction():
            self._lock_teacher(teacher_id)
            self._ensure_no_overlap(teacher_id, day, start, end)
            slot = self.repository.create(
                teacher_id=teacher_id, day_of_week=day, start_time=start, end_time=end
            )

        self.logger.info(f"Created availability slot {slot.id} for teacher {teacher_id}")
        return slot

    @BaseService.measure_operation("update_slot")
    def update_slot(
        self,
        slot_id: str,
        requester_id: str,
        *,
        day_of_week: Any = None,
        start_time: Any = None,
        end_time: Any = None,
    ) -> AvailabilitySlot:
        """
        Partially update a slot owned by ``requester_id``.

        The combined final interval is re-checked against every other slot of
        the teacher on the final weekday.
        """
        slot = self.repository.get_by_id(slot_id)
        if slot is None:
            raise NotFoundException("Availability slot not found")
        if slot.teacher_id != requester_id:
            raise ForbiddenException("You do not have permission to update this slot")
        if day_of_week is None and start_time is None and end_time is None:
            raise ValidationException("At least one field must be provided")

        updates: dict[str, Any] = {}
        if day_of_week is not None:
            updates["day_of_week"] = validate_day_of_week(day_of_week)
        if start_time is not None:
            updates["start_time"] = parse_slot_time(start_time, "startTime")
        if end_time is not None:
            updates["end_time"] = parse_slot_time(end_time, "endTime")

        final_day = updates.get("day_of_week", slot.day_of_week)
        final_start = updates.get("start_time", slot.start_time)
        final_end = updates.get("end_time", slot.end_time)
        if final_start >= final_end:
            raise ValidationException("Start time must be before end time")

        with self.transaction():
            self._lock_teacher(slot.teacher_id)
            self._ensure_no_overlap(
                slot.teacher_id, final_day, final_start, final_end, exclude_slot_id=slot.id
            )
            self.repository.update(slot, **updates)

        self.logger.info(f"Updated availability slot {slot.id}")
        return slot

    def get_slot(self, slot_id: str, requester_id: str) -> AvailabilitySlot:
        slot = self.repository.get_by_id(slot_id)
        if slot is None:
            raise NotFoundException("Availability slot not found")
        if slot.teacher_id != requester_id:
            raise ForbiddenException("You do not have access to this availability slot")
        return slot

    def list_for_teacher(
        self, teacher_id: str, day_of_week: Optional[Any] = None
    ) -> List[AvailabilitySlot]:
        """Public listing; the teacher must exist."""
        self._require_teacher(teacher_id)
        day = validate_day_of_week(day_of_week) if day_of_week is not None else None
        return self.repository.list_for_teacher(teacher_id, day)

    def list_mine(self, teacher_id: str) -> List[AvailabilitySlot]:
        return self.repository.list_for_teacher(teacher_id)

    @BaseService.measure_operation("delete_slot")
    def delete_slot(self, slot_id: str, requester_id: str) -> None:
        slot = self.repository.get_by_id(slot_id)
        if slot is None:
            raise NotFoundException("Availability slot not found")
        if slot.teacher_id != requester_id:
            raise ForbiddenException("You do not have permission to delete this slot")
        with self.transaction():
            self.repository.delete(slot.id)
        self.logger.info(f"Deleted availability slot {slot_id}")

    @BaseService.measure_operation("delete_all_slots")
    def delete_all(self, teacher_id: str) -> int:
        """Remove every slot of the teacher; returns how many were deleted."""
        with self.transaction():
            deleted = self.repository.delete_all_for_teacher(teacher_id)
        self.logger.info(f"Deleted {deleted} availability slots for teacher {teacher_id}")
        return deleted
