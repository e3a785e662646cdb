# backend/tutorlink/repositories/availability_repository.py
"""
Availability Repository.

Slots are always returned ordered by (day_of_week, start_time).
"""

from datetime import time
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..core.exceptions import RepositoryException
from ..models.availability import AvailabilitySlot
from .base_repository import BaseRepository


class AvailabilityRepository(BaseRepository[AvailabilitySlot]):
    def __init__(self, db: Session):
        super().__init__(db, AvailabilitySlot)

    def list_for_teacher(
        self, teacher_id: str, day_of_week: Optional[int] = None
    ) -> List[AvailabilitySlot]:
        query = self._build_query().filter(AvailabilitySlot.teacher_id == teacher_id)
        if day_of_week is not None:
            query = query.filter(AvailabilitySlot.day_of_week == day_of_week)
        query = query.order_by(AvailabilitySlot.day_of_week.asc(), AvailabilitySlot.start_time.asc())
        return self._execute_query(query)

    def find_overlapping(
        self,
        teacher_id: str,
        day_of_week: int,
        start: time,
        end: time,
        exclude_slot_id: Optional[str] = None,
    ) -> Optional[AvailabilitySlot]:
        """
        First slot of the teacher on that day intersecting [start, end).

        Intersection is ``existing.start < end AND start < existing.end``, so
        intervals sharing only an endpoint are not returned.
        """
        query = self._build_query().filter(
            AvailabilitySlot.teacher_id == teacher_id,
            AvailabilitySlot.day_of_week == day_of_week,
            AvailabilitySlot.start_time < end,
            AvailabilitySlot.end_time > start,
        )
        if exclude_slot_id:
            query = query.filter(AvailabilitySlot.id != exclude_slot_id)
        return self._execute_first(query.order_by(AvailabilitySlot.start_time.asc()))

    def delete_all_for_teacher(self, teacher_id: str) -> int:
        try:
            deleted = (
                self._build_query()
                .filter(AvailabilitySlot.teacher_id == teacher_id)
                .delete(synchronize_session=False)
            )
            self.db.flush()
            return int(deleted)
        except SQLAlchemyError as e:
            self.logger.error(f"Error deleting slots for teacher {teacher_id}: {str(e)}")
            self.db.rollback()
            raise RepositoryException(f"Failed to delete availability: {str(e)}")
