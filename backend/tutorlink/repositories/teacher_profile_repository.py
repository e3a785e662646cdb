# backend/tutorlink/repositories/teacher_profile_repository.py
"""
Repository for teacher profiles and their subject links.
"""

from typing import List, Optional, Sequence

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..core.exceptions import RepositoryException
from ..models.teacher_profile import TeacherProfile, TeacherSubject
from .base_repository import BaseRepository


class TeacherProfileRepository(BaseRepository[TeacherProfile]):
    def __init__(self, db: Session):
        super().__init__(db, TeacherProfile)

    def get_by_user_id(self, user_id: str, *, for_update: bool = False) -> Optional[TeacherProfile]:
        """
        Load a teacher's profile.

        ``for_update`` locks the row; availability writers use it to serialise
        per teacher so the overlap check and the insert happen atomically.
        """
        query = self._build_query().filter(TeacherProfile.user_id == user_id)
        if for_update:
            query = query.with_for_update()
        return self._execute_first(query)

    def search(
        self,
        *,
        city: Optional[str],
        subject_id: Optional[str],
        page: int,
        page_size: int,
    ) -> tuple[List[TeacherProfile], int]:
        """Exact-match filters, most recently updated first."""
        query = self._build_query()
        if city:
            query = query.filter(TeacherProfile.city == city)
        if subject_id:
            query = query.join(
                TeacherSubject, TeacherSubject.teacher_profile_id == TeacherProfile.id
            ).filter(TeacherSubject.subject_id == subject_id)
        query = query.order_by(TeacherProfile.updated_at.desc(), TeacherProfile.id.desc())
        return self._paginate(query, page, page_size)

    def replace_subjects(self, profile_id: str, subject_ids: Sequence[str]) -> None:
        """Swap the whole subject set of a profile. Caller owns the transaction."""
        try:
            self.db.query(TeacherSubject).filter(
                TeacherSubject.teacher_profile_id == profile_id
            ).delete(synchronize_session=False)
            for subject_id in dict.fromkeys(subject_ids):
                self.db.add(TeacherSubject(teacher_profile_id=profile_id, subject_id=subject_id))
            self.db.flush()
        except SQLAlchemyError as e:
            self.logger.error(f"Error replacing subjects for profile {profile_id}: {str(e)}")
            self.db.rollback()
            raise RepositoryException(f"Failed to replace teacher subjects: {str(e)}")
