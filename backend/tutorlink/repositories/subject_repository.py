# backend/tutorlink/repositories/subject_repository.py
from typing import Iterable, List

from sqlalchemy.orm import Session

from ..models.subject import Subject
from ..models.teacher_profile import TeacherSubject
from .base_repository import BaseRepository


class SubjectRepository(BaseRepository[Subject]):
    def __init__(self, db: Session):
        super().__init__(db, Subject)

    def list_all(self) -> List[Subject]:
        return self._execute_query(self._build_query().order_by(Subject.name.asc()))

    def get_by_ids(self, ids: Iterable[str]) -> List[Subject]:
        unique_ids = list(set(ids))
        if not unique_ids:
            return []
        return self._execute_query(self._build_query().filter(Subject.id.in_(unique_ids)))

    def list_for_teacher_profile(self, profile_id: str) -> List[Subject]:
        query = (
            self._build_query()
            .join(TeacherSubject, TeacherSubject.subject_id == Subject.id)
            .filter(TeacherSubject.teacher_profile_id == profile_id)
            .order_by(Subject.name.asc())
        )
        return self._execute_query(query)

    def existing_names(self) -> set[str]:
        return {name for (name,) in self.db.query(Subject.name).all()}
