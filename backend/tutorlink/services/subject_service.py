# backend/tutorlink/services/subject_service.py
import logging
from typing import Iterable, List

from sqlalchemy.orm import Session

from ..core.constants import DEFAULT_SUBJECTS
from ..models.subject import Subject
from ..repositories.factory import RepositoryFactory
from .base import BaseService

logger = logging.getLogger(__name__)


class SubjectService(BaseService):
    def __init__(self, db: Session):
        super().__init__(db)
        self.repository = RepositoryFactory.create_subject_repository(db)

    def list_subjects(self) -> List[Subject]:
        """Full catalogue ordered by name."""
        return self.repository.list_all()

    @BaseService.measure_operation("seed_subjects")
    def seed_defaults(self, names: Iterable[str] = DEFAULT_SUBJECTS) -> int:
        """
        Insert any missing catalogue entries.

        Idempotent; returns the number of subjects created.
        """
        existing = self.repository.existing_names()
        missing = [name for name in dict.fromkeys(names) if name not in existing]
        with self.transaction():
            for name in missing:
                self.repository.create(name=name)
        if missing:
            self.logger.info(f"Seeded {len(missing)} subjects")
        return len(missing)
