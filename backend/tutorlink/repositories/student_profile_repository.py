# backend/tutorlink/repositories/student_profile_repository.py
from typing import Optional

from sqlalchemy.orm import Session

from ..models.student_profile import StudentProfile
from .base_repository import BaseRepository


class StudentProfileRepository(BaseRepository[StudentProfile]):
    def __init__(self, db: Session):
        super().__init__(db, StudentProfile)

    def get_by_user_id(self, user_id: str) -> Optional[StudentProfile]:
        return self.find_one_by(user_id=user_id)
