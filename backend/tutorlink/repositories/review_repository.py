# backend/tutorlink/repositories/review_repository.py
from typing import List, Optional

from sqlalchemy.orm import Session

from ..models.review import Review
from .base_repository import BaseRepository


class ReviewRepository(BaseRepository[Review]):
    def __init__(self, db: Session):
        super().__init__(db, Review)

    def find_for_pair(self, teacher_id: str, student_id: str) -> Optional[Review]:
        return self.find_one_by(teacher_id=teacher_id, student_id=student_id)

    def page_for_teacher(self, teacher_id: str, *, page: int, page_size: int):
        query = (
            self._build_query()
            .filter(Review.teacher_id == teacher_id)
            .order_by(Review.created_at.desc(), Review.id.desc())
        )
        return self._paginate(query, page, page_size)

    def page_for_student(self, student_id: str, *, page: int, page_size: int):
        query = (
            self._build_query()
            .filter(Review.student_id == student_id)
            .order_by(Review.created_at.desc(), Review.id.desc())
        )
        return self._paginate(query, page, page_size)

    def ratings_for_teacher(self, teacher_id: str) -> List[int]:
        """All current ratings of a teacher (full rescan)."""
        rows = self.db.query(Review.rating).filter(Review.teacher_id == teacher_id).all()
        return [int(rating) for (rating,) in rows]
