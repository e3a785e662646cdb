# backend/tutorlink/repositories/user_repository.py
from typing import Dict, Iterable, Optional

from sqlalchemy.orm import Session

from ..models.user import User
from .base_repository import BaseRepository


class UserRepository(BaseRepository[User]):
    """Data access for user accounts."""

    def __init__(self, db: Session):
        super().__init__(db, User)

    def get_by_email(self, email: str) -> Optional[User]:
        return self.find_one_by(email=email)

    def get_teacher(self, user_id: str) -> Optional[User]:
        """Return the user only when it holds the TEACHER role."""
        user = self.get_by_id(user_id)
        if user is None or not user.is_teacher:
            return None
        return user

    def get_many_by_ids(self, ids: Iterable[str]) -> Dict[str, User]:
        unique_ids = list({i for i in ids if i})
        if not unique_ids:
            return {}
        rows = self._execute_query(self._build_query().filter(User.id.in_(unique_ids)))
        return {user.id: user for user in rows}
