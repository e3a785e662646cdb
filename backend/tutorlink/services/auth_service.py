# backend/tutorlink/services/auth_service.py
"""
Account registration and login.

Registration creates the user and its empty role profile in one transaction.
"""

import logging
from typing import Tuple

from sqlalchemy.orm import Session

from ..auth import (
    DUMMY_HASH_FOR_TIMING_ATTACK,
    create_access_token,
    get_password_hash,
    verify_password,
)
from ..core.enums import REGISTRABLE_ROLES, UserRole
from ..core.exceptions import (
    ConflictException,
    IntegrityConflictError,
    UnauthorizedException,
    ValidationException,
)
from ..models.user import User
from ..repositories.factory import RepositoryFactory
from .base import BaseService

logger = logging.getLogger(__name__)


def normalize_email(email: str) -> str:
    return email.strip().lower()


class AuthService(BaseService):
    def __init__(self, db: Session):
        super().__init__(db)
        self.user_repository = RepositoryFactory.create_user_repository(db)
        self.teacher_profile_repository = RepositoryFactory.create_teacher_profile_repository(db)
        self.student_profile_repository = RepositoryFactory.create_student_profile_repository(db)

    @BaseService.measure_operation("register")
    def register(
        self, *, name: str, surname: str, email: str, password: str, role: str
    ) -> Tuple[User, str]:
        """
        Create a STUDENT or TEACHER account.

        Returns:
            The new user and a fresh access token

        Raises:
            ValidationException: Missing fields or a non-registrable role
            ConflictException: Email already in use
        """
        name = (name or "").strip()
        surname = (surname or "").strip()
        email = normalize_email(email or "")
        if not name:
            raise ValidationException("Name is required")
        if not surname:
            raise ValidationException("Surname is required")
        if not email:
            raise ValidationException("Email is required")
        if not password:
            raise ValidationException("Password is required")
        if role not in {r.value for r in REGISTRABLE_ROLES}:
            raise ValidationException("Invalid role")

        if self.user_repository.get_by_email(email):
            raise ConflictException("Email is already in use")

        hashed = get_password_hash(password)
        try:
            with self.transaction():
                user = self.user_repository.create(
                    name=name, surname=surname, email=email, hashed_password=hashed, role=role
                )
                if role == UserRole.TEACHER.value:
                    self.teacher_profile_repository.create(user_id=user.id)
                else:
                    self.student_profile_repository.create(user_id=user.id)
        except IntegrityConflictError:
            # Lost a race with a concurrent registration for the same email.
            raise ConflictException("Email is already in use")

        self.logger.info(f"Registered {role} account {user.id}")
        return user, create_access_token(user.id, user.role)

    @BaseService.measure_operation("login")
    def login(self, *, email: str, password: str) -> Tuple[User, str]:
        user = self.user_repository.get_by_email(normalize_email(email or ""))
        if user is None:
            verify_password(password or "", DUMMY_HASH_FOR_TIMING_ATTACK)
            raise UnauthorizedException("Invalid email or password")
        if not verify_password(password or "", user.hashed_password):
            raise UnauthorizedException("Invalid email or password")
        return user, create_access_token(user.id, user.role)
