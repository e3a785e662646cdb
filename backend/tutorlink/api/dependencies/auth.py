# backend/tutorlink/api/dependencies/auth.py
"""
Authentication and authorization dependencies.

The bearer token identifies the user; the role used for authorization is
always read from the stored account, not from the token claim.
"""

import logging
from typing import Any, Awaitable, Callable, Dict

from fastapi import Depends
from sqlalchemy.orm import Session

from ...auth import get_token_payload
from ...core.enums import UserRole
from ...core.exceptions import ForbiddenException, UnauthorizedException
from ...models.user import User
from ...repositories.factory import RepositoryFactory
from .database import get_db

logger = logging.getLogger(__name__)


def get_current_user(
    payload: Dict[str, Any] = Depends(get_token_payload),
    db: Session = Depends(get_db),
) -> User:
    """
    Get the current authenticated user from the database.

    Raises:
        UnauthorizedException: If the token's user no longer exists
    """
    user = RepositoryFactory.create_user_repository(db).get_by_id(payload["sub"])
    if user is None:
        logger.warning(f"Token subject {payload['sub']} has no account")
        raise UnauthorizedException("User not found")
    return user


def require_role(*roles: UserRole) -> Callable[..., Awaitable[User]]:
    """Ensure the current user holds one of the provided roles."""

    allowed = {role.value for role in roles}

    async def checker(current_user: User = Depends(get_current_user)) -> User:
        if current_user.role not in allowed:
            raise ForbiddenException("User does not have the required role")
        return current_user

    return checker


get_current_student = require_role(UserRole.STUDENT)
get_current_teacher = require_role(UserRole.TEACHER)
