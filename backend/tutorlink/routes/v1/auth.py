# backend/tutorlink/routes/v1/auth.py
"""
Authentication routes.

Endpoints:
    POST /register → Create a STUDENT or TEACHER account
    POST /login    → Exchange credentials for an access token
    GET /me        → Current user
"""

import logging

from fastapi import APIRouter, Depends, status

from ...api.dependencies import get_auth_service, get_current_user
from ...core.exceptions import DomainException
from ...models.user import User
from ...schemas.auth import AuthResponse, LoginRequest, MeResponse, RegisterRequest, UserResponse
from ...services.auth_service import AuthService
from .. import handle_domain_exception

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(
    payload: RegisterRequest,
    service: AuthService = Depends(get_auth_service),
) -> AuthResponse:
    try:
        user, token = service.register(
            name=payload.name,
            surname=payload.surname,
            email=payload.email,
            password=payload.password,
            role=payload.role,
        )
        return AuthResponse(token=token, user=UserResponse.model_validate(user))
    except DomainException as e:
        handle_domain_exception(e)


@router.post("/login", response_model=AuthResponse)
def login(
    payload: LoginRequest,
    service: AuthService = Depends(get_auth_service),
) -> AuthResponse:
    try:
        user, token = service.login(email=payload.email, password=payload.password)
        return AuthResponse(token=token, user=UserResponse.model_validate(user))
    except DomainException as e:
        handle_domain_exception(e)


@router.get("/me", response_model=MeResponse)
def read_me(current_user: User = Depends(get_current_user)) -> MeResponse:
    return MeResponse(user=UserResponse.model_validate(current_user))
