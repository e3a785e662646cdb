from datetime import datetime
from typing import Optional

from pydantic import EmailStr, Field

from .base import ApiModel, StrictRequestModel


class RegisterRequest(StrictRequestModel):
    name: str = Field(..., min_length=1, max_length=100)
    surname: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    password: str = Field(..., min_length=8, max_length=128)
    role: str


class LoginRequest(StrictRequestModel):
    email: str
    password: str


class UserResponse(ApiModel):
    id: str
    name: str
    surname: str
    email: str
    role: str
    created_at: Optional[datetime] = None


class UserPublic(ApiModel):
    """Public identity of another participant."""

    id: str
    name: str
    surname: str
    email: str


class AuthResponse(ApiModel):
    token: str
    user: UserResponse


class MeResponse(ApiModel):
    user: UserResponse
