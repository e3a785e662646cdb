# backend/tutorlink/schemas/teacher.py
"""
Teacher profile schemas.

``ratingAvg`` and ``reviewsCount`` are read-only: they are recomputed from
reviews and never accepted from clients.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import Field

from .auth import UserResponse
from .base import ApiModel, Money, Page, StrictRequestModel
from .subject import SubjectResponse


class TeacherProfileUpdate(StrictRequestModel):
    bio: Optional[str] = None
    city: Optional[str] = None
    hourly_rate: Optional[float] = None


class TeacherSubjectsUpdate(StrictRequestModel):
    subject_ids: List[str] = Field(default_factory=list)


class TeacherProfileResponse(ApiModel):
    user_id: str
    name: str
    surname: str
    role: str
    bio: Optional[str] = None
    city: Optional[str] = None
    hourly_rate: Optional[Money] = None
    rating_avg: Optional[Money] = None
    reviews_count: int = 0
    user: UserResponse
    subjects: List[SubjectResponse] = Field(default_factory=list)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class TeacherProfileEnvelope(ApiModel):
    profile: TeacherProfileResponse


class TeacherSearchItem(ApiModel):
    id: str
    name: str
    surname: str
    email: str
    city: Optional[str] = None
    hourly_rate: Optional[Money] = None
    rating_avg: Optional[Money] = None
    reviews_count: int = 0
    bio: Optional[str] = None
    subjects: List[SubjectResponse] = Field(default_factory=list)


TeacherSearchPage = Page[TeacherSearchItem]
