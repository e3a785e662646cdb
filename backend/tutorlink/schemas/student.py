from datetime import datetime
from typing import Optional

from .base import ApiModel, StrictRequestModel


class StudentProfileUpdate(StrictRequestModel):
    city: Optional[str] = None
    level: Optional[str] = None
    track: Optional[str] = None


class StudentProfileResponse(ApiModel):
    user_id: str
    city: Optional[str] = None
    level: Optional[str] = None
    track: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class StudentProfileEnvelope(ApiModel):
    profile: StudentProfileResponse
