from datetime import datetime, time
from typing import Any, List, Optional

from pydantic import field_validator

from ..utils.time_of_day import format_time_of_day
from .base import ApiModel, StrictRequestModel, wire_field


class AvailabilitySlotCreate(StrictRequestModel):
    """Times are ``HH:MM`` or ``HH:MM:SS``; parsed and range-checked by the service."""

    day_of_week: int
    start_time: str
    end_time: str


class AvailabilitySlotUpdate(StrictRequestModel):
    day_of_week: Optional[int] = None
    start_time: Optional[str] = None
    end_time: Optional[str] = None


class AvailabilitySlotResponse(ApiModel):
    id: str
    teacher_user_id: str = wire_field("teacher_id", "teacherUserId")
    day_of_week: int
    start_time: str
    end_time: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator("start_time", "end_time", mode="before")
    @classmethod
    def _format_time(cls, value: Any) -> Any:
        if isinstance(value, time):
            return format_time_of_day(value)
        return value


class SlotEnvelope(ApiModel):
    slot: AvailabilitySlotResponse


class SlotListEnvelope(ApiModel):
    slots: List[AvailabilitySlotResponse]


class DeletedCountResponse(ApiModel):
    deleted_count: int
