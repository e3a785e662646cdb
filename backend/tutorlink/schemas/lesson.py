from datetime import datetime
from typing import List, Optional

from .base import ApiModel, Page, StrictRequestModel, wire_field


class LessonCreate(StrictRequestModel):
    teacher_user_id: str
    student_user_id: str
    subject_id: str
    start_at: datetime
    duration_min: int


class LessonStatusUpdate(StrictRequestModel):
    status: str


class LessonResponse(ApiModel):
    id: str
    teacher_user_id: str = wire_field("teacher_id", "teacherUserId")
    student_user_id: str = wire_field("student_id", "studentUserId")
    subject_id: str
    start_at: datetime
    duration_min: int
    status_for_teacher: str
    status_for_student: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class LessonEnvelope(ApiModel):
    lesson: LessonResponse


class UpcomingLessonsResponse(ApiModel):
    lessons: List[LessonResponse]


LessonPage = Page[LessonResponse]
