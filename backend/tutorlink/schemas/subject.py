from typing import List

from .base import ApiModel


class SubjectResponse(ApiModel):
    id: str
    name: str


class SubjectListResponse(ApiModel):
    subjects: List[SubjectResponse]
