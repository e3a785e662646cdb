# backend/tutorlink/routes/v1/subjects.py
from fastapi import APIRouter, Depends

from ...api.dependencies import get_subject_service
from ...schemas.subject import SubjectListResponse, SubjectResponse
from ...services.subject_service import SubjectService

router = APIRouter(tags=["subjects"])


@router.get("", response_model=SubjectListResponse)
def list_subjects(service: SubjectService = Depends(get_subject_service)) -> SubjectListResponse:
    """Subject catalogue ordered by name."""
    return SubjectListResponse(
        subjects=[SubjectResponse.model_validate(s) for s in service.list_subjects()]
    )
