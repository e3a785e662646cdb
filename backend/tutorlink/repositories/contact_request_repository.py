# backend/tutorlink/repositories/contact_request_repository.py
from typing import Dict, Iterable, List, Optional

from sqlalchemy.orm import Session

from ..core.enums import ContactRequestStatus
from ..models.contact_request import ContactRequest
from .base_repository import BaseRepository


class ContactRequestRepository(BaseRepository[ContactRequest]):
    def __init__(self, db: Session):
        super().__init__(db, ContactRequest)

    def find_pending(self, student_id: str, teacher_id: str) -> Optional[ContactRequest]:
        return self.find_one_by(
            student_id=student_id,
            teacher_id=teacher_id,
            status=ContactRequestStatus.PENDING.value,
        )

    def get_many_by_ids(self, ids: Iterable[str]) -> Dict[str, ContactRequest]:
        unique_ids = list({i for i in ids if i})
        if not unique_ids:
            return {}
        rows = self._execute_query(self._build_query().filter(ContactRequest.id.in_(unique_ids)))
        return {request.id: request for request in rows}

    def list_sent(
        self, student_id: str, status: Optional[ContactRequestStatus] = None
    ) -> List[ContactRequest]:
        query = self._build_query().filter(ContactRequest.student_id == student_id)
        return self._ordered(query, status)

    def list_received(
        self, teacher_id: str, status: Optional[ContactRequestStatus] = None
    ) -> List[ContactRequest]:
        query = self._build_query().filter(ContactRequest.teacher_id == teacher_id)
        return self._ordered(query, status)

    def _ordered(self, query, status: Optional[ContactRequestStatus]) -> List[ContactRequest]:
        if status is not None:
            query = query.filter(ContactRequest.status == status.value)
        return self._execute_query(
            query.order_by(ContactRequest.created_at.desc(), ContactRequest.id.desc())
        )
