# backend/tutorlink/models/subject.py
from sqlalchemy import Column, String
import ulid

from ..database import Base


class Subject(Base):
    """Flat catalog entry; names are globally unique."""

    __tablename__ = "subjects"

    id = Column(String(26), primary_key=True, default=lambda: str(ulid.ULID()))
    name = Column(String(100), nullable=False, unique=True)

    def __repr__(self) -> str:
        return f"<Subject {self.name}>"
