# backend/tutorlink/routes/v1/__init__.py
"""
Routers mounted by ``tutorlink.main``.
"""

from . import (
    auth,
    availability,
    conversations,
    health,
    lessons,
    metrics,
    realtime,
    requests,
    reviews,
    students,
    subjects,
    teachers,
)

__all__ = [
    "auth",
    "availability",
    "conversations",
    "health",
    "lessons",
    "metrics",
    "realtime",
    "requests",
    "reviews",
    "students",
    "subjects",
    "teachers",
]
