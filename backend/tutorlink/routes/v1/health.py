# backend/tutorlink/routes/v1/health.py
"""
Health check endpoint.
"""

import logging
from typing import Dict

from fastapi import APIRouter

logger = logging.getLogger(__name__)
router = APIRouter(tags=["health"])


@router.get("/health")
def health_check() -> Dict[str, str]:
    """Liveness probe; does not touch the database."""
    return {"status": "ok"}
