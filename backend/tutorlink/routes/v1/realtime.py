# backend/tutorlink/routes/v1/realtime.py
"""
Websocket endpoint.

Clients connect to ``/ws`` and authenticate with ``Authorization: Bearer``
or a first frame ``{"auth": {"token": "..."}}``. Frames in both directions
are JSON objects ``{"event": str, "data": object}``.
"""

from typing import Callable

from fastapi import APIRouter, Depends, WebSocket
from sqlalchemy.orm import Session

from ...api.dependencies import get_session_factory
from ...services.messaging.gateway import RealtimeGateway

router = APIRouter(tags=["realtime"])


@router.websocket("/ws")
async def realtime_socket(
    websocket: WebSocket,
    session_factory: Callable[[], Session] = Depends(get_session_factory),
) -> None:
    await RealtimeGateway(session_factory).serve(websocket)
