# backend/tutorlink/services/messaging/__init__.py
"""
Real-time messaging: room registry, outbound publisher and websocket gateway.
"""

from .connection_manager import ConnectionManager, connection_manager
from .events import (
    EventPublisher,
    EventType,
    NullEventPublisher,
    build_frame,
    conversation_room,
    user_room,
)
from .publisher import RoomEventPublisher

__all__ = [
    "ConnectionManager",
    "EventPublisher",
    "EventType",
    "NullEventPublisher",
    "RoomEventPublisher",
    "build_frame",
    "connection_manager",
    "conversation_room",
    "user_room",
]
