# backend/tutorlink/services/messaging/events.py
"""
Real-time event names, room names and frame builders.

Every websocket frame, in both directions, has the shape:
{
    "event": str,  # Event name, e.g. "message:new"
    "data": dict   # Event-specific payload
}
"""

from enum import Enum
from typing import Any, Dict, Iterable, Optional, Protocol

from ...core.exceptions import DomainException


class EventType(str, Enum):
    """Websocket event names."""

    # Client -> server
    CONVERSATION_JOIN = "conversation:join"
    CONVERSATION_LEAVE = "conversation:leave"
    MESSAGE_SEND = "message:send"
    PING = "ping"

    # Server -> client
    CONNECTED = "connected"
    CONVERSATION_JOINED = "conversation:joined"
    CONVERSATION_LEFT = "conversation:left"
    MESSAGE_NEW = "message:new"
    MESSAGE_SENT = "message:sent"
    CONTACT_REQUEST_CREATED = "contactRequest:created"
    CONTACT_REQUEST_STATUS_UPDATED = "contactRequest:statusUpdated"
    SOCKET_ERROR = "socket:error"
    PONG = "pong"


def user_room(user_id: str) -> str:
    return f"user:{user_id}"


def conversation_room(conversation_id: str) -> str:
    return f"conversation:{conversation_id}"


def build_frame(event: EventType | str, data: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """
    Build a properly structured frame.

    Args:
        event: The event name
        data: Event-specific payload

    Returns:
        Frame dict ready for ``send_json``
    """
    name = event.value if isinstance(event, EventType) else event
    return {"event": name, "data": data or {}}


def build_error_frame(error: DomainException) -> Dict[str, Any]:
    """``socket:error`` frame carrying ``{code, type, message}``."""
    return build_frame(EventType.SOCKET_ERROR, error.to_socket_error())


class EventPublisher(Protocol):
    """
    Outbound notification port used by services.

    Services call ``publish`` after their transaction commits; they never
    talk to the websocket registry directly.
    """

    def publish(self, rooms: Iterable[str], event: EventType, data: Dict[str, Any]) -> None:
        ...


class NullEventPublisher:
    """Publisher that drops every event."""

    def publish(self, rooms: Iterable[str], event: EventType, data: Dict[str, Any]) -> None:
        return None
