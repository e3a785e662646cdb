# backend/tutorlink/services/messaging/connection_manager.py
"""
Single-process websocket room registry.

Each authenticated connection joins ``user:<id>`` and may join any number of
``conversation:<id>`` rooms. One user can hold several connections (tabs),
so rooms track connections, not users.

Horizontal scale-out would need an external pub/sub relay; this registry only
fans out to sockets held by the current process.
"""

import asyncio
from dataclasses import dataclass, field
import logging
from typing import Any, Dict, Iterable, Optional, Set

from fastapi import WebSocket
import ulid

from ...monitoring.prometheus_metrics import prometheus_metrics
from .events import EventType, build_frame, user_room

logger = logging.getLogger(__name__)


@dataclass(eq=False)
class Connection:
    """One accepted websocket and the rooms it belongs to."""

    websocket: WebSocket
    user_id: str
    role: str
    id: str = field(default_factory=lambda: str(ulid.ULID()))
    rooms: Set[str] = field(default_factory=set)

    def in_room(self, room: str) -> bool:
        return room in self.rooms

    async def send(self, frame: Dict[str, Any]) -> None:
        await self.websocket.send_json(frame)


class ConnectionManager:
    def __init__(self) -> None:
        self.connections: Dict[str, Connection] = {}
        self.rooms: Dict[str, Set[str]] = {}
        self._loop: Optional[asyncio.AbstractEventLoop] = None

    @property
    def loop(self) -> Optional[asyncio.AbstractEventLoop]:
        return self._loop

    def bind_loop(self, loop: Optional[asyncio.AbstractEventLoop] = None) -> None:
        """Remember the event loop that owns the sockets."""
        self._loop = loop or asyncio.get_running_loop()

    def register(self, websocket: WebSocket, user_id: str, role: str) -> Connection:
        """Track an accepted, authenticated socket and join its personal room."""
        self.bind_loop()
        connection = Connection(websocket=websocket, user_id=user_id, role=role)
        self.connections[connection.id] = connection
        self.join(connection, user_room(user_id))
        prometheus_metrics.connection_opened()
        logger.info(f"User {user_id} connected ({connection.id})")
        return connection

    def unregister(self, connection: Connection) -> None:
        """Remove the connection from every room it joined."""
        if self.connections.pop(connection.id, None) is None:
            return
        for room in list(connection.rooms):
            self.leave(connection, room)
        prometheus_metrics.connection_closed()
        logger.info(f"User {connection.user_id} disconnected ({connection.id})")

    def join(self, connection: Connection, room: str) -> None:
        self.rooms.setdefault(room, set()).add(connection.id)
        connection.rooms.add(room)

    def leave(self, connection: Connection, room: str) -> None:
        members = self.rooms.get(room)
        if members is not None:
            members.discard(connection.id)
            if not members:
                del self.rooms[room]
        connection.rooms.discard(room)

    def room_size(self, room: str) -> int:
        return len(self.rooms.get(room, ()))

    async def emit_to_rooms(
        self, rooms: Iterable[str], event: EventType | str, data: Dict[str, Any]
    ) -> int:
        """
        Send one frame to every connection in any of ``rooms``.

        A connection present in several of the rooms receives the frame once.
        Returns the number of sockets written to.
        """
        frame = build_frame(event, data)
        targets: Set[str] = set()
        for room in rooms:
            targets.update(self.rooms.get(room, ()))

        sent = 0
        for connection_id in targets:
            connection = self.connections.get(connection_id)
            if connection is None:
                continue
            try:
                await connection.send(frame)
                sent += 1
            except Exception as e:
                logger.error(f"Error sending {frame['event']} to {connection.user_id}: {e}")
                self.unregister(connection)
        prometheus_metrics.record_realtime_event(frame["event"], "out")
        return sent

    async def emit_to_room(self, room: str, event: EventType | str, data: Dict[str, Any]) -> int:
        return await self.emit_to_rooms([room], event, data)


# Global instance
connection_manager = ConnectionManager()
