# backend/tutorlink/services/messaging/gateway.py
"""
Websocket gateway.

Lifecycle of one socket:

1. accept, then authenticate with the ``Authorization`` header or, failing
   that, a first frame ``{"auth": {"token": "..."}}``
2. register in the room registry (joins ``user:<id>``) and send ``connected``
3. dispatch client frames until the peer disconnects
4. unregister

Handlers never let an exception reach the transport: every failure becomes a
``socket:error`` frame and the connection stays open. Database work runs in a
worker thread with its own session.
"""

import asyncio
import json
import logging
from typing import Any, Awaitable, Callable, Dict, Optional

from fastapi import WebSocket, WebSocketDisconnect, status
from sqlalchemy.orm import Session, sessionmaker

from ...auth import decode_access_token, token_from_header
from ...core.config import settings
from ...core.exceptions import (
    DomainException,
    ForbiddenException,
    ServiceException,
    UnauthorizedException,
    ValidationException,
)
from ...monitoring.prometheus_metrics import prometheus_metrics
from ...repositories.factory import RepositoryFactory
from ...schemas.conversation import MessageResponse
from ..conversation_service import ConversationService
from .connection_manager import Connection, ConnectionManager, connection_manager
from .events import EventType, build_error_frame, build_frame, conversation_room

logger = logging.getLogger(__name__)

AUTH_FAILED_CLOSE_CODE = 4401

Handler = Callable[[Connection, Dict[str, Any]], Awaitable[None]]


class RealtimeGateway:
    def __init__(
        self,
        session_factory: sessionmaker,
        manager: ConnectionManager = connection_manager,
        auth_timeout: Optional[float] = None,
    ) -> None:
        self.session_factory = session_factory
        self.manager = manager
        self.auth_timeout = (
            auth_timeout if auth_timeout is not None else settings.socket_auth_timeout_seconds
        )
        self._handlers: Dict[str, Handler] = {
            EventType.CONVERSATION_JOIN.value: self._on_join,
            EventType.CONVERSATION_LEAVE.value: self._on_leave,
            EventType.MESSAGE_SEND.value: self._on_send,
            EventType.PING.value: self._on_ping,
        }

    # Database access

    def _run_in_session(self, work: Callable[[Session], Any]) -> Any:
        db = self.session_factory()
        try:
            return work(db)
        finally:
            db.close()

    async def _with_db(self, work: Callable[[Session], Any]) -> Any:
        return await asyncio.to_thread(self._run_in_session, work)

    # Handshake

    async def _read_token(self, websocket: WebSocket) -> str:
        token = token_from_header(websocket.headers.get("authorization"))
        if token:
            return token
        try:
            raw = await asyncio.wait_for(websocket.receive_text(), timeout=self.auth_timeout)
        except asyncio.TimeoutError:
            raise UnauthorizedException("Authentication timed out")
        try:
            frame = json.loads(raw)
        except ValueError:
            raise UnauthorizedException("Authentication token is required")
        auth = frame.get("auth") if isinstance(frame, dict) else None
        token = auth.get("token") if isinstance(auth, dict) else None
        if not isinstance(token, str) or not token.strip():
            raise UnauthorizedException("Authentication token is required")
        return token.strip()

    async def authenticate(self, websocket: WebSocket) -> Dict[str, Any]:
        """
        Resolve the socket's user.

        Returns:
            ``{"user_id", "role"}`` of an existing account

        Raises:
            UnauthorizedException: Missing, invalid or expired token, or the user
                no longer exists
        """
        payload = decode_access_token(await self._read_token(websocket))

        def load_user(db: Session) -> Optional[Dict[str, Any]]:
            user = RepositoryFactory.create_user_repository(db).get_by_id(payload["sub"])
            if user is None:
                return None
            return {"user_id": user.id, "role": user.role}

        identity = await self._with_db(load_user)
        if identity is None:
            raise UnauthorizedException("User not found")
        return identity

    async def serve(self, websocket: WebSocket) -> None:
        """Run one socket from accept to disconnect."""
        await websocket.accept()
        try:
            identity = await self.authenticate(websocket)
        except WebSocketDisconnect:
            return
        except UnauthorizedException as e:
            logger.warning(f"Websocket authentication failed: {e.message}")
            await websocket.send_json(build_error_frame(e))
            await websocket.close(code=AUTH_FAILED_CLOSE_CODE)
            return
        except Exception:
            logger.exception("Unexpected error during websocket authentication")
            await websocket.send_json(
                build_error_frame(ServiceException("Websocket authentication failed"))
            )
            await websocket.close(code=status.WS_1011_INTERNAL_ERROR)
            return

        connection = self.manager.register(websocket, identity["user_id"], identity["role"])
        try:
            await connection.send(
                build_frame(
                    EventType.CONNECTED,
                    {"userId": connection.user_id, "role": connection.role},
                )
            )
            while True:
                raw = await websocket.receive_text()
                await self.handle_raw(connection, raw)
        except WebSocketDisconnect:
            pass
        finally:
            self.manager.unregister(connection)

    # Dispatch

    async def handle_raw(self, connection: Connection, raw: str) -> None:
        try:
            frame = json.loads(raw)
        except ValueError:
            await self._send_error(connection, ValidationException("Frame must be valid JSON"))
            return
        await self.handle_frame(connection, frame)

    async def handle_frame(self, connection: Connection, frame: Any) -> None:
        """Route one decoded client frame; failures are reported, never raised."""
        if not isinstance(frame, dict) or not isinstance(frame.get("event"), str):
            await self._send_error(
                connection, ValidationException("Frame must be an object with an 'event' name")
            )
            return

        event = frame["event"]
        data = frame.get("data") or {}
        handler = self._handlers.get(event)
        prometheus_metrics.record_realtime_event(event if handler else "unknown", "in")
        if handler is None:
            await self._send_error(connection, ValidationException(f"Unknown event: {event}"))
            return
        if not isinstance(data, dict):
            await self._send_error(connection, ValidationException("Event data must be an object"))
            return

        try:
            await handler(connection, data)
        except WebSocketDisconnect:
            raise
        except DomainException as e:
            logger.warning(f"Rejected {event} from {connection.user_id}: {e.code} {e.message}")
            await self._send_error(connection, e)
        except Exception:
            logger.exception(f"Error handling {event} from {connection.user_id}")
            await self._send_error(connection, ServiceException(f"Unhandled error in {event}"))

    async def _send_error(self, connection: Connection, error: DomainException) -> None:
        await connection.send(build_error_frame(error))

    # Handlers

    @staticmethod
    def _conversation_id(data: Dict[str, Any]) -> str:
        conversation_id = data.get("conversationId")
        if not isinstance(conversation_id, str) or not conversation_id:
            raise ValidationException("conversationId is required")
        return conversation_id

    async def _on_join(self, connection: Connection, data: Dict[str, Any]) -> None:
        conversation_id = self._conversation_id(data)
        await self._with_db(
            lambda db: ConversationService(db).get_conversation_for_participant(
                conversation_id, connection.user_id
            )
        )
        self.manager.join(connection, conversation_room(conversation_id))
        await connection.send(
            build_frame(EventType.CONVERSATION_JOINED, {"conversationId": conversation_id})
        )

    async def _on_leave(self, connection: Connection, data: Dict[str, Any]) -> None:
        conversation_id = self._conversation_id(data)
        self.manager.leave(connection, conversation_room(conversation_id))
        await connection.send(
            build_frame(EventType.CONVERSATION_LEFT, {"conversationId": conversation_id})
        )

    async def _on_send(self, connection: Connection, data: Dict[str, Any]) -> None:
        conversation_id = self._conversation_id(data)
        content = data.get("content")
        if not content:
            raise ValidationException("content is required")
        room = conversation_room(conversation_id)
        if not connection.in_room(room):
            raise ForbiddenException("You have not joined this conversation")

        def send(db: Session) -> Dict[str, Any]:
            message = ConversationService(db).send_message(
                conversation_id, connection.user_id, content
            )
            return MessageResponse.model_validate(message).to_wire()

        message = await self._with_db(send)
        await self.manager.emit_to_room(
            room,
            EventType.MESSAGE_NEW,
            {"conversationId": conversation_id, "message": message},
        )
        await connection.send(
            build_frame(
                EventType.MESSAGE_SENT,
                {"conversationId": conversation_id, "messageId": message["id"]},
            )
        )

    async def _on_ping(self, connection: Connection, data: Dict[str, Any]) -> None:
        await connection.send(build_frame(EventType.PONG, data))
