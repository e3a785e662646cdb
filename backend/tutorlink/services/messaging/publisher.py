# backend/tutorlink/services/messaging/publisher.py
"""
EventPublisher backed by the in-process websocket registry.

Services run synchronously, usually on a worker thread, while sockets live on
the event loop. Publishing therefore hands the fan-out coroutine to the loop
instead of awaiting it.
"""

import asyncio
from concurrent.futures import Future
import logging
from typing import Any, Dict, Iterable, Set, Union

from .connection_manager import ConnectionManager, connection_manager
from .events import EventType

logger = logging.getLogger(__name__)

# Strong references to fan-out tasks until they finish; the loop only keeps weak ones.
_background_tasks: Set["asyncio.Task[Any]"] = set()


def _log_failure(future: Union["asyncio.Future[Any]", Future]) -> None:
    if future.cancelled():
        return
    error = future.exception()
    if error is not None:
        logger.error(f"Realtime fan-out failed: {error!r}")


def _task_done(task: "asyncio.Task[Any]") -> None:
    _background_tasks.discard(task)
    _log_failure(task)


class RoomEventPublisher:
    def __init__(self, manager: ConnectionManager = connection_manager) -> None:
        self.manager = manager

    def publish(self, rooms: Iterable[str], event: EventType, data: Dict[str, Any]) -> None:
        loop = self.manager.loop
        room_list = list(rooms)
        if loop is None or loop.is_closed():
            logger.debug(f"No realtime loop bound; dropping {event.value} for {room_list}")
            return

        coro = self.manager.emit_to_rooms(room_list, event, data)
        try:
            running = asyncio.get_running_loop()
        except RuntimeError:
            running = None

        if running is loop:
            task = loop.create_task(coro)
            _background_tasks.add(task)
            task.add_done_callback(_task_done)
        else:
            asyncio.run_coroutine_threadsafe(coro, loop).add_done_callback(_log_failure)
        logger.debug(f"Published {event.value} to {room_list}")
