"""
WebSocket connection manager.
Relays broadcaster events to connected clients.
"""
from typing import Any, List, Optional, Set
from fastapi import WebSocket
from pydantic import BaseModel
import asyncio
import logging

from bedflow.core.events import EventBroadcaster
from bedflow.models.enums import EventTopicEnum

logger = logging.getLogger("bedflow.websocket")


def serialize_payload(payload: Any) -> Any:
    """Converts event payloads (models, lists of models) to JSON-ready data."""
    if isinstance(payload, BaseModel):
        return payload.model_dump(mode="json")
    if isinstance(payload, (list, tuple)):
        return [serialize_payload(item) for item in payload]
    return payload


class ConnectionManager:
    """
    WebSocket connection manager.

    Characteristics:
    - Keeps the list of active connections
    - Subscribes to the event broadcaster and fans every event out
    - Drops dead connections automatically
    """

    def __init__(self):
        self.active_connections: List[WebSocket] = []
        self._subscription: Optional[int] = None
        self._broadcaster: Optional[EventBroadcaster] = None
        self._pending: Set[asyncio.Task] = set()

    # ============================================
    # BROADCASTER BRIDGE
    # ============================================

    def attach(self, broadcaster: EventBroadcaster) -> None:
        """Starts relaying events of a broadcaster."""
        self.detach()
        self._broadcaster = broadcaster
        self._subscription = broadcaster.subscribe(self.on_event)

    def detach(self) -> None:
        """Stops relaying events."""
        if self._broadcaster is not None and self._subscription is not None:
            self._broadcaster.unsubscribe(self._subscription)
        self._broadcaster = None
        self._subscription = None

    def on_event(self, topic: EventTopicEnum, payload: Any) -> None:
        """
        Broadcaster callback.

        Schedules the fan-out on the running event loop and returns at
        once, so publishing never waits on network I/O.
        """
        if not self.active_connections:
            return

        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.debug(f"No running event loop, {topic.value} not relayed")
            return

        message = {"type": topic.value, "data": serialize_payload(payload)}
        task = loop.create_task(self.broadcast(message))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    # ============================================
    # CONNECTIONS
    # ============================================

    async def connect(self, websocket: WebSocket) -> None:
        """
        Accepts a WebSocket client.

        Args:
            websocket: WebSocket connection
        """
        await websocket.accept()
        self.active_connections.append(websocket)

        logger.info(
            f"WebSocket connected. Total connections: {len(self.active_connections)}"
        )

    def disconnect(self, websocket: WebSocket) -> None:
        """
        Forgets a WebSocket client.

        Args:
            websocket: Connection to drop
        """
        if websocket in self.active_connections:
            self.active_connections.remove(websocket)

        logger.info(
            f"WebSocket disconnected. Total connections: {len(self.active_connections)}"
        )

    async def broadcast(self, message: dict) -> None:
        """
        Sends a message to every connected client.

        Args:
            message: Dictionary with the message to send
        """
        disconnected: List[WebSocket] = []

        for connection in list(self.active_connections):
            try:
                await connection.send_json(message)
            except Exception as e:
                logger.warning(f"Error sending message: {e}")
                disconnected.append(connection)

        for conn in disconnected:
            self.disconnect(conn)

    @property
    def connection_count(self) -> int:
        """Total number of active connections."""
        return len(self.active_connections)
