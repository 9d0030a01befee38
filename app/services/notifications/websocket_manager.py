import asyncio
import logging
from typing import List, Optional, Set

from fastapi import WebSocket

from .toast_center import Toast

logger = logging.getLogger(__name__)


class WebSocketManager:
    """
    Manages WebSocket connections that render the toast queue.

    Supports:
    - Multiple concurrent viewers
    - Pushing the full ordered toast list after every change
    - Dropping connections that fail to receive
    """

    def __init__(self):
        self._connections: Set[WebSocket] = set()
        self._lock = asyncio.Lock()
        self._pending: Set[asyncio.Task] = set()

    async def connect(self, websocket: WebSocket, toasts: Optional[List[Toast]] = None):
        """
        Accept a new WebSocket connection.

        Args:
            websocket: The WebSocket connection
            toasts: Current toasts to send as the first snapshot
        """
        await websocket.accept()

        async with self._lock:
            self._connections.add(websocket)

        logger.info(f"WebSocket connected: viewers={len(self._connections)}")

        if toasts is not None:
            await websocket.send_json(self._snapshot_message(toasts))

    async def disconnect(self, websocket: WebSocket):
        """Remove a WebSocket connection."""
        async with self._lock:
            self._connections.discard(websocket)

        logger.info(f"WebSocket disconnected: viewers={len(self._connections)}")

    async def broadcast(self, message: dict):
        """
        Send a message to every connected viewer.

        Args:
            message: Message to send (will be JSON encoded)
        """
        async with self._lock:
            connections = list(self._connections)

        disconnected = []
        for websocket in connections:
            try:
                await websocket.send_json(message)
            except Exception as e:
                logger.warning(f"Failed to push toasts to viewer: {e}")
                disconnected.append(websocket)

        for ws in disconnected:
            await self.disconnect(ws)

    async def send_snapshot(self, toasts: List[Toast]):
        await self.broadcast(self._snapshot_message(toasts))

    def on_toasts_changed(self, toasts: List[Toast]) -> None:
        """
        Toast center listener: schedule a snapshot push.

        Changes made outside a running loop are not pushed; viewers get the
        current list on their next connect.
        """
        if not self._connections:
            return
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            return
        task = loop.create_task(self.send_snapshot(toasts))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    @staticmethod
    def _snapshot_message(toasts: List[Toast]) -> dict:
        return {
            "type": "toasts",
            "items": [toast.to_dict() for toast in toasts],
        }

    @property
    def connection_count(self) -> int:
        """Get total number of active connections."""
        return len(self._connections)


# Global instance
websocket_manager = WebSocketManager()
