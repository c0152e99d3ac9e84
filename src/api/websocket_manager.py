"""WebSocket connection management for live storyboard updates."""

import logging

from fastapi import WebSocket

logger = logging.getLogger(__name__)


class WebSocketManager:
    """Manages WebSocket connections grouped by session id."""

    def __init__(self):
        self.connections: dict[str, list[WebSocket]] = {}

    async def connect(self, session_id: str, websocket: WebSocket) -> None:
        """Accept a WebSocket connection and register it under a session."""
        await websocket.accept()
        self.connections.setdefault(session_id, []).append(websocket)

    async def broadcast(self, session_id: str, message: dict) -> None:
        """Send a message to every client watching a session.

        Clients whose send fails are dropped from the pool.
        """
        disconnected = []
        for ws in list(self.connections.get(session_id, [])):
            try:
                await ws.send_json(message)
            except Exception as e:
                logger.debug(f"Dropping WebSocket for session {session_id}: {e}")
                disconnected.append(ws)

        for ws in disconnected:
            self.disconnect(session_id, ws)

    def disconnect(self, session_id: str, websocket: WebSocket) -> None:
        """Remove a WebSocket from the connection pool."""
        clients = self.connections.get(session_id)
        if clients and websocket in clients:
            clients.remove(websocket)
        if not clients:
            self.connections.pop(session_id, None)
