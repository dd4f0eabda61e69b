"""WebSocket connection manager for live change events."""

from __future__ import annotations

import json
import logging

from fastapi import WebSocket

logger = logging.getLogger(__name__)


class ConnectionManager:
    def __init__(self):
        self._connections: dict[str, list[WebSocket]] = {}

    async def connect(self, channel: str, websocket: WebSocket):
        await websocket.accept()
        self._connections.setdefault(channel, []).append(websocket)

    def disconnect(self, channel: str, websocket: WebSocket):
        conns = self._connections.get(channel, [])
        if websocket in conns:
            conns.remove(websocket)

    def count(self, channel: str) -> int:
        return len(self._connections.get(channel, []))

    async def broadcast(self, channel: str, message: dict):
        """Send a JSON message to every client on a channel, dropping dead sockets."""
        conns = self._connections.get(channel, [])
        if not conns:
            return
        text = json.dumps(message)
        dead = []
        for ws in list(conns):
            try:
                await ws.send_text(text)
            except Exception:
                logger.debug("Dropping websocket on %s", channel)
                dead.append(ws)
        for ws in dead:
            if ws in conns:
                conns.remove(ws)


ws_manager = ConnectionManager()
