from __future__ import annotations

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from shopsync.services.session_state import EVENTS_CHANNEL
from shopsync.services.ws_manager import ws_manager

router = APIRouter(tags=["websocket"])


@router.websocket("/api/ws")
async def websocket_endpoint(websocket: WebSocket):
    await ws_manager.connect(EVENTS_CHANNEL, websocket)
    try:
        while True:
            await websocket.receive_text()
    except WebSocketDisconnect:
        ws_manager.disconnect(EVENTS_CHANNEL, websocket)
