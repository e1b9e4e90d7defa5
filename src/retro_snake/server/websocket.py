"""WebSocket handler streaming snapshots and accepting player commands."""

from __future__ import annotations

import json
import logging

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from retro_snake.server.session_manager import SessionManager
from retro_snake.snake import Direction

logger = logging.getLogger(__name__)

ws_router = APIRouter()

_ACTIONS: dict[str, str] = {
    "start": "start_session",
    "pause": "pause_session",
    "resume": "resume_session",
    "tap": "tap",
}


def _get_manager(ws: WebSocket) -> SessionManager:
    return ws.app.state.session_manager


@ws_router.websocket("/sessions/{session_id}/play")
async def play(websocket: WebSocket, session_id: str) -> None:
    """Send directions or actions, receive a snapshot after every change."""
    manager = _get_manager(websocket)
    session = manager.get_session(session_id)
    if session is None:
        await websocket.close(code=4004, reason="Session not found.")
        return

    await websocket.accept()
    session.subscribers.append(websocket)
    logger.info("Subscriber connected to session %s.", session_id)

    # Send initial snapshot so the client can render immediately.
    await websocket.send_text(
        json.dumps(session.engine.snapshot().to_dict(), separators=(",", ":")),
    )

    try:
        while True:
            raw = await websocket.receive_text()
            try:
                msg = json.loads(raw)
            except json.JSONDecodeError:
                continue
            if not isinstance(msg, dict):
                continue

            direction_str = msg.get("direction")
            if isinstance(direction_str, str):
                try:
                    direction = Direction.parse(direction_str)
                except ValueError:
                    continue
                await manager.set_direction(session_id, direction)
                continue

            action = msg.get("action")
            if isinstance(action, str) and action.lower() in _ACTIONS:
                await getattr(manager, _ACTIONS[action.lower()])(session_id)
    except KeyError:
        logger.info("Session %s removed while subscriber connected.", session_id)
        await websocket.close(code=4004, reason="Session not found.")
    except WebSocketDisconnect:
        logger.info("Subscriber disconnected from session %s.", session_id)
    finally:
        if websocket in session.subscribers:
            session.subscribers.remove(websocket)
