"""REST API route handlers for session lifecycle management."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Request

from retro_snake.config import EngineConfig
from retro_snake.exceptions import InvalidConfigError
from retro_snake.server.models import (
    CreateSessionRequest,
    DirectionRequest,
    ErrorResponse,
    SessionSummary,
)
from retro_snake.server.session_manager import SessionManager
from retro_snake.snake import Direction

router = APIRouter(
    prefix="/sessions",
    tags=["sessions"],
    responses={404: {"model": ErrorResponse}},
)
highscore_router = APIRouter(prefix="/highscores", tags=["highscores"])


def _get_manager(request: Request) -> SessionManager:
    return request.app.state.session_manager


@router.post("", status_code=201)
async def create_session(
    body: CreateSessionRequest, request: Request,
) -> SessionSummary:
    """Create a new session in the waiting state."""
    manager = _get_manager(request)
    fields = body.model_dump()
    seed = fields.pop("seed")
    try:
        config = EngineConfig(**fields)
    except InvalidConfigError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    session = manager.create_session(config, seed=seed)
    return manager.summarize(session)


@router.get("")
async def list_sessions(request: Request) -> list[SessionSummary]:
    """List retained sessions."""
    return _get_manager(request).list_sessions()


@router.get("/{session_id}")
async def get_session(session_id: str, request: Request) -> dict:
    """Get session metadata and the current snapshot."""
    manager = _get_manager(request)
    session = manager.get_session(session_id)
    if session is None:
        raise HTTPException(status_code=404, detail="Session not found.")
    result = manager.summarize(session).model_dump(mode="json")
    result["state"] = session.engine.snapshot().to_dict()
    return result


async def _run_command(request: Request, command: str, session_id: str) -> dict:
    manager = _get_manager(request)
    handler = getattr(manager, command)
    try:
        snapshot = await handler(session_id)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail="Session not found.") from exc
    return snapshot.to_dict()


@router.post("/{session_id}/start")
async def start_session(session_id: str, request: Request) -> dict:
    """Start the session, or restart it after game over."""
    return await _run_command(request, "start_session", session_id)


@router.post("/{session_id}/pause")
async def pause_session(session_id: str, request: Request) -> dict:
    return await _run_command(request, "pause_session", session_id)


@router.post("/{session_id}/resume")
async def resume_session(session_id: str, request: Request) -> dict:
    return await _run_command(request, "resume_session", session_id)


@router.post("/{session_id}/tap")
async def tap_session(session_id: str, request: Request) -> dict:
    """Start when idle or over, otherwise toggle pause."""
    return await _run_command(request, "tap", session_id)


@router.post("/{session_id}/direction", status_code=202)
async def set_direction(
    session_id: str, body: DirectionRequest, request: Request,
) -> dict:
    """Queue a heading for the next tick."""
    manager = _get_manager(request)
    try:
        direction = Direction.parse(body.direction)
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    try:
        await manager.set_direction(session_id, direction)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail="Session not found.") from exc
    return {"status": "accepted", "direction": direction.name.lower()}


@router.delete("/{session_id}", status_code=204)
async def delete_session(session_id: str, request: Request) -> None:
    try:
        await _get_manager(request).delete_session(session_id)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail="Session not found.") from exc


@highscore_router.get("")
async def list_highscores(request: Request) -> dict:
    """Return the best score per game key."""
    return _get_manager(request).highscores.to_dict()
