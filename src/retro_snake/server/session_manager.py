"""In-memory session registry, lifecycle management, and async tick loops."""

from __future__ import annotations

import asyncio
import json
import logging
import time
import uuid
from dataclasses import dataclass, field

from starlette.websockets import WebSocket, WebSocketState

from retro_snake.config import EngineConfig
from retro_snake.engine import GameSnapshot, Phase, SimulationEngine
from retro_snake.highscore import DEFAULT_KEY, HighScoreStore
from retro_snake.server.models import SessionStatus, SessionSummary
from retro_snake.snake import Direction

logger = logging.getLogger(__name__)

_MAX_FINISHED_SESSIONS = 100


@dataclass
class Session:
    """All host-side state for a single game session."""

    session_id: str
    engine: SimulationEngine
    highscore_key: str = DEFAULT_KEY
    subscribers: list[WebSocket] = field(default_factory=list)
    created_at: float = field(default_factory=time.monotonic)
    finished_at: float | None = None
    lock: asyncio.Lock = field(default_factory=asyncio.Lock)
    _task: asyncio.Task | None = field(default=None, repr=False)

    @property
    def status(self) -> SessionStatus:
        phase = self.engine.phase
        if phase is Phase.NOT_STARTED:
            return SessionStatus.WAITING
        if phase is Phase.GAME_OVER:
            return SessionStatus.FINISHED
        if self.engine.paused:
            return SessionStatus.PAUSED
        return SessionStatus.RUNNING

    @property
    def loop_running(self) -> bool:
        return self._task is not None and not self._task.done()


class SessionManager:
    """Central registry that owns every session and schedules its ticks.

    The engine owns no timer, so each session's loop re-reads
    ``engine.tick_interval_ms`` after every tick. Ticks and commands are
    serialized through the session lock.
    """

    def __init__(
        self,
        highscores: HighScoreStore | None = None,
        max_finished_sessions: int = _MAX_FINISHED_SESSIONS,
    ) -> None:
        if max_finished_sessions < 0:
            raise ValueError("max_finished_sessions must be >= 0.")
        self.highscores = highscores if highscores is not None else HighScoreStore()
        self._sessions: dict[str, Session] = {}
        self._max_finished_sessions = max_finished_sessions

    def create_session(
        self,
        config: EngineConfig | None = None,
        seed: int | None = None,
    ) -> Session:
        """Register a new session in the waiting state."""
        engine = SimulationEngine(config, seed=seed)
        session_id = uuid.uuid4().hex[:12]
        session = Session(session_id=session_id, engine=engine)
        self._sessions[session_id] = session
        logger.info(
            "Session %s created (%d×%d).",
            session_id, engine.grid.width, engine.grid.height,
        )
        return session

    def get_session(self, session_id: str) -> Session | None:
        return self._sessions.get(session_id)

    def _require(self, session_id: str) -> Session:
        session = self._sessions.get(session_id)
        if session is None:
            raise KeyError(f"Session {session_id} not found.")
        return session

    def summarize(self, session: Session) -> SessionSummary:
        return SessionSummary(
            session_id=session.session_id,
            status=session.status,
            score=session.engine.score,
            high_score=self.highscores.get(session.highscore_key),
            tick_interval_ms=session.engine.tick_interval_ms,
        )

    def list_sessions(self) -> list[SessionSummary]:
        """Return summaries of all retained sessions."""
        return [self.summarize(s) for s in self._sessions.values()]

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    async def start_session(self, session_id: str) -> GameSnapshot:
        """Start, or restart after game over, and ensure the loop runs."""
        session = self._require(session_id)
        async with session.lock:
            snapshot = session.engine.start()
            session.finished_at = None
        if not session.loop_running:
            session._task = asyncio.create_task(self._tick_loop(session))
        await self._broadcast(session, snapshot)
        return snapshot

    async def pause_session(self, session_id: str) -> GameSnapshot:
        session = self._require(session_id)
        async with session.lock:
            session.engine.pause()
            snapshot = session.engine.snapshot()
        await self._broadcast(session, snapshot)
        return snapshot

    async def resume_session(self, session_id: str) -> GameSnapshot:
        session = self._require(session_id)
        async with session.lock:
            session.engine.resume()
            snapshot = session.engine.snapshot()
        await self._broadcast(session, snapshot)
        return snapshot

    async def tap(self, session_id: str) -> GameSnapshot:
        """Start a session that is not running, otherwise toggle pause."""
        session = self._require(session_id)
        if session.engine.phase is not Phase.RUNNING:
            return await self.start_session(session_id)
        async with session.lock:
            session.engine.toggle_pause()
            snapshot = session.engine.snapshot()
        await self._broadcast(session, snapshot)
        return snapshot

    async def set_direction(self, session_id: str, direction: Direction) -> None:
        session = self._require(session_id)
        async with session.lock:
            session.engine.set_direction(direction)

    async def delete_session(self, session_id: str) -> None:
        session = self._require(session_id)
        await self._stop_loop(session)
        await self._close_connections(session)
        del self._sessions[session_id]
        logger.info("Session %s deleted.", session_id)

    # ------------------------------------------------------------------
    # Tick loop
    # ------------------------------------------------------------------

    async def _tick_loop(self, session: Session) -> None:
        """Tick the engine at its current interval until the game ends."""
        engine = session.engine
        try:
            while engine.phase is Phase.RUNNING:
                await asyncio.sleep(engine.tick_interval_ms / 1000.0)
                async with session.lock:
                    if engine.paused:
                        continue
                    previous_score = engine.score
                    snapshot = engine.tick()
                    if engine.score != previous_score:
                        self.highscores.submit(
                            engine.score, key=session.highscore_key,
                        )
                    if engine.is_over():
                        self._finish(session)
                await self._broadcast(session, snapshot)
        except asyncio.CancelledError:
            logger.info("Tick loop cancelled for session %s.", session.session_id)
        except Exception:
            logger.exception("Tick loop error in session %s.", session.session_id)
            session.engine.abort()
            self._finish(session)
        finally:
            if session.status == SessionStatus.FINISHED:
                self._prune_finished_sessions()

    def _finish(self, session: Session) -> None:
        """Stamp the end of a game exactly once."""
        if session.finished_at is None:
            session.finished_at = time.monotonic()

    async def _stop_loop(self, session: Session) -> None:
        task = session._task
        if task is not None and not task.done():
            task.cancel()
            await asyncio.gather(task, return_exceptions=True)

    def _prune_finished_sessions(self) -> None:
        """Bound retained finished sessions to avoid unbounded registry growth."""
        finished = [
            s for s in self._sessions.values()
            if s.status == SessionStatus.FINISHED and not s.subscribers
        ]
        overflow = len(finished) - self._max_finished_sessions
        if overflow <= 0:
            return

        finished.sort(
            key=lambda s: s.finished_at if s.finished_at is not None else s.created_at,
        )
        for stale in finished[:overflow]:
            self._sessions.pop(stale.session_id, None)
        logger.info(
            "Pruned %d finished sessions (retaining up to %d).",
            overflow,
            self._max_finished_sessions,
        )

    # ------------------------------------------------------------------
    # Subscribers
    # ------------------------------------------------------------------

    async def _broadcast(self, session: Session, snapshot: GameSnapshot) -> None:
        """Send the snapshot to every connected subscriber."""
        payload = json.dumps(snapshot.to_dict(), separators=(",", ":"))
        dead: list[WebSocket] = []

        # Iterate over a copy so disconnect handlers can mutate the list.
        for ws in list(session.subscribers):
            try:
                if ws.client_state == WebSocketState.CONNECTED:
                    await ws.send_text(payload)
            except Exception:
                dead.append(ws)

        for ws in dead:
            if ws in session.subscribers:
                session.subscribers.remove(ws)

    async def _close_connections(self, session: Session) -> None:
        for ws in list(session.subscribers):
            try:
                if ws.client_state == WebSocketState.CONNECTED:
                    await ws.close(code=1000, reason="Session closed.")
            except Exception:
                logger.warning(
                    "Failed closing subscriber socket in session %s.",
                    session.session_id,
                )
        session.subscribers.clear()

    async def cleanup(self) -> None:
        """Cancel all running tick loops."""
        tasks = [s._task for s in self._sessions.values() if s.loop_running]
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
        logger.info("SessionManager cleanup complete.")
