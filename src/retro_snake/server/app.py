"""FastAPI application factory."""

from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI

from retro_snake.highscore import HighScoreStore
from retro_snake.server.routes import highscore_router, router
from retro_snake.server.session_manager import SessionManager
from retro_snake.server.websocket import ws_router


def create_app(highscores: HighScoreStore | None = None) -> FastAPI:
    """Build and return the FastAPI application."""

    @asynccontextmanager
    async def _lifespan(app: FastAPI):
        app.state.session_manager = SessionManager(highscores=highscores)
        yield
        await app.state.session_manager.cleanup()

    app = FastAPI(
        title="Retro Snake API", version="0.1.0", lifespan=_lifespan,
    )
    app.include_router(router)
    app.include_router(highscore_router)
    app.include_router(ws_router)
    return app
