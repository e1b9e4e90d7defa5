"""Load test: many sessions ticking concurrently."""

from __future__ import annotations

import asyncio

import pytest

from retro_snake.config import EngineConfig
from retro_snake.server.session_manager import SessionManager


class TestConcurrentSessions:
    @pytest.mark.asyncio
    async def test_50_concurrent_sessions(self):
        """Start 50 fast sessions; every snake eventually hits a wall."""
        manager = SessionManager()
        config = EngineConfig(
            grid_width=10, grid_height=10,
            initial_tick_interval_ms=5, min_tick_interval_ms=1,
        )
        sessions = [manager.create_session(config, seed=i) for i in range(50)]
        for s in sessions:
            await manager.start_session(s.session_id)

        for _ in range(200):
            await asyncio.sleep(0.05)
            if all(s.engine.is_over() for s in sessions):
                break

        finished = sum(1 for s in sessions if s.engine.is_over())
        assert finished == 50, f"Only {finished}/50 sessions finished"
        await manager.cleanup()
