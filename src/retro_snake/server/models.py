"""Pydantic models for API request/response schemas."""

from __future__ import annotations

import enum

from pydantic import BaseModel, Field


class SessionStatus(str, enum.Enum):
    """Host-side lifecycle states for a session."""

    WAITING = "waiting"
    RUNNING = "running"
    PAUSED = "paused"
    FINISHED = "finished"


class CreateSessionRequest(BaseModel):
    """Request body for POST /sessions."""

    grid_width: int = Field(default=20, ge=2, le=200)
    grid_height: int = Field(default=20, ge=2, le=200)
    initial_tick_interval_ms: int = Field(default=150, ge=1, le=5000)
    min_tick_interval_ms: int = Field(default=50, ge=1, le=5000)
    tick_interval_decrement_ms: int = Field(default=10, ge=1)
    score_per_food: int = Field(default=10, ge=1)
    speedup_score_threshold: int = Field(default=50, ge=1)
    food_placement: str = "rejection"
    allow_tail_chase: bool = False
    seed: int | None = None


class DirectionRequest(BaseModel):
    """Request body for POST /sessions/{session_id}/direction."""

    direction: str = Field(min_length=1, max_length=8)


class SessionSummary(BaseModel):
    """Compact session info for list endpoints."""

    session_id: str
    status: SessionStatus
    score: int
    high_score: int
    tick_interval_ms: int


class ErrorResponse(BaseModel):
    """Standard error envelope."""

    detail: str
