"""Tick-based simulation engine composing grid, snake, and food logic."""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field

import numpy as np

from retro_snake.config import EngineConfig
from retro_snake.food import FoodSpawner
from retro_snake.grid import Grid
from retro_snake.snake import Direction, Position, Snake

logger = logging.getLogger(__name__)


class Phase(str, enum.Enum):
    """Coarse lifecycle of a game session."""

    NOT_STARTED = "not_started"
    RUNNING = "running"
    GAME_OVER = "game_over"


class DeathCause(str, enum.Enum):
    """Why a session reached :attr:`Phase.GAME_OVER`."""

    WALL = "wall"
    SELF = "self"
    BOARD_FULL = "board_full"
    ABORTED = "aborted"


@dataclass
class GameState:
    """Mutable state of one game session, owned by the engine."""

    snake: Snake
    direction: Direction = Direction.RIGHT
    pending_direction: Direction = Direction.RIGHT
    food: Position | None = None
    score: int = 0
    tick_interval_ms: int = 150
    phase: Phase = Phase.NOT_STARTED
    paused: bool = False
    ticks: int = 0
    death_cause: DeathCause | None = None


@dataclass(frozen=True)
class GameSnapshot:
    """Read-only view of a :class:`GameState` handed to renderers."""

    snake: tuple[Position, ...]
    food: Position | None
    score: int
    tick_interval_ms: int
    speed_percent: int
    phase: Phase
    paused: bool
    direction: Direction
    ticks: int
    death_cause: DeathCause | None = None
    grid: dict = field(default_factory=dict)

    def to_dict(self) -> dict:
        """Return a JSON-serializable dictionary."""
        return {
            "snake": [list(seg) for seg in self.snake],
            "food": list(self.food) if self.food is not None else None,
            "score": self.score,
            "tick_interval_ms": self.tick_interval_ms,
            "speed_percent": self.speed_percent,
            "phase": self.phase.value,
            "paused": self.paused,
            "direction": self.direction.name.lower(),
            "ticks": self.ticks,
            "death_cause": (
                self.death_cause.value if self.death_cause is not None else None
            ),
            "grid": self.grid,
        }


class SimulationEngine:
    """Single-snake, tick-based game engine.

    The engine performs no I/O and owns no timer. A host scheduler calls
    :meth:`tick` every :attr:`tick_interval_ms` milliseconds, re-reading the
    interval after each tick, and forwards input through
    :meth:`set_direction`, :meth:`start`, :meth:`pause` and :meth:`resume`.
    ``tick`` and ``set_direction`` must not run concurrently.
    """

    def __init__(
        self,
        config: EngineConfig | None = None,
        seed: int | None = None,
        rng: np.random.Generator | None = None,
    ) -> None:
        self.config = config if config is not None else EngineConfig()
        self.grid = Grid(self.config.grid_width, self.config.grid_height)
        self.rng = rng if rng is not None else np.random.default_rng(seed)
        self.food_spawner = FoodSpawner(
            self.grid, rng=self.rng, placement=self.config.placement,
        )
        self._state = self._fresh_state()

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------

    @property
    def state(self) -> GameState:
        """The live state. Hosts must treat it as read-only."""
        return self._state

    @property
    def phase(self) -> Phase:
        return self._state.phase

    @property
    def paused(self) -> bool:
        return self._state.paused

    @property
    def score(self) -> int:
        return self._state.score

    @property
    def tick_interval_ms(self) -> int:
        return self._state.tick_interval_ms

    @property
    def speed_percent(self) -> int:
        """How far the interval has dropped from initial towards the floor."""
        initial = self.config.initial_tick_interval_ms
        span = initial - self.config.min_tick_interval_ms
        if span == 0:
            return 0
        return round((initial - self._state.tick_interval_ms) / span * 100)

    def is_over(self) -> bool:
        return self._state.phase is Phase.GAME_OVER

    def snapshot(self) -> GameSnapshot:
        """Capture an immutable copy of the current state."""
        s = self._state
        return GameSnapshot(
            snake=tuple(s.snake.body),
            food=s.food,
            score=s.score,
            tick_interval_ms=s.tick_interval_ms,
            speed_percent=self.speed_percent,
            phase=s.phase,
            paused=s.paused,
            direction=s.direction,
            ticks=s.ticks,
            death_cause=s.death_cause,
            grid=self.grid.to_dict(),
        )

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def start(self) -> GameSnapshot:
        """Discard any previous session and begin a new one."""
        state = self._fresh_state()
        state.phase = Phase.RUNNING
        state.food = self.food_spawner.place(state.snake)
        self._state = state
        logger.info(
            "Game started on %d×%d grid, food at %s.",
            self.grid.width, self.grid.height, state.food,
        )
        return self.snapshot()

    def set_direction(self, requested: Direction) -> None:
        """Queue a heading for the next tick.

        Requests reversing the committed direction are ignored, as are
        requests outside a running game. Pausing does not block them.
        """
        s = self._state
        if s.phase is not Phase.RUNNING:
            return
        if requested is s.direction.opposite:
            return
        s.pending_direction = requested

    def pause(self) -> None:
        if self._state.phase is Phase.RUNNING:
            self._state.paused = True

    def resume(self) -> None:
        if self._state.phase is Phase.RUNNING:
            self._state.paused = False

    def abort(self) -> None:
        """End a running game without a collision, e.g. after a host failure."""
        if self._state.phase is Phase.RUNNING:
            self._end_game(DeathCause.ABORTED)

    def toggle_pause(self) -> None:
        if self._state.phase is Phase.RUNNING:
            self._state.paused = not self._state.paused

    def tick(self) -> GameSnapshot:
        """Advance the game by one cell.

        Returns the resulting snapshot. Does nothing unless the game is
        running and not paused.
        """
        s = self._state
        if s.phase is not Phase.RUNNING or s.paused:
            return self.snapshot()

        s.direction = s.pending_direction
        new_head = s.snake.next_head(s.direction)

        # --- boundary check ---
        if not self.grid.in_bounds(new_head):
            self._end_game(DeathCause.WALL)
            return self.snapshot()

        # --- self-collision check against the pre-move body ---
        will_grow = new_head == s.food
        body = set(s.snake.body)
        if self.config.allow_tail_chase and not will_grow:
            body.discard(s.snake.tail)  # tail will move away
        if new_head in body:
            self._end_game(DeathCause.SELF)
            return self.snapshot()

        # --- move ---
        s.snake.advance(new_head, grow=will_grow)
        s.ticks += 1

        if will_grow:
            self._eat()

        return self.snapshot()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _fresh_state(self) -> GameState:
        return GameState(
            snake=Snake([self.grid.center]),
            tick_interval_ms=self.config.initial_tick_interval_ms,
        )

    def _eat(self) -> None:
        s = self._state
        cfg = self.config
        s.score += cfg.score_per_food
        if s.score % cfg.speedup_score_threshold == 0:
            previous = s.tick_interval_ms
            s.tick_interval_ms = max(
                cfg.min_tick_interval_ms,
                s.tick_interval_ms - cfg.tick_interval_decrement_ms,
            )
            if s.tick_interval_ms != previous:
                logger.debug(
                    "Speed-up at score %d: %d ms -> %d ms.",
                    s.score, previous, s.tick_interval_ms,
                )

        if len(s.snake) >= self.grid.cell_count:
            s.food = None
            self._end_game(DeathCause.BOARD_FULL)
            return
        s.food = self.food_spawner.place(s.snake)

    def _end_game(self, cause: DeathCause) -> None:
        s = self._state
        s.phase = Phase.GAME_OVER
        s.paused = False
        s.death_cause = cause
        logger.info(
            "Game over (%s) after %d ticks with score %d.",
            cause.value, s.ticks, s.score,
        )
