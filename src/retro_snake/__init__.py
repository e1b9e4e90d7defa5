"""Retro Snake: deterministic tick-based snake simulation."""

from retro_snake.config import EngineConfig
from retro_snake.engine import (
    DeathCause,
    GameSnapshot,
    GameState,
    Phase,
    SimulationEngine,
)
from retro_snake.exceptions import GridFullError, InvalidConfigError
from retro_snake.food import FoodPlacement, FoodSpawner
from retro_snake.grid import Grid
from retro_snake.highscore import HighScoreStore
from retro_snake.snake import Direction, Snake

__all__ = [
    "DeathCause",
    "Direction",
    "EngineConfig",
    "FoodPlacement",
    "FoodSpawner",
    "GameSnapshot",
    "GameState",
    "Grid",
    "GridFullError",
    "HighScoreStore",
    "InvalidConfigError",
    "Phase",
    "SimulationEngine",
    "Snake",
]
