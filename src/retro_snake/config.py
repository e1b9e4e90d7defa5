"""Engine configuration."""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass
from pathlib import Path

from retro_snake.exceptions import InvalidConfigError
from retro_snake.food import FoodPlacement

logger = logging.getLogger(__name__)

_POSITIVE_FIELDS = (
    "initial_tick_interval_ms",
    "min_tick_interval_ms",
    "tick_interval_decrement_ms",
    "score_per_food",
    "speedup_score_threshold",
)


@dataclass(frozen=True)
class EngineConfig:
    """Constants fixed for the lifetime of a :class:`SimulationEngine`.

    Supports JSON serialization for reproducibility.
    """

    # Grid
    grid_width: int = 20
    grid_height: int = 20

    # Speed
    initial_tick_interval_ms: int = 150
    min_tick_interval_ms: int = 50
    tick_interval_decrement_ms: int = 10

    # Scoring
    score_per_food: int = 10
    speedup_score_threshold: int = 50

    # Rules
    food_placement: str = FoodPlacement.REJECTION.value
    allow_tail_chase: bool = False

    def __post_init__(self) -> None:
        if self.grid_width <= 1 or self.grid_height <= 1:
            raise InvalidConfigError(
                f"Grid must be at least 2×2, got "
                f"{self.grid_width}×{self.grid_height}.",
            )
        for name in _POSITIVE_FIELDS:
            if getattr(self, name) <= 0:
                raise InvalidConfigError(f"{name} must be positive.")
        if self.min_tick_interval_ms > self.initial_tick_interval_ms:
            raise InvalidConfigError(
                "min_tick_interval_ms cannot exceed initial_tick_interval_ms.",
            )
        try:
            FoodPlacement(self.food_placement)
        except ValueError:
            raise InvalidConfigError(
                f"Unknown food_placement: {self.food_placement!r}.",
            ) from None

    @property
    def placement(self) -> FoodPlacement:
        return FoodPlacement(self.food_placement)

    def to_dict(self) -> dict:
        """Serialize to a plain dict."""
        return asdict(self)

    def save(self, path: str | Path) -> None:
        """Write config to a JSON file."""
        p = Path(path)
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(json.dumps(self.to_dict(), indent=2))
        logger.info("Config saved to %s", p)

    @classmethod
    def load(cls, path: str | Path) -> EngineConfig:
        """Load config from a JSON file."""
        raw = json.loads(Path(path).read_text())
        return cls(**raw)
