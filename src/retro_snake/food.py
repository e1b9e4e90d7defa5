"""Food placement logic."""

from __future__ import annotations

import enum
import logging
from typing import TYPE_CHECKING

import numpy as np

from retro_snake.exceptions import GridFullError

if TYPE_CHECKING:
    from retro_snake.grid import Grid
    from retro_snake.snake import Position, Snake

logger = logging.getLogger(__name__)


class FoodPlacement(enum.Enum):
    """Sampling strategy used when relocating food."""

    REJECTION = "rejection"
    FREE_CELLS = "free_cells"


class FoodSpawner:
    """Places the single food item on a cell the snake does not cover.

    Uses a seeded NumPy RNG for deterministic, reproducible placement.
    """

    def __init__(
        self,
        grid: Grid,
        rng: np.random.Generator | None = None,
        placement: FoodPlacement = FoodPlacement.REJECTION,
    ) -> None:
        self.grid = grid
        self.rng = rng if rng is not None else np.random.default_rng()
        self.placement = placement

    def place(self, snake: Snake) -> Position:
        """Pick a new food cell not occupied by *snake*."""
        if len(snake) >= self.grid.cell_count:
            logger.warning("No free cells left for food placement.")
            raise GridFullError("Snake covers the whole grid.")

        if self.placement is FoodPlacement.FREE_CELLS:
            free = self.grid.free_cells(snake.body)
            return free[int(self.rng.integers(len(free)))]

        occupied = set(snake.body)
        attempts = 0
        while True:
            attempts += 1
            pos = (
                int(self.rng.integers(self.grid.width)),
                int(self.rng.integers(self.grid.height)),
            )
            if pos not in occupied:
                if attempts > self.grid.cell_count:
                    logger.debug(
                        "Food placement took %d samples (snake length %d).",
                        attempts, len(snake),
                    )
                return pos
