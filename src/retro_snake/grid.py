"""Grid bounds for the snake game."""

from __future__ import annotations

from collections.abc import Iterable

import numpy as np

from retro_snake.snake import Position


class Grid:
    """Fixed-size playfield.

    Coordinates are ``(x, y)`` with ``0 <= x < width`` and
    ``0 <= y < height``. Occupancy masks are NumPy arrays indexed
    ``[y, x]``.
    """

    def __init__(self, width: int = 20, height: int = 20) -> None:
        if width <= 1 or height <= 1:
            raise ValueError("Grid dimensions must be at least 2×2.")
        self.width = width
        self.height = height

    @property
    def cell_count(self) -> int:
        return self.width * self.height

    @property
    def center(self) -> Position:
        """Starting cell, (10, 10) on the default 20×20 grid."""
        return self.width // 2, self.height // 2

    def in_bounds(self, pos: Position) -> bool:
        """Check whether a coordinate lies within the grid."""
        x, y = pos
        return 0 <= x < self.width and 0 <= y < self.height

    def occupancy(self, occupied: Iterable[Position]) -> np.ndarray:
        """Return a boolean ``(height, width)`` mask of occupied cells."""
        mask = np.zeros((self.height, self.width), dtype=bool)
        for x, y in occupied:
            mask[y, x] = True
        return mask

    def free_cells(self, occupied: Iterable[Position]) -> list[Position]:
        """Return all cells not in *occupied*, in row-major order."""
        ys, xs = np.nonzero(~self.occupancy(occupied))
        return list(zip(xs.tolist(), ys.tolist(), strict=True))

    def to_dict(self) -> dict:
        """Serialize grid dimensions to a dictionary."""
        return {"width": self.width, "height": self.height}
