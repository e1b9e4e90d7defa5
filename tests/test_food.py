"""Tests for the FoodSpawner module."""

import numpy as np
import pytest

from retro_snake.exceptions import GridFullError
from retro_snake.food import FoodPlacement, FoodSpawner
from retro_snake.grid import Grid
from retro_snake.snake import Snake


class TestFoodPlacement:
    @pytest.mark.parametrize("placement", list(FoodPlacement))
    def test_never_on_snake(self, placement):
        grid = Grid(width=5, height=5)
        snake = Snake([(x, y) for y in range(5) for x in range(5) if (x, y) != (2, 3)])
        spawner = FoodSpawner(grid, rng=np.random.default_rng(0), placement=placement)
        for _ in range(10):
            assert spawner.place(snake) == (2, 3)

    @pytest.mark.parametrize("placement", list(FoodPlacement))
    def test_in_bounds(self, placement):
        grid = Grid(width=7, height=3)
        snake = Snake([(3, 1)])
        spawner = FoodSpawner(grid, rng=np.random.default_rng(1), placement=placement)
        for _ in range(50):
            pos = spawner.place(snake)
            assert grid.in_bounds(pos)
            assert pos != (3, 1)

    def test_deterministic_with_seed(self):
        positions_a = self._place_with_seed(42)
        positions_b = self._place_with_seed(42)
        assert positions_a == positions_b

    def test_different_seeds_differ(self):
        assert self._place_with_seed(1) != self._place_with_seed(2)

    def test_full_grid_raises(self):
        grid = Grid(width=2, height=2)
        snake = Snake([(0, 0), (1, 0), (1, 1), (0, 1)])
        spawner = FoodSpawner(grid)
        with pytest.raises(GridFullError):
            spawner.place(snake)

    @staticmethod
    def _place_with_seed(seed: int) -> list[tuple[int, int]]:
        grid = Grid(width=10, height=10)
        spawner = FoodSpawner(grid, rng=np.random.default_rng(seed))
        snake = Snake([(5, 5)])
        return [spawner.place(snake) for _ in range(5)]
