"""Tests for the Grid module."""

import numpy as np
import pytest

from retro_snake.grid import Grid


class TestGridInit:
    def test_default_dimensions(self):
        grid = Grid()
        assert grid.width == 20
        assert grid.height == 20
        assert grid.center == (10, 10)
        assert grid.cell_count == 400

    def test_degenerate_size_rejected(self):
        with pytest.raises(ValueError, match="at least 2"):
            Grid(width=1, height=5)
        with pytest.raises(ValueError, match="at least 2"):
            Grid(width=5, height=0)

    def test_non_square_center(self):
        assert Grid(width=7, height=4).center == (3, 2)


class TestGridQueries:
    def test_in_bounds(self):
        grid = Grid(width=5, height=3)
        assert grid.in_bounds((0, 0))
        assert grid.in_bounds((4, 2))
        assert not grid.in_bounds((-1, 0))
        assert not grid.in_bounds((5, 0))
        assert not grid.in_bounds((0, 3))

    def test_occupancy_is_row_major(self):
        grid = Grid(width=4, height=3)
        mask = grid.occupancy([(3, 0), (1, 2)])
        assert mask.shape == (3, 4)
        assert mask[0, 3]
        assert mask[2, 1]
        assert np.count_nonzero(mask) == 2

    def test_free_cells(self):
        grid = Grid(width=2, height=2)
        assert grid.free_cells([(0, 0), (1, 1)]) == [(1, 0), (0, 1)]
        assert len(Grid(4, 4).free_cells([])) == 16

    def test_to_dict(self):
        assert Grid(6, 8).to_dict() == {"width": 6, "height": 8}
