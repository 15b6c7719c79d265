"""Tests for grid storage and coefficient rasterization."""

import numpy as np
import pytest

from dielectra.errors import ConfigurationError
from dielectra.grid import Grid
from dielectra.pde.boundary import embed_plates
from dielectra.pde.rasterize import cell_bounds, plate_arrays, rasterize_coefficient
from dielectra.types import Plate, Slab, VoltageRef


class TestGrid:

    def test_layout(self):
        grid = Grid(10, background=2.0)
        assert grid.potential.dtype == np.float64
        assert grid.coefficient.dtype == np.float32
        assert grid.potential.flags['C_CONTIGUOUS']
        assert np.all(grid.coefficient == 2.0)
        assert grid.idx(3, 2) == 23

    def test_reset(self):
        grid = Grid(5)
        grid.potential[2, 2] = 9.0
        grid.coefficient[1, 1] = 4.0
        grid.reset(background=1.5)
        assert np.all(grid.potential == 0.0)
        assert np.all(grid.coefficient == 1.5)

    def test_flat_view_is_row_major(self):
        grid = Grid(4)
        grid.potential[1, 3] = 7.0
        assert grid.flat_potential()[grid.idx(3, 1)] == 7.0

    def test_sample_bilinear(self):
        grid = Grid(4)
        grid.potential[:, :] = np.arange(4)[None, :]  # V = x
        assert grid.sample(1.25, 2.0) == pytest.approx(1.25)

    @pytest.mark.parametrize("size", [0, 2, 3.5])
    def test_invalid_size(self, size):
        with pytest.raises(ConfigurationError):
            Grid(size)

    def test_is_finite(self):
        grid = Grid(4)
        assert grid.is_finite()
        grid.potential[0, 0] = np.inf
        assert not grid.is_finite()


class TestRasterize:

    def test_slab_roundtrip(self):
        grid = Grid(100)
        rasterize_coefficient(grid.coefficient, 1.0, [(Slab(10, 10, 20, 20), 4.0)])
        flat = grid.coefficient.reshape(-1)
        assert flat[grid.idx(15, 15)] == 4.0
        assert flat[grid.idx(5, 5)] == 1.0
        assert flat[grid.idx(29, 29)] == 4.0
        assert flat[grid.idx(30, 30)] == 1.0

    def test_fractional_bounds_round_outward(self):
        assert cell_bounds(Slab(10.5, 2.2, 2.0, 0.3), 100) == (10, 13, 2, 3)

    def test_clipped_to_grid(self):
        assert cell_bounds(Slab(-5, 95, 20, 20), 100) == (0, 15, 95, 100)

    def test_fully_outside_is_empty(self):
        x0, x1, y0, y1 = cell_bounds(Slab(150, 10, 5, 5), 100)
        assert x1 - x0 == 0

    def test_resets_to_background(self):
        grid = Grid(20)
        rasterize_coefficient(grid.coefficient, 1.0, [(Slab(0, 0, 10, 10), 4.0)])
        rasterize_coefficient(grid.coefficient, 2.0, [(Slab(15, 15, 2, 2), 6.0)])
        assert grid.coefficient[5, 5] == 2.0
        assert grid.coefficient[16, 16] == 6.0

    def test_last_region_wins(self):
        grid = Grid(20)
        rasterize_coefficient(grid.coefficient, 1.0, [(Slab(0, 0, 10, 10), 4.0), (Slab(5, 5, 10, 10), 8.0)])
        assert grid.coefficient[7, 7] == 8.0
        assert grid.coefficient[2, 2] == 4.0

    def test_does_not_touch_potential(self):
        grid = Grid(10)
        grid.potential[4, 4] = 3.0
        rasterize_coefficient(grid.coefficient, 1.0, [(Slab(0, 0, 10, 10), 4.0)])
        assert grid.potential[4, 4] == 3.0


class TestEmbedPlates:

    def test_overlap_order(self):
        grid = Grid(30)
        a = Plate("a", 5, 5, 10, 10, VoltageRef.TOP)
        b = Plate("b", 10, 10, 10, 10, VoltageRef.BOTTOM)

        embed_plates(grid.potential, [a, b], [1.0, 2.0])
        assert grid.potential[12, 12] == 2.0

        embed_plates(grid.potential, [b, a], [2.0, 1.0])
        assert grid.potential[12, 12] == 1.0

    def test_plate_arrays(self):
        bounds, values = plate_arrays([Plate("p", 1.5, 2, 3, 1)], [7.0], 10)
        assert bounds.dtype == np.int64
        assert bounds.tolist() == [[1, 5, 2, 3]]
        assert values.tolist() == [7.0]

    def test_no_plates(self):
        bounds, values = plate_arrays([], [], 10)
        assert bounds.shape == (0, 4)
        assert values.shape == (0,)
