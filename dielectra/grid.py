"""Grid storage: the potential and coefficient arrays owned by one solver."""

from __future__ import annotations

import numpy as np
from scipy.ndimage import map_coordinates

from dielectra import defaults
from dielectra.errors import ConfigurationError

POTENTIAL_DTYPE = np.float64
COEFFICIENT_DTYPE = np.float32


class Grid:
    """Two parallel N x N row-major arrays.

    Attributes:
        size: Side length N, fixed for the lifetime of the grid
        potential: float64 (N, N), indexed [y, x]
        coefficient: float32 (N, N), permittivity per cell, must stay > 0
    """

    def __init__(self, size: int = defaults.DEFAULT_GRID_SIZE, background: float = defaults.DEFAULT_EPSILON_BG):
        if int(size) != size or size < defaults.MIN_GRID_SIZE:
            raise ConfigurationError(f"Grid size must be an integer >= {defaults.MIN_GRID_SIZE}, got {size!r}")
        self.size = int(size)
        self.potential = np.zeros((self.size, self.size), dtype=POTENTIAL_DTYPE)
        self.coefficient = np.full((self.size, self.size), background, dtype=COEFFICIENT_DTYPE)

    @property
    def shape(self) -> tuple[int, int]:
        return (self.size, self.size)

    def idx(self, x: int, y: int) -> int:
        """Flat row-major index of cell (x, y)."""
        return y * self.size + x

    def reset(self, background: float = defaults.DEFAULT_EPSILON_BG) -> None:
        """Zero the potential and fill the coefficient grid with the background value."""
        self.potential.fill(0.0)
        self.coefficient.fill(background)

    def potential_view(self) -> np.ndarray:
        """Read-only view of the potential; writes raise ValueError."""
        view = self.potential.view()
        view.flags.writeable = False
        return view

    def flat_potential(self) -> np.ndarray:
        """Read-only length N*N row-major view."""
        return self.potential_view().reshape(-1)

    def sample(self, x: float, y: float) -> float:
        """Bilinear probe of the potential at a fractional grid position.

        Positions outside the grid clamp to the nearest edge cell.
        """
        coords = np.array([[y], [x]], dtype=np.float64)
        value = map_coordinates(self.potential, coords, order=1, mode="nearest")
        return float(value[0])

    def is_finite(self) -> bool:
        return bool(np.isfinite(self.potential).all())

    def __repr__(self) -> str:
        return (
            f"Grid(size={self.size}, potential=[{self.potential.min():.4g}, {self.potential.max():.4g}], "
            f"coefficient=[{self.coefficient.min():.4g}, {self.coefficient.max():.4g}])"
        )
