"""Test configuration for dielectra."""

import numpy as np
import pytest

from dielectra.pde.relaxation import relax_batch
from dielectra.types import BoundaryMode, SimulationParams


@pytest.fixture(scope="session", autouse=True)
def compile_kernels():
    """Trigger numba compilation once so individual tests don't pay for it."""
    phi = np.zeros((4, 4), dtype=np.float64)
    eps = np.ones((4, 4), dtype=np.float32)
    relax_batch(
        phi,
        eps,
        1,
        np.zeros(4, dtype=np.int64),
        np.zeros(4, dtype=np.float64),
        np.zeros((0, 4), dtype=np.int64),
        np.zeros(0, dtype=np.float64),
    )


@pytest.fixture
def edge_params():
    """Small EDGES-mode setup: top row at +1, bottom row at -1, insulating sides."""
    return SimulationParams(
        grid_size=41,
        mode=BoundaryMode.EDGES,
        voltage_top=1.0,
        voltage_bottom=-1.0,
        epsilon_bg=1.0,
        epsilon_slab=4.0,
    )


@pytest.fixture
def plate_params():
    return SimulationParams(grid_size=50, mode=BoundaryMode.PLATES)
