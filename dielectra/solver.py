"""Steady-state field solver: owns a Grid and drives relaxation in batches.

The caller decides the cadence. Each step() runs a fixed batch of
Gauss-Seidel iterations and returns; nothing here assumes a timer or
display loop. A FieldSolver is single-owner: geometry changes and step()
calls must not overlap.

Example:
    from dielectra import FieldSolver, SimulationParams

    solver = FieldSolver(SimulationParams(epsilon_slab=6.0))
    for _ in range(200):
        solver.step()
    rgba = solver.heatmap()
    arrows = solver.arrows()
"""

from __future__ import annotations

import dataclasses
import logging
import math
from typing import Iterable, Optional

import numpy as np

from dielectra import defaults
from dielectra.errors import ConfigurationError
from dielectra.field import ArrowLayout, FieldVector, layout_arrows, sample_field_vectors
from dielectra.grid import Grid
from dielectra.pde.boundary import BoundaryConfig, plate_voltages
from dielectra.pde.rasterize import plate_arrays, rasterize_coefficient
from dielectra.pde.relaxation import embed_sources, enforce_edges, relax_batch
from dielectra.render import Legend, build_legend, colorize_potential
from dielectra.types import BoundaryMode, Plate, SimulationParams, Slab, VectorStyle, fixed_plates
from dielectra.validation import validate_boundary, validate_params, validate_regions

logger = logging.getLogger(__name__)


class FieldSolver:
    """Relaxation solver for div(eps grad V) = 0 with slabs, plates and edge conditions.

    Attributes:
        params: Current SimulationParams
        grid: Owned potential/coefficient storage
        slabs: Dielectric regions, painted with params.epsilon_slab
        plates: Fixed-voltage regions, later plates win on overlap
        boundary: Outer-edge conditions
        iterations_done: Sweeps run since the last reset
        last_delta: Largest per-cell change over the most recent sweep
    """

    def __init__(
        self,
        params: Optional[SimulationParams] = None,
        slabs: Optional[Iterable[Slab]] = None,
        plates: Optional[Iterable[Plate]] = None,
        boundary: Optional[BoundaryConfig] = None,
    ):
        params = params if params is not None else SimulationParams()
        validate_params(params)
        size = params.grid_size

        slabs = list(slabs) if slabs is not None else [Slab.default(size)]
        if plates is not None:
            plates = list(plates)
        elif params.mode is BoundaryMode.PLATES:
            plates = fixed_plates(size)
        else:
            plates = []
        validate_regions(slabs, "slabs")
        validate_regions(plates, "plates")
        if boundary is not None:
            validate_boundary(boundary)

        self.params = params
        self.grid = Grid(size, params.epsilon_bg)
        self.slabs: list[Slab] = slabs
        self.plates: list[Plate] = plates
        self._custom_boundary = boundary is not None
        self.boundary = boundary if boundary is not None else BoundaryConfig.from_params(params)
        self.iterations_done = 0
        self.last_delta = math.inf
        self.reset()

    # ------------------------------------------------------------------
    # Read-only outputs
    # ------------------------------------------------------------------

    @property
    def size(self) -> int:
        return self.grid.size

    @property
    def potential(self) -> np.ndarray:
        """Read-only (N, N) view of the potential."""
        return self.grid.potential_view()

    @property
    def coefficient(self) -> np.ndarray:
        view = self.grid.coefficient.view()
        view.flags.writeable = False
        return view

    def sample(self, x: float, y: float) -> float:
        """Potential at a fractional grid position (bilinear)."""
        return self.grid.sample(x, y)

    # ------------------------------------------------------------------
    # Geometry and parameters
    # ------------------------------------------------------------------

    def reset(self) -> None:
        """Zero the potential, re-apply edges and plates, re-rasterize materials."""
        self.grid.reset(self.params.epsilon_bg)
        edge_types, edge_values, bounds, values = self._kernel_args()
        enforce_edges(self.grid.potential, edge_types, edge_values)
        embed_sources(self.grid.potential, bounds, values)
        self.rasterize()
        self.iterations_done = 0
        self.last_delta = math.inf
        logger.debug("Solver reset (N=%d, %d slabs, %d plates)", self.size, len(self.slabs), len(self.plates))

    def rasterize(self) -> None:
        """Repaint the coefficient grid from the slabs. Leaves the potential alone."""
        rasterize_coefficient(
            self.grid.coefficient,
            self.params.epsilon_bg,
            [(slab, self.params.epsilon_slab) for slab in self.slabs],
        )
        logger.debug("Rasterized %d slabs (eps_bg=%g, eps_slab=%g)",
                     len(self.slabs), self.params.epsilon_bg, self.params.epsilon_slab)

    def set_slabs(self, slabs: Iterable[Slab]) -> None:
        """Replace the dielectric regions; the potential keeps relaxing from where it is."""
        slabs = list(slabs)
        validate_regions(slabs, "slabs")
        self.slabs = slabs
        self.rasterize()

    def set_plates(self, plates: Iterable[Plate]) -> None:
        plates = list(plates)
        validate_regions(plates, "plates")
        self.plates = plates

    def set_boundary(self, boundary: Optional[BoundaryConfig]) -> None:
        """Override the edge conditions; None goes back to deriving them from params."""
        if boundary is None:
            self._custom_boundary = False
            self.boundary = BoundaryConfig.from_params(self.params)
            return
        validate_boundary(boundary)
        self._custom_boundary = True
        self.boundary = boundary

    def set_params(self, params: SimulationParams, reset_on_voltage_change: bool = True) -> None:
        """
        Swap in new parameters, redoing only the work they invalidate.

        Coefficient changes re-rasterize, voltage changes restart the potential
        from zero (unless reset_on_voltage_change is False). Grid size is fixed
        for a solver's lifetime.
        """
        validate_params(params)
        if params.grid_size != self.size:
            raise ConfigurationError(
                f"Grid size is fixed at {self.size}; create a new FieldSolver for N={params.grid_size}"
            )
        old = self.params
        self.params = params
        if not self._custom_boundary:
            self.boundary = BoundaryConfig.from_params(params)

        voltages_changed = (old.voltage_top, old.voltage_bottom) != (params.voltage_top, params.voltage_bottom)
        if voltages_changed and reset_on_voltage_change:
            self.reset()
        elif (old.epsilon_bg, old.epsilon_slab) != (params.epsilon_bg, params.epsilon_slab):
            self.rasterize()

    def update_params(self, **changes) -> None:
        """set_params with a copy of the current params, e.g. update_params(epsilon_slab=8.0)."""
        self.set_params(dataclasses.replace(self.params, **changes))

    # ------------------------------------------------------------------
    # Relaxation
    # ------------------------------------------------------------------

    def _kernel_args(self) -> tuple[np.ndarray, np.ndarray, np.ndarray, np.ndarray]:
        edge_types, edge_values = self.boundary.to_arrays()
        bounds, values = plate_arrays(self.plates, plate_voltages(self.plates, self.params), self.size)
        return edge_types, edge_values, bounds, values

    def step(self, iterations: Optional[int] = None) -> float:
        """
        Run one batch of iterations (default params.iterations_per_step).

        Each iteration enforces the edges, sweeps the interior, then re-pins
        the plates. Returns the largest per-cell change of the last iteration.
        """
        requested = self.params.iterations_per_step if iterations is None else iterations
        n = int(requested)
        if n != requested or n < 0:
            raise ValueError(f"iterations must be an integer >= 0, got {requested!r}")
        if n == 0:
            return 0.0
        edge_types, edge_values, bounds, values = self._kernel_args()
        delta = relax_batch(self.grid.potential, self.grid.coefficient, n, edge_types, edge_values, bounds, values)
        self.iterations_done += n
        self.last_delta = float(delta)
        return self.last_delta

    def run_until_converged(
        self,
        tol: float = defaults.DEFAULT_CONVERGENCE_TOL,
        max_batches: int = defaults.DEFAULT_MAX_BATCHES,
        iterations: Optional[int] = None,
    ) -> bool:
        """Step until the per-sweep change drops below tol. Returns True on convergence."""
        for _ in range(max_batches):
            if self.step(iterations) < tol:
                logger.debug("Converged after %d iterations (delta=%.3g)", self.iterations_done, self.last_delta)
                return True
        logger.warning(
            "Relaxation not converged after %d batches (delta=%.3g, tol=%.3g)",
            max_batches, self.last_delta, tol,
        )
        return False

    # ------------------------------------------------------------------
    # Presentation
    # ------------------------------------------------------------------

    def heatmap(self) -> np.ndarray:
        """(N, N, 4) uint8 RGBA raster of the potential."""
        return colorize_potential(self.grid.potential, self.params.normalization_range(), self.params.color_map)

    def field_vectors(
        self,
        stride: int = defaults.FIELD_STRIDE,
        inset: int = defaults.FIELD_INSET,
        min_magnitude: float = defaults.FIELD_MIN_MAGNITUDE,
    ) -> list[FieldVector]:
        """Raw (unscaled) field vectors on a coarse stride."""
        return sample_field_vectors(self.grid.potential, stride, inset, min_magnitude)

    def arrows(
        self,
        canvas_size: int = defaults.DEFAULT_CANVAS_SIZE,
        stride: int = defaults.FIELD_STRIDE,
        style: Optional[VectorStyle] = None,
    ) -> ArrowLayout:
        """Display-scaled arrows for a square canvas of canvas_size pixels."""
        style = style if style is not None else self.params.vector_style
        if not self.params.show_vectors:
            return ArrowLayout(arrows=[], style=style)
        vectors = self.field_vectors(stride=stride)
        return layout_arrows(vectors, canvas_size / self.size, stride=stride, style=style)

    def legend(self, direction: str = "to top") -> Legend:
        return build_legend(self.params.color_map, self.params.normalization_range(), direction)

    def __repr__(self) -> str:
        return (
            f"FieldSolver(N={self.size}, mode={self.params.mode.value}, slabs={len(self.slabs)}, "
            f"plates={len(self.plates)}, iterations={self.iterations_done})"
        )
