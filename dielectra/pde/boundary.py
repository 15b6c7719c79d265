"""
Outer-edge boundary conditions and embedded plate sources.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Sequence

import numpy as np

from dielectra.pde.rasterize import plate_arrays
from dielectra.pde.relaxation import embed_sources, enforce_edges
from dielectra.types import BoundaryMode, BoundaryType, Edge, EDGE_ORDER, Plate, SimulationParams


@dataclass(frozen=True)
class EdgeCondition:
    """Condition for one outer edge.

    value is only read for Dirichlet edges: the constant the edge is held at
    wherever no plate overrides it.
    """
    type: BoundaryType = BoundaryType.DIRICHLET
    value: float = 0.0

    @classmethod
    def dirichlet(cls, value: float = 0.0) -> EdgeCondition:
        return cls(BoundaryType.DIRICHLET, float(value))

    @classmethod
    def neumann(cls) -> EdgeCondition:
        return cls(BoundaryType.NEUMANN, 0.0)


@dataclass(frozen=True)
class BoundaryConfig:
    """Four independent edge conditions."""
    top: EdgeCondition = field(default_factory=EdgeCondition.neumann)
    bottom: EdgeCondition = field(default_factory=EdgeCondition.neumann)
    left: EdgeCondition = field(default_factory=EdgeCondition.neumann)
    right: EdgeCondition = field(default_factory=EdgeCondition.neumann)

    @classmethod
    def edge_dirichlet(cls, voltage_top: float, voltage_bottom: float) -> BoundaryConfig:
        """Top/bottom rows held at the two voltages, left/right insulating."""
        return cls(
            top=EdgeCondition.dirichlet(voltage_top),
            bottom=EdgeCondition.dirichlet(voltage_bottom),
            left=EdgeCondition.neumann(),
            right=EdgeCondition.neumann(),
        )

    @classmethod
    def plates(
        cls,
        top: BoundaryType = BoundaryType.NEUMANN,
        bottom: BoundaryType = BoundaryType.NEUMANN,
        left: BoundaryType = BoundaryType.NEUMANN,
        right: BoundaryType = BoundaryType.NEUMANN,
        *,
        top_value: float = 0.0,
        bottom_value: float = 0.0,
        left_value: float = 0.0,
        right_value: float = 0.0,
    ) -> BoundaryConfig:
        """Per-edge types for plate mode; *_value is the constant a Dirichlet edge holds."""
        return cls(
            top=EdgeCondition(BoundaryType(top), float(top_value)),
            bottom=EdgeCondition(BoundaryType(bottom), float(bottom_value)),
            left=EdgeCondition(BoundaryType(left), float(left_value)),
            right=EdgeCondition(BoundaryType(right), float(right_value)),
        )

    @classmethod
    def from_params(cls, params: SimulationParams) -> BoundaryConfig:
        """Build the configuration for params.mode."""
        if params.mode is BoundaryMode.EDGES:
            return cls.edge_dirichlet(params.voltage_top, params.voltage_bottom)
        if params.mode is BoundaryMode.PLATES:
            types = params.boundary_conditions
            values = params.dirichlet_values
            return cls.plates(
                top=types[Edge.TOP],
                bottom=types[Edge.BOTTOM],
                left=types[Edge.LEFT],
                right=types[Edge.RIGHT],
                top_value=values[Edge.TOP],
                bottom_value=values[Edge.BOTTOM],
                left_value=values[Edge.LEFT],
                right_value=values[Edge.RIGHT],
            )
        raise ValueError(f"Unknown boundary mode: {params.mode!r}")

    def condition(self, edge: Edge) -> EdgeCondition:
        return {
            Edge.TOP: self.top,
            Edge.BOTTOM: self.bottom,
            Edge.LEFT: self.left,
            Edge.RIGHT: self.right,
        }[edge]

    def to_arrays(self) -> tuple[np.ndarray, np.ndarray]:
        """(edge_types int64[4], edge_values float64[4]) in top, bottom, left, right order."""
        conditions = [self.condition(edge) for edge in EDGE_ORDER]
        edge_types = np.array([int(c.type) for c in conditions], dtype=np.int64)
        edge_values = np.array([c.value for c in conditions], dtype=np.float64)
        return edge_types, edge_values


def apply_boundaries(potential: np.ndarray, config: BoundaryConfig) -> None:
    """Enforce the outer-ring conditions on the potential in place."""
    edge_types, edge_values = config.to_arrays()
    enforce_edges(potential, edge_types, edge_values)


def plate_voltages(plates: Iterable[Plate], params: SimulationParams) -> list[float]:
    return [params.voltage(plate.voltage_ref) for plate in plates]


def embed_plates(potential: np.ndarray, plates: Sequence[Plate], voltages: Sequence[float]) -> None:
    """Overwrite the potential inside each plate with its voltage, in order."""
    bounds, values = plate_arrays(plates, voltages, potential.shape[0])
    embed_sources(potential, bounds, values)
