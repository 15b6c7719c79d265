"""Core data types for dielectra - framework-agnostic."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field

from dielectra import defaults
from dielectra.colorspace.colormaps import ColorMapName


class BoundaryType(enum.IntEnum):
    """Outer-edge condition. Values are the integer codes used by the kernels."""
    DIRICHLET = 0
    NEUMANN = 1


class Edge(enum.Enum):
    TOP = "top"
    BOTTOM = "bottom"
    LEFT = "left"
    RIGHT = "right"


# Order in which the enforcer visits edges; left/right win at the corners.
EDGE_ORDER: tuple[Edge, ...] = (Edge.TOP, Edge.BOTTOM, Edge.LEFT, Edge.RIGHT)


class VoltageRef(enum.Enum):
    """Which of the two externally supplied voltages a plate carries."""
    TOP = "voltage_top"
    BOTTOM = "voltage_bottom"


class BoundaryMode(enum.Enum):
    """Top-level boundary setup.

    EDGES: top/bottom rows fixed to the two voltages, left/right insulating.
    PLATES: each outer edge independently Neumann or Dirichlet, voltages
        injected through plates.
    """
    EDGES = "edges"
    PLATES = "plates"


@dataclass
class Slab:
    """Axis-aligned dielectric region in grid coordinates."""
    x: float
    y: float
    width: float
    height: float

    @classmethod
    def default(cls, grid_size: int = defaults.DEFAULT_GRID_SIZE) -> Slab:
        scale = grid_size / defaults.DEFAULT_GRID_SIZE
        x, y, w, h = defaults.DEFAULT_SLAB
        return cls(x * scale, y * scale, w * scale, h * scale)


@dataclass
class Plate:
    """Embedded electrode: a rectangle pinned to one of the two voltages."""
    id: str
    x: float
    y: float
    width: float
    height: float
    voltage_ref: VoltageRef = VoltageRef.TOP


def _plates_from_layout(layout, grid_size: int) -> list[Plate]:
    scale = grid_size / defaults.DEFAULT_GRID_SIZE
    refs = {"top": VoltageRef.TOP, "bottom": VoltageRef.BOTTOM}
    return [
        Plate(id=pid, x=x * scale, y=y * scale, width=w * scale, height=h * scale, voltage_ref=refs[pid])
        for pid, x, y, w, h in layout
    ]


def fixed_plates(grid_size: int = defaults.DEFAULT_GRID_SIZE) -> list[Plate]:
    """Full-width plates along the top and bottom edges (standard capacitor)."""
    return _plates_from_layout(defaults.FIXED_PLATE_LAYOUT, grid_size)


def free_plates(grid_size: int = defaults.DEFAULT_GRID_SIZE) -> list[Plate]:
    """Two short plates floating inside the domain."""
    return _plates_from_layout(defaults.FREE_PLATE_LAYOUT, grid_size)


@dataclass
class VectorStyle:
    """Arrow rendering style. Only the presentation path reads these."""
    color: str = defaults.DEFAULT_VECTOR_COLOR
    opacity: float = defaults.DEFAULT_VECTOR_OPACITY
    width: float = defaults.DEFAULT_VECTOR_WIDTH


@dataclass
class SimulationParams:
    grid_size: int = defaults.DEFAULT_GRID_SIZE
    epsilon_slab: float = defaults.DEFAULT_EPSILON_SLAB
    epsilon_bg: float = defaults.DEFAULT_EPSILON_BG
    voltage_top: float = defaults.DEFAULT_VOLTAGE_TOP
    voltage_bottom: float = defaults.DEFAULT_VOLTAGE_BOTTOM
    mode: BoundaryMode = BoundaryMode.PLATES
    # Per-edge conditions (PLATES mode only; EDGES mode fixes them)
    boundary_top: BoundaryType = BoundaryType.NEUMANN
    boundary_bottom: BoundaryType = BoundaryType.NEUMANN
    boundary_left: BoundaryType = BoundaryType.NEUMANN
    boundary_right: BoundaryType = BoundaryType.NEUMANN
    # Constant a Dirichlet edge resolves to in PLATES mode
    dirichlet_top: float = 0.0
    dirichlet_bottom: float = 0.0
    dirichlet_left: float = 0.0
    dirichlet_right: float = 0.0
    iterations_per_step: int = defaults.ITERATIONS_PER_STEP
    color_map: ColorMapName = ColorMapName(defaults.DEFAULT_COLOR_MAP)
    show_vectors: bool = defaults.DEFAULT_SHOW_VECTORS
    vector_style: VectorStyle = field(default_factory=VectorStyle)

    def voltage(self, ref: VoltageRef) -> float:
        """Resolve a plate's voltage reference."""
        if ref is VoltageRef.TOP:
            return self.voltage_top
        if ref is VoltageRef.BOTTOM:
            return self.voltage_bottom
        raise ValueError(f"Unknown voltage reference: {ref!r}")

    def normalization_range(self) -> tuple[float, float]:
        """(min, max) of the two voltages, used only for colorization."""
        return min(self.voltage_top, self.voltage_bottom), max(self.voltage_top, self.voltage_bottom)

    @property
    def boundary_conditions(self) -> dict[Edge, BoundaryType]:
        return {
            Edge.TOP: self.boundary_top,
            Edge.BOTTOM: self.boundary_bottom,
            Edge.LEFT: self.boundary_left,
            Edge.RIGHT: self.boundary_right,
        }

    @property
    def dirichlet_values(self) -> dict[Edge, float]:
        return {
            Edge.TOP: self.dirichlet_top,
            Edge.BOTTOM: self.dirichlet_bottom,
            Edge.LEFT: self.dirichlet_left,
            Edge.RIGHT: self.dirichlet_right,
        }
