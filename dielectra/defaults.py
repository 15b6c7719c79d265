"""Central place for Dielectra default settings."""

# Grid / solver
DEFAULT_GRID_SIZE: int = 100
MIN_GRID_SIZE: int = 3  # need at least one interior cell
ITERATIONS_PER_STEP: int = 40  # Gauss-Seidel sweeps per step() call
DEFAULT_CONVERGENCE_TOL: float = 1e-6
DEFAULT_MAX_BATCHES: int = 10_000

# Materials
DEFAULT_EPSILON_BG: float = 1.0
DEFAULT_EPSILON_SLAB: float = 4.0

# Sources
DEFAULT_VOLTAGE_TOP: float = 100.0
DEFAULT_VOLTAGE_BOTTOM: float = -100.0

# Geometry (grid units, laid out for DEFAULT_GRID_SIZE)
DEFAULT_SLAB: tuple[float, float, float, float] = (35.0, 40.0, 30.0, 20.0)
# Fixed mode: full-width plates along the top and bottom edges
FIXED_PLATE_LAYOUT: tuple[tuple[str, float, float, float, float], ...] = (
    ("top", 0.0, 0.0, 100.0, 4.0),
    ("bottom", 0.0, 96.0, 100.0, 4.0),
)
# Free mode: 40x3 draggable blocks
FREE_PLATE_LAYOUT: tuple[tuple[str, float, float, float, float], ...] = (
    ("top", 30.0, 20.0, 40.0, 3.0),
    ("bottom", 30.0, 75.0, 40.0, 3.0),
)

# Field arrows
FIELD_STRIDE: int = 5
FIELD_INSET: int = 2  # keeps the central-difference stencil in bounds
FIELD_MIN_MAGNITUDE: float = 0.01
ARROW_GAIN: float = 8.0
ARROW_MAX_FRACTION: float = 0.9  # of one stride, in pixels
ARROW_MIN_LENGTH: float = 3.0

# Vector style
DEFAULT_VECTOR_COLOR: str = "#000000"
DEFAULT_VECTOR_OPACITY: float = 0.8
DEFAULT_VECTOR_WIDTH: float = 1.0
DEFAULT_SHOW_VECTORS: bool = True

# Display
DEFAULT_CANVAS_SIZE: int = 600
DEFAULT_COLOR_MAP: str = "turbo"
DEFAULT_LEGEND_TICKS: int = 5
LEGEND_LUT_SIZE: int = 256
