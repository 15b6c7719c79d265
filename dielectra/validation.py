"""Checks applied where parameters enter the solver.

The kernels assume a strictly positive coefficient grid and finite values;
these helpers reject anything else once, up front, with ConfigurationError.
Regions that merely hang off the grid are fine, they get clipped.
"""

from __future__ import annotations

import math
from typing import Iterable

from dielectra import defaults
from dielectra.colorspace import resolve_colormap
from dielectra.errors import ConfigurationError, UnknownColorMapError
from dielectra.pde.boundary import BoundaryConfig
from dielectra.types import EDGE_ORDER, Plate, SimulationParams, Slab


def _require_finite(name: str, value: float) -> None:
    if not math.isfinite(value):
        raise ConfigurationError(f"{name} must be finite, got {value!r}")


def validate_coefficient(name: str, value: float) -> None:
    _require_finite(name, value)
    if value <= 0.0:
        raise ConfigurationError(f"{name} must be positive, got {value!r}")


def validate_region(region: Slab | Plate, label: str = "region") -> None:
    for attr in ("x", "y", "width", "height"):
        _require_finite(f"{label}.{attr}", getattr(region, attr))
    if region.width <= 0 or region.height <= 0:
        raise ConfigurationError(
            f"{label} must have positive width and height, got {region.width!r} x {region.height!r}"
        )


def validate_regions(regions: Iterable[Slab | Plate], label: str) -> None:
    for i, region in enumerate(regions):
        validate_region(region, f"{label}[{i}]")


def validate_boundary(config: BoundaryConfig) -> None:
    for edge in EDGE_ORDER:
        _require_finite(f"boundary.{edge.value}.value", config.condition(edge).value)


def validate_params(params: SimulationParams) -> None:
    """Reject parameters that would break the relaxation invariants."""
    if int(params.grid_size) != params.grid_size or params.grid_size < defaults.MIN_GRID_SIZE:
        raise ConfigurationError(f"grid_size must be an integer >= {defaults.MIN_GRID_SIZE}, got {params.grid_size!r}")
    validate_coefficient("epsilon_bg", params.epsilon_bg)
    validate_coefficient("epsilon_slab", params.epsilon_slab)
    _require_finite("voltage_top", params.voltage_top)
    _require_finite("voltage_bottom", params.voltage_bottom)
    for edge, value in params.dirichlet_values.items():
        _require_finite(f"dirichlet_{edge.value}", value)
    if int(params.iterations_per_step) != params.iterations_per_step or params.iterations_per_step < 0:
        raise ConfigurationError(f"iterations_per_step must be an integer >= 0, got {params.iterations_per_step!r}")
    try:
        resolve_colormap(params.color_map)
    except UnknownColorMapError as exc:
        raise ConfigurationError(exc.args[0]) from exc
    if not 0.0 <= params.vector_style.opacity <= 1.0:
        raise ConfigurationError(f"vector opacity must be in [0, 1], got {params.vector_style.opacity!r}")
