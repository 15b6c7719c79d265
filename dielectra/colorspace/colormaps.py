"""Scalar-to-RGB colormaps for heatmaps and legends.

Two kinds of map are supported:
- procedural: ``turbo`` is four piecewise-linear ramps (blue -> cyan -> green
  -> yellow -> red) computed directly from t, no table needed.
- table-driven: an ordered list of ``(position, (r, g, b))`` stops spanning
  [0, 1], linearly interpolated between the two bracketing stops.

Inputs outside [0, 1] clamp to the end colors. Channels are 0-255 integers,
interpolated values are rounded half-up.

Example:
    from dielectra.colorspace import map_scalar, gradient_css

    map_scalar(0.5, "magma")          # (182, 54, 121)
    gradient_css("hot", "to top")     # legend background
"""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass

import numpy as np

from dielectra.errors import UnknownColorMapError

RGB = tuple[int, int, int]


class ColorMapName(str, enum.Enum):
    TURBO = "turbo"
    JET = "jet"
    HOT = "hot"
    MAGMA = "magma"
    GRAY = "gray"


COLOR_MAP_STOPS: dict[ColorMapName, tuple[tuple[float, RGB], ...]] = {
    ColorMapName.JET: (
        (0.0, (0, 0, 128)),
        (0.125, (0, 0, 255)),
        (0.375, (0, 255, 255)),
        (0.625, (255, 255, 0)),
        (0.875, (255, 0, 0)),
        (1.0, (128, 0, 0)),
    ),
    ColorMapName.HOT: (
        (0.0, (0, 0, 0)),
        (0.33, (255, 0, 0)),
        (0.66, (255, 255, 0)),
        (1.0, (255, 255, 255)),
    ),
    ColorMapName.MAGMA: (
        (0.0, (0, 0, 4)),
        (0.25, (80, 18, 123)),
        (0.5, (182, 54, 121)),
        (0.75, (251, 135, 97)),
        (1.0, (252, 253, 191)),
    ),
    ColorMapName.GRAY: (
        (0.0, (0, 0, 0)),
        (1.0, (255, 255, 255)),
    ),
}

# Band edges of the procedural turbo ramp, used for its legend
TURBO_ANCHORS: tuple[tuple[float, RGB], ...] = (
    (0.0, (0, 0, 255)),
    (0.25, (0, 255, 255)),
    (0.5, (0, 255, 0)),
    (0.75, (255, 255, 0)),
    (1.0, (255, 0, 0)),
)


@dataclass(frozen=True)
class GradientStop:
    """One stop of a continuous legend gradient."""
    position: float  # [0, 1]
    color: RGB

    @property
    def percent(self) -> float:
        return self.position * 100.0


def resolve_colormap(name: ColorMapName | str) -> ColorMapName:
    """Coerce a name to ColorMapName, raising UnknownColorMapError if undefined."""
    if isinstance(name, ColorMapName):
        return name
    try:
        return ColorMapName(str(name).lower())
    except ValueError:
        available = [m.value for m in ColorMapName]
        raise UnknownColorMapError(f"Unknown colormap: {name!r}. Available: {available}") from None


def list_colormaps() -> list[str]:
    return [m.value for m in ColorMapName]


def _clamp_unit(t: float) -> float:
    if t <= 0.0:
        return 0.0
    if t >= 1.0:
        return 1.0
    return float(t)


def _turbo(t: float) -> RGB:
    if t < 0.25:
        return (0, math.floor(255 * (t / 0.25)), 255)
    if t < 0.5:
        return (0, 255, math.floor(255 * (1 - (t - 0.25) / 0.25)))
    if t < 0.75:
        return (math.floor(255 * ((t - 0.5) / 0.25)), 255, 0)
    return (255, math.floor(255 * (1 - (t - 0.75) / 0.25)), 0)


def _multi_stop(t: float, stops: tuple[tuple[float, RGB], ...]) -> RGB:
    if t <= stops[0][0]:
        return stops[0][1]
    if t >= stops[-1][0]:
        return stops[-1][1]

    for (p0, c0), (p1, c1) in zip(stops[:-1], stops[1:]):
        if p0 <= t <= p1:
            frac = (t - p0) / (p1 - p0)
            return tuple(math.floor(a + (b - a) * frac + 0.5) for a, b in zip(c0, c1))
    return stops[-1][1]


def map_scalar(t: float, name: ColorMapName | str = ColorMapName.TURBO) -> RGB:
    """Map a normalized scalar to an RGB triple."""
    cmap = resolve_colormap(name)
    t = _clamp_unit(t)
    if cmap is ColorMapName.TURBO:
        return _turbo(t)
    return _multi_stop(t, COLOR_MAP_STOPS[cmap])


def _turbo_array(t: np.ndarray) -> np.ndarray:
    zeros = np.zeros_like(t)
    full = np.full_like(t, 255.0)
    bands = [t < 0.25, t < 0.5, t < 0.75]
    r = np.select(bands, [zeros, zeros, np.floor(255 * ((t - 0.5) / 0.25))], default=full)
    g = np.select(bands, [np.floor(255 * (t / 0.25)), full, full],
                  default=np.floor(255 * (1 - (t - 0.75) / 0.25)))
    b = np.select(bands, [full, np.floor(255 * (1 - (t - 0.25) / 0.25)), zeros], default=zeros)
    return np.stack([r, g, b], axis=-1)


def _multi_stop_array(t: np.ndarray, stops: tuple[tuple[float, RGB], ...]) -> np.ndarray:
    positions = np.array([p for p, _ in stops], dtype=np.float64)
    colors = np.array([c for _, c in stops], dtype=np.float64)
    if len(stops) == 1:
        return np.broadcast_to(colors[0], t.shape + (3,)).copy()

    seg = np.clip(np.searchsorted(positions, t, side="right") - 1, 0, len(stops) - 2)
    p0 = positions[seg]
    p1 = positions[seg + 1]
    frac = np.clip((t - p0) / (p1 - p0), 0.0, 1.0)[..., None]
    c0 = colors[seg]
    c1 = colors[seg + 1]
    return np.floor(c0 + (c1 - c0) * frac + 0.5)


def map_array(t: np.ndarray, name: ColorMapName | str = ColorMapName.TURBO) -> np.ndarray:
    """Vectorized map_scalar: array of normalized values -> uint8 array (..., 3)."""
    cmap = resolve_colormap(name)
    t = np.clip(np.asarray(t, dtype=np.float64), 0.0, 1.0)
    if cmap is ColorMapName.TURBO:
        rgb = _turbo_array(t)
    else:
        rgb = _multi_stop_array(t, COLOR_MAP_STOPS[cmap])
    return np.clip(rgb, 0, 255).astype(np.uint8)


def build_lut(name: ColorMapName | str = ColorMapName.TURBO, size: int = 256) -> np.ndarray:
    """Sample a colormap into a (size, 3) uint8 lookup table."""
    if size <= 0:
        raise ValueError("LUT size must be positive")
    return map_array(np.linspace(0.0, 1.0, size), name)


def gradient_stops(name: ColorMapName | str = ColorMapName.TURBO) -> list[GradientStop]:
    """Continuous gradient description for legends.

    Linear interpolation between these stops reproduces map_scalar to within
    one level per channel (the turbo ramps floor, the gradient does not).
    """
    cmap = resolve_colormap(name)
    stops = TURBO_ANCHORS if cmap is ColorMapName.TURBO else COLOR_MAP_STOPS[cmap]
    return [GradientStop(position=pos, color=color) for pos, color in stops]


def gradient_css(name: ColorMapName | str = ColorMapName.TURBO, direction: str = "to right") -> str:
    """Render gradient_stops as a CSS ``linear-gradient`` string."""
    parts = [
        f"rgb({s.color[0]},{s.color[1]},{s.color[2]}) {s.percent:g}%"
        for s in gradient_stops(name)
    ]
    return f"linear-gradient({direction}, {', '.join(parts)})"
