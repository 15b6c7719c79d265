"""
Electric field estimation from the potential.

The field is the negative gradient E = -grad V. sample_field_vectors gives
the raw physical vectors on a coarse stride for quiver plots;
layout_arrows rescales them into pixel-space arrows for drawing. The raw
vectors are never modified by the display step.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np

from dielectra import defaults
from dielectra.types import VectorStyle


@dataclass(frozen=True)
class FieldVector:
    """Unscaled field sample at grid cell (x, y)."""
    x: int
    y: int
    ex: float
    ey: float

    @property
    def magnitude(self) -> float:
        return math.hypot(self.ex, self.ey)


@dataclass(frozen=True)
class ArrowSegment:
    """Display arrow: origin (px, py) and extent (dx, dy) in pixels."""
    px: float
    py: float
    dx: float
    dy: float

    @property
    def length(self) -> float:
        return math.hypot(self.dx, self.dy)


@dataclass
class ArrowLayout:
    arrows: list[ArrowSegment]
    style: VectorStyle


def electric_field(phi: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
    """
    Dense field (ex, ey) over the whole grid.

    Central differences in the interior, one-sided on the outer ring.
    """
    gy, gx = np.gradient(phi)
    return -gx, -gy


def sample_field_vectors(
    phi: np.ndarray,
    stride: int = defaults.FIELD_STRIDE,
    inset: int = defaults.FIELD_INSET,
    min_magnitude: float = defaults.FIELD_MIN_MAGNITUDE,
) -> list[FieldVector]:
    """
    Sample E on a regular stride using central differences.

        Ex = -(V[x+1, y] - V[x-1, y]) / 2
        Ey = -(V[x, y+1] - V[x, y-1]) / 2

    Samples start `inset` cells from each edge and stop `inset` cells short of
    the far edge. Vectors shorter than min_magnitude are dropped.
    """
    if stride < 1:
        raise ValueError("stride must be >= 1")
    inset = max(1, int(inset))
    n_rows, n_cols = phi.shape
    ys = np.arange(inset, n_rows - inset, stride)
    xs = np.arange(inset, n_cols - inset, stride)
    if ys.size == 0 or xs.size == 0:
        return []

    yy, xx = np.meshgrid(ys, xs, indexing="ij")
    ex = -(phi[yy, xx + 1] - phi[yy, xx - 1]) / 2.0
    ey = -(phi[yy + 1, xx] - phi[yy - 1, xx]) / 2.0
    mag = np.hypot(ex, ey)
    keep = mag >= min_magnitude

    return [
        FieldVector(int(x), int(y), float(vx), float(vy))
        for x, y, vx, vy in zip(xx[keep], yy[keep], ex[keep], ey[keep])
    ]


def layout_arrows(
    vectors: list[FieldVector],
    cell_size: float,
    stride: int = defaults.FIELD_STRIDE,
    gain: float = defaults.ARROW_GAIN,
    max_fraction: float = defaults.ARROW_MAX_FRACTION,
    min_length: float = defaults.ARROW_MIN_LENGTH,
    style: VectorStyle | None = None,
) -> ArrowLayout:
    """
    Turn raw field vectors into pixel arrows.

    Arrows start at the cell centre, point along E, and have length
    min(|E| * gain, max_fraction * stride * cell_size). Arrows shorter than
    min_length pixels are dropped.

    Args:
        vectors: Output of sample_field_vectors
        cell_size: Pixels per grid cell (canvas size / N)
    """
    max_len = stride * cell_size * max_fraction
    arrows: list[ArrowSegment] = []
    for v in vectors:
        mag = v.magnitude
        if mag <= 0.0:
            continue
        visual = min(mag * gain, max_len)
        if visual < min_length:
            continue
        arrows.append(ArrowSegment(
            px=(v.x + 0.5) * cell_size,
            py=(v.y + 0.5) * cell_size,
            dx=v.ex / mag * visual,
            dy=v.ey / mag * visual,
        ))
    return ArrowLayout(arrows=arrows, style=style if style is not None else VectorStyle())
