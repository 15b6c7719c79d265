"""
Rasterization of rectangular regions onto the grid.

Regions are given in continuous grid coordinates and snapped outward to
whole cells: columns [floor(x), ceil(x + width)) and rows
[floor(y), ceil(y + height)), clipped to [0, N). No fractional coverage,
the last region to touch a cell owns it.
"""

import math
from typing import Iterable, Protocol

import numpy as np


class Region(Protocol):
    x: float
    y: float
    width: float
    height: float


def cell_bounds(region: Region, size: int) -> tuple[int, int, int, int]:
    """
    Integer cell bounds (x0, x1, y0, y1), half-open and clipped to the grid.

    Regions fully outside the grid yield an empty range (x0 >= x1 or y0 >= y1).
    """
    x0 = max(0, math.floor(region.x))
    x1 = min(size, math.ceil(region.x + region.width))
    y0 = max(0, math.floor(region.y))
    y1 = min(size, math.ceil(region.y + region.height))
    return x0, max(x0, x1), y0, max(y0, y1)


def rasterize_coefficient(
    coefficient: np.ndarray,
    background: float,
    materials: Iterable[tuple[Region, float]],
) -> None:
    """
    Reset the coefficient grid to background, then paint each (region, value) in order.

    Overwrites the whole grid; call only when geometry or material values change.
    The potential grid is not touched.
    """
    size = coefficient.shape[0]
    coefficient.fill(background)
    for region, value in materials:
        x0, x1, y0, y1 = cell_bounds(region, size)
        coefficient[y0:y1, x0:x1] = value


def plate_arrays(plates, voltages, size: int) -> tuple[np.ndarray, np.ndarray]:
    """
    Pack plates into kernel-friendly arrays.

    Args:
        plates: Sequence of regions, in override order (later wins)
        voltages: Voltage for each plate, same order
        size: Grid side length

    Returns:
        (bounds, values): int64 (P, 4) rows of (x0, x1, y0, y1) and float64 (P,)
    """
    plates = list(plates)
    bounds = np.zeros((len(plates), 4), dtype=np.int64)
    values = np.zeros(len(plates), dtype=np.float64)
    for k, (plate, voltage) in enumerate(zip(plates, voltages)):
        bounds[k] = cell_bounds(plate, size)
        values[k] = voltage
    return bounds, values
