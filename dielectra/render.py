"""Presentation outputs: heatmap raster and legend."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
from PIL import Image

from dielectra import defaults
from dielectra.colorspace import (
    ColorMapName,
    GradientStop,
    build_lut,
    gradient_css,
    gradient_stops,
    map_array,
    resolve_colormap,
)


@dataclass
class Legend:
    """Everything a UI needs to draw a colour bar."""
    color_map: ColorMapName
    stops: list[GradientStop]
    css: str
    ticks: list[float]


def normalize_potential(phi: np.ndarray, vmin: float, vmax: float) -> np.ndarray:
    """Map potentials to [0, 1] over [vmin, vmax], clamping outside values.

    A zero-width range falls back to a unit range starting at vmin.
    """
    span = vmax - vmin
    if span == 0:
        span = 1.0
    return np.clip((phi.astype(np.float64, copy=False) - vmin) / span, 0.0, 1.0)


def colorize_potential(
    phi: np.ndarray,
    normalization_range: tuple[float, float],
    color_map: ColorMapName | str = defaults.DEFAULT_COLOR_MAP,
) -> np.ndarray:
    """Dense RGBA raster: one mapped colour per cell, alpha 255.

    Returns:
        uint8 array of shape (N, N, 4), row-major like the grid
    """
    vmin, vmax = normalization_range
    norm = normalize_potential(phi, vmin, vmax)
    rgba = np.empty(phi.shape + (4,), dtype=np.uint8)
    rgba[..., :3] = map_array(norm, color_map)
    rgba[..., 3] = 255
    return rgba


def raster_to_pil(rgba: np.ndarray, scale: int = 1) -> Image.Image:
    """Wrap an RGBA raster as a PIL image, optionally nearest-neighbour upscaled."""
    image = Image.fromarray(np.ascontiguousarray(rgba))
    if scale > 1:
        image = image.resize((image.width * scale, image.height * scale), Image.Resampling.NEAREST)
    return image


def legend_ticks(voltage_a: float, voltage_b: float, count: int = defaults.DEFAULT_LEGEND_TICKS) -> list[float]:
    """Evenly spaced tick values from the max voltage down to the min voltage."""
    if count < 2:
        raise ValueError("Legend needs at least two ticks")
    vmin, vmax = min(voltage_a, voltage_b), max(voltage_a, voltage_b)
    return [vmin + (vmax - vmin) * (1 - i / (count - 1)) for i in range(count)]


def build_legend(
    color_map: ColorMapName | str,
    normalization_range: tuple[float, float],
    direction: str = "to top",
    tick_count: int = defaults.DEFAULT_LEGEND_TICKS,
) -> Legend:
    stops = gradient_stops(color_map)
    return Legend(
        color_map=resolve_colormap(color_map),
        stops=stops,
        css=gradient_css(color_map, direction),
        ticks=legend_ticks(*normalization_range, count=tick_count),
    )


def legend_bar(
    color_map: ColorMapName | str,
    length: int = defaults.LEGEND_LUT_SIZE,
    thickness: int = 16,
    vertical: bool = True,
) -> np.ndarray:
    """RGBA colour bar sampled from the colormap. Vertical bars put t=1 at the top."""
    lut = build_lut(color_map, length)
    rgba = np.empty((length, 4), dtype=np.uint8)
    rgba[:, :3] = lut
    rgba[:, 3] = 255
    if vertical:
        return np.repeat(rgba[::-1, None, :], thickness, axis=1)
    return np.repeat(rgba[None, :, :], thickness, axis=0)
