"""Colormaps for potential heatmaps and legend gradients.

This module provides:
- Procedural (turbo) and table-driven (jet, hot, magma, gray) colormaps
- Scalar and vectorized lookups, LUT sampling
- Gradient stop descriptions for legends
"""

from .colormaps import (
    ColorMapName,
    GradientStop,
    COLOR_MAP_STOPS,
    TURBO_ANCHORS,
    resolve_colormap,
    list_colormaps,
    map_scalar,
    map_array,
    build_lut,
    gradient_stops,
    gradient_css,
)

__all__ = [
    'ColorMapName',
    'GradientStop',
    'COLOR_MAP_STOPS',
    'TURBO_ANCHORS',
    'resolve_colormap',
    'list_colormaps',
    'map_scalar',
    'map_array',
    'build_lut',
    'gradient_stops',
    'gradient_css',
]
