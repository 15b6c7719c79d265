"""
Finite-difference pieces of the field solver: rasterization, boundaries, relaxation.
"""

from .boundary import BoundaryConfig, EdgeCondition, apply_boundaries, embed_plates
from .rasterize import cell_bounds, rasterize_coefficient
from .relaxation import relax_batch

__all__ = [
    'BoundaryConfig',
    'EdgeCondition',
    'apply_boundaries',
    'embed_plates',
    'cell_bounds',
    'rasterize_coefficient',
    'relax_batch',
]
