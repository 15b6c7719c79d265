"""Dielectra: finite-difference electrostatics for dielectric slabs between capacitor plates."""

from dielectra.errors import ConfigurationError, DielectraError, UnknownColorMapError
from dielectra.grid import Grid
from dielectra.pde.boundary import BoundaryConfig, EdgeCondition
from dielectra.solver import FieldSolver
from dielectra.types import (
    BoundaryMode,
    BoundaryType,
    Edge,
    Plate,
    SimulationParams,
    Slab,
    VectorStyle,
    VoltageRef,
    fixed_plates,
    free_plates,
)

__all__ = [
    'BoundaryConfig',
    'BoundaryMode',
    'BoundaryType',
    'ConfigurationError',
    'DielectraError',
    'Edge',
    'EdgeCondition',
    'FieldSolver',
    'Grid',
    'Plate',
    'SimulationParams',
    'Slab',
    'UnknownColorMapError',
    'VectorStyle',
    'VoltageRef',
    'fixed_plates',
    'free_plates',
]
