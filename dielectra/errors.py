"""Solver configuration and lookup errors."""


class DielectraError(Exception):
    """Base class for dielectra errors."""
    pass


class ConfigurationError(DielectraError, ValueError):
    """Parameters violate a solver invariant (non-positive coefficient, degenerate region, ...)."""
    pass


class UnknownColorMapError(DielectraError, KeyError):
    """Reference to a colormap that is not defined."""
    pass
