"""
Relaxation kernels for the variable-coefficient Laplace equation.

Solves div(eps grad V) = 0 on a unit-spaced grid. Each face between two
cells gets the arithmetic mean of their coefficients, and zero net flux
through a cell's four faces gives

    V[i] = (eU V[up] + eD V[down] + eL V[left] + eR V[right]) / (eU + eD + eL + eR)

Updates are applied in place in row-major order (Gauss-Seidel). All kernels
take (N, N) arrays indexed [y, x] and are compiled with numba; none of them
validate input, the coefficient grid must be strictly positive.
"""

import numba
import numpy as np

DIRICHLET = 0
NEUMANN = 1

# Row order of edge_types / edge_values arrays
EDGE_TOP = 0
EDGE_BOTTOM = 1
EDGE_LEFT = 2
EDGE_RIGHT = 3


@numba.njit(cache=True)
def enforce_edges(phi: np.ndarray, edge_types: np.ndarray, edge_values: np.ndarray) -> None:
    """
    Apply outer-ring conditions, visiting top, bottom, left, right in that order.

    Dirichlet sets the edge to edge_values[e]; Neumann copies the neighbour one
    cell inward (zero normal derivative).
    """
    n_rows, n_cols = phi.shape

    for x in range(n_cols):
        if edge_types[EDGE_TOP] == NEUMANN:
            phi[0, x] = phi[1, x]
        else:
            phi[0, x] = edge_values[EDGE_TOP]

    for x in range(n_cols):
        if edge_types[EDGE_BOTTOM] == NEUMANN:
            phi[n_rows - 1, x] = phi[n_rows - 2, x]
        else:
            phi[n_rows - 1, x] = edge_values[EDGE_BOTTOM]

    for y in range(n_rows):
        if edge_types[EDGE_LEFT] == NEUMANN:
            phi[y, 0] = phi[y, 1]
        else:
            phi[y, 0] = edge_values[EDGE_LEFT]

    for y in range(n_rows):
        if edge_types[EDGE_RIGHT] == NEUMANN:
            phi[y, n_cols - 1] = phi[y, n_cols - 2]
        else:
            phi[y, n_cols - 1] = edge_values[EDGE_RIGHT]


@numba.njit(cache=True)
def gauss_seidel_sweep(phi: np.ndarray, eps: np.ndarray) -> None:
    """One in-place sweep over the interior cells 1 <= x, y <= N-2."""
    n_rows, n_cols = phi.shape
    for y in range(1, n_rows - 1):
        for x in range(1, n_cols - 1):
            e = np.float64(eps[y, x])
            eps_up = 0.5 * (e + np.float64(eps[y - 1, x]))
            eps_down = 0.5 * (e + np.float64(eps[y + 1, x]))
            eps_left = 0.5 * (e + np.float64(eps[y, x - 1]))
            eps_right = 0.5 * (e + np.float64(eps[y, x + 1]))

            total = eps_up + eps_down + eps_left + eps_right
            phi[y, x] = (
                eps_up * phi[y - 1, x]
                + eps_down * phi[y + 1, x]
                + eps_left * phi[y, x - 1]
                + eps_right * phi[y, x + 1]
            ) / total


@numba.njit(cache=True)
def embed_sources(phi: np.ndarray, plate_bounds: np.ndarray, plate_values: np.ndarray) -> None:
    """
    Pin every cell of each plate to its voltage; later plates win on overlap.

    plate_bounds rows are (x0, x1, y0, y1), half-open and already clipped.
    """
    for k in range(plate_bounds.shape[0]):
        x0 = plate_bounds[k, 0]
        x1 = plate_bounds[k, 1]
        y0 = plate_bounds[k, 2]
        y1 = plate_bounds[k, 3]
        value = plate_values[k]
        for y in range(y0, y1):
            for x in range(x0, x1):
                phi[y, x] = value


@numba.njit(cache=True)
def relax_batch(
    phi: np.ndarray,
    eps: np.ndarray,
    iterations: int,
    edge_types: np.ndarray,
    edge_values: np.ndarray,
    plate_bounds: np.ndarray,
    plate_values: np.ndarray,
) -> float:
    """
    Run `iterations` full iterations: edges -> interior sweep -> plates.

    Returns the largest absolute change any cell saw over the final iteration
    (0.0 when iterations == 0).
    """
    if iterations <= 0:
        return 0.0

    for it in range(iterations - 1):
        enforce_edges(phi, edge_types, edge_values)
        gauss_seidel_sweep(phi, eps)
        embed_sources(phi, plate_bounds, plate_values)

    before = phi.copy()
    enforce_edges(phi, edge_types, edge_values)
    gauss_seidel_sweep(phi, eps)
    embed_sources(phi, plate_bounds, plate_values)

    max_delta = 0.0
    n_rows, n_cols = phi.shape
    for y in range(n_rows):
        for x in range(n_cols):
            delta = abs(phi[y, x] - before[y, x])
            if delta > max_delta:
                max_delta = delta
    return max_delta
