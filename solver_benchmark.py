"""Time Gauss-Seidel batches and sweeps-to-convergence at a few grid sizes."""

import time

from dielectra import BoundaryMode, FieldSolver, SimulationParams
from dielectra.defaults import ITERATIONS_PER_STEP

SIZES = (50, 100, 200, 400)
TOL = 1e-4

# Warmup (JIT compile)
print("Compiling kernels...")
FieldSolver(SimulationParams(grid_size=10)).step(1)

print(f"{'N':>5} {'ms/step':>10} {'sweeps to tol':>15} {'total [s]':>10}")
print("-" * 44)

for n in SIZES:
    params = SimulationParams(grid_size=n, mode=BoundaryMode.PLATES)

    solver = FieldSolver(params)
    t0 = time.perf_counter()
    for _ in range(20):
        solver.step()
    per_step = (time.perf_counter() - t0) / 20

    solver.reset()
    t0 = time.perf_counter()
    converged = solver.run_until_converged(tol=TOL, max_batches=20_000)
    total = time.perf_counter() - t0
    sweeps = f"{solver.iterations_done}" if converged else f">{solver.iterations_done}"

    print(f"{n:>5} {per_step * 1000:>10.2f} {sweeps:>15} {total:>10.2f}")

print(f"\n{ITERATIONS_PER_STEP} sweeps per step, tol={TOL:g} (max per-cell change)")
