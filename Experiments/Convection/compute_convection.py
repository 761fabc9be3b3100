"""
Heated Cavity Convection Computation
====================================

This script computes buoyancy-driven convection in a square cavity with hot
bottom and side walls and a cold lid, using the vorticity-stream-function
finite difference solver.
"""

# %%
# Problem Setup
# -------------
# Configure the solver with Ra=1e4, Pr=0.71 on a 41x41 grid.

import logging

from convection import VorticityStreamSolver
from utils import get_project_root

logging.basicConfig(level=logging.INFO, format="%(message)s")

project_root = get_project_root()
data_dir = project_root / "data" / "Convection"
data_dir.mkdir(parents=True, exist_ok=True)

solver = VorticityStreamSolver(
    nx=41,          # Grid points in x-direction
    ny=41,          # Grid points in y-direction
    dt=1e-4,        # Time step
    pr=0.71,        # Prandtl number
    ra=1e4,         # Rayleigh number
)

print(f"Solver configured: Ra={solver.config.ra:g}, Pr={solver.config.pr}, Grid={solver.config.nx}x{solver.config.ny}")

# %%
# Time Stepping
# -------------
# March 2000 explicit steps, reporting progress every 100 steps.

solver.run(2000, on_progress=lambda step, steps: print(f"Completed step {step}/{steps}"))

# %%
# Diagnostics
# -----------

print("\nFinal diagnostics:")
print(f"  Kinetic energy: {solver.time_series.energy[-1]:.6e}")
print(f"  Enstrophy:      {solver.time_series.enstrophy[-1]:.6e}")
print(f"  max |psi|:      {abs(solver.state.stream).max():.6e}")

# %%
# Save Solution
# -------------
# Export the fields, parameters and diagnostics to HDF5.

output_file = data_dir / "convection_Ra1e4.h5"
solver.save(output_file)

print(f"\nResults saved to: {output_file}")
