"""Finite difference kernels for the vorticity-stream-function formulation.

This package contains the numba-compiled grid kernels used by the
convection solver: the Jacobi stream-function relaxer, velocity
reconstruction, wall boundary conditions and the explicit
advection-diffusion time step.
"""

from .poisson.jacobi import jacobi_sweep, solve_stream_function, poisson_residual
from .core.velocity import reconstruct_velocity
from .core.boundary import apply_temperature_walls, apply_thom_vorticity
from .core.time_step import advance_vorticity_temperature

__all__ = [
    "jacobi_sweep",
    "solve_stream_function",
    "poisson_residual",
    "reconstruct_velocity",
    "apply_temperature_walls",
    "apply_thom_vorticity",
    "advance_vorticity_temperature",
]
