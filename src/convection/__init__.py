"""Heated-cavity convection solver framework.

Solver Hierarchy:
-----------------
ConvectionSolver (abstract base - parameters, run loop, diagnostics)
└── VorticityStreamSolver (finite differences, Jacobi + explicit Euler)
"""

from .base_solver import ConvectionSolver
from .datastructures import SimParameters, SimState, TimeSeries
from .errors import (
    ConvectionError,
    ConfigurationError,
    SimulationDivergedError,
    StorageUnavailableError,
    RunNotFoundError,
    RenderError,
)
from .vorticity_solver import VorticityStreamSolver

__all__ = [
    # Base classes
    "ConvectionSolver",
    # Configuration and data structures
    "SimParameters",
    "SimState",
    "TimeSeries",
    # Errors
    "ConvectionError",
    "ConfigurationError",
    "SimulationDivergedError",
    "StorageUnavailableError",
    "RunNotFoundError",
    "RenderError",
    # Concrete solvers
    "VorticityStreamSolver",
]
