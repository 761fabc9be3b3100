"""Data structures for solver configuration, state and diagnostics.

This module defines the parameter, grid-state and time-series data
structures shared by the vorticity-stream-function solver, the run
catalog and the plotting utilities.
"""

from dataclasses import dataclass, asdict, field
from typing import Iterable, List, Tuple

import numpy as np
import pandas as pd

from .errors import ConfigurationError

# ========================================================
# Parameters
# ========================================================


@dataclass(frozen=True)
class SimParameters:
    """Simulation parameters for the heated square cavity.

    Parameters
    ----------
    nx : int, optional
        Number of grid points in x-direction. Default is 41.
    ny : int, optional
        Number of grid points in y-direction. Default is 41.
    dt : float, optional
        Time step. Default is 1e-4.
    pr : float, optional
        Prandtl number. Default is 0.71.
    ra : float, optional
        Rayleigh number. Default is 1e4.
    jacobi_iterations : int, optional
        Jacobi sweeps per stream-function solve. Default is 50.
    progress_interval : int, optional
        Steps between progress notifications in ``run``. Default is 100.
    """
    # Grid parameters
    nx: int = 41
    ny: int = 41

    # Time integration
    dt: float = 1e-4

    # Physics parameters
    pr: float = 0.71
    ra: float = 1e4

    # Solver config
    jacobi_iterations: int = 50
    progress_interval: int = 100

    def __post_init__(self):
        if self.nx < 2 or self.ny < 2:
            raise ConfigurationError(
                f"Grid needs at least 2 points per direction, got nx={self.nx}, ny={self.ny}"
            )
        if not self.dt > 0:
            raise ConfigurationError(f"Time step must be positive, got dt={self.dt}")
        if not self.pr > 0:
            raise ConfigurationError(f"Prandtl number must be positive, got pr={self.pr}")
        if self.jacobi_iterations < 1:
            raise ConfigurationError(
                f"jacobi_iterations must be >= 1, got {self.jacobi_iterations}"
            )
        if self.progress_interval < 1:
            raise ConfigurationError(
                f"progress_interval must be >= 1, got {self.progress_interval}"
            )

    @property
    def dx(self) -> float:
        """Grid spacing in x over the unit square."""
        return 1.0 / (self.nx - 1)

    @property
    def dy(self) -> float:
        """Grid spacing in y over the unit square."""
        return 1.0 / (self.ny - 1)

    def to_dataframe(self) -> pd.DataFrame:
        """Convert parameters to single-row DataFrame.

        Returns
        -------
        pd.DataFrame
            Single-row DataFrame with all parameters plus dx and dy.
        """
        row = asdict(self)
        row.update(dx=self.dx, dy=self.dy)
        return pd.DataFrame([row])


# ========================================================
# Grid state
# ========================================================


@dataclass
class SimState:
    """The five grid fields of the simulation, each of shape (ny, nx).

    Arrays are indexed ``[row=y, col=x]``; row 0 is the bottom wall.
    A solver overwrites these arrays in place on every step, so use
    ``copy()`` (or ``ConvectionSolver.snapshot()``) to keep a frozen result.
    """

    temp: np.ndarray
    vort: np.ndarray
    stream: np.ndarray
    u: np.ndarray
    v: np.ndarray

    @classmethod
    def allocate(cls, nx: int, ny: int):
        """Allocate an all-zero state."""
        return cls(
            temp=np.zeros((ny, nx)),
            vort=np.zeros((ny, nx)),
            stream=np.zeros((ny, nx)),
            u=np.zeros((ny, nx)),
            v=np.zeros((ny, nx)),
        )

    @classmethod
    def from_records(cls, nx: int, ny: int, records: Iterable[Tuple[int, int, float, float, float]]):
        """Rebuild a state from stored ``(x, y, temperature, u, v)`` records.

        Records outside the ``nx`` by ``ny`` grid are ignored. Stream function
        and vorticity are not stored, so they stay zero.
        """
        state = cls.allocate(nx, ny)
        for x, y, temperature, u_velocity, v_velocity in records:
            x, y = int(x), int(y)
            if 0 <= x < nx and 0 <= y < ny:
                state.temp[y, x] = temperature
                state.u[y, x] = u_velocity
                state.v[y, x] = v_velocity
        return state

    @property
    def shape(self) -> Tuple[int, int]:
        return self.temp.shape

    def copy(self):
        return SimState(
            temp=self.temp.copy(),
            vort=self.vort.copy(),
            stream=self.stream.copy(),
            u=self.u.copy(),
            v=self.v.copy(),
        )

    def to_dataframe(self) -> pd.DataFrame:
        """Convert the persisted fields to a long-format DataFrame.

        Returns
        -------
        pd.DataFrame
            One row per grid cell with columns
            x, y, temperature, u_velocity, v_velocity.
        """
        ny, nx = self.shape
        y, x = np.mgrid[0:ny, 0:nx]
        return pd.DataFrame({
            "x": x.ravel(),
            "y": y.ravel(),
            "temperature": self.temp.ravel(),
            "u_velocity": self.u.ravel(),
            "v_velocity": self.v.ravel(),
        })


# ========================================================
# Diagnostics
# ========================================================


@dataclass
class TimeSeries:
    """Per-step diagnostics recorded by ``run``.

    Parameters
    ----------
    energy : List[float]
        Kinetic energy 0.5 * sum(u^2 + v^2) dA after each step.
    enstrophy : List[float]
        Enstrophy 0.5 * sum(vort^2) dA after each step.
    """
    energy: List[float] = field(default_factory=list)
    enstrophy: List[float] = field(default_factory=list)

    def to_dataframe(self) -> pd.DataFrame:
        """Convert time series to DataFrame; the index is the step number."""
        return pd.DataFrame(asdict(self))
