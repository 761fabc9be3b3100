"""Abstract base solver for the heated-cavity convection problem."""

import logging
import time
from abc import ABC, abstractmethod
from dataclasses import asdict
from pathlib import Path

import numpy as np

from .datastructures import SimParameters, TimeSeries
from .errors import SimulationDivergedError

log = logging.getLogger(__name__)


class ConvectionSolver(ABC):
    """Abstract base solver for buoyancy-driven cavity convection.

    Handles:
    - Parameter management
    - Time-stepping loop with progress notifications
    - Diagnostics and result storage

    Subclasses must:
    - Set the Config class attribute
    - Implement step() - advance the state one time step
    - Extend __init__() to allocate and initialize ``self.state``
    """

    Config = SimParameters

    def __init__(self, config=None, **kwargs):
        """Initialize solver with configuration.

        Parameters
        ----------
        config : Config, optional
            Configuration object. If not provided, kwargs are used to create config.
        **kwargs
            Configuration parameters passed to Config class if config is None.
        """
        if config is None:
            if self.Config is None:
                raise ValueError("Subclass must define Config class attribute")
            config = self.Config(**kwargs)

        self.config = config
        self.state = None
        self.time_series = TimeSeries()
        self.steps_taken = 0

    @abstractmethod
    def step(self):
        """Advance ``self.state`` by one time step in place."""

    def snapshot(self):
        """Independent copy of the current fields.

        ``self.state`` is updated in place by every step; hand a snapshot to
        anything that keeps the fields beyond the next step.
        """
        return self.state.copy()

    def run(self, steps, on_progress=None, check_finite=False):
        """Advance the simulation exactly `steps` times.

        Parameters
        ----------
        steps : int
            Number of time steps.
        on_progress : callable, optional
            Called as ``on_progress(step, steps)`` after every step whose
            zero-based index is a multiple of ``config.progress_interval``.
        check_finite : bool, optional
            If True, raise SimulationDivergedError as soon as a field holds
            NaN or inf. Off by default.
        """
        interval = self.config.progress_interval
        log.info(
            "Running %d steps on a %dx%d grid (Pr=%g, Ra=%g, dt=%g)",
            steps, self.config.nx, self.config.ny, self.config.pr, self.config.ra, self.config.dt,
        )

        time_start = time.time()
        for i in range(steps):
            self.step()

            self.time_series.energy.append(self._calculate_energy())
            self.time_series.enstrophy.append(self._calculate_enstrophy())

            if check_finite:
                self._check_finite()

            if on_progress is not None and i % interval == 0:
                on_progress(i, steps)

        time_end = time.time()
        log.info("Solver finished %d steps in %.2f seconds.", steps, time_end - time_start)

    def _check_finite(self):
        for name in ("temp", "vort", "stream", "u", "v"):
            if not np.all(np.isfinite(getattr(self.state, name))):
                raise SimulationDivergedError(self.steps_taken, name)

    def save(self, filepath):
        """Save parameters, fields and time series to an HDF5 file.

        Parameters
        ----------
        filepath : str or Path
            Output file path.
        """
        import h5py

        filepath = Path(filepath)
        filepath.parent.mkdir(parents=True, exist_ok=True)

        with h5py.File(filepath, "w") as f:
            # Parameters as root-level attributes
            for key, val in asdict(self.config).items():
                f.attrs[key] = val
            f.attrs["steps_taken"] = self.steps_taken

            fields_grp = f.create_group("fields")
            for key, val in asdict(self.state).items():
                fields_grp.create_dataset(key, data=val)

            ts_grp = f.create_group("time_series")
            for key, val in asdict(self.time_series).items():
                ts_grp.create_dataset(key, data=np.asarray(val, dtype=np.float64))

        log.info("Results saved to %s", filepath)

    # ---------------------------------------------------------------------
    # Diagnostics
    # ---------------------------------------------------------------------
    def _calculate_energy(self) -> float:
        """
        Kinetic energy:
            E = 0.5 * sum (u^2 + v^2) dA
        """
        u = self.state.u
        v = self.state.v
        dA = self.config.dx * self.config.dy
        return 0.5 * float(np.sum(u * u + v * v)) * dA

    def _calculate_enstrophy(self) -> float:
        """
        Enstrophy:
            Z = 0.5 * sum vort^2 dA
        """
        w = self.state.vort
        dA = self.config.dx * self.config.dy
        return 0.5 * float(np.sum(w * w)) * dA
