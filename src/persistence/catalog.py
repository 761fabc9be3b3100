"""HDF5-backed catalog of simulation runs and their final fields.

File layout::

    /runs/<id>              group, one per run
        attrs               description, grid_size, time_steps,
                            prandtl_number, rayleigh_number, created_at
        results/x, y, temperature, u_velocity, v_velocity
                            one entry per grid cell, written in bulk
"""

import logging
import os
from contextlib import contextmanager
from dataclasses import dataclass, asdict
from datetime import datetime, timezone
from pathlib import Path
from typing import List

import h5py
import numpy as np
import pandas as pd

from convection.datastructures import SimState
from convection.errors import RunNotFoundError, StorageUnavailableError

log = logging.getLogger(__name__)

DEFAULT_CATALOG = "convection_runs.h5"
RESULT_COLUMNS = ("x", "y", "temperature", "u_velocity", "v_velocity")


def default_catalog_path():
    """Catalog location from ``$CONVECTION_DB``, else ./convection_runs.h5."""
    return Path(os.environ.get("CONVECTION_DB", DEFAULT_CATALOG))


@dataclass
class SimulationRun:
    """One catalog record."""
    id: int
    description: str
    grid_size: int
    time_steps: int
    prandtl_number: float
    rayleigh_number: float
    created_at: datetime


class RunCatalog:
    """Catalog of simulation runs stored in a single HDF5 file.

    Parameters
    ----------
    path : str or Path, optional
        HDF5 file. Defaults to ``default_catalog_path()``.
    """

    def __init__(self, path=None):
        self.path = Path(path) if path is not None else default_catalog_path()

    @contextmanager
    def _open(self, mode):
        try:
            if mode != "r":
                self.path.parent.mkdir(parents=True, exist_ok=True)
            with h5py.File(self.path, mode) as f:
                yield f
        except OSError as exc:
            raise StorageUnavailableError(f"Cannot access run catalog {self.path}: {exc}") from exc

    def _run_group(self, f, run_id):
        key = f"runs/{int(run_id)}"
        if key not in f:
            raise RunNotFoundError(run_id)
        return f[key]

    @staticmethod
    def _record(run_id, attrs):
        return SimulationRun(
            id=int(run_id),
            description=str(attrs["description"]),
            grid_size=int(attrs["grid_size"]),
            time_steps=int(attrs["time_steps"]),
            prandtl_number=float(attrs["prandtl_number"]),
            rayleigh_number=float(attrs["rayleigh_number"]),
            created_at=datetime.fromisoformat(str(attrs["created_at"])),
        )

    # ---------------------------------------------------------------------
    # Writing
    # ---------------------------------------------------------------------
    def create_run(self, description, grid_size, time_steps, prandtl_number, rayleigh_number):
        """Insert a catalog record and return it with its assigned id."""
        with self._open("a") as f:
            runs = f.require_group("runs")
            run_id = max((int(k) for k in runs.keys()), default=0) + 1
            grp = runs.create_group(str(run_id))

            record = SimulationRun(
                id=run_id,
                description=description,
                grid_size=int(grid_size),
                time_steps=int(time_steps),
                prandtl_number=float(prandtl_number),
                rayleigh_number=float(rayleigh_number),
                created_at=datetime.now(timezone.utc).replace(tzinfo=None),
            )
            for key, val in asdict(record).items():
                if key == "id":
                    continue
                grp.attrs[key] = val.isoformat() if isinstance(val, datetime) else val

        log.info("Created simulation run with ID: %d", run_id)
        return record

    def save_results(self, run_id, state: SimState):
        """Bulk-write one (x, y, temperature, u, v) record per grid cell."""
        df = state.to_dataframe()
        with self._open("a") as f:
            grp = self._run_group(f, run_id)
            if "results" in grp:
                del grp["results"]
            res = grp.create_group("results")
            for col in RESULT_COLUMNS:
                res.create_dataset(col, data=df[col].to_numpy())
        log.info("Saved %d result points for run %d", len(df), run_id)

    # ---------------------------------------------------------------------
    # Reading
    # ---------------------------------------------------------------------
    def list_runs(self) -> List[SimulationRun]:
        """All catalog records ordered by id."""
        if not self.path.exists():
            return []
        with self._open("r") as f:
            if "runs" not in f:
                return []
            runs = f["runs"]
            return [self._record(k, runs[k].attrs) for k in sorted(runs.keys(), key=int)]

    def runs_dataframe(self) -> pd.DataFrame:
        """Catalog as a DataFrame, one row per run."""
        columns = ["id", "description", "grid_size", "time_steps",
                   "prandtl_number", "rayleigh_number", "created_at"]
        return pd.DataFrame([asdict(r) for r in self.list_runs()], columns=columns)

    def get_run(self, run_id) -> SimulationRun:
        if not self.path.exists():
            raise RunNotFoundError(run_id)
        with self._open("r") as f:
            return self._record(run_id, self._run_group(f, run_id).attrs)

    def get_results(self, run_id) -> SimState:
        """Rebuild the stored final state of a run.

        Grid size comes from the catalog record; stream function and vorticity
        are not stored and come back as zeros.
        """
        if not self.path.exists():
            raise RunNotFoundError(run_id)
        with self._open("r") as f:
            grp = self._run_group(f, run_id)
            size = int(grp.attrs["grid_size"])
            if "results" not in grp:
                return SimState.allocate(size, size)
            columns = [np.asarray(grp["results"][col]) for col in RESULT_COLUMNS]

        return SimState.from_records(size, size, zip(*columns))
