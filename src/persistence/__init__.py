"""Run catalog and per-cell result storage for convection runs."""

from .catalog import RunCatalog, SimulationRun, default_catalog_path

__all__ = [
    "RunCatalog",
    "SimulationRun",
    "default_catalog_path",
]
