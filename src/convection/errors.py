"""Exception types raised by the convection solver and its collaborators."""


class ConvectionError(Exception):
    """Base class for all errors raised by this package."""


class ConfigurationError(ConvectionError, ValueError):
    """Invalid simulation parameters (grid too small, non-positive dt, ...)."""


class SimulationDivergedError(ConvectionError):
    """Raised by the optional finiteness check when a field contains NaN/inf."""

    def __init__(self, step, field):
        self.step = step
        self.field = field
        super().__init__(f"Non-finite values in '{field}' after step {step}")


class StorageUnavailableError(ConvectionError):
    """The run catalog could not be opened, read or written."""


class RunNotFoundError(ConvectionError, KeyError):
    """No catalog record exists for the requested run id."""

    def __init__(self, run_id):
        self.run_id = run_id
        super().__init__(f"No simulation run with id {run_id}")

    def __str__(self):
        return self.args[0]


class RenderError(ConvectionError):
    """The temperature image could not be produced or written."""
