"""Vorticity-stream-function solver for the heated square cavity.

Three walls (bottom, left, right) are held at T = 1 and the top wall at
T = 0. Each time step relaxes the stream function, rebuilds the velocity,
applies Thom's wall vorticity and advances vorticity and temperature with
an explicit upwind / central-difference scheme.
"""

import numpy as np

from .base_solver import ConvectionSolver
from .datastructures import SimParameters, SimState

from fd.poisson.jacobi import solve_stream_function
from fd.core.velocity import reconstruct_velocity
from fd.core.boundary import apply_temperature_walls, apply_thom_vorticity
from fd.core.time_step import advance_vorticity_temperature


class VorticityStreamSolver(ConvectionSolver):
    """Finite difference Boussinesq convection solver.

    Parameters
    ----------
    config : SimParameters, optional
        Grid, time step and physics parameters.
    **kwargs
        Passed to SimParameters when config is not given.
    """

    Config = SimParameters

    def __init__(self, config=None, **kwargs):
        super().__init__(config=config, **kwargs)

        self.state = SimState.allocate(self.config.nx, self.config.ny)
        apply_temperature_walls(self.state.temp)

        # Second buffers for the explicit update
        self._vort_new = np.zeros_like(self.state.vort)
        self._temp_new = np.zeros_like(self.state.temp)

    def step(self):
        """Perform one time step.

        Stream function -> velocity -> wall vorticity -> vorticity and
        temperature, in that order.
        """
        s = self.state  # Shorthand for readability
        c = self.config
        dx, dy = c.dx, c.dy

        # New buffers start from the pre-step fields, so wall vorticity set by
        # Thom's formula below feeds the interior update but is not kept
        np.copyto(self._vort_new, s.vort)
        np.copyto(self._temp_new, s.temp)

        solve_stream_function(s.stream, s.vort, dx, dy, c.jacobi_iterations)
        reconstruct_velocity(s.stream, dx, dy, s.u, s.v)
        apply_thom_vorticity(s.stream, dx, dy, s.vort)

        advance_vorticity_temperature(
            s.vort, s.temp, s.u, s.v,
            dx, dy, float(c.dt), float(c.pr), float(c.ra),
            self._vort_new, self._temp_new,
        )

        # Copy back so the state arrays keep their identity between steps
        np.copyto(s.vort, self._vort_new)
        np.copyto(s.temp, self._temp_new)

        self.steps_taken += 1
