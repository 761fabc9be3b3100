import matplotlib

matplotlib.use("Agg")

import pytest

from convection import SimParameters, VorticityStreamSolver


@pytest.fixture
def small_params():
    return SimParameters(nx=9, ny=9, dt=1e-4, pr=0.71, ra=1e4)


@pytest.fixture
def solver(small_params):
    return VorticityStreamSolver(small_params)
