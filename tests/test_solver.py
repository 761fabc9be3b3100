import h5py
import numpy as np
import pytest

from convection import (
    ConfigurationError,
    SimParameters,
    SimulationDivergedError,
    VorticityStreamSolver,
)

FIELDS = ("temp", "vort", "stream", "u", "v")


def assert_wall_temperatures(temp):
    assert np.all(temp[0, :] == 1.0)
    assert np.all(temp[-1, 1:-1] == 0.0)
    assert np.all(temp[:, 0] == 1.0)
    assert np.all(temp[:, -1] == 1.0)


def test_initial_state(solver):
    s = solver.state
    assert_wall_temperatures(s.temp)
    assert not s.temp[1:-1, 1:-1].any()
    for name in ("vort", "stream", "u", "v"):
        assert not getattr(s, name).any()


def test_kwargs_build_config():
    solver = VorticityStreamSolver(nx=6, ny=4, ra=0.0)
    assert isinstance(solver.config, SimParameters)
    assert solver.state.shape == (4, 6)


def test_invalid_config_rejected():
    with pytest.raises(ConfigurationError):
        VorticityStreamSolver(nx=1, ny=5)
    with pytest.raises(ConfigurationError):
        VorticityStreamSolver(dt=0.0)


@pytest.mark.parametrize("n_steps", [0, 1, 7, 40])
def test_boundary_temperature_invariant(small_params, n_steps):
    solver = VorticityStreamSolver(small_params)
    for _ in range(n_steps):
        solver.step()
    assert_wall_temperatures(solver.state.temp)


def test_shapes_preserved_rectangular_grid():
    solver = VorticityStreamSolver(nx=7, ny=5)
    solver.run(15)
    for name in FIELDS:
        assert getattr(solver.state, name).shape == (5, 7)


def test_runs_are_deterministic(small_params):
    a = VorticityStreamSolver(small_params)
    b = VorticityStreamSolver(small_params)
    for _ in range(25):
        a.step()
        b.step()
    for name in FIELDS:
        assert np.array_equal(getattr(a.state, name), getattr(b.state, name))


def test_no_flow_without_buoyancy():
    solver = VorticityStreamSolver(nx=9, ny=9, dt=1e-4, pr=0.71, ra=0.0)
    solver.run(30)
    assert not solver.state.vort.any()
    assert not solver.state.stream.any()
    assert not solver.state.u.any()
    assert not solver.state.v.any()


def test_no_flow_with_uniform_interior_temperature():
    solver = VorticityStreamSolver(nx=9, ny=9, dt=1e-4, pr=0.71, ra=0.0)
    solver.state.temp[1:-1, 1:-1] = 1.0
    solver.run(30)
    assert not solver.state.vort.any()
    assert not solver.state.stream.any()


def test_single_step_on_5x5_grid():
    solver = VorticityStreamSolver(nx=5, ny=5, dt=1e-4, pr=0.71, ra=10000.0)
    initial_temp = solver.state.temp.copy()

    solver.step()
    s = solver.state

    # (a) wall temperatures untouched
    np.testing.assert_array_equal(s.temp[0, :], initial_temp[0, :])
    np.testing.assert_array_equal(s.temp[-1, :], initial_temp[-1, :])
    np.testing.assert_array_equal(s.temp[:, 0], initial_temp[:, 0])
    np.testing.assert_array_equal(s.temp[:, -1], initial_temp[:, -1])

    # (b) corner vorticity never assigned
    for corner in [(0, 0), (0, -1), (-1, 0), (-1, -1)]:
        assert s.vort[corner] == 0.0

    # (c) buoyancy spins up the fluid next to the hot left wall:
    # dt * ra * pr * (T[1,2] - T[1,0]) / (2 dx) = 1e-4 * 1e4 * 0.71 * (-1) / 0.5
    assert s.vort[1, 1] != 0.0
    assert s.vort[1, 1] == pytest.approx(-1.42)
    # and with the opposite sign next to the hot right wall
    assert s.vort[1, 3] == pytest.approx(1.42)


def reference_step(s, dx, dy, dt, pr, ra, n_iter=50):
    """Vectorised numpy version of one solver step, used as a reference."""
    vort_new = s.vort.copy()
    temp_new = s.temp.copy()

    for _ in range(n_iter):
        old = s.stream.copy()
        s.stream[1:-1, 1:-1] = ((old[1:-1, 2:] + old[1:-1, :-2]) * dy**2
                                + (old[2:, 1:-1] + old[:-2, 1:-1]) * dx**2
                                - s.vort[1:-1, 1:-1] * dx**2 * dy**2) / (2 * (dx**2 + dy**2))

    s.u[1:-1, 1:-1] = (s.stream[2:, 1:-1] - s.stream[:-2, 1:-1]) / (2 * dy)
    s.v[1:-1, 1:-1] = -(s.stream[1:-1, 2:] - s.stream[1:-1, :-2]) / (2 * dx)

    s.vort[0, 1:-1] = -2 * s.stream[1, 1:-1] / dy**2
    s.vort[-1, 1:-1] = -2 * s.stream[-2, 1:-1] / dy**2
    s.vort[1:-1, 0] = -2 * s.stream[1:-1, 1] / dx**2
    s.vort[1:-1, -1] = -2 * s.stream[1:-1, -2] / dx**2

    u = s.u[1:-1, 1:-1]
    v = s.v[1:-1, 1:-1]

    def advection(phi):
        c = phi[1:-1, 1:-1]
        adv_x = np.where(u > 0, u * (c - phi[1:-1, :-2]) / dx, u * (phi[1:-1, 2:] - c) / dx)
        adv_y = np.where(v > 0, v * (c - phi[:-2, 1:-1]) / dy, v * (phi[2:, 1:-1] - c) / dy)
        return adv_x, adv_y

    def lap(phi):
        c = phi[1:-1, 1:-1]
        return ((phi[1:-1, 2:] - 2 * c + phi[1:-1, :-2]) / dx**2
                + (phi[2:, 1:-1] - 2 * c + phi[:-2, 1:-1]) / dy**2)

    w_ax, w_ay = advection(s.vort)
    t_ax, t_ay = advection(s.temp)
    buoyancy = ra * pr * (s.temp[1:-1, 2:] - s.temp[1:-1, :-2]) / (2 * dx)

    vort_new[1:-1, 1:-1] = s.vort[1:-1, 1:-1] + dt * (pr * lap(s.vort) - w_ax - w_ay + buoyancy)
    temp_new[1:-1, 1:-1] = s.temp[1:-1, 1:-1] + dt * (lap(s.temp) - t_ax - t_ay)
    s.vort = vort_new
    s.temp = temp_new


def test_matches_reference_step():
    params = SimParameters(nx=9, ny=7, dt=1e-4, pr=0.71, ra=1e4)
    solver = VorticityStreamSolver(params)
    expected = solver.snapshot()

    for _ in range(20):
        solver.step()
        reference_step(expected, params.dx, params.dy, params.dt, params.pr, params.ra)

    for name in FIELDS:
        np.testing.assert_allclose(
            getattr(solver.state, name), getattr(expected, name), rtol=1e-10, atol=1e-12,
        )


def test_wall_vorticity_keeps_pre_step_value(small_params):
    solver = VorticityStreamSolver(small_params)
    for _ in range(20):
        solver.step()
        w = solver.state.vort
        assert not w[0, :].any()
        assert not w[-1, :].any()
        assert not w[:, 0].any()
        assert not w[:, -1].any()
    # Thom's formula still drives the interior
    assert np.abs(solver.state.vort[1:-1, 1:-1]).max() > 0.0


def test_state_arrays_updated_in_place(solver):
    arrays = {name: getattr(solver.state, name) for name in FIELDS}
    solver.run(5)
    for name, arr in arrays.items():
        assert getattr(solver.state, name) is arr


def test_snapshot_is_not_overwritten(solver):
    solver.run(3)
    snap = solver.snapshot()
    frozen = {name: getattr(snap, name).copy() for name in FIELDS}

    solver.run(5)

    for name in FIELDS:
        np.testing.assert_array_equal(getattr(snap, name), frozen[name])
    assert not np.array_equal(snap.vort, solver.state.vort)


def test_flow_develops_with_buoyancy(solver):
    solver.run(50)
    assert np.abs(solver.state.stream).max() > 0.0
    assert np.abs(solver.state.u).max() > 0.0
    assert np.all(np.isfinite(solver.state.temp))


def test_jacobi_budget_changes_result():
    a = VorticityStreamSolver(nx=9, ny=9, jacobi_iterations=50)
    b = VorticityStreamSolver(nx=9, ny=9, jacobi_iterations=5)
    a.run(3)
    b.run(3)
    assert not np.array_equal(a.state.stream, b.state.stream)


def test_progress_notifications():
    solver = VorticityStreamSolver(nx=5, ny=5)
    calls = []
    solver.run(250, on_progress=lambda step, steps: calls.append((step, steps)))

    assert calls == [(0, 250), (100, 250), (200, 250)]
    assert solver.steps_taken == 250


def test_custom_progress_interval():
    solver = VorticityStreamSolver(nx=5, ny=5, progress_interval=3)
    calls = []
    solver.run(7, on_progress=lambda step, steps: calls.append(step))
    assert calls == [0, 3, 6]


def test_time_series_recorded(solver):
    solver.run(12)
    assert len(solver.time_series.energy) == 12
    assert len(solver.time_series.enstrophy) == 12
    df = solver.time_series.to_dataframe()
    assert list(df.columns) == ["energy", "enstrophy"]
    assert df["enstrophy"].iloc[-1] > 0.0


def test_unstable_parameters_propagate_silently():
    solver = VorticityStreamSolver(nx=21, ny=21, dt=1.0, ra=1e6)
    solver.run(200)
    assert not np.all(np.isfinite(solver.state.vort))


def test_finiteness_check_raises():
    solver = VorticityStreamSolver(nx=21, ny=21, dt=1.0, ra=1e6)
    with pytest.raises(SimulationDivergedError) as excinfo:
        solver.run(200, check_finite=True)
    assert excinfo.value.step < 200
    assert excinfo.value.field in FIELDS


def test_finiteness_check_does_not_change_results(small_params):
    a = VorticityStreamSolver(small_params)
    b = VorticityStreamSolver(small_params)
    a.run(20)
    b.run(20, check_finite=True)
    assert np.array_equal(a.state.vort, b.state.vort)


def test_save_hdf5(solver, tmp_path):
    solver.run(5)
    path = tmp_path / "out" / "run.h5"
    solver.save(path)

    with h5py.File(path, "r") as f:
        assert f.attrs["nx"] == 9
        assert f.attrs["steps_taken"] == 5
        np.testing.assert_array_equal(f["fields/temp"][()], solver.state.temp)
        assert f["time_series/energy"].shape == (5,)
