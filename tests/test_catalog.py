import numpy as np
import pytest

from convection import (
    RunNotFoundError,
    StorageUnavailableError,
    VorticityStreamSolver,
)
from persistence import RunCatalog, default_catalog_path


@pytest.fixture
def catalog(tmp_path):
    return RunCatalog(tmp_path / "runs.h5")


def test_empty_catalog_lists_nothing(catalog):
    assert catalog.list_runs() == []
    assert catalog.runs_dataframe().empty


def test_ids_assigned_in_order(catalog):
    first = catalog.create_run("first", 9, 10, 0.71, 1e4)
    second = catalog.create_run("second", 17, 20, 1.0, 1e5)

    assert (first.id, second.id) == (1, 2)
    runs = catalog.list_runs()
    assert [r.id for r in runs] == [1, 2]
    assert runs[1].description == "second"
    assert runs[1].grid_size == 17
    assert runs[1].rayleigh_number == 1e5
    assert runs[0].created_at <= runs[1].created_at


def test_get_run(catalog):
    created = catalog.create_run("desc", 5, 3, 0.71, 0.0)
    assert catalog.get_run(created.id) == created


def test_results_round_trip(catalog):
    solver = VorticityStreamSolver(nx=9, ny=9, dt=1e-4, pr=0.71, ra=1e4)
    solver.run(10)
    run = catalog.create_run("round trip", 9, 10, 0.71, 1e4)

    catalog.save_results(run.id, solver.state)
    loaded = catalog.get_results(run.id)

    assert loaded.shape == solver.state.shape
    np.testing.assert_array_equal(loaded.temp, solver.state.temp)
    np.testing.assert_array_equal(loaded.u, solver.state.u)
    np.testing.assert_array_equal(loaded.v, solver.state.v)
    assert not loaded.stream.any()
    assert not loaded.vort.any()


def test_results_without_points_are_zero(catalog):
    run = catalog.create_run("empty", 4, 0, 0.71, 1e4)
    state = catalog.get_results(run.id)
    assert state.shape == (4, 4)
    assert not state.temp.any()


def test_unknown_run(catalog):
    with pytest.raises(RunNotFoundError):
        catalog.get_results(3)
    catalog.create_run("only", 5, 1, 0.71, 1e4)
    with pytest.raises(RunNotFoundError):
        catalog.get_run(2)
    with pytest.raises(RunNotFoundError):
        catalog.save_results(2, VorticityStreamSolver(nx=5, ny=5).state)


def test_unreadable_store(tmp_path):
    catalog = RunCatalog(tmp_path)  # a directory, not an HDF5 file
    with pytest.raises(StorageUnavailableError):
        catalog.list_runs()
    with pytest.raises(StorageUnavailableError):
        catalog.create_run("x", 5, 1, 0.71, 1e4)


def test_storage_failure_leaves_state_intact(tmp_path):
    solver = VorticityStreamSolver(nx=5, ny=5)
    solver.run(3)
    before = solver.state.copy()

    with pytest.raises(StorageUnavailableError):
        RunCatalog(tmp_path).save_results(1, solver.state)

    np.testing.assert_array_equal(solver.state.temp, before.temp)
    np.testing.assert_array_equal(solver.state.vort, before.vort)


def test_default_path_from_environment(monkeypatch, tmp_path):
    monkeypatch.setenv("CONVECTION_DB", str(tmp_path / "env.h5"))
    assert default_catalog_path() == tmp_path / "env.h5"
    assert RunCatalog().path == tmp_path / "env.h5"

    monkeypatch.delenv("CONVECTION_DB")
    assert default_catalog_path().name == "convection_runs.h5"
