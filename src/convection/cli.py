"""Command-line entry point: run, list and query convection simulations."""

import argparse
import logging
import sys
from pathlib import Path

from .errors import ConvectionError
from .vorticity_solver import VorticityStreamSolver

from persistence import RunCatalog
from utils.heatmap import draw_temperature_map

log = logging.getLogger("convection")


def build_parser():
    ap = argparse.ArgumentParser(
        prog="convection",
        description="Buoyancy-driven convection in a heated square cavity.",
    )
    ap.add_argument("--db", type=Path, default=None,
                    help="run catalog file (default: $CONVECTION_DB or ./convection_runs.h5)")
    ap.add_argument("--output-dir", type=Path, default=Path("."),
                    help="directory for rendered images")
    ap.add_argument("-v", "--verbose", action="store_true")
    sub = ap.add_subparsers(dest="command", required=True)

    run = sub.add_parser("run", help="run a new simulation and save the results")
    run.add_argument("-d", "--description", default="Test Run")
    run.add_argument("-g", "--grid-size", type=int, default=41)
    run.add_argument("-s", "--steps", type=int, default=1000)
    run.add_argument("--prandtl", type=float, default=0.71)
    run.add_argument("--rayleigh", type=float, default=10000.0)
    run.add_argument("--dt", type=float, default=1e-4)

    sub.add_parser("list", help="list all previous simulation runs")

    query = sub.add_parser("query", help="render the stored result of a past run")
    query.add_argument("-i", "--id", type=int, required=True)

    return ap


def _log_progress(step, steps):
    log.info("Completed step %d/%d", step, steps)


def cmd_run(args, catalog):
    log.info("Starting new simulation...")
    solver = VorticityStreamSolver(
        nx=args.grid_size,
        ny=args.grid_size,
        dt=args.dt,
        pr=args.prandtl,
        ra=args.rayleigh,
    )

    run = catalog.create_run(
        args.description, args.grid_size, args.steps, args.prandtl, args.rayleigh,
    )

    solver.run(args.steps, on_progress=_log_progress)

    log.info("Saving results to catalog...")
    catalog.save_results(run.id, solver.state)

    output_file = args.output_dir / f"run_{run.id}_temp.png"
    draw_temperature_map(solver.state.temp, output_file)
    return run


def cmd_list(args, catalog):
    runs = catalog.list_runs()
    print("--- Available Simulation Runs ---")
    print(f"{'ID':<5} | {'Description':<25} | {'Grid':<10} | {'Steps':<10} | {'Pr':<10} | {'Ra':<10}")
    print("-" * 85)
    for run in runs:
        print(
            f"{run.id:<5} | {run.description:<25} | {run.grid_size:<10} | "
            f"{run.time_steps:<10} | {run.prandtl_number:<10.2f} | {run.rayleigh_number:<10.1e}"
        )
    return runs


def cmd_query(args, catalog):
    log.info("Querying results for run ID: %d", args.id)
    state = catalog.get_results(args.id)
    log.info("Results retrieved. Generating visualization...")

    output_file = args.output_dir / f"queried_run_{args.id}_temp.png"
    draw_temperature_map(state.temp, output_file)
    return state


COMMANDS = {
    "run": cmd_run,
    "list": cmd_list,
    "query": cmd_query,
}


def main(argv=None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(message)s",
    )

    args.output_dir.mkdir(parents=True, exist_ok=True)
    catalog = RunCatalog(args.db)
    try:
        COMMANDS[args.command](args, catalog)
    except ConvectionError as exc:
        log.error("%s", exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
