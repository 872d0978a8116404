"""Command-line interface and high-level pipelines for Las Vegas experiments.

This module wires together configuration loading, RNG seeding, and execution
of the three run modes:

- ``demo``: the fixed demonstration sequence from the configuration (by
  default a sweep for N=8, solutions for N=100 and N=1000, and a sweep for
  N=39).
- ``sweep``: seed-depth statistics for one board size, printed as ``k;t;s``
  and optionally exported to CSV and PNG.
- ``solve``: one solution for ``(size, k)`` printed as ``[c0,c1,...]``.

It intentionally isolates I/O, argument parsing, and progress reporting from
the core algorithmic modules so that the rest of the codebase remains easy to
test programmatically.
"""
from __future__ import annotations

import argparse
import random
import tempfile
import time
from pathlib import Path
from typing import Any, Dict, List, Optional

from . import settings
from .experiments import run_single_solution, run_sweep, run_sweep_parallel
from .reporting import (
    format_sweep_lines,
    print_solution,
    print_sweep,
    save_raw_trials_to_csv,
    save_sweep_to_csv,
)
from .stats import SolutionRecord, SweepResult
from config_manager import ConfigManager
from lvqueens.backtracking import bt_nqueens_first
from lvqueens.lasvegas import BudgetExceededError
from lvqueens.utils import format_placement, is_valid_solution


DEFAULT_CONFIG = "config.json"


# ------------- Configuration ------------------------------------------------

def apply_configuration(config_path: str) -> ConfigManager:
    """Load configuration and copy its values into the ``settings`` module.

    Missing sections or keys leave the corresponding defaults untouched.
    """
    config_mgr = ConfigManager(config_path)

    experiment_settings = config_mgr.get_experiment_settings()
    if experiment_settings:
        settings.SWEEP_SIZE = int(experiment_settings.get("sweep_size", settings.SWEEP_SIZE))
        settings.SWEEP_REPS = int(experiment_settings.get("sweep_reps", settings.SWEEP_REPS))
        settings.SOLVE_SIZE = int(experiment_settings.get("solve_size", settings.SOLVE_SIZE))
        settings.SOLVE_DEPTH = int(experiment_settings.get("solve_k", settings.SOLVE_DEPTH))
        seed = experiment_settings.get("seed", settings.RANDOM_SEED)
        settings.RANDOM_SEED = int(seed) if seed is not None else None

    retry_settings = config_mgr.get_retry_settings()
    if retry_settings:
        max_trials = retry_settings.get("max_trials", settings.MAX_TRIALS)
        time_limit = retry_settings.get("time_limit", settings.SOLVE_TIME_LIMIT)
        settings.set_limits(
            max_trials=int(max_trials) if max_trials is not None else None,
            time_limit=float(time_limit) if time_limit is not None else None,
        )

    output_settings = config_mgr.get_output_settings()
    if output_settings:
        settings.OUT_DIR = output_settings.get("output_dir", settings.OUT_DIR)
        settings.DATE_IN_FILENAMES = bool(output_settings.get("date_in_filenames", settings.DATE_IN_FILENAMES))
        workers = output_settings.get("num_processes")
        if workers is not None:
            settings.NUM_PROCESSES = max(1, int(workers))

    demo_sequence = config_mgr.get_demo_sequence()
    if demo_sequence:
        settings.DEMO_SEQUENCE = validate_demo_sequence(demo_sequence)

    return config_mgr


def validate_demo_sequence(steps: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Check and normalize demo steps; raise ``ValueError`` on malformed entries."""
    normalized: List[Dict[str, Any]] = []
    for index, step in enumerate(steps, start=1):
        mode = str(step.get("mode", "")).lower()
        if mode == "sweep":
            normalized.append({"mode": mode, "size": int(step["size"]), "reps": int(step["reps"])})
        elif mode == "solve":
            normalized.append({"mode": mode, "size": int(step["size"]), "k": int(step["k"])})
        else:
            raise ValueError(f"Demo step {index} has unknown mode '{step.get('mode')}'. Allowed: sweep, solve")
    return normalized


def seed_random(seed: Optional[int] = None) -> int:
    """Seed the process-wide RNG once; use the current time when ``seed`` is None."""
    effective = seed if seed is not None else int(time.time())
    random.seed(effective)
    return effective


# ------------- Pipelines ----------------------------------------------------

def sweep_pipeline(
    size: int,
    reps: int,
    parallel: bool = False,
    export_csv: bool = False,
    plot: bool = False,
    validate: bool = False,
    k_values: Optional[List[int]] = None,
) -> SweepResult:
    """Run one seed-depth sweep, print ``k;t;s`` and write optional artifacts."""
    keep_raw = export_csv
    if parallel:
        result = run_sweep_parallel(
            size,
            reps,
            settings.NUM_PROCESSES,
            base_seed=settings.RANDOM_SEED,
            k_values=k_values,
            max_trials=settings.MAX_TRIALS,
            time_limit=settings.SOLVE_TIME_LIMIT,
            progress_label=f"N={size}",
            validate=validate,
            keep_raw=keep_raw,
        )
    else:
        result = run_sweep(
            size,
            reps,
            k_values=k_values,
            max_trials=settings.MAX_TRIALS,
            time_limit=settings.SOLVE_TIME_LIMIT,
            progress_label=f"N={size}",
            validate=validate,
            keep_raw=keep_raw,
        )

    print_sweep(result)

    if export_csv:
        save_sweep_to_csv(result, settings.OUT_DIR)
        save_raw_trials_to_csv(result, settings.OUT_DIR)
    if plot:
        from .plots import plot_sweep  # local import keeps matplotlib off the solve path

        plot_sweep(result, settings.OUT_DIR)
    return result


def solve_pipeline(size: int, k: int, validate: bool = False) -> SolutionRecord:
    """Find one solution for ``(size, k)`` and print its placement."""
    record = run_single_solution(
        size,
        k,
        max_trials=settings.MAX_TRIALS,
        time_limit=settings.SOLVE_TIME_LIMIT,
        validate=validate,
    )
    print_solution(record)
    return record


def run_demo(
    sequence: Optional[List[Dict[str, Any]]] = None,
    parallel: bool = False,
    export_csv: bool = False,
    plot: bool = False,
    validate: bool = False,
) -> None:
    """Run the demonstration sequence step by step."""
    steps = sequence if sequence is not None else settings.DEMO_SEQUENCE
    for index, step in enumerate(steps):
        if index:
            print("\n")
        if step["mode"] == "sweep":
            print(f"Some stats for n = {step['size']}:\n")
            sweep_pipeline(step["size"], step["reps"], parallel=parallel, export_csv=export_csv, plot=plot, validate=validate)
        else:
            print(f"A solution for n = {step['size']}:\n")
            solve_pipeline(step["size"], step["k"], validate=validate)


# ------------- Quick regression ---------------------------------------------

def run_quick_regression_tests() -> None:
    """Execute a fast, deterministic smoke test at small N.

    Verifies that:
    - Plain backtracking finds the canonical first solution for N=4 and a
      valid solution for N=8, and reports no solution for N=3.
    - A seeded sweep for N=6 yields one trial at k=0 and valid probabilities.
    - A single Las Vegas solve for N=8 returns a valid placement.
    - The sweep report and CSV export are produced in a temporary folder.
    """
    print("Running quick regression tests (N=4, 6, 8)...")

    solution, nodes, elapsed = bt_nqueens_first(4, time_limit=5.0)
    if solution != [1, 3, 0, 2]:
        raise AssertionError(f"Backtracking returned {solution} for N=4, expected [1, 3, 0, 2].")
    solution, nodes, elapsed = bt_nqueens_first(8, time_limit=5.0)
    if solution is None or not is_valid_solution(solution) or nodes <= 0:
        raise AssertionError(f"Backtracking failed for N=8: solution={solution}, nodes={nodes}.")
    print(f"  [BT] N=8: {format_placement(solution)}, nodes={nodes}, time={elapsed:.4f}s")
    if bt_nqueens_first(3)[0] is not None:
        raise AssertionError("Backtracking reported a solution for N=3.")

    rng = random.Random(42)
    result = run_sweep(6, 20, rng=rng, validate=True, keep_raw=True)
    if result["entries"][0]["total_trials"] != 20:
        raise AssertionError("Pure backtracking (k=0) needed more than one trial per repetition.")
    for k, entry in result["entries"].items():
        if not 0.0 < entry["success_probability"] <= 1.0:
            raise AssertionError(f"Invalid success probability at k={k}: {entry['success_probability']}")
    lines = format_sweep_lines(result)
    if lines[0] != "k;t;s" or len(lines) != 8:
        raise AssertionError(f"Unexpected sweep report layout: {lines}")
    print("  Sweep N=6: " + " | ".join(lines[1:]))

    record = run_single_solution(8, 5, rng=random.Random(42), max_trials=10_000, validate=True)
    print(f"  [LV] N=8, k=5: {format_placement(record['solution'])} after {record['trials']} trial(s)")

    with tempfile.TemporaryDirectory() as tmpdir:
        csv_path = Path(save_sweep_to_csv(result, tmpdir))
        if not csv_path.exists() or csv_path.stat().st_size == 0:
            raise AssertionError("Sweep CSV was not generated successfully during quick tests.")

    print("Quick regression tests passed.")


# ------------- CLI wiring ---------------------------------------------------

def parse_k_values(k_args: Optional[List[str]]) -> Optional[List[int]]:
    """Normalize ``--k`` inputs (repeated flags or comma-separated) to ints."""
    if not k_args:
        return None
    values: List[int] = []
    for entry in k_args:
        for token in entry.split(","):
            token = token.strip()
            if token:
                values.append(int(token))
    return values or None


def build_arg_parser():
    """Construct the argument parser for the CLI entry point."""
    parser = argparse.ArgumentParser(description="Las Vegas N-Queens: randomized seeding plus backtracking.")
    parser.add_argument(
        "--mode",
        choices=["demo", "sweep", "solve"],
        default="demo",
        help="Run the demo sequence (default), a seed-depth sweep, or a single solve.",
    )
    parser.add_argument("--size", "-n", type=int, help="Board size N (defaults from configuration).")
    parser.add_argument(
        "--k",
        "-k",
        "--seed-depth",
        dest="k",
        action="append",
        help="Seed depth. For solve: a single value. For sweep: restrict to these values (comma-separated or repeated).",
    )
    parser.add_argument("--reps", "-r", type=int, help="Repetitions per k in sweep mode.")
    parser.add_argument("--seed", type=int, help="RNG seed (default: current time).")
    parser.add_argument("--max-trials", type=int, help="Abort a solve after this many Las Vegas attempts.")
    parser.add_argument("--time-limit", type=float, help="Abort a solve after this many seconds.")
    parser.add_argument("--parallel", action="store_true", help="Run sweeps with a process pool.")
    parser.add_argument("--csv", action="store_true", help="Export sweep results (aggregate and raw) to CSV.")
    parser.add_argument("--plot", action="store_true", help="Save PNG charts of time and success probability vs k.")
    parser.add_argument("--config", help="Path to configuration file (default: config.json if present).")
    parser.add_argument("--quick-test", action="store_true", help="Run quick regression tests and exit.")
    parser.add_argument("--validate", action="store_true", help="Validate every produced board (extra assertions).")
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """CLI entry point: parse arguments and dispatch to the chosen pipeline."""
    parser = build_arg_parser()
    args = parser.parse_args(argv)

    if args.quick_test:
        run_quick_regression_tests()
        return

    config_path = args.config or DEFAULT_CONFIG
    if args.config or Path(config_path).exists():
        try:
            apply_configuration(config_path)
        except FileNotFoundError as exc:
            print(f"Configuration file not found: {exc}")
            raise SystemExit(1) from exc
        except (KeyError, TypeError, ValueError) as exc:
            print(f"Configuration error: {exc}")
            raise SystemExit(1) from exc

    if args.max_trials is not None or args.time_limit is not None:
        settings.set_limits(
            max_trials=args.max_trials if args.max_trials is not None else settings.MAX_TRIALS,
            time_limit=args.time_limit if args.time_limit is not None else settings.SOLVE_TIME_LIMIT,
        )
    if args.seed is not None:
        settings.RANDOM_SEED = args.seed
    seed_random(settings.RANDOM_SEED)

    try:
        k_values = parse_k_values(args.k)
        if args.mode == "sweep":
            size = args.size if args.size is not None else settings.SWEEP_SIZE
            reps = args.reps if args.reps is not None else settings.SWEEP_REPS
            sweep_pipeline(size, reps, parallel=args.parallel, export_csv=args.csv, plot=args.plot, validate=args.validate, k_values=k_values)
        elif args.mode == "solve":
            size = args.size if args.size is not None else settings.SOLVE_SIZE
            if k_values and len(k_values) > 1:
                raise ValueError("solve mode accepts a single --k value")
            k = k_values[0] if k_values else settings.SOLVE_DEPTH
            solve_pipeline(size, k, validate=args.validate)
        else:
            run_demo(parallel=args.parallel, export_csv=args.csv, plot=args.plot, validate=args.validate)
    except KeyboardInterrupt:
        print("\nExecution interrupted by user.")
        raise SystemExit(130) from None
    except BudgetExceededError as exc:
        print(f"Budget exhausted: {exc}")
        raise SystemExit(1) from exc
    except ValueError as exc:
        print(f"Execution error: {exc}")
        raise SystemExit(1) from exc
