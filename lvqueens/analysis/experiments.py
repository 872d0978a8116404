"""Experiment runners for the Las Vegas solver (sequential and parallel).

Two experiment kinds are supported:

- Single solution: run ``solve_until_success`` once for ``(size, k)`` and keep
  the resulting placement.
- Seed-depth sweep: for every ``k`` from ``size`` down to ``0`` run
  ``solve_until_success`` ``reps`` times, accumulating wall time and trial
  counts, then derive the mean time per repetition and the estimated success
  probability ``1 / mean(trials)`` of one attempt.

The sequential sweep reuses a single board for every repetition and every k.
The parallel sweep splits repetitions into chunks executed by worker
processes; each worker builds its own board and its own seeded RNG, so no
board is ever shared.
"""
from __future__ import annotations

import random
from concurrent.futures import ProcessPoolExecutor
from time import perf_counter
from typing import Any, Dict, List, Optional, Sequence, Tuple

from .stats import (
    ProgressPrinter,
    SolutionRecord,
    SweepResult,
    summarize_sweep_entry,
)
from lvqueens.board import ConstraintBoard
from lvqueens.lasvegas import solve_until_success
from lvqueens.utils import is_valid_solution


def _k_order(size: int, k_values: Optional[Sequence[int]]) -> List[int]:
    """Return the seed depths to sweep, descending, validated against ``size``."""
    if k_values is None:
        return list(range(size, -1, -1))
    ks = sorted(set(int(k) for k in k_values), reverse=True)
    invalid = [k for k in ks if not 0 <= k <= size]
    if invalid:
        raise ValueError(f"Seed depths out of range [0, {size}]: " + ", ".join(str(k) for k in invalid))
    return ks


def run_single_solution(
    size: int,
    k: int,
    rng: Optional[Any] = None,
    max_trials: Optional[int] = None,
    time_limit: Optional[float] = None,
    validate: bool = False,
) -> SolutionRecord:
    """Solve one board of ``size`` with seed depth ``k`` and record the outcome."""
    board = ConstraintBoard(size)
    start = perf_counter()
    trials = solve_until_success(board, k, rng, max_trials=max_trials, time_limit=time_limit)
    elapsed = perf_counter() - start
    solution = board.solution()
    if validate and not is_valid_solution(solution):
        raise AssertionError(f"Invalid Las Vegas solution produced for N={size}, k={k}: {solution}")
    return {"size": size, "k": k, "solution": solution, "trials": trials, "time": elapsed}


def run_sweep(
    size: int,
    reps: int,
    rng: Optional[Any] = None,
    k_values: Optional[Sequence[int]] = None,
    max_trials: Optional[int] = None,
    time_limit: Optional[float] = None,
    progress_label: Optional[str] = None,
    validate: bool = False,
    keep_raw: bool = False,
) -> SweepResult:
    """Measure time and success probability for each seed depth sequentially.

    Parameters
    ----------
    size : int
        Board size N.
    reps : int
        Number of ``solve_until_success`` runs per k (>= 1).
    rng : random.Random-like | None
        Source of randomness for seeding (None = process-wide ``random``).
    k_values : Sequence[int] | None
        Seed depths to measure; default is every k from ``size`` down to 0.
    max_trials, time_limit : optional
        Retry budget forwarded to each ``solve_until_success`` call.
    progress_label : str | None
        When set, print one progress line per k.
    validate : bool
        Check every produced board with ``is_valid_solution``.
    keep_raw : bool
        Keep the per-repetition trial counts in each entry.

    Returns
    -------
    SweepResult
        ``{"size", "reps", "entries": {k: SweepEntry}}`` with entries in
        descending k order.
    """
    if reps < 1:
        raise ValueError(f"reps must be >= 1, got {reps}")
    ks = _k_order(size, k_values)
    board = ConstraintBoard(size)
    progress = ProgressPrinter(len(ks), progress_label) if progress_label else None
    result: SweepResult = {"size": size, "reps": reps, "entries": {}}

    for index, k in enumerate(ks, start=1):
        trial_counts: List[int] = []
        start = perf_counter()
        for _ in range(reps):
            trial_counts.append(solve_until_success(board, k, rng, max_trials=max_trials, time_limit=time_limit))
            if validate and not is_valid_solution(board.placement):
                raise AssertionError(f"Invalid board produced for N={size}, k={k}: {board.placement}")
        elapsed = perf_counter() - start
        result["entries"][k] = summarize_sweep_entry(k, trial_counts, elapsed, keep_raw=keep_raw)
        if progress:
            progress.update(index, f"k={k}")

    return result


# Reusable worker ------------------------------------------------------------

ChunkParams = Tuple[int, int, int, int, Optional[int], Optional[float], bool]


def run_sweep_chunk(params: ChunkParams) -> Tuple[List[int], float]:
    """Worker wrapper: run ``reps`` solves for one ``(size, k)`` with its own board and RNG."""
    size, k, reps, seed, max_trials, time_limit, validate = params
    board = ConstraintBoard(size)
    rng = random.Random(seed)
    trial_counts: List[int] = []
    start = perf_counter()
    for _ in range(reps):
        trial_counts.append(solve_until_success(board, k, rng, max_trials=max_trials, time_limit=time_limit))
        if validate and not is_valid_solution(board.placement):
            raise AssertionError(f"Invalid board produced for N={size}, k={k}: {board.placement}")
    return trial_counts, perf_counter() - start


def _split_reps(reps: int, parts: int) -> List[int]:
    """Split ``reps`` into at most ``parts`` positive, near-equal chunk sizes."""
    parts = max(1, min(parts, reps))
    base, extra = divmod(reps, parts)
    return [base + (1 if i < extra else 0) for i in range(parts)]


def run_sweep_parallel(
    size: int,
    reps: int,
    num_processes: int,
    base_seed: Optional[int] = None,
    k_values: Optional[Sequence[int]] = None,
    max_trials: Optional[int] = None,
    time_limit: Optional[float] = None,
    progress_label: Optional[str] = None,
    validate: bool = False,
    keep_raw: bool = False,
) -> SweepResult:
    """Parallel variant of ``run_sweep`` using a process pool.

    Repetitions of each k are split into ``num_processes`` chunks; with
    ``validate`` each worker checks every board it produces. Chunk
    seeds are drawn from ``random.Random(base_seed)``, so a fixed
    ``base_seed`` makes the whole sweep reproducible. Elapsed times of the
    chunks are summed, so ``mean_time_ms`` remains the cost of one repetition
    rather than the wall time of the parallel run.
    """
    if reps < 1:
        raise ValueError(f"reps must be >= 1, got {reps}")
    ks = _k_order(size, k_values)
    seeder = random.Random(base_seed)
    chunks = _split_reps(reps, num_processes)
    progress = ProgressPrinter(len(ks), progress_label) if progress_label else None
    result: SweepResult = {"size": size, "reps": reps, "entries": {}}

    tasks: Dict[int, List[ChunkParams]] = {}
    for k in ks:
        tasks[k] = [(size, k, chunk, seeder.getrandbits(64), max_trials, time_limit, validate) for chunk in chunks]

    with ProcessPoolExecutor(max_workers=max(1, num_processes)) as executor:
        for index, k in enumerate(ks, start=1):
            trial_counts: List[int] = []
            elapsed = 0.0
            for counts, chunk_elapsed in executor.map(run_sweep_chunk, tasks[k]):
                trial_counts.extend(counts)
                elapsed += chunk_elapsed
            result["entries"][k] = summarize_sweep_entry(k, trial_counts, elapsed, keep_raw=keep_raw)
            if progress:
                progress.update(index, f"k={k}")

    return result
