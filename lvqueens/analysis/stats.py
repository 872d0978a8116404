"""Typed result shapes and statistics helpers for the sweep pipeline.

Defines ``TypedDict`` structures for experiment outputs and provides utilities
to summarize trial counts and to aggregate per-k sweep measurements.
"""
from __future__ import annotations

import statistics
from typing import Dict, List, Optional, TypedDict


class StatsSummary(TypedDict, total=False):
    count: int
    mean: Optional[float]
    median: Optional[float]
    std: Optional[float]
    min: Optional[float]
    max: Optional[float]
    q25: Optional[float]
    q75: Optional[float]
    range: Optional[float]


class SweepEntry(TypedDict, total=False):
    k: int
    reps: int
    total_trials: int
    elapsed: float
    mean_time_ms: float
    success_probability: float
    trials: StatsSummary
    raw_trials: List[int]


class SweepResult(TypedDict):
    size: int
    reps: int
    entries: Dict[int, SweepEntry]


class SolutionRecord(TypedDict):
    size: int
    k: int
    solution: List[int]
    trials: int
    time: float


class ProgressPrinter:
    """Minimal, stdout-only progress reporter for long-running loops.

    Parameters
    ----------
    total : int
        Total number of steps/items expected. Values <= 0 are coerced to 1 to
        avoid division by zero when reporting percentages.
    label : str
        Short label printed in front of the progress counters.
    """

    def __init__(self, total: int, label: str):
        self.total = max(1, total)
        self.label = label

    def update(self, index: int, detail: str = "") -> None:
        """Print a single-line progress update to stdout."""
        percent = (index / self.total) * 100
        suffix = f" - {detail}" if detail else ""
        print(f"[{self.label}] {index}/{self.total} ({percent:.0f}%)" + suffix)


def compute_detailed_statistics(values: List[float], label: str = "") -> StatsSummary:
    """Compute summary statistics for a numeric sequence.

    Parameters
    ----------
    values : List[float]
        A list of numeric values to summarize.
    label : str, optional
        Optional label carried through for debugging contexts; unused in
        calculations.

    Returns
    -------
    StatsSummary
        count, mean, median, std (population), min, max, q25, q75 and range.
        When ``values`` is empty, all numeric fields are ``None`` and
        ``count`` is 0 to keep CSV generation consistent.
    """
    if not values:
        return {
            "count": 0,
            "mean": None,
            "median": None,
            "std": None,
            "min": None,
            "max": None,
            "q25": None,
            "q75": None,
            "range": None,
        }

    sorted_vals = sorted(values)
    n = len(values)

    mean_val = statistics.mean(values)
    median_val = statistics.median(values)
    min_val = min(values)
    max_val = max(values)
    range_val = max_val - min_val
    std_val = statistics.pstdev(values) if n > 1 else 0

    q25 = sorted_vals[n // 4] if n >= 4 else min_val
    q75 = sorted_vals[3 * n // 4] if n >= 4 else max_val

    return {
        "count": n,
        "mean": mean_val,
        "median": median_val,
        "std": std_val,
        "min": min_val,
        "max": max_val,
        "q25": q25,
        "q75": q75,
        "range": range_val,
    }


def summarize_sweep_entry(k: int, trial_counts: List[int], elapsed: float, keep_raw: bool = False) -> SweepEntry:
    """Build the per-k sweep entry from trial counts and accumulated wall time.

    ``mean_time_ms`` is the elapsed time per repetition in milliseconds and
    ``success_probability`` is ``1 / mean(trials)``, i.e. repetitions divided
    by the total number of Las Vegas attempts.
    """
    reps = len(trial_counts)
    total_trials = sum(trial_counts)
    entry: SweepEntry = {
        "k": k,
        "reps": reps,
        "total_trials": total_trials,
        "elapsed": elapsed,
        "mean_time_ms": elapsed * 1000.0 / reps if reps else 0.0,
        "success_probability": reps / total_trials if total_trials else 0.0,
        "trials": compute_detailed_statistics([float(t) for t in trial_counts], f"trials_k{k}"),
    }
    if keep_raw:
        entry["raw_trials"] = list(trial_counts)
    return entry
