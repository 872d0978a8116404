"""Console and CSV reporting for sweep and single-solution experiments.

Console formats
---------------
- Sweep: a ``k;t;s`` header followed by one line per seed depth in descending
  order, where ``t`` is the mean time per repetition in milliseconds and ``s``
  the estimated success probability, both with five decimals.
- Single solution: the placement as ``[c0,c1,...]``.

CSV exports write the aggregate per-k table and, when raw trial counts were
kept, one row per repetition. Filenames carry the board size and an optional
run-id suffix controlled by ``settings.DATE_IN_FILENAMES``.
"""
from __future__ import annotations

import csv
import os
from typing import List

from . import settings
from .stats import SolutionRecord, SweepResult
from lvqueens.utils import format_placement

SWEEP_HEADER = "k;t;s"


def build_suffix() -> str:
    """Return the filename suffix for the current run ('' when stamping is off)."""
    if getattr(settings, "DATE_IN_FILENAMES", False):
        return "_" + str(settings.RUN_ID)
    return ""


def format_sweep_lines(result: SweepResult) -> List[str]:
    """Render a sweep as the ``k;t;s`` report, header included."""
    lines = [SWEEP_HEADER]
    for k in sorted(result["entries"], reverse=True):
        entry = result["entries"][k]
        lines.append(f"{k};{entry['mean_time_ms']:.5f};{entry['success_probability']:.5f}")
    return lines


def print_sweep(result: SweepResult) -> None:
    print("\n".join(format_sweep_lines(result)))


def print_solution(record: SolutionRecord) -> None:
    print(format_placement(record["solution"]))


def save_sweep_to_csv(result: SweepResult, out_dir: str) -> str:
    """Write the per-k aggregate table to ``sweep_N{size}.csv`` and return its path.

    Column names follow lowercase snake_case.
    """
    os.makedirs(out_dir, exist_ok=True)
    filename = os.path.join(out_dir, f"sweep_N{result['size']}{build_suffix()}.csv")

    with open(filename, "w", newline="") as f:
        writer = csv.writer(f)
        writer.writerow([
            "k",
            "mean_time_ms",
            "success_probability",
            "total_trials",
            "reps",
            "trials_mean",
            "trials_std",
            "trials_max",
        ])
        for k in sorted(result["entries"], reverse=True):
            entry = result["entries"][k]
            trials = entry.get("trials", {})
            writer.writerow([
                k,
                f"{entry['mean_time_ms']:.5f}",
                f"{entry['success_probability']:.5f}",
                entry["total_trials"],
                entry["reps"],
                trials.get("mean"),
                trials.get("std"),
                trials.get("max"),
            ])

    print(f"Sweep CSV saved: {filename}")
    return filename


def save_raw_trials_to_csv(result: SweepResult, out_dir: str) -> str:
    """Write one row per repetition (``k, rep, trials``) to ``sweep_N{size}_raw.csv``.

    Entries without raw trial counts are skipped.
    """
    os.makedirs(out_dir, exist_ok=True)
    filename = os.path.join(out_dir, f"sweep_N{result['size']}_raw{build_suffix()}.csv")

    with open(filename, "w", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(["k", "rep", "trials"])
        for k in sorted(result["entries"], reverse=True):
            for rep, trials in enumerate(result["entries"][k].get("raw_trials", []), start=1):
                writer.writerow([k, rep, trials])

    print(f"Raw trials CSV saved: {filename}")
    return filename
