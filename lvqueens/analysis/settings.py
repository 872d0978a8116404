"""Global settings and limits for the Las Vegas N-Queens experiments.

This module centralizes tunable constants used across the orchestration code.
Values can be overridden at runtime via the configuration loader in
`lvqueens.analysis.cli.apply_configuration` or by CLI flags.
"""
from __future__ import annotations

import multiprocessing
from datetime import datetime
from typing import Any, Dict, List, Optional

# Statistics sweep defaults: board size and repetitions per seed depth k
SWEEP_SIZE: int = 8
SWEEP_REPS: int = 1000

# Single-solution defaults: board size and seed depth
SOLVE_SIZE: int = 100
SOLVE_DEPTH: int = 88

# Demonstration sequence run by `--mode demo` (illustrative, not contractual)
DEMO_SEQUENCE: List[Dict[str, Any]] = [
    {"mode": "sweep", "size": 8, "reps": 1_000_000},
    {"mode": "solve", "size": 100, "k": 88},
    {"mode": "solve", "size": 1000, "k": 983},
    {"mode": "sweep", "size": 39, "reps": 100},
]

# Retry-loop budget (None = unbounded, matching the classic Las Vegas loop)
MAX_TRIALS: Optional[int] = None
SOLVE_TIME_LIMIT: Optional[float] = None

# RNG seed (None = seed from the current time once at startup)
RANDOM_SEED: Optional[int] = None

# Output directory for CSV and charts
OUT_DIR: str = "results_lasvegas"

# Number of worker processes for parallel sweeps (leave one core for the OS)
NUM_PROCESSES: int = max(1, multiprocessing.cpu_count() - 1)

# When True, output filenames include a datestamp suffix (e.g., _20251113-142530)
# applied consistently across all artifacts produced within the same run.
DATE_IN_FILENAMES: bool = False

# Unique run identifier used for filename stamping; set once at import time.
RUN_ID: str = datetime.now().strftime("%Y%m%d-%H%M%S")


def set_limits(max_trials: Optional[int] = None, time_limit: Optional[float] = None) -> None:
        """Configure the retry-loop budget used by every solve.

        Parameters
        - max_trials: maximum Las Vegas attempts per solve (None disables).
        - time_limit: wall-clock seconds per solve (None disables).

        Side effects
        - Updates module-level globals and prints a concise summary to stdout to
            make the active limits explicit at run start.
        """
        global MAX_TRIALS, SOLVE_TIME_LIMIT
        MAX_TRIALS = max_trials
        SOLVE_TIME_LIMIT = time_limit

        print("Retry budget configured:")
        print(f"   - Trials: {MAX_TRIALS}" if MAX_TRIALS else "   - Trials: unlimited")
        print(f"   - Time: {SOLVE_TIME_LIMIT}s" if SOLVE_TIME_LIMIT else "   - Time: unlimited")
