"""
Analysis and orchestration package for Las Vegas N-Queens experiments.

This package contains:
- settings: global knobs, retry budget and demo sequence
- stats: typed summaries and aggregation helpers
- experiments: single-solution and seed-depth sweep runners
- reporting: ``k;t;s`` console output and CSV exports
- plots: time and success-probability charts
- cli: top-level pipeline entry points and argument parser
"""

from . import settings as settings  # re-export for convenience
from .stats import (
    StatsSummary,
    SweepEntry,
    SweepResult,
    SolutionRecord,
    compute_detailed_statistics,
    summarize_sweep_entry,
    ProgressPrinter,
)

__all__ = [
    # types
    "StatsSummary",
    "SweepEntry",
    "SweepResult",
    "SolutionRecord",
    # utils
    "compute_detailed_statistics",
    "summarize_sweep_entry",
    "ProgressPrinter",
    # settings module
    "settings",
]
