"""Tests for sweep and single-solution runners, reporting, and plots."""

import contextlib
import csv
import io
from pathlib import Path
import random
import re
import sys
import tempfile
import unittest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from lvqueens.analysis.experiments import (
    _split_reps,
    run_single_solution,
    run_sweep,
    run_sweep_chunk,
    run_sweep_parallel,
)
from lvqueens.lasvegas import BudgetExceededError
from lvqueens.analysis.reporting import (
    format_sweep_lines,
    save_raw_trials_to_csv,
    save_sweep_to_csv,
)
from lvqueens.analysis.stats import compute_detailed_statistics, summarize_sweep_entry
from lvqueens.utils import format_placement, is_valid_solution


class StatsTests(unittest.TestCase):

    def test_summary_of_empty_values(self):
        summary = compute_detailed_statistics([])
        self.assertEqual(summary["count"], 0)
        self.assertIsNone(summary["mean"])

    def test_summary_values(self):
        summary = compute_detailed_statistics([1.0, 2.0, 3.0, 4.0])
        self.assertEqual(summary["count"], 4)
        self.assertAlmostEqual(summary["mean"], 2.5)
        self.assertEqual(summary["min"], 1.0)
        self.assertEqual(summary["max"], 4.0)
        self.assertEqual(summary["range"], 3.0)

    def test_sweep_entry_probability_is_inverse_mean_trials(self):
        entry = summarize_sweep_entry(3, [1, 2, 3, 2], elapsed=0.008, keep_raw=True)
        self.assertEqual(entry["total_trials"], 8)
        self.assertAlmostEqual(entry["success_probability"], 0.5)
        self.assertAlmostEqual(entry["mean_time_ms"], 2.0)
        self.assertEqual(entry["raw_trials"], [1, 2, 3, 2])


class SweepTests(unittest.TestCase):

    def test_sweep_covers_every_depth_descending(self):
        result = run_sweep(6, 10, rng=random.Random(4), validate=True)
        self.assertEqual(result["size"], 6)
        self.assertEqual(list(result["entries"]), [6, 5, 4, 3, 2, 1, 0])
        for k, entry in result["entries"].items():
            self.assertEqual(entry["reps"], 10)
            self.assertGreaterEqual(entry["total_trials"], 10)
            self.assertGreater(entry["success_probability"], 0.0)
            self.assertLessEqual(entry["success_probability"], 1.0)
            self.assertGreaterEqual(entry["mean_time_ms"], 0.0)

    def test_pure_backtracking_probability_is_one(self):
        result = run_sweep(8, 5, rng=random.Random(4), k_values=[0])
        self.assertEqual(result["entries"][0]["total_trials"], 5)
        self.assertEqual(result["entries"][0]["success_probability"], 1.0)

    def test_full_random_probability_below_one(self):
        result = run_sweep(8, 100, rng=random.Random(4), k_values=[8])
        self.assertLess(result["entries"][8]["success_probability"], 1.0)

    def test_k_values_are_validated_and_sorted(self):
        result = run_sweep(5, 2, rng=random.Random(1), k_values=[0, 3, 3])
        self.assertEqual(list(result["entries"]), [3, 0])
        with self.assertRaises(ValueError):
            run_sweep(5, 2, k_values=[6])
        with self.assertRaises(ValueError):
            run_sweep(5, 0)

    def test_single_solution_record(self):
        record = run_single_solution(10, 6, rng=random.Random(2), validate=True)
        self.assertEqual(record["size"], 10)
        self.assertEqual(record["k"], 6)
        self.assertTrue(is_valid_solution(record["solution"]))
        self.assertGreaterEqual(record["trials"], 1)

    def test_split_reps(self):
        self.assertEqual(_split_reps(10, 3), [4, 3, 3])
        self.assertEqual(_split_reps(2, 8), [1, 1])
        self.assertEqual(sum(_split_reps(1_000_000, 7)), 1_000_000)

    def test_chunk_worker_is_deterministic(self):
        first = run_sweep_chunk((8, 4, 20, 123, None, None, True))
        second = run_sweep_chunk((8, 4, 20, 123, None, None, True))
        self.assertEqual(first[0], second[0])
        self.assertEqual(len(first[0]), 20)

    def test_parallel_sweep_merges_chunks(self):
        result = run_sweep_parallel(6, 9, num_processes=2, base_seed=17, k_values=[6, 0], keep_raw=True)
        self.assertEqual(list(result["entries"]), [6, 0])
        self.assertEqual(result["entries"][0]["total_trials"], 9)
        self.assertEqual(len(result["entries"][6]["raw_trials"]), 9)
        again = run_sweep_parallel(6, 9, num_processes=2, base_seed=17, k_values=[6, 0], keep_raw=True)
        self.assertEqual(result["entries"][6]["raw_trials"], again["entries"][6]["raw_trials"])

    def test_sweep_prints_progress_per_depth(self):
        out = io.StringIO()
        with contextlib.redirect_stdout(out):
            run_sweep(5, 2, rng=random.Random(4), progress_label="N=5")
        lines = out.getvalue().splitlines()
        self.assertEqual(len(lines), 6)
        self.assertEqual(lines[0], "[N=5] 1/6 (17%) - k=5")
        self.assertEqual(lines[-1], "[N=5] 6/6 (100%) - k=0")

    def test_parallel_sweep_validates_boards(self):
        result = run_sweep_parallel(6, 4, num_processes=2, base_seed=3, k_values=[3], validate=True)
        self.assertEqual(result["entries"][3]["reps"], 4)

    def test_parallel_sweep_reports_exhausted_budget(self):
        with self.assertRaises(BudgetExceededError) as ctx:
            run_sweep_parallel(3, 2, num_processes=2, base_seed=1, k_values=[1], max_trials=5)
        self.assertEqual(ctx.exception.size, 3)
        self.assertEqual(ctx.exception.trials, 5)


class ReportingTests(unittest.TestCase):

    def setUp(self):
        self.result = run_sweep(5, 4, rng=random.Random(9), keep_raw=True)

    def test_sweep_report_format(self):
        lines = format_sweep_lines(self.result)
        self.assertEqual(lines[0], "k;t;s")
        self.assertEqual(len(lines), 7)
        pattern = re.compile(r"^\d+;\d+\.\d{5};\d\.\d{5}$")
        for line in lines[1:]:
            self.assertRegex(line, pattern)
        self.assertTrue(lines[1].startswith("5;"))
        self.assertTrue(lines[-1].startswith("0;"))
        self.assertTrue(lines[-1].endswith(";1.00000"))

    def test_placement_format(self):
        self.assertEqual(format_placement([1, 3, 0, 2]), "[1,3,0,2]")

    def test_csv_exports(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = save_sweep_to_csv(self.result, tmpdir)
            with open(path, newline="") as f:
                rows = list(csv.DictReader(f))
            self.assertEqual([int(r["k"]) for r in rows], [5, 4, 3, 2, 1, 0])
            self.assertEqual(rows[-1]["success_probability"], "1.00000")

            raw_path = save_raw_trials_to_csv(self.result, tmpdir)
            with open(raw_path, newline="") as f:
                raw_rows = list(csv.DictReader(f))
            self.assertEqual(len(raw_rows), 6 * 4)
            self.assertTrue(all(int(r["trials"]) >= 1 for r in raw_rows))

    def test_plots_written(self):
        from lvqueens.analysis.plots import plot_sweep

        with tempfile.TemporaryDirectory() as tmpdir:
            paths = plot_sweep(self.result, tmpdir)
            self.assertEqual(len(paths), 2)
            for path in paths:
                self.assertTrue(Path(path).exists())
                self.assertGreater(Path(path).stat().st_size, 0)


if __name__ == "__main__":
    unittest.main()
