"""Tests for randomized seeding and the retry-until-success loop."""

from pathlib import Path
import pickle
import random
import sys
import unittest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from lvqueens.board import UNPLACED, ConstraintBoard
from lvqueens.lasvegas import (
    BudgetExceededError,
    seed,
    solve,
    solve_until_success,
    solve_with_seed,
)
from lvqueens.utils import conflicts, is_valid_solution


class FirstChoice:
    """Deterministic stand-in for an RNG: always picks the first option."""

    def choice(self, options):
        return options[0]


class SeedTests(unittest.TestCase):

    def test_seed_places_k_non_attacking_queens(self):
        rng = random.Random(11)
        for _ in range(100):
            board = ConstraintBoard(8)
            if seed(board, 5, rng):
                self.assertEqual(board.placed_count, 5)
                self.assertTrue(all(col != UNPLACED for col in board.placement[:5]))
                self.assertEqual(board.placement[5:], [UNPLACED] * 3)
                self.assertEqual(conflicts(board.placement), 0)

    def test_seed_zero_is_noop(self):
        board = ConstraintBoard(5)
        self.assertTrue(seed(board, 0, random.Random(1)))
        self.assertEqual(board.snapshot(), ConstraintBoard(5).snapshot())

    def test_seed_reports_exhaustion(self):
        # (0,0) then (2,1) leaves no feasible column in row 2 of a 4x4 board.
        board = ConstraintBoard(4)
        self.assertFalse(seed(board, 3, FirstChoice()))
        self.assertEqual(board.placement[:2], [0, 2])

    def test_seed_depth_out_of_range(self):
        board = ConstraintBoard(4)
        with self.assertRaises(ValueError):
            seed(board, 5)
        with self.assertRaises(ValueError):
            seed(board, -1)

    def test_solve_with_seed_fails_on_dead_prefix(self):
        board = ConstraintBoard(4)
        self.assertFalse(solve_with_seed(board, 1, FirstChoice()))
        self.assertEqual(board.placement, [0, UNPLACED, UNPLACED, UNPLACED])

    def test_solve_with_seed_succeeds(self):
        board = ConstraintBoard(4)
        self.assertTrue(solve_with_seed(board, 0))
        self.assertEqual(board.placement, [1, 3, 0, 2])


class RetryLoopTests(unittest.TestCase):

    def test_every_depth_eventually_succeeds(self):
        rng = random.Random(5)
        for size in range(4, 9):
            board = ConstraintBoard(size)
            for k in range(size + 1):
                trials = solve_until_success(board, k, rng)
                self.assertGreaterEqual(trials, 1)
                self.assertTrue(is_valid_solution(board.placement), f"N={size}, k={k}: {board.placement}")

    def test_pure_backtracking_needs_one_trial(self):
        for size in (1, 4, 6, 8, 10):
            board = ConstraintBoard(size)
            for _ in range(5):
                self.assertEqual(solve_until_success(board, 0, random.Random(3)), 1)

    def test_pure_random_placement_sometimes_fails(self):
        rng = random.Random(1234)
        board = ConstraintBoard(8)
        reps = 200
        total = sum(solve_until_success(board, 8, rng) for _ in range(reps))
        self.assertGreater(total, reps)
        self.assertLess(reps / total, 1.0)

    def test_stale_state_is_discarded(self):
        board = ConstraintBoard(6)
        board.place(0, 0)
        board.place(2, 1)
        self.assertEqual(solve_until_success(board, 0), 1)
        self.assertEqual(board.placement, [1, 3, 5, 0, 2, 4])

    def test_fixed_seed_is_reproducible(self):
        first = solve(12, 8, random.Random(99))
        second = solve(12, 8, random.Random(99))
        self.assertEqual(first.solution, second.solution)
        self.assertEqual(first.trials, second.trials)
        self.assertTrue(is_valid_solution(first.solution))

    def test_unsolvable_board_hits_trial_budget(self):
        board = ConstraintBoard(3)
        with self.assertRaises(BudgetExceededError) as ctx:
            solve_until_success(board, 1, random.Random(0), max_trials=25)
        self.assertEqual(ctx.exception.trials, 25)
        self.assertEqual(ctx.exception.size, 3)
        self.assertEqual(ctx.exception.k, 1)

    def test_unsolvable_board_hits_time_budget(self):
        board = ConstraintBoard(2)
        with self.assertRaises(BudgetExceededError) as ctx:
            solve_until_success(board, 2, random.Random(0), time_limit=0.05)
        self.assertGreaterEqual(ctx.exception.elapsed, 0.05)

    def test_budget_error_survives_pickling(self):
        error = pickle.loads(pickle.dumps(BudgetExceededError(3, 1, 5, 0.25)))
        self.assertIsInstance(error, BudgetExceededError)
        self.assertEqual((error.size, error.k, error.trials, error.elapsed), (3, 1, 5, 0.25))
        self.assertEqual(str(error), "No solution found for N=3, k=1 within budget (5 trials, 0.250s)")

    def test_invalid_budget_rejected(self):
        with self.assertRaises(ValueError):
            solve_until_success(ConstraintBoard(4), 0, max_trials=0)

    def test_solve_large_board_with_deep_seeding(self):
        result = solve(100, 88, random.Random(8), time_limit=120.0)
        self.assertTrue(is_valid_solution(result.solution))
        self.assertGreaterEqual(result.trials, 1)


if __name__ == "__main__":
    unittest.main()
