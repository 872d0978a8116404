"""Las Vegas solver: random seeding followed by backtracking.

A Las Vegas attempt places the first ``k`` queens at random among the columns
that are still feasible in their row, then lets ``lvqueens.backtracking``
complete the remaining rows. An attempt may fail (no feasible column while
seeding, or no completion for the random prefix) but any board it returns is a
valid solution. ``solve_until_success`` repeats attempts from an empty board
until one succeeds and reports how many attempts it took; averaged over many
runs, ``1 / mean(trials)`` estimates the success probability of one attempt.

Seed depth trade-off
--------------------
- ``k = 0``: pure deterministic backtracking; always succeeds in one trial.
- ``k = size``: pure random placement; success only when every row happened
  to have a feasible column.
- Intermediate ``k`` trades a per-attempt failure probability for a much
  shallower backtracking search.

Randomness
----------
Every function accepts an optional ``rng`` exposing ``choice`` (e.g. a
``random.Random`` instance). When omitted, the process-wide ``random`` module
is used; seed it once at startup, or pass ``random.Random(seed)`` for
reproducible runs.

Termination
-----------
Boards of size 2 and 3 have no solution, so without a budget the retry loop
never returns for them, whatever ``k``. Pass ``max_trials`` or ``time_limit``
to get a ``BudgetExceededError`` instead.
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from time import perf_counter
from typing import Any, List, Optional

from .backtracking import SearchTimeout, search
from .board import ConstraintBoard


class BudgetExceededError(RuntimeError):
    """Raised when the retry loop runs out of attempts or time.

    Attributes
    ----------
    size, k : int
        Board size and seed depth of the failed run.
    trials : int
        Attempts started before giving up.
    elapsed : float
        Seconds spent in the retry loop.
    """

    def __init__(self, size: int, k: int, trials: int, elapsed: float):
        super().__init__(
            f"No solution found for N={size}, k={k} within budget "
            f"({trials} trials, {elapsed:.3f}s)"
        )
        self.size = size
        self.k = k
        self.trials = trials
        self.elapsed = elapsed

    def __reduce__(self):
        # Rebuild from the attributes so workers can raise it across processes.
        return (type(self), (self.size, self.k, self.trials, self.elapsed))


@dataclass
class LasVegasResult:
    """Outcome of ``solve``: the solution, attempts used, and wall time."""

    solution: List[int]
    trials: int
    elapsed: float


def _check_depth(board: ConstraintBoard, k: int) -> None:
    if not 0 <= k <= board.size:
        raise ValueError(f"Seed depth k must be in [0, {board.size}], got {k}")


def seed(board: ConstraintBoard, k: int, rng: Optional[Any] = None) -> bool:
    """Place queens on rows ``0..k-1`` uniformly among feasible columns.

    Returns False as soon as a row has no feasible column; the board is then
    left partially seeded and must be reset before reuse.
    """
    _check_depth(board, k)
    chooser = rng if rng is not None else random
    size = board.size
    for row in range(k):
        available = [col for col in range(size) if board.can_place(col, row)]
        if not available:
            return False
        board.place(chooser.choice(available), row)
    return True


def solve_with_seed(board: ConstraintBoard, k: int, rng: Optional[Any] = None) -> bool:
    """Run one Las Vegas attempt: random seeding of ``k`` rows, then backtracking."""
    if not seed(board, k, rng):
        return False
    return search(board, k)


def solve_until_success(
    board: ConstraintBoard,
    k: int,
    rng: Optional[Any] = None,
    max_trials: Optional[int] = None,
    time_limit: Optional[float] = None,
) -> int:
    """Repeat Las Vegas attempts on ``board`` until one succeeds.

    Each trial resets the board, so any prior state is discarded. On return
    the board holds the solution.

    Parameters
    ----------
    board : ConstraintBoard
        Board reused across trials.
    k : int
        Seed depth, ``0 <= k <= board.size``.
    rng : random.Random-like | None
        Source of randomness for seeding.
    max_trials : int | None
        Maximum number of attempts (None = unbounded).
    time_limit : float | None
        Wall-clock budget in seconds (None = unbounded). Also bounds the
        backtracking phase of the running attempt.

    Returns
    -------
    int
        Number of trials taken (>= 1).

    Raises
    ------
    BudgetExceededError
        If ``max_trials`` or ``time_limit`` is exhausted first.
    """
    _check_depth(board, k)
    if max_trials is not None and max_trials < 1:
        raise ValueError(f"max_trials must be >= 1, got {max_trials}")

    start = perf_counter()
    deadline = None if time_limit is None else start + time_limit
    trials = 0

    while True:
        if max_trials is not None and trials >= max_trials:
            raise BudgetExceededError(board.size, k, trials, perf_counter() - start)
        if deadline is not None and perf_counter() > deadline:
            raise BudgetExceededError(board.size, k, trials, perf_counter() - start)

        board.reset()
        trials += 1
        if not seed(board, k, rng):
            continue
        remaining = None if deadline is None else max(0.0, deadline - perf_counter())
        try:
            found = search(board, k, remaining)
        except SearchTimeout as exc:
            raise BudgetExceededError(board.size, k, trials, perf_counter() - start) from exc
        if found:
            return trials


def solve(
    size: int,
    k: int,
    rng: Optional[Any] = None,
    max_trials: Optional[int] = None,
    time_limit: Optional[float] = None,
) -> LasVegasResult:
    """Solve a fresh ``size`` board with seed depth ``k``."""
    board = ConstraintBoard(size)
    start = perf_counter()
    trials = solve_until_success(board, k, rng, max_trials=max_trials, time_limit=time_limit)
    return LasVegasResult(board.solution(), trials, perf_counter() - start)
