"""Backtracking search over a ``ConstraintBoard``.

This module implements chronological depth-first search that fills a board
row by row, starting from an arbitrary row so that it can complete a board
whose leading rows were already seeded (see ``lvqueens.lasvegas``).

- search(board, start_row=0, time_limit=None): complete ``board`` in place and
    return True, or return False when no completion exists for the rows
    already placed.
- search_with_stats(board, start_row=0, time_limit=None): same search, also
    returning the number of explored nodes.
- bt_nqueens_first(size, time_limit=None): solve an empty board of the given
    size and return ``(solution, nodes_explored, elapsed_seconds)``.

Implementation overview
-----------------------
- Feasibility comes exclusively from the board's column and diagonal indices;
    placed queens are never rescanned.
- Search strategy: depth-first search implemented iteratively with an explicit
    stack of decision frames, avoiding Python recursion overhead and the
    interpreter recursion limit for large boards.
- Value order: columns are tried in ascending order 0..N-1 and every failed
    placement is undone before the next column is tried (strict LIFO undo).
    Consequently the first solution found from an empty board is the
    lexicographically smallest one, e.g. ``[1, 3, 0, 2]`` for N = 4.
- Completeness is tested before any row is scanned, so a board that is already
    complete is reported as solved immediately.

Contract
--------
- Rows ``< start_row`` must already hold queens (contiguous, row-ordered).
- On success the board holds the full solution. On failure the board holds
  exactly the rows it was given. On timeout ``SearchTimeout`` is raised and the
  board is left mid-search; callers are expected to ``reset`` it.
- Nodes explored: one per candidate cell probed with ``can_place``.
"""

from __future__ import annotations

from dataclasses import dataclass
from time import perf_counter
from typing import List, Optional, Tuple

from .board import UNPLACED, ConstraintBoard


class SearchTimeout(RuntimeError):
    """Raised when a time-limited search exceeds its budget."""

    def __init__(self, message: str, nodes: int = 0):
        super().__init__(message)
        self.nodes = nodes


@dataclass
class _Frame:
    """Mutable stack frame: the row being filled and the next column to try."""

    row: int
    next_col: int = 0


def _search(board: ConstraintBoard, start_row: int, deadline: Optional[float]) -> Tuple[bool, int]:
    """Iterative core shared by the public entry points.

    ``deadline`` is an absolute ``perf_counter()`` value or None.
    """
    if board.is_complete():
        return True, 0

    size = board.size
    if not 0 <= start_row < size:
        return False, 0

    stack: List[_Frame] = [_Frame(start_row)]
    explored = 0

    while stack:
        if deadline is not None and perf_counter() > deadline:
            raise SearchTimeout(f"Backtracking exceeded its time limit after {explored} nodes", explored)

        frame = stack[-1]
        row = frame.row

        placed_col = board.placement[row]
        if placed_col != UNPLACED:
            # Returning from a failed subtree; undo this row before trying the next column.
            board.remove(placed_col, row)

        placed = False
        while frame.next_col < size:
            col = frame.next_col
            frame.next_col = col + 1
            explored += 1
            if board.can_place(col, row):
                board.place(col, row)
                placed = True
                break

        if not placed:
            # Every column failed at this row; backtrack to the previous one.
            stack.pop()
            continue

        if board.is_complete():
            return True, explored

        stack.append(_Frame(row + 1))

    return False, explored


def search(board: ConstraintBoard, start_row: int = 0, time_limit: Optional[float] = None) -> bool:
    """Complete ``board`` from ``start_row`` by chronological backtracking.

    Parameters
    ----------
    board : ConstraintBoard
        Board whose rows ``0..start_row-1`` are already placed.
    start_row : int, default 0
        First row to fill.
    time_limit : float | None
        Optional wall-clock budget in seconds.

    Returns
    -------
    bool
        True if the board now holds a full solution, False if no completion
        exists for the given prefix.

    Raises
    ------
    SearchTimeout
        If ``time_limit`` elapses before the search ends.
    """
    deadline = None if time_limit is None else perf_counter() + time_limit
    found, _ = _search(board, start_row, deadline)
    return found


def search_with_stats(
    board: ConstraintBoard, start_row: int = 0, time_limit: Optional[float] = None
) -> Tuple[bool, int]:
    """Like ``search`` but also return the number of explored nodes."""
    deadline = None if time_limit is None else perf_counter() + time_limit
    return _search(board, start_row, deadline)


def bt_nqueens_first(size: int, time_limit: Optional[float] = None) -> Tuple[Optional[List[int]], int, float]:
    """Find the first solution of an empty ``size`` board via backtracking.

    Returns
    -------
    (solution, nodes_explored, elapsed_seconds)
        - solution: ``list[int]`` with ``solution[row] = col``, or None when
          the board has no solution (N = 2, 3) or the time limit elapsed.
        - nodes_explored: number of candidate cells probed.
        - elapsed_seconds: wall time measured with ``perf_counter()``.
    """
    board = ConstraintBoard(size)
    start = perf_counter()
    deadline = None if time_limit is None else start + time_limit
    try:
        found, explored = _search(board, 0, deadline)
    except SearchTimeout as exc:
        return None, exc.nodes, perf_counter() - start
    if not found:
        return None, explored, perf_counter() - start
    return board.solution(), explored, perf_counter() - start
