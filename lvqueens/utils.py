"""Utility helpers for the Las Vegas N-Queens project.

Reference checks that do not rely on a board's feasibility indices, used to
validate solver output and to cross-check ``ConstraintBoard`` in tests, plus
the placement formatting shared by the CLI and reports.

Representation
--------------
Placements are encoded as a 1D list where ``placement[row] = col``; ``-1``
marks an empty row.
"""

from __future__ import annotations

from collections import Counter
from typing import Sequence

from .board import UNPLACED


def is_attacked(placement: Sequence[int], col: int, row: int) -> bool:
    """Return True if any placed queen other than row ``row`` attacks (col, row).

    Brute-force O(N) scan; the reference against which board indices are checked.
    """
    for other_row, other_col in enumerate(placement):
        if other_col == UNPLACED or other_row == row:
            continue
        if other_col == col or abs(other_col - col) == abs(other_row - row):
            return True
    return False


def conflicts(placement: Sequence[int]) -> int:
    """Count attacking queen pairs in O(N), ignoring empty rows.

    Rows are distinct by construction, so only columns and the two diagonal
    directions can collide.
    """
    col_count: Counter[int] = Counter()
    rising: Counter[int] = Counter()
    falling: Counter[int] = Counter()

    for row, col in enumerate(placement):
        if col == UNPLACED:
            continue
        col_count[col] += 1
        rising[row - col] += 1
        falling[row + col] += 1

    def _pairs(counter: Counter[int]) -> int:
        return sum(count * (count - 1) // 2 for count in counter.values() if count > 1)

    return _pairs(col_count) + _pairs(rising) + _pairs(falling)


def is_valid_solution(placement: Sequence[int]) -> bool:
    """Return True if ``placement`` is a complete, non-attacking N-Queens solution.

    Contract
    - Input: sequence of length N where placement[row] = col (0-based)
    - Valid if: every 0 <= col < N and no two queens attack each other
    """
    n = len(placement)
    if n == 0:
        return False
    for col in placement:
        if not isinstance(col, int) or col < 0 or col >= n:
            return False
    return conflicts(placement) == 0


def format_placement(placement: Sequence[int]) -> str:
    """Render a placement as ``[c0,c1,...]`` without spaces."""
    return "[" + ",".join(str(col) for col in placement) + "]"
