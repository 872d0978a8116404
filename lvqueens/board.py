"""Constraint-tracking board for the N-Queens problem.

The board stores one queen per row and keeps three boolean feasibility indices
so that legality checks are O(1) and never require scanning placed queens.

Representation
--------------
- ``placement[row] = col`` places a queen at (col, row); ``-1`` marks a row
    that is still empty.
- ``free_columns[col]`` is True while no queen occupies column ``col``.
- ``free_diag_rising[row - col + (size - 1)]`` is True while the diagonal
    running up-right through (col, row) is unattacked. The shift maps the range
    ``[-(size-1), size-1]`` onto ``[0, 2*size-2]``.
- ``free_diag_falling[row + col]`` is True while the anti-diagonal through
    (col, row) is unattacked.

Invariant
---------
A cell (col, row) is attack-free under all placed queens if and only if the
three corresponding index entries are True. ``place`` and ``remove`` are the
only mutators and keep the invariant; ``reset`` restores the empty board.

Contract (public API)
---------------------
- Queens are placed in increasing row order without gaps (row 0, 1, 2, ...).
  ``is_complete`` relies on this and only inspects the last row.
- ``remove`` must undo the most recent placement of that row (LIFO).
- Coordinates are validated: out-of-range values raise ``IndexError``;
  placing on an attacked cell or removing a queen that is not there raises
  ``ValueError``. The feasibility indices are never left inconsistent.
"""

from __future__ import annotations

from typing import List, Tuple

UNPLACED = -1


class ConstraintBoard:
    """N-Queens board with O(1) column and diagonal feasibility checks.

    Parameters
    ----------
    size : int
        Board dimension N (N >= 1).
    """

    __slots__ = (
        "_size",
        "_shift",
        "placement",
        "free_columns",
        "free_diag_rising",
        "free_diag_falling",
        "placed_count",
    )

    def __init__(self, size: int):
        if size < 1:
            raise ValueError(f"Board size must be >= 1, got {size}")
        self._size = size
        self._shift = size - 1
        self.placement: List[int] = [UNPLACED] * size
        self.free_columns: List[bool] = [True] * size
        self.free_diag_rising: List[bool] = [True] * (2 * size - 1)
        self.free_diag_falling: List[bool] = [True] * (2 * size - 1)
        self.placed_count = 0

    @property
    def size(self) -> int:
        return self._size

    def reset(self) -> None:
        """Remove every queen and mark all columns and diagonals free again."""
        size = self._size
        self.placement[:] = [UNPLACED] * size
        self.free_columns[:] = [True] * size
        self.free_diag_rising[:] = [True] * (2 * size - 1)
        self.free_diag_falling[:] = [True] * (2 * size - 1)
        self.placed_count = 0

    def _check_bounds(self, col: int, row: int) -> None:
        if not (0 <= col < self._size and 0 <= row < self._size):
            raise IndexError(f"Cell (col={col}, row={row}) is outside a {self._size}x{self._size} board")

    def can_place(self, col: int, row: int) -> bool:
        """Return True if a queen at (col, row) is attacked by no placed queen."""
        self._check_bounds(col, row)
        return (
            self.free_columns[col]
            and self.free_diag_rising[row - col + self._shift]
            and self.free_diag_falling[row + col]
        )

    def place(self, col: int, row: int) -> None:
        """Place a queen at (col, row) and mark its lines as attacked.

        Raises
        ------
        IndexError
            If the cell lies outside the board.
        ValueError
            If the row already holds a queen or the cell is attacked.
        """
        self._check_bounds(col, row)
        if self.placement[row] != UNPLACED:
            raise ValueError(f"Row {row} already holds a queen at column {self.placement[row]}")
        rising = row - col + self._shift
        falling = row + col
        if not (self.free_columns[col] and self.free_diag_rising[rising] and self.free_diag_falling[falling]):
            raise ValueError(f"Cell (col={col}, row={row}) is attacked by a placed queen")
        self.placement[row] = col
        self.free_columns[col] = False
        self.free_diag_rising[rising] = False
        self.free_diag_falling[falling] = False
        self.placed_count += 1

    def remove(self, col: int, row: int) -> None:
        """Remove the queen at (col, row), freeing its column and diagonals.

        Raises
        ------
        IndexError
            If the cell lies outside the board.
        ValueError
            If no queen sits at (col, row).
        """
        self._check_bounds(col, row)
        if self.placement[row] != col:
            raise ValueError(f"No queen at (col={col}, row={row}) to remove")
        self.placement[row] = UNPLACED
        self.free_columns[col] = True
        self.free_diag_rising[row - col + self._shift] = True
        self.free_diag_falling[row + col] = True
        self.placed_count -= 1

    def is_complete(self) -> bool:
        """Return True once every row holds a queen.

        With row-ordered placement, the last row being set implies all rows
        are set; ``placed_count`` guards against out-of-order callers.
        """
        return self.placement[self._size - 1] != UNPLACED and self.placed_count == self._size

    def solution(self) -> List[int]:
        """Return a copy of the placement list (``solution[row] = col``)."""
        return self.placement.copy()

    def snapshot(self) -> Tuple[Tuple[int, ...], Tuple[bool, ...], Tuple[bool, ...], Tuple[bool, ...]]:
        """Return an immutable copy of the full board state for comparisons."""
        return (
            tuple(self.placement),
            tuple(self.free_columns),
            tuple(self.free_diag_rising),
            tuple(self.free_diag_falling),
        )

    def __repr__(self) -> str:
        return f"ConstraintBoard(size={self._size}, placement={self.placement!r})"

    def __str__(self) -> str:
        return "[" + ",".join(map(str, self.placement)) + "]"
