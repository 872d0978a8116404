"""Las Vegas N-Queens: constraint-tracking board, backtracking and randomized seeding."""

from .backtracking import SearchTimeout, bt_nqueens_first, search, search_with_stats
from .board import UNPLACED, ConstraintBoard
from .lasvegas import BudgetExceededError, LasVegasResult, seed, solve, solve_until_success, solve_with_seed
from .utils import conflicts, format_placement, is_attacked, is_valid_solution

__all__ = [
    "ConstraintBoard",
    "UNPLACED",
    "search",
    "search_with_stats",
    "bt_nqueens_first",
    "SearchTimeout",
    "seed",
    "solve_with_seed",
    "solve_until_success",
    "solve",
    "LasVegasResult",
    "BudgetExceededError",
    "conflicts",
    "format_placement",
    "is_attacked",
    "is_valid_solution",
]
