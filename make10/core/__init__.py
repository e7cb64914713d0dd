# make10/core/__init__.py
from .coerce_utils import InvalidInputError, coerce_target, parse_digits, validate_digits
from .evaluator import SearchOptions, evaluate, evaluate_text
from .solver import (
    DEFAULT_TARGET,
    STRATEGIES,
    CancelToken,
    SearchCancelled,
    SearchStats,
    Solution,
    solve,
    solve_with_stats,
)

__all__ = [
    # engine
    "solve", "solve_with_stats", "Solution", "SearchStats", "SearchOptions",
    "CancelToken", "SearchCancelled", "DEFAULT_TARGET", "STRATEGIES",

    # checking
    "evaluate", "evaluate_text",

    # input boundary
    "InvalidInputError", "parse_digits", "validate_digits", "coerce_target",
]
