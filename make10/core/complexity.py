# make10/core/complexity.py
from __future__ import annotations
from typing import Tuple

from .expression import ExpressionNode, iter_internal
from .formatter import render


def score_expression_complexity(node: ExpressionNode) -> int:
    """
    operators used (+/- = 1 each, * and / = 2 each) plus one per
    parenthesis pair in the canonical rendering.
    """
    score = 0
    for internal in iter_internal(node):
        score += 1 + internal.op.penalty
    return score + render(node)[1]


def sort_key(score: int, text: str, rank: int = 0) -> Tuple[int, str, int]:
    """Ascending score, then ascending text; rank only as a last resort."""
    return score, text, rank
