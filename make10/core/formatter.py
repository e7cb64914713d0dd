# make10/core/formatter.py
"""
Infix rendering with the minimum parentheses the grammar needs.

Grammar (left-associative, two precedence levels):
    expr   := expr ("+" | "-") term | term
    term   := term ("*" | "/") factor | factor
    factor := DIGIT | "(" expr ")"

So a left child is wrapped only when it binds looser than its parent, and a
right child is wrapped when it binds looser than *or as loosely as* its parent.
The rendering is injective: two different trees never share a string.
"""
from __future__ import annotations
from typing import Tuple

from .expression import ExpressionNode, Internal, Leaf
from .operators import binds_looser


def _needs_parens(child: ExpressionNode, parent: Internal, is_left: bool) -> bool:
    if not isinstance(child, Internal):
        return False
    if is_left:
        return binds_looser(child.op, parent.op)
    return not binds_looser(parent.op, child.op)


def _render(node: ExpressionNode) -> Tuple[str, int]:
    if isinstance(node, Leaf):
        return str(node.value), 0

    left, left_pairs = _render(node.left)
    right, right_pairs = _render(node.right)
    pairs = left_pairs + right_pairs

    if _needs_parens(node.left, node, True):
        left = f"({left})"
        pairs += 1
    if _needs_parens(node.right, node, False):
        right = f"({right})"
        pairs += 1

    return f"{left} {node.op.symbol} {right}", pairs


def to_text(node: ExpressionNode) -> str:
    """Canonical infix string, e.g. ``4 * 3 - 2 * 1``."""
    return _render(node)[0]


def render(node: ExpressionNode) -> Tuple[str, int]:
    """(text, parenthesis pairs) in one pass."""
    return _render(node)
