# make10/core/canonical.py
"""
Canonical form of an expression tree.

Trees that only differ by commutativity, associativity, or where an inverse
operator sits inside one precedence family collapse to a single tree:

    (a - x) + y   ->  a + y - x
    a - (b - c)   ->  a + c - b
    a / (b * c)   ->  a / b / c
    1 + (2 + 3)   ->  3 + 2 + 1

A maximal run of +/- nodes (or of * and / nodes) is a *group*. A group is
flattened into positive and negative terms, the terms are sorted in
descending order and the group is rebuilt left-deep:

    p1 + p2 + ... - n1 - n2 ...

Nothing is simplified numerically: the same operators and the same digit
leaves come out, with the same value.
"""
from __future__ import annotations
from typing import List, Tuple

from .expression import ExpressionNode, Internal, depth
from .formatter import to_text
from .operators import DIRECT, Operator


def term_key(node: ExpressionNode) -> Tuple[bool, int, str]:
    """Sort key for terms inside a group (sorted descending)."""
    return isinstance(node, Internal), depth(node), to_text(node)


def _split_terms(node: ExpressionNode, family: str, positive: bool,
                 pos: List[ExpressionNode], neg: List[ExpressionNode]) -> None:
    if isinstance(node, Internal) and node.op.family == family:
        _split_terms(node.left, family, positive, pos, neg)
        right_positive = positive if node.op.commutative else not positive
        _split_terms(node.right, family, right_positive, pos, neg)
    else:
        (pos if positive else neg).append(node)


def _rebuild(family: str, pos: List[ExpressionNode], neg: List[ExpressionNode]) -> ExpressionNode:
    pos.sort(key=term_key, reverse=True)
    neg.sort(key=term_key, reverse=True)

    direct = DIRECT[family]
    node = pos[0]
    for term in pos[1:]:
        node = Internal(direct, node, term)
    for term in neg:
        node = Internal(direct.inverse, node, term)
    return node


def join(op: Operator, left: ExpressionNode, right: ExpressionNode) -> ExpressionNode:
    """
    Canonical form of ``left op right`` where both children are already
    canonical. Only the top group is re-flattened; terms are reused as-is.
    """
    pos: List[ExpressionNode] = []
    neg: List[ExpressionNode] = []
    _split_terms(left, op.family, True, pos, neg)
    _split_terms(right, op.family, op.commutative, pos, neg)
    return _rebuild(op.family, pos, neg)


def canonicalize(node: ExpressionNode) -> ExpressionNode:
    """Canonical form of an arbitrary tree (post-order ``join``)."""
    if not isinstance(node, Internal):
        return node
    return join(node.op, canonicalize(node.left), canonicalize(node.right))
