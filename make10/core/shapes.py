# make10/core/shapes.py
"""
Tree shapes and operator assignments over a fixed left-to-right leaf order.

A shape over n leaves is built by the classic recursive split: pick k, put a
shape over the first k leaves on the left and one over the rest on the right.
There are Catalan(n-1) shapes, and each one takes 4**(n-1) operator
assignments.
"""
from __future__ import annotations
from fractions import Fraction
from functools import lru_cache
from itertools import product
from math import comb
from typing import Callable, Dict, Iterator, List, Optional, Sequence, Tuple

from .evaluator import DEFAULT_OPTIONS, SearchOptions, apply_step
from .expression import ExpressionNode, Internal, Leaf
from .operators import OPERATORS, Operator
from .rational import as_rational

# A shape is None (a leaf slot) or a (left, right) pair of shapes.
Shape = Optional[tuple]

# (value, node) pairs; the value is cached so parents never re-evaluate.
Evaluated = Tuple[Fraction, ExpressionNode]


def catalan(n: int) -> int:
    return comb(2 * n, n) // (n + 1)


def tree_count(n_leaves: int) -> int:
    """Size of the shape x operator space for one ordering."""
    return catalan(n_leaves - 1) * len(OPERATORS) ** (n_leaves - 1)


@lru_cache(maxsize=None)
def _shapes(n: int) -> Tuple[Shape, ...]:
    if n == 1:
        return (None,)
    out = []
    for k in range(1, n):
        for left in _shapes(k):
            for right in _shapes(n - k):
                out.append((left, right))
    return tuple(out)


def enumerate_shapes(n_leaves: int) -> Iterator[Shape]:
    yield from _shapes(n_leaves)


def leaf_count(shape: Shape) -> int:
    if shape is None:
        return 1
    return leaf_count(shape[0]) + leaf_count(shape[1])


def operator_assignments(n_internal: int) -> Iterator[Tuple[Operator, ...]]:
    return product(OPERATORS, repeat=n_internal)


def realize(shape: Shape, leaves: Sequence[Leaf], ops: Sequence[Operator]) -> ExpressionNode:
    """
    Fill a shape: leaves left to right, operators in pre-order
    (root first, then the left subtree, then the right subtree).
    """
    leaf_iter = iter(leaves)
    op_iter = iter(ops)

    def _fill(s: Shape) -> ExpressionNode:
        if s is None:
            return next(leaf_iter)
        op = next(op_iter)
        left = _fill(s[0])
        right = _fill(s[1])
        return Internal(op, left, right)

    return _fill(shape)


def enumerate_trees(leaves: Sequence[Leaf]) -> Iterator[ExpressionNode]:
    """Every shape x every operator assignment, unevaluated."""
    n = len(leaves)
    for shape in enumerate_shapes(n):
        for ops in operator_assignments(n - 1):
            yield realize(shape, leaves, ops)


def build_evaluated(leaves: Sequence[Leaf],
                    options: SearchOptions = DEFAULT_OPTIONS,
                    on_join: Optional[Callable[[], None]] = None) -> List[Evaluated]:
    """
    All valid trees over ``leaves`` (in this order) with their exact values.

    Each leaf range [i..j] is built once and reused by every parent that
    spans it. A subtree whose value is undefined is dropped where it is
    made, so no parent ever sees it.
    """
    memo: Dict[Tuple[int, int], List[Evaluated]] = {}

    def _range(i: int, j: int) -> List[Evaluated]:
        key = (i, j)
        if key in memo:
            return memo[key]
        if i == j:
            out = [(as_rational(leaves[i].value), leaves[i])]
        else:
            out = []
            for k in range(i, j):
                lefts = _range(i, k)
                rights = _range(k + 1, j)
                for lv, ln in lefts:
                    for rv, rn in rights:
                        for op in OPERATORS:
                            if on_join is not None:
                                on_join()
                            value = apply_step(op, lv, rv, options)
                            if value is not None:
                                out.append((value, Internal(op, ln, rn)))
        memo[key] = out
        return out

    return _range(0, len(leaves) - 1)
