# make10/core/expression.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Iterator, List, Sequence, Union

from .operators import Operator


@dataclass(frozen=True)
class Digit:
    """One input digit and the position it was typed at."""
    value: int
    position: int


@dataclass(frozen=True)
class Leaf:
    digit: Digit

    @property
    def value(self) -> int:
        return self.digit.value


@dataclass(frozen=True)
class Internal:
    op: Operator
    left: "ExpressionNode"
    right: "ExpressionNode"


ExpressionNode = Union[Leaf, Internal]


def digits_from_values(values: Sequence[int]) -> List[Digit]:
    """Tag each input value with its position."""
    return [Digit(int(v), i) for i, v in enumerate(values)]


def leaf(value: int, position: int = 0) -> Leaf:
    return Leaf(Digit(int(value), position))


def iter_leaves(node: ExpressionNode) -> Iterator[Leaf]:
    if isinstance(node, Leaf):
        yield node
        return
    yield from iter_leaves(node.left)
    yield from iter_leaves(node.right)


def iter_internal(node: ExpressionNode) -> Iterator[Internal]:
    if isinstance(node, Internal):
        yield node
        yield from iter_internal(node.left)
        yield from iter_internal(node.right)


def leaf_values(node: ExpressionNode) -> List[int]:
    return [lf.value for lf in iter_leaves(node)]


def depth(node: ExpressionNode) -> int:
    """Leaves have depth 0."""
    if isinstance(node, Leaf):
        return 0
    return 1 + max(depth(node.left), depth(node.right))
