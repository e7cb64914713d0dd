# make10/core/evaluator.py
from __future__ import annotations
import ast
from dataclasses import dataclass
from fractions import Fraction
from typing import Any, List, Mapping, Optional, Sequence

from .expression import ExpressionNode, Internal
from .operators import Operator
from .rational import as_rational, is_integer


@dataclass(frozen=True)
class SearchOptions:
    """
    Optional pruning rules applied to every intermediate step of a candidate.
    All off by default.
      integers_only    - every intermediate value must be a whole number
      non_negative     - a subtraction may not go below zero
      prune_identities - drop x / 1, x - 0 and 0 / x (their twins x * 1,
                         x + 0 and 0 * x are kept)
    """
    integers_only: bool = False
    non_negative: bool = False
    prune_identities: bool = False

    @classmethod
    def from_config(cls, config: Mapping[str, Any]) -> "SearchOptions":
        return cls(
            integers_only=bool(config.get("SOLVER_INTEGERS_ONLY", False)),
            non_negative=bool(config.get("SOLVER_NON_NEGATIVE", False)),
            prune_identities=bool(config.get("SOLVER_PRUNE_IDENTITIES", False)),
        )


DEFAULT_OPTIONS = SearchOptions()


def apply_step(op: Operator, a: Fraction, b: Fraction,
               options: SearchOptions = DEFAULT_OPTIONS) -> Optional[Fraction]:
    """
    One node's worth of arithmetic. Returns None for an invalid step
    (division by zero, or a step the options rule out).
    """
    if options.prune_identities:
        if op is Operator.DIVIDE and (b == 1 or a == 0):
            return None
        if op is Operator.SUBTRACT and b == 0:
            return None

    result = op.apply(a, b)
    if result is None:
        return None
    if options.non_negative and op is Operator.SUBTRACT and result < 0:
        return None
    if options.integers_only and not is_integer(result):
        return None
    return result


def evaluate(node: ExpressionNode, options: SearchOptions = DEFAULT_OPTIONS) -> Optional[Fraction]:
    """
    Exact value of a tree, bottom-up. Returns None as soon as any subtree is
    invalid; the right sibling of an invalid left subtree is never evaluated.
    """
    if not isinstance(node, Internal):
        return as_rational(node.value)

    left = evaluate(node.left, options)
    if left is None:
        return None
    right = evaluate(node.right, options)
    if right is None:
        return None
    return apply_step(node.op, left, right, options)


# ============================================================
# Exact evaluation of expression text (for checking answers)
# ============================================================

ALLOWED_NODES = (
    ast.Expression, ast.BinOp, ast.Constant,
    ast.Add, ast.Sub, ast.Mult, ast.Div,
)

_AST_OPS = {
    ast.Add: Operator.ADD,
    ast.Sub: Operator.SUBTRACT,
    ast.Mult: Operator.MULTIPLY,
    ast.Div: Operator.DIVIDE,
}


def _used_digits(tree: ast.AST) -> List[int]:
    return [n.value for n in ast.walk(tree) if isinstance(n, ast.Constant)]


def evaluate_text(expr: str, digits: Optional[Sequence[int]] = None) -> Fraction:
    """
    Evaluate an infix expression exactly.
      - only single digits, + - * / and parentheses are allowed
      - if ``digits`` is given, the expression must use each of them exactly once
    Raises ValueError for anything else, including division by zero.
    """
    try:
        tree = ast.parse((expr or "").strip(), mode="eval")
    except SyntaxError as e:
        raise ValueError(f"Invalid expression: {expr!r}") from e

    for node in ast.walk(tree):
        if not isinstance(node, ALLOWED_NODES):
            raise ValueError(f"Illegal expression: {type(node).__name__}")
        if isinstance(node, ast.Constant):
            if type(node.value) is not int or not 0 <= node.value <= 9:
                raise ValueError(f"Only single digits are allowed, got {node.value!r}")

    if digits is not None:
        if sorted(_used_digits(tree)) != sorted(int(d) for d in digits):
            raise ValueError("Expression must use each digit exactly once")

    def _rec(n: ast.AST) -> Fraction:
        if isinstance(n, ast.Expression):
            return _rec(n.body)
        if isinstance(n, ast.Constant):
            return as_rational(n.value)
        left, right = _rec(n.left), _rec(n.right)
        value = _AST_OPS[type(n.op)].apply(left, right)
        if value is None:
            raise ValueError("Division by zero")
        return value

    return _rec(tree)
