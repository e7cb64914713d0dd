# make10/core/operators.py
from __future__ import annotations
from enum import Enum
from fractions import Fraction
from typing import Callable, Dict, Optional

from . import rational

ADDITIVE = "additive"
MULTIPLICATIVE = "multiplicative"


class Operator(Enum):
    """
    The four binary operators. Each member carries:
      symbol      - text used by the formatter
      precedence  - 1 for +/-, 2 for * and /
      commutative - True for + and *
      family      - ADDITIVE or MULTIPLICATIVE (groups an operator with its inverse)
    """
    ADD = ("+", 1, True, ADDITIVE)
    SUBTRACT = ("-", 1, False, ADDITIVE)
    MULTIPLY = ("*", 2, True, MULTIPLICATIVE)
    DIVIDE = ("/", 2, False, MULTIPLICATIVE)

    def __init__(self, symbol: str, precedence: int, commutative: bool, family: str):
        self.symbol = symbol
        self.precedence = precedence
        self.commutative = commutative
        self.family = family

    def __repr__(self) -> str:
        return f"Operator.{self.name}"

    def apply(self, a: Fraction, b: Fraction) -> Optional[Fraction]:
        return _FUNCS[self](a, b)

    @property
    def inverse(self) -> "Operator":
        return _INVERSE[self]

    @property
    def penalty(self) -> int:
        """Complexity penalty: 0 for +/-, 1 for * and /."""
        return 0 if self.family == ADDITIVE else 1


_FUNCS: Dict[Operator, Callable[[Fraction, Fraction], Optional[Fraction]]] = {
    Operator.ADD: rational.add,
    Operator.SUBTRACT: rational.subtract,
    Operator.MULTIPLY: rational.multiply,
    Operator.DIVIDE: rational.divide,
}

_INVERSE = {
    Operator.ADD: Operator.SUBTRACT,
    Operator.SUBTRACT: Operator.ADD,
    Operator.MULTIPLY: Operator.DIVIDE,
    Operator.DIVIDE: Operator.MULTIPLY,
}

# Enumeration order used everywhere operators are tried.
OPERATORS = (Operator.ADD, Operator.SUBTRACT, Operator.MULTIPLY, Operator.DIVIDE)

# The "direct" operator of each family, used when rebuilding a flattened group.
DIRECT = {ADDITIVE: Operator.ADD, MULTIPLICATIVE: Operator.MULTIPLY}


def binds_looser(op1: Operator, op2: Operator) -> bool:
    """True when op1 binds less tightly than op2."""
    return op1.precedence < op2.precedence
