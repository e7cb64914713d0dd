# make10/core/rational.py
"""
Exact arithmetic for the solver.

Every intermediate value is a ``fractions.Fraction`` (arbitrary precision,
always in lowest terms with a positive denominator). Operations that have no
result return ``None`` instead of raising, so a bad candidate is simply
dropped by the caller and the search carries on.
"""
from __future__ import annotations
from fractions import Fraction
from typing import Optional

# Marker for "this candidate has no value" (division by zero or a pruned step).
UNDEFINED = None


def as_rational(n: int) -> Fraction:
    return Fraction(int(n))


def add(a: Fraction, b: Fraction) -> Fraction:
    return a + b


def subtract(a: Fraction, b: Fraction) -> Fraction:
    return a - b


def multiply(a: Fraction, b: Fraction) -> Fraction:
    return a * b


def divide(a: Fraction, b: Fraction) -> Optional[Fraction]:
    """a / b, or UNDEFINED when b is zero."""
    if b == 0:
        return UNDEFINED
    return a / b


def is_integer(value: Optional[Fraction]) -> bool:
    return value is not None and value.denominator == 1


def equals_integer(value: Optional[Fraction], target: int) -> bool:
    """Exact comparison against an integer target; UNDEFINED never matches."""
    if value is None:
        return False
    return value.denominator == 1 and value.numerator == int(target)
