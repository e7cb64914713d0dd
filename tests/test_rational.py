"""Tests for exact rational arithmetic."""

from fractions import Fraction

from make10.core.rational import (
    UNDEFINED,
    add,
    as_rational,
    divide,
    equals_integer,
    is_integer,
    multiply,
    subtract,
)


class TestArithmetic:
    def test_lowest_terms(self):
        value = divide(as_rational(6), as_rational(4))
        assert (value.numerator, value.denominator) == (3, 2)

    def test_sign_lives_on_numerator(self):
        value = divide(as_rational(1), as_rational(-3))
        assert value.denominator > 0
        assert value.numerator == -1

    def test_basic_ops(self):
        a, b = as_rational(7), as_rational(2)
        assert add(a, b) == 9
        assert subtract(a, b) == 5
        assert multiply(a, b) == 14
        assert divide(a, b) == Fraction(7, 2)

    def test_divide_by_zero_is_undefined(self):
        assert divide(as_rational(5), as_rational(0)) is UNDEFINED

    def test_nested_division_stays_exact(self):
        third = divide(as_rational(1), as_rational(3))
        total = add(add(third, third), third)
        assert total == 1
        assert is_integer(total)


class TestEqualsInteger:
    def test_match(self):
        assert equals_integer(Fraction(20, 2), 10)

    def test_fraction_never_matches(self):
        assert not equals_integer(Fraction(21, 2), 10)
        assert not is_integer(Fraction(21, 2))

    def test_undefined_never_matches(self):
        assert not equals_integer(UNDEFINED, 10)
        assert not is_integer(UNDEFINED)
