"""Tests for the canonical form used to dedupe solutions."""

import pytest

from make10.core.canonical import canonicalize, join, term_key
from make10.core.evaluator import evaluate
from make10.core.expression import Internal, digits_from_values, leaf, Leaf, leaf_values
from make10.core.formatter import to_text
from make10.core.operators import Operator
from make10.core.shapes import enumerate_trees

ADD, SUB, MUL, DIV = Operator.ADD, Operator.SUBTRACT, Operator.MULTIPLY, Operator.DIVIDE


def op(o, a, b):
    a = leaf(a) if isinstance(a, int) else a
    b = leaf(b) if isinstance(b, int) else b
    return Internal(o, a, b)


def canonical_text(tree):
    return to_text(canonicalize(tree))


class TestCanonicalText:
    @pytest.mark.parametrize("tree, expected", [
        (op(ADD, op(SUB, 7, 2), 5), "7 + 5 - 2"),
        (op(SUB, 9, op(SUB, 4, 1)), "9 + 1 - 4"),
        (op(DIV, 8, op(MUL, 4, 2)), "8 / 4 / 2"),
        (op(ADD, 1, op(ADD, 2, 3)), "3 + 2 + 1"),
        (op(MUL, 2, 5), "5 * 2"),
        (op(ADD, 1, op(MUL, 2, 3)), "3 * 2 + 1"),
        (op(SUB, op(MUL, 1, 2), op(MUL, 3, 4)), "2 * 1 - 4 * 3"),
    ])
    def test_known_forms(self, tree, expected):
        assert canonical_text(tree) == expected

    def test_commutative_reorderings_collapse(self):
        assert canonical_text(op(ADD, 1, 9)) == canonical_text(op(ADD, 9, 1)) == "9 + 1"
        a = op(SUB, op(MUL, 4, 3), op(MUL, 2, 1))
        b = op(SUB, op(MUL, 3, 4), op(MUL, 1, 2))
        assert canonical_text(a) == canonical_text(b) == "4 * 3 - 2 * 1"

    def test_subtraction_order_kept(self):
        assert canonical_text(op(SUB, 7, 2)) == "7 - 2"
        assert canonical_text(op(SUB, 2, 7)) == "2 - 7"

    def test_idempotent(self):
        tree = op(DIV, op(SUB, 9, op(ADD, 1, 4)), op(DIV, 2, 6))
        once = canonicalize(tree)
        assert canonicalize(once) == once


class TestInvariants:
    def test_value_and_digits_preserved(self):
        leaves = [Leaf(d) for d in digits_from_values([6, 3, 2, 1])]
        for tree in enumerate_trees(leaves):
            value = evaluate(tree)
            if value is None:
                continue
            canon = canonicalize(tree)
            assert evaluate(canon) == value
            assert sorted(leaf_values(canon)) == [1, 2, 3, 6]

    def test_join_is_compositional(self):
        leaves = [Leaf(d) for d in digits_from_values([5, 4, 2])]
        for tree in enumerate_trees(leaves):
            direct = canonicalize(tree)
            stepwise = join(tree.op, canonicalize(tree.left), canonicalize(tree.right))
            assert to_text(direct) == to_text(stepwise)

    def test_compound_terms_sort_first(self):
        assert term_key(op(MUL, 2, 3)) > term_key(leaf(9))
