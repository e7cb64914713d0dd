"""Tests for the solver: properties of the result set and both strategies."""

import pytest

from make10.core import (
    CancelToken,
    InvalidInputError,
    SearchCancelled,
    SearchOptions,
    evaluate_text,
    solve,
    solve_with_stats,
)
from make10.core.permutations import count_distinct_orderings

HANDS = [
    [1, 2, 3, 4],
    [9, 9, 9, 9],
    [0, 5, 5],
    [1, 1, 5, 8],
    [2, 3, 4],
    [7, 0, 0, 3],
]


def _digits_in(text):
    return sorted(int(ch) for ch in text if ch.isdigit())


class TestKnownCases:
    def test_two_digits(self):
        assert solve([2, 5]) == ["5 * 2"]
        assert solve([5, 5]) == ["5 + 5"]
        assert solve([1, 9]) == ["9 + 1"]

    def test_commutative_twins_collapse(self):
        assert solve([5, 2]) == solve([2, 5]) == ["5 * 2"]

    def test_three_digits(self):
        assert solve([2, 5, 1]) == ["5 * 2 * 1", "5 * 2 / 1"]

    def test_zero_terms(self):
        assert solve([0, 5, 5]) == ["5 + 5 + 0", "5 + 5 - 0"]

    def test_one_two_three_four(self):
        results = solve([1, 2, 3, 4])
        assert results[0] == "4 + 3 + 2 + 1"
        assert "4 * 3 - 2 * 1" in results

    def test_unreachable(self):
        assert solve([1, 1]) == []

    def test_other_target(self):
        assert "8 / (3 - 8 / 3)" in solve([8, 3, 8, 3], 24)

    def test_rational_intermediates_needed(self):
        assert solve([8, 3, 8, 3], 24, options=SearchOptions(integers_only=True)) == []


class TestProperties:
    @pytest.mark.parametrize("digits", HANDS)
    def test_digit_conservation(self, digits):
        for text in solve(digits):
            assert _digits_in(text) == sorted(digits)

    @pytest.mark.parametrize("digits", HANDS)
    def test_exactness(self, digits):
        # also covers the division guard: evaluate_text raises on x / 0
        for text in solve(digits):
            assert evaluate_text(text, digits) == 10

    @pytest.mark.parametrize("digits", HANDS)
    def test_ordering(self, digits):
        solutions, _ = solve_with_stats(digits)
        keys = [(s.score, s.text) for s in solutions]
        assert keys == sorted(keys)

    @pytest.mark.parametrize("digits", HANDS)
    def test_no_duplicates(self, digits):
        results = solve(digits)
        assert len(results) == len(set(results))

    def test_determinism(self):
        assert solve([3, 1, 4, 1, 5]) == solve([3, 1, 4, 1, 5])

    def test_input_order_does_not_matter(self):
        assert solve([4, 3, 2, 1]) == solve([1, 2, 3, 4])

    def test_zero_divisor_hand(self):
        # every candidate that divides by 0 - 0 is dropped without error
        for text in solve([0, 0, 9, 1]):
            assert evaluate_text(text) == 10


class TestStrategies:
    @pytest.mark.parametrize("digits", HANDS + [[1, 1, 2, 2, 5]])
    def test_indexed_matches_exhaustive(self, digits):
        indexed, _ = solve_with_stats(digits, strategy="indexed")
        exhaustive, _ = solve_with_stats(digits, strategy="exhaustive")
        # rank is discovery order and differs by strategy
        assert [(s.text, s.score) for s in indexed] == [(s.text, s.score) for s in exhaustive]

    def test_full_set_size(self):
        # counted by brute force over every tree of every ordering
        assert len(solve([1, 2, 3, 4])) == 18
        assert len(solve([1, 2, 3, 4], strategy="exhaustive")) == 18

    @pytest.mark.parametrize("options", [
        SearchOptions(integers_only=True),
        SearchOptions(non_negative=True),
        SearchOptions(prune_identities=True),
        SearchOptions(True, True, True),
    ])
    def test_options_agree_across_strategies(self, options):
        digits = [1, 2, 3, 4]
        assert solve(digits, options=options) == solve(digits, strategy="exhaustive", options=options)

    @pytest.mark.parametrize("options", [
        SearchOptions(integers_only=True),
        SearchOptions(non_negative=True),
        SearchOptions(prune_identities=True),
    ])
    def test_options_only_remove(self, options):
        digits = [2, 5, 1, 6]
        assert set(solve(digits, options=options)) <= set(solve(digits))

    def test_exhaustive_visits_distinct_orderings(self):
        _, stats = solve_with_stats([1, 1, 2, 3], strategy="exhaustive")
        assert stats.orderings == count_distinct_orderings([1, 1, 2, 3]) == 12

    def test_unknown_strategy(self):
        with pytest.raises(ValueError, match="Unknown strategy"):
            solve([1, 2], strategy="greedy")


class TestWorkers:
    def test_indexed_pool_matches_serial(self):
        assert solve([1, 2, 3, 4, 5], workers=2) == solve([1, 2, 3, 4, 5])

    def test_match_count_independent_of_workers(self):
        _, serial = solve_with_stats([1, 2, 3, 4, 5])
        _, pooled = solve_with_stats([1, 2, 3, 4, 5], workers=2)
        assert serial.matches == pooled.matches
        assert serial.matches >= serial.solutions

    def test_exhaustive_pool_matches_serial(self):
        digits = [1, 2, 3, 4]
        assert solve(digits, strategy="exhaustive", workers=2) == solve(digits, strategy="exhaustive")


class TestGuards:
    @pytest.mark.parametrize("digits", [[], [7], [1] * 7, [1, 10], [1, -2]])
    def test_rejected_before_search(self, digits):
        with pytest.raises(InvalidInputError):
            solve(digits)

    @pytest.mark.parametrize("strategy", ["indexed", "exhaustive"])
    def test_cancelled_search_yields_nothing(self, strategy):
        token = CancelToken()
        token.cancel()
        assert token.cancelled
        with pytest.raises(SearchCancelled):
            solve([1, 2, 3, 4], strategy=strategy, cancel=token)

    def test_six_digits_stay_bounded(self):
        solutions, stats = solve_with_stats([1, 2, 3, 4, 5, 6])
        assert solutions
        assert stats.joins < 1_000_000
        assert stats.solutions == len(solutions)
        for s in solutions[:50]:
            assert evaluate_text(s.text, [1, 2, 3, 4, 5, 6]) == 10
