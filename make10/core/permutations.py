# make10/core/permutations.py
"""
Orderings and splits of a digit multiset.

Both enumerators work on *values*: two digits with the same value are
interchangeable, so orderings (and splits) that differ only by swapping equal
digits are produced once.
"""
from __future__ import annotations
from math import factorial
from collections import Counter
from typing import Iterator, List, Sequence, Tuple, TypeVar

T = TypeVar("T")


def distinct_orderings(items: Sequence[T], key=lambda x: x) -> Iterator[Tuple[T, ...]]:
    """
    Yield every distinct ordering of ``items`` in lexicographic order of ``key``.

    Items are sorted first; at each recursion depth a candidate is skipped when
    it has the same key as the previous unused candidate, so
    [1, 1, 2] yields (1,1,2), (1,2,1), (2,1,1) and nothing else.
    """
    pool = sorted(items, key=key)
    n = len(pool)
    used = [False] * n
    current: List[T] = []

    def _walk() -> Iterator[Tuple[T, ...]]:
        if len(current) == n:
            yield tuple(current)
            return
        for i in range(n):
            if used[i]:
                continue
            if i > 0 and not used[i - 1] and key(pool[i]) == key(pool[i - 1]):
                continue
            used[i] = True
            current.append(pool[i])
            yield from _walk()
            current.pop()
            used[i] = False

    yield from _walk()


def count_distinct_orderings(values: Sequence[int]) -> int:
    """N! / prod(k! for each repeated value)."""
    total = factorial(len(values))
    for k in Counter(values).values():
        total //= factorial(k)
    return total


def ordered_splits(multiset: Tuple[int, ...]) -> Iterator[Tuple[Tuple[int, ...], Tuple[int, ...]]]:
    """
    Yield every distinct (left, right) split of a sorted value tuple into two
    non-empty sorted sub-multisets. Both orientations are produced, since the
    left/right role matters for - and /.
    """
    counts = sorted(Counter(multiset).items())
    size = len(multiset)

    def _choose(idx: int, picked: List[int]) -> Iterator[List[int]]:
        if idx == len(counts):
            yield list(picked)
            return
        value, available = counts[idx]
        for take in range(available + 1):
            picked.extend([value] * take)
            yield from _choose(idx + 1, picked)
            del picked[len(picked) - take:]

    for left in _choose(0, []):
        if 0 < len(left) < size:
            rest = Counter(multiset)
            rest.subtract(left)
            right = tuple(sorted(rest.elements()))
            yield tuple(left), right
