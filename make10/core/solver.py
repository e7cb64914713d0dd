# make10/core/solver.py
"""
Find every distinct expression over a hand of digits that hits a target.

    solve([1, 2, 3, 4])  ->  ["4 + 3 + 2 + 1", ..., "4 * 3 - 2 * 1", ...]

Each digit is used exactly once, with + - * / and any grouping. Results are
canonical strings (see canonical.py), one per distinct expression, ordered
from simplest to most complex.

Two strategies produce the same result set:

  exhaustive  every distinct ordering of the digits, every tree shape and
              every operator assignment, evaluated and filtered. Slow at six
              digits; kept as the reference.
  indexed     works on sub-multisets instead of orderings. Small groups of
              digits are expanded once into their distinct canonical
              subexpressions, indexed by exact value; bigger groups are
              searched goal-first by working out what value the other side
              of a split has to produce.
"""
from __future__ import annotations
import logging
import threading
import time
from concurrent.futures import ProcessPoolExecutor, as_completed
from dataclasses import dataclass
from fractions import Fraction
from typing import Dict, List, Optional, Sequence, Tuple

from .canonical import canonicalize, join
from .coerce_utils import MAX_DIGITS, MIN_DIGITS, validate_digits, values_key
from .complexity import score_expression_complexity, sort_key
from .evaluator import DEFAULT_OPTIONS, SearchOptions, apply_step
from .expression import Digit, ExpressionNode, Leaf, digits_from_values, leaf
from .formatter import to_text
from .operators import OPERATORS, Operator
from .permutations import distinct_orderings, ordered_splits
from .rational import equals_integer
from .shapes import build_evaluated

logger = logging.getLogger(__name__)

DEFAULT_TARGET = 10
STRATEGIES = ("indexed", "exhaustive")

# Sub-multisets up to this size are expanded in full and indexed by value.
INDEX_LIMIT = 4


class SearchCancelled(RuntimeError):
    """The caller gave up on this search; no result is produced."""


class CancelToken:
    """Shared flag a caller sets to abandon an in-flight search."""

    def __init__(self):
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def raise_if_cancelled(self) -> None:
        if self._event.is_set():
            raise SearchCancelled("search abandoned by caller")


@dataclass(frozen=True)
class Solution:
    text: str
    score: int
    rank: int


@dataclass
class SearchStats:
    strategy: str
    joins: int = 0       # operator applications attempted
    lookups: int = 0     # value-index lookups (indexed only)
    matches: int = 0     # target hits before dedup (indexed: per root split)
    orderings: int = 0   # digit orderings visited (exhaustive only)
    solutions: int = 0
    elapsed: float = 0.0

    def count_join(self) -> None:
        self.joins += 1

    def merge(self, other: "SearchStats") -> None:
        self.joins += other.joins
        self.lookups += other.lookups
        self.matches += other.matches
        self.orderings += other.orderings


class _Collector:
    """Dedupes canonical trees by their text, remembering discovery order."""

    def __init__(self):
        self.by_text: Dict[str, Solution] = {}

    def add_text(self, text: str, score: int) -> None:
        if text not in self.by_text:
            self.by_text[text] = Solution(text, score, len(self.by_text))

    def add(self, node: ExpressionNode) -> None:
        self.add_text(to_text(node), score_expression_complexity(node))

    def ordered(self) -> List[Solution]:
        return sorted(self.by_text.values(), key=lambda s: sort_key(s.score, s.text, s.rank))


# ============================================================
# Exhaustive strategy (orderings x shapes x operators)
# ============================================================

def _exhaustive_ordering(ordering: Sequence[Digit], target: int,
                         options: SearchOptions, stats: SearchStats,
                         collector: _Collector) -> None:
    leaves = [Leaf(d) for d in ordering]
    stats.orderings += 1
    for value, node in build_evaluated(leaves, options, on_join=stats.count_join):
        if equals_integer(value, target):
            stats.matches += 1
            collector.add(canonicalize(node))


def _exhaustive_worker(orderings: List[Tuple[Digit, ...]], target: int,
                       options: SearchOptions) -> Tuple[List[Tuple[str, int]], SearchStats]:
    stats = SearchStats("exhaustive")
    collector = _Collector()
    for ordering in orderings:
        _exhaustive_ordering(ordering, target, options, stats, collector)
    return [(s.text, s.score) for s in collector.by_text.values()], stats


# ============================================================
# Indexed strategy (sub-multisets, value index, goal-first)
# ============================================================

# A canonical subexpression: (exact value, canonical tree, canonical text).
Entry = Tuple[Fraction, ExpressionNode, str]

# Marker: any value on the other side works (e.g. 0 * x == 0).
_ANY = object()


def _needed_right(op: Operator, left: Fraction, target: Fraction):
    """Value r with ``left op r == target``; None if impossible, _ANY if any r works."""
    if op is Operator.ADD:
        return target - left
    if op is Operator.SUBTRACT:
        return left - target
    if op is Operator.MULTIPLY:
        if left == 0:
            return _ANY if target == 0 else None
        return target / left
    # DIVIDE
    if target == 0:
        return _ANY if left == 0 else None
    if left == 0:
        return None
    return left / target


def _needed_left(op: Operator, right: Fraction, target: Fraction):
    """Value l with ``l op right == target``; None if impossible, _ANY if any l works."""
    if op is Operator.ADD:
        return target - right
    if op is Operator.SUBTRACT:
        return target + right
    if op is Operator.MULTIPLY:
        if right == 0:
            return _ANY if target == 0 else None
        return target / right
    # DIVIDE
    if right == 0:
        return None
    return target * right


class _IndexedSearch:
    """
    Per-call working set for the indexed strategy. Keys are sorted value
    tuples (sub-multisets of the hand); nothing outlives the call.
    """

    def __init__(self, options: SearchOptions, stats: SearchStats,
                 cancel: Optional[CancelToken] = None):
        self.options = options
        self.stats = stats
        self.cancel = cancel
        self._entries: Dict[Tuple[int, ...], List[Entry]] = {}
        self._index: Dict[Tuple[int, ...], Dict[Fraction, List[Entry]]] = {}
        self._found: Dict[Tuple[Tuple[int, ...], Fraction], List[Entry]] = {}

    def check_cancelled(self) -> None:
        if self.cancel is not None:
            self.cancel.raise_if_cancelled()

    def _join(self, op: Operator, left: Entry, right: Entry,
              seen: Dict[str, Entry], expect: Optional[Fraction] = None) -> bool:
        """Join two entries into ``seen``; True when the step is valid (and hits ``expect``)."""
        self.stats.count_join()
        value = apply_step(op, left[0], right[0], self.options)
        if value is None or (expect is not None and value != expect):
            return False
        node = join(op, left[1], right[1])
        text = to_text(node)
        if text not in seen:
            seen[text] = (value, node, text)
        return True

    def entries(self, multiset: Tuple[int, ...]) -> List[Entry]:
        """Every distinct canonical subexpression over exactly these digits."""
        cached = self._entries.get(multiset)
        if cached is not None:
            return cached
        if len(multiset) == 1:
            v = multiset[0]
            out = [(Fraction(v), leaf(v), str(v))]
        else:
            seen: Dict[str, Entry] = {}
            for left_ms, right_ms in ordered_splits(multiset):
                self.check_cancelled()
                rights = self.entries(right_ms)
                for left in self.entries(left_ms):
                    for right in rights:
                        for op in OPERATORS:
                            self._join(op, left, right, seen)
            out = list(seen.values())
        self._entries[multiset] = out
        return out

    def index(self, multiset: Tuple[int, ...]) -> Dict[Fraction, List[Entry]]:
        cached = self._index.get(multiset)
        if cached is not None:
            return cached
        by_value: Dict[Fraction, List[Entry]] = {}
        for entry in self.entries(multiset):
            by_value.setdefault(entry[0], []).append(entry)
        self._index[multiset] = by_value
        return by_value

    def _candidates(self, multiset: Tuple[int, ...], need) -> List[Entry]:
        if need is None:
            return []
        if need is _ANY:
            return self.entries(multiset)
        return self.find(multiset, need)

    def find_split(self, left_ms: Tuple[int, ...], right_ms: Tuple[int, ...],
                   target: Fraction, seen: Dict[str, Entry]) -> int:
        """
        Everything of the form (left_ms) op (right_ms) that equals target.
        Returns the number of hits before dedup.
        """
        hits = 0
        if len(left_ms) <= len(right_ms):
            for left in self.entries(left_ms):
                for op in OPERATORS:
                    for right in self._candidates(right_ms, _needed_right(op, left[0], target)):
                        hits += self._join(op, left, right, seen, expect=target)
        else:
            for right in self.entries(right_ms):
                for op in OPERATORS:
                    for left in self._candidates(left_ms, _needed_left(op, right[0], target)):
                        hits += self._join(op, left, right, seen, expect=target)
        return hits

    def find(self, multiset: Tuple[int, ...], target: Fraction) -> List[Entry]:
        """Every distinct canonical subexpression over these digits with this value."""
        if len(multiset) <= INDEX_LIMIT:
            self.stats.lookups += 1
            return self.index(multiset).get(target, [])

        key = (multiset, target)
        cached = self._found.get(key)
        if cached is not None:
            return cached

        seen: Dict[str, Entry] = {}
        for left_ms, right_ms in ordered_splits(multiset):
            self.check_cancelled()
            self.find_split(left_ms, right_ms, target, seen)
        out = list(seen.values())
        self._found[key] = out
        return out


def _indexed_worker(left_ms: Tuple[int, ...], right_ms: Tuple[int, ...], target: int,
                    options: SearchOptions) -> Tuple[List[Tuple[str, int]], SearchStats]:
    stats = SearchStats("indexed")
    search = _IndexedSearch(options, stats)
    seen: Dict[str, Entry] = {}
    stats.matches += search.find_split(left_ms, right_ms, Fraction(target), seen)
    out = [(text, score_expression_complexity(node)) for _, node, text in seen.values()]
    return out, stats


# ============================================================
# Orchestration
# ============================================================

def _run_in_pool(worker, jobs: List[tuple], workers: int,
                 cancel: Optional[CancelToken], stats: SearchStats,
                 collector: _Collector) -> None:
    """Run jobs on a process pool and merge results in submission order."""
    results: Dict[int, Tuple[List[Tuple[str, int]], SearchStats]] = {}
    with ProcessPoolExecutor(max_workers=workers) as executor:
        futures = {executor.submit(worker, *job): i for i, job in enumerate(jobs)}
        try:
            for future in as_completed(futures):
                if cancel is not None and cancel.cancelled:
                    raise SearchCancelled("search abandoned by caller")
                results[futures[future]] = future.result()
        except BaseException:
            for future in futures:
                future.cancel()
            raise

    for i in range(len(jobs)):
        found, part = results[i]
        stats.merge(part)
        for text, score in found:
            collector.add_text(text, score)


def _solve_exhaustive(digits: List[int], target: int, options: SearchOptions,
                      workers: int, cancel: Optional[CancelToken],
                      stats: SearchStats, collector: _Collector) -> None:
    orderings = distinct_orderings(digits_from_values(digits), key=lambda d: d.value)

    if workers <= 1:
        for ordering in orderings:
            if cancel is not None:
                cancel.raise_if_cancelled()
            _exhaustive_ordering(ordering, target, options, stats, collector)
        return

    # One job per distinct leading digit.
    groups: Dict[int, List[Tuple[Digit, ...]]] = {}
    for ordering in orderings:
        groups.setdefault(ordering[0].value, []).append(ordering)
    jobs = [(group, target, options) for _, group in sorted(groups.items())]
    _run_in_pool(_exhaustive_worker, jobs, workers, cancel, stats, collector)


def _solve_indexed(digits: List[int], target: int, options: SearchOptions,
                   workers: int, cancel: Optional[CancelToken],
                   stats: SearchStats, collector: _Collector) -> None:
    multiset = tuple(sorted(digits))

    if workers > 1 and len(multiset) > INDEX_LIMIT:
        jobs = [(left, right, target, options) for left, right in ordered_splits(multiset)]
        _run_in_pool(_indexed_worker, jobs, workers, cancel, stats, collector)
        return

    # The root is searched one split at a time, exactly as the pool does it.
    search = _IndexedSearch(options, stats, cancel)
    goal = Fraction(target)
    for left_ms, right_ms in ordered_splits(multiset):
        search.check_cancelled()
        seen: Dict[str, Entry] = {}
        stats.matches += search.find_split(left_ms, right_ms, goal, seen)
        for _, node, _text in seen.values():
            collector.add(node)


def solve_with_stats(digits: Sequence[int], target: int = DEFAULT_TARGET, *,
                     strategy: str = "indexed",
                     options: Optional[SearchOptions] = None,
                     workers: int = 1,
                     cancel: Optional[CancelToken] = None) -> Tuple[List[Solution], SearchStats]:
    """
    Full search returning Solution records plus counters.
    Raises InvalidInputError before searching when the hand is out of range,
    and SearchCancelled if ``cancel`` is set before the search finishes.
    """
    values = validate_digits(list(digits), MIN_DIGITS, MAX_DIGITS)
    if strategy not in STRATEGIES:
        raise ValueError(f"Unknown strategy {strategy!r} (expected one of {', '.join(STRATEGIES)})")
    options = options or DEFAULT_OPTIONS
    target = int(target)

    stats = SearchStats(strategy)
    collector = _Collector()
    started = time.perf_counter()
    logger.debug("solve %s -> %d [%s, workers=%d, %s]",
                 values_key(values), target, strategy, workers, options)

    try:
        if strategy == "exhaustive":
            _solve_exhaustive(values, target, options, workers, cancel, stats, collector)
        else:
            _solve_indexed(values, target, options, workers, cancel, stats, collector)
    except SearchCancelled:
        logger.info("solve %s -> %d cancelled after %.3fs",
                    values_key(values), target, time.perf_counter() - started)
        raise

    solutions = collector.ordered()
    stats.solutions = len(solutions)
    stats.elapsed = time.perf_counter() - started
    logger.debug("solve %s -> %d: %d solutions (%d matches, %d joins, %d lookups) in %.3fs",
                 values_key(values), target, stats.solutions, stats.matches,
                 stats.joins, stats.lookups, stats.elapsed)
    return solutions, stats


def solve(digits: Sequence[int], target: int = DEFAULT_TARGET, **kwargs) -> List[str]:
    """Canonical solution strings, simplest first. Empty when nothing works."""
    solutions, _ = solve_with_stats(digits, target, **kwargs)
    return [s.text for s in solutions]
