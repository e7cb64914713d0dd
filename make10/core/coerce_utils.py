# make10/core/coerce_utils.py
"""
Turning what a caller typed into something the solver accepts.

The solver itself only checks its precondition; everything that can be
wrong with raw input (empty text, letters, too many characters) is caught
here and reported with a reason the page can show.
"""
from __future__ import annotations
from typing import Any, Iterable, List, Optional, Sequence

MIN_DIGITS = 2
MAX_DIGITS = 6


class InvalidInputError(ValueError):
    """Input that must never reach the search."""

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


def validate_digits(values: Sequence[int],
                    min_digits: int = MIN_DIGITS,
                    max_digits: int = MAX_DIGITS) -> List[int]:
    """Check length and range; returns the values as a plain list of ints."""
    out = list(values)
    if not min_digits <= len(out) <= max_digits:
        raise InvalidInputError(
            f"Enter between {min_digits} and {max_digits} digits (got {len(out)})."
        )
    for v in out:
        if type(v) is not int or not 0 <= v <= 9:
            raise InvalidInputError(f"Not a digit: {v!r}")
    return out


def _coerce_items(items: Iterable[Any]) -> List[int]:
    out: List[int] = []
    for item in items:
        if isinstance(item, bool):
            raise InvalidInputError(f"Not a digit: {item!r}")
        if isinstance(item, int):
            out.append(item)
        elif isinstance(item, str) and len(item.strip()) == 1 and item.strip().isdigit():
            out.append(int(item.strip()))
        else:
            raise InvalidInputError(f"Not a digit: {item!r}")
    return out


def parse_digits(raw: Any,
                 min_digits: int = MIN_DIGITS,
                 max_digits: int = MAX_DIGITS) -> List[int]:
    """
    Accepts "1234", " 1234 ", [1, 2, 3, 4] or ["1", "2", "3", "4"].
    Each character (or list item) is one digit; digits are never joined into
    bigger numbers.
    """
    if raw is None:
        raise InvalidInputError("No digits given.")
    if isinstance(raw, str):
        text = raw.strip()
        if not text:
            raise InvalidInputError("No digits given.")
        bad = sorted({ch for ch in text if ch not in "0123456789"})
        if bad:
            raise InvalidInputError(f"Only digits 0-9 are allowed (found {''.join(bad)!r}).")
        if len(text) > max_digits:
            raise InvalidInputError(f"At most {max_digits} digits are allowed.")
        values = [int(ch) for ch in text]
    elif isinstance(raw, (list, tuple)):
        values = _coerce_items(raw)
    else:
        raise InvalidInputError(f"Unsupported digits value: {type(raw).__name__}")
    return validate_digits(values, min_digits, max_digits)


def coerce_target(raw: Any, enabled: Optional[Sequence[int]], default: int) -> int:
    """A requested target, or ``default`` when none was given."""
    if raw is None or (isinstance(raw, str) and not raw.strip()):
        return int(default)
    try:
        target = int(str(raw).strip())
    except ValueError:
        raise InvalidInputError(f"Target must be a whole number, got {raw!r}")
    if enabled and target not in enabled:
        raise InvalidInputError(
            f"Target {target} is not enabled (choose from {', '.join(map(str, enabled))})."
        )
    return target


def values_key(values: Sequence[int]) -> str:
    """Sorted key for a hand of digits, e.g. [4, 1, 3] -> "1-3-4"."""
    return "-".join(map(str, sorted(values)))
