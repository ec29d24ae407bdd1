# PURPOSE: Numeric coercion and rounding helpers shared by the validator,
#          the percentage repair step and the sanitizer.
# CONTEXT: Model replies and request bodies are loosely typed; every numeric field
#          goes through to_number() so the fallback rule is the same everywhere.

from __future__ import annotations

import math
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Optional, Tuple

PERCENT_TOTAL = 100


def to_number(value: Any) -> Optional[float]:
    """
    Generic numeric parse.

    parameters:
    - value: Any – candidate value from untrusted JSON.

    returns:
    - float – when value is a finite number or a string holding one.
    - None – for everything else (bool, None, containers, "N/A", NaN, ±inf).

    notes:
    - bool is an int subclass in Python; it is deliberately not a number here.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        try:
            n = float(value)
        except OverflowError:
            # json.loads builds arbitrarily large ints from plain literals.
            return None
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            n = float(text)
        except ValueError:
            return None
    else:
        return None
    return n if math.isfinite(n) else None


def safe_number(value: Any, fallback: float) -> float:
    """Return to_number(value), or fallback when it is not numeric."""
    n = to_number(value)
    return fallback if n is None else n


def clamp(x: float, lo: float, hi: float) -> float:
    """Clamp x into [lo, hi]."""
    return max(lo, min(hi, x))


def round_half_up(x: float) -> int:
    """
    Round to the nearest integer with halves going up (63.5 -> 64).

    notes:
    - Python's round() is banker's rounding; Decimal gives the half-up behaviour
      consumers of the percentages expect.
    """
    return int(Decimal(str(x)).quantize(Decimal("1"), ROUND_HALF_UP))


def split_percentages(a: Any, b: Any, default: float = 50) -> Tuple[int, int]:
    """
    Repair a pair of percentages so they are integers that sum to exactly 100.

    steps:
    1) Missing/unparseable values become `default`.
    2) Both are clamped to [0, 100].
    3) Both are rescaled proportionally to sum to 100 (an all-zero pair becomes 50/50).
    4) The first is rounded half-up; the second is 100 minus the first.

    returns:
    - (int, int) – e.g. (70, 40) -> (64, 36); (200, -50) -> (100, 0).
    """
    pa = clamp(safe_number(a, default), 0, PERCENT_TOTAL)
    pb = clamp(safe_number(b, default), 0, PERCENT_TOTAL)
    total = pa + pb
    if total <= 0:
        pa, pb = PERCENT_TOTAL / 2, PERCENT_TOTAL / 2
    else:
        pa, pb = pa * PERCENT_TOTAL / total, pb * PERCENT_TOTAL / total

    first = round_half_up(pa)
    second = round_half_up(pb)
    # Rounding both can leave 99 or 101; the second absorbs the error.
    if first + second != PERCENT_TOTAL:
        second = PERCENT_TOTAL - first
    return first, second
