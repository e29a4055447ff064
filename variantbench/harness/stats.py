"""Summary statistics over timing samples.

Uses plain arithmetic (no scipy dependency). All functions are pure and
never mutate their input.
"""

from __future__ import annotations

import math
from collections.abc import Sequence


def mean(values: Sequence[float]) -> float:
    """Arithmetic mean of a non-empty sequence."""
    if not values:
        raise ValueError("mean of empty sequence")
    return sum(values) / len(values)


def median(values: Sequence[float]) -> float:
    """Median of a non-empty sequence."""
    return percentile(values, 50.0)


def percentile(values: Sequence[float], q: float) -> float:
    """Compute the q-th percentile with linear interpolation between ranks.

    Matches the default ("linear") method of numpy.percentile.

    Args:
        values: Non-empty sequence of numbers (any order)
        q: Percentile in [0, 100]

    Returns:
        Interpolated percentile value

    Raises:
        ValueError: If values is empty or q is out of range
    """
    if not values:
        raise ValueError("percentile of empty sequence")
    if not 0.0 <= q <= 100.0:
        raise ValueError(f"percentile must be within [0, 100], got {q}")

    ordered = sorted(values)
    if len(ordered) == 1:
        return float(ordered[0])

    rank = (len(ordered) - 1) * (q / 100.0)
    lower = math.floor(rank)
    upper = math.ceil(rank)
    if lower == upper:
        return float(ordered[lower])

    frac = rank - lower
    return ordered[lower] * (1 - frac) + ordered[upper] * frac


def stdev(values: Sequence[float]) -> float:
    """Sample standard deviation; 0.0 when fewer than two values."""
    n = len(values)
    if n < 2:
        return 0.0

    avg = sum(values) / n
    variance = sum((x - avg) ** 2 for x in values) / (n - 1)
    return math.sqrt(variance)
