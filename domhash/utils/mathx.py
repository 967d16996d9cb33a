"""Numeric helpers shared by the scoring engine."""
from __future__ import annotations

from typing import Iterable, Sequence

__all__ = ["ratio", "mean", "longest_run"]


def ratio(numerator: float | int, denominator: float | int) -> float:
    """Return ``numerator / denominator`` or ``0.0`` for an empty denominator."""

    if not denominator:
        return 0.0
    return float(numerator) / float(denominator)


def mean(values: Iterable[float]) -> float:
    """Arithmetic mean; ``0.0`` for no values."""

    seq = list(values)
    if not seq:
        return 0.0
    return sum(seq) / len(seq)


def longest_run(items: Sequence[str]) -> int:
    """Length of the longest run of consecutive identical items."""

    best = 0
    current = 0
    previous = None
    for item in items:
        current = current + 1 if current and item == previous else 1
        previous = item
        best = max(best, current)
    return best
