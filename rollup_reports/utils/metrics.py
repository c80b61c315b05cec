"""Pure metric math helpers used by the rollup engine and campaign stats."""
from __future__ import annotations

import math


def safe_div(numerator: float | int, denominator: float | int) -> float:
    if denominator in (0, 0.0):
        return 0.0
    return float(numerator) / float(denominator)


def round_half_up(value: float, digits: int = 2) -> float:
    """Round half away from zero for non-negative values (``2.345 -> 2.35``)."""
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor


def completion_rate_pct(completes: int, impressions: int) -> float:
    """Video completion rate as a percentage with two decimals.

    ``round(completes / impressions * 10000) / 100``; 0 when there are no
    impressions. Completions above impressions are not clamped.
    """
    if impressions <= 0:
        return 0.0
    return math.floor(safe_div(completes, impressions) * 10000 + 0.5) / 100


__all__ = ["safe_div", "round_half_up", "completion_rate_pct"]
