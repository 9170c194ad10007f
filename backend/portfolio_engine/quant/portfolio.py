"""Portfolio-level analytics.  Pure computation, no I/O."""

from __future__ import annotations

from typing import Iterable, Mapping, Sequence


def period_change(prices_newest_first: Sequence[float], days: int) -> float:
    """Price delta between the latest point and the point *days* back.

    The look-back is clamped to the length of the series.
    """
    if len(prices_newest_first) < 2:
        return 0.0
    recent = float(prices_newest_first[0])
    past = float(prices_newest_first[min(days, len(prices_newest_first) - 1)])
    return recent - past


def concentration_hhi(values: Iterable[float]) -> float:
    """Herfindahl-Hirschman Index: sum of squared shares of *values*."""
    amounts = [max(float(v), 0.0) for v in values]
    total = sum(amounts)
    if total <= 0:
        return 0.0
    return float(sum((v / total) ** 2 for v in amounts))


def diversification_score(buckets: Mapping[str, float]) -> float:
    """``100 - 100 * HHI`` over bucket shares; 0 for an empty or single bucket."""
    if not buckets:
        return 0.0
    total = sum(max(float(v), 0.0) for v in buckets.values())
    if total <= 0:
        return 0.0
    return max(0.0, 100.0 - concentration_hhi(buckets.values()) * 100.0)


def weighted_average(values: Sequence[float], weights: Sequence[float]) -> float:
    """Weighted mean; 0.0 when the weights sum to zero."""
    total_weight = float(sum(weights))
    if total_weight == 0:
        return 0.0
    return float(sum(v * w for v, w in zip(values, weights)) / total_weight)
