"""Per-asset risk and liquidity scores.  Pure computation, no I/O."""

from __future__ import annotations

from typing import Sequence

import pandas as pd

from ._helpers import _clamp, _safe_float

MIN_HISTORY_POINTS = 10
NEUTRAL_RISK_SCORE = 50.0
RISK_SCALE = 1000.0
LIQUIDITY_SCALE = 1000.0


def daily_returns(prices_newest_first: Sequence[float]) -> pd.Series:
    """Simple returns in chronological order from a most-recent-first price list."""
    close = pd.Series(list(prices_newest_first)[::-1], dtype="float64")
    close = close[close > 0].reset_index(drop=True)
    return close.pct_change().dropna()


def return_volatility(returns: pd.Series) -> float:
    """Population standard deviation of a return series."""
    if returns.empty:
        return 0.0
    return float(returns.std(ddof=0))


def volatility_risk_score(prices_newest_first: Sequence[float]) -> float:
    """Risk score in ``[0, 100]`` from the volatility of daily returns.

    Short histories carry too little information to call an asset safe, so
    anything below ``MIN_HISTORY_POINTS`` prices scores ``NEUTRAL_RISK_SCORE``.
    """
    if len(prices_newest_first) < MIN_HISTORY_POINTS:
        return NEUTRAL_RISK_SCORE
    returns = daily_returns(prices_newest_first)
    if returns.empty:
        return NEUTRAL_RISK_SCORE
    return _clamp(return_volatility(returns) * RISK_SCALE)


def liquidity_score(volume_24h: object, market_cap: object) -> float:
    """Turnover (24h volume / market cap) scaled to ``[0, 100]``.

    Returns 0 when the market cap is unknown.
    """
    volume = _safe_float(volume_24h) or 0.0
    cap = _safe_float(market_cap) or 0.0
    if cap <= 0 or volume <= 0:
        return 0.0
    return _clamp(volume / cap * LIQUIDITY_SCALE)
