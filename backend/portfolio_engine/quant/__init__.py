"""Quantitative analytics toolkit -- pure computation, no I/O."""

from .portfolio import concentration_hhi, diversification_score, period_change, weighted_average
from .risk import (
    daily_returns,
    liquidity_score,
    return_volatility,
    volatility_risk_score,
)

__all__ = [
    # risk
    "daily_returns",
    "return_volatility",
    "volatility_risk_score",
    "liquidity_score",
    # portfolio
    "period_change",
    "concentration_hhi",
    "diversification_score",
    "weighted_average",
]
