"""Qualitative insights and simple forward projections over an enriched asset list."""

from __future__ import annotations

from typing import Iterable, Sequence

from portfolio_engine import quant
from portfolio_engine.schemas.portfolio import (
    MarketInsight,
    PortfolioAsset,
    PortfolioPrediction,
    PredictionFactor,
    PredictionScenarios,
    Timeframe,
)
from portfolio_engine.services.metrics import value_by

TIMEFRAME_MULTIPLIERS: dict[Timeframe, float] = {
    "1d": 0.01,
    "7d": 0.05,
    "30d": 0.15,
    "90d": 0.35,
    "1y": 1.0,
}
SCENARIO_BAND = 0.2
# Lower bound on the growth factor; projections stay strictly positive.
MIN_GROWTH = 0.01
MIN_CONFIDENCE = 20.0
MAX_CONFIDENCE = 90.0


def _value_weights(assets: Sequence[PortfolioAsset]) -> list[float]:
    total = sum(asset.total_value for asset in assets)
    if total <= 0:
        return [0.0 for _ in assets]
    return [asset.total_value / total for asset in assets]


def trend_score(assets: Sequence[PortfolioAsset]) -> float:
    """Value-weighted mean of ``monthly_change / total_value``."""
    score = 0.0
    for asset, weight in zip(assets, _value_weights(assets)):
        if asset.total_value > 0:
            score += weight * asset.monthly_change / asset.total_value
    return score


def portfolio_volatility(assets: Sequence[PortfolioAsset]) -> float:
    """Value-weighted mean of ``risk_score / 100``."""
    return sum(weight * asset.risk_score / 100 for asset, weight in zip(assets, _value_weights(assets)))


def prediction_confidence(volatility: float) -> float:
    return max(MIN_CONFIDENCE, MAX_CONFIDENCE - volatility * 10)


def generate_predictions(assets: Sequence[PortfolioAsset]) -> list[PortfolioPrediction]:
    current_value = sum(asset.total_value for asset in assets)
    volatility = portfolio_volatility(assets)
    trend = trend_score(assets)
    diversification = quant.diversification_score(value_by(assets, "type"))
    confidence = prediction_confidence(volatility)

    predictions: list[PortfolioPrediction] = []
    for timeframe, multiplier in TIMEFRAME_MULTIPLIERS.items():
        predicted = current_value * max(MIN_GROWTH, 1 + trend * multiplier)
        change = ((predicted - current_value) / current_value) * 100 if current_value > 0 else 0.0
        predictions.append(
            PortfolioPrediction(
                timeframe=timeframe,
                predicted_value=predicted,
                predicted_change=change,
                confidence=confidence,
                factors=[
                    PredictionFactor(
                        name="Market Trend",
                        impact=trend * 50,
                        description="Positive market momentum" if trend > 0 else "Market headwinds",
                    ),
                    PredictionFactor(
                        name="Portfolio Diversification",
                        # 0-100 score mapped onto 0-20 to sit beside the trend factor.
                        impact=diversification * 0.2,
                        description="Well-diversified portfolio reduces risk"
                        if diversification >= 50
                        else "Concentrated portfolio amplifies swings",
                    ),
                    PredictionFactor(
                        name="Volatility",
                        impact=-volatility * 10,
                        description="Price volatility widens the outcome range",
                    ),
                ],
                scenarios=PredictionScenarios(
                    optimistic=predicted * (1 + SCENARIO_BAND),
                    realistic=predicted,
                    pessimistic=predicted * (1 - SCENARIO_BAND),
                ),
            )
        )
    return predictions


def holding_tags(assets: Iterable[PortfolioAsset]) -> set[str]:
    """Lower-cased asset types and blockchains the user holds."""
    tags: set[str] = set()
    for asset in assets:
        tags.update({asset.type.lower(), asset.blockchain.lower()})
    return tags


def filter_relevant_insights(insights: Iterable[MarketInsight], assets: Sequence[PortfolioAsset]) -> list[MarketInsight]:
    """Insights tagged with a held type or chain, or naming a held symbol in ``relevant_symbols``."""
    tags = holding_tags(assets)
    symbols = {asset.symbol.upper() for asset in assets}
    relevant = [
        insight
        for insight in insights
        if any(tag.lower() in tags for tag in insight.relevant_assets)
        or any(symbol.upper() in symbols for symbol in insight.relevant_symbols)
    ]
    return sorted(relevant, key=lambda insight: insight.confidence, reverse=True)
