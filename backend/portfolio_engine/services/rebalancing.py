from __future__ import annotations

from typing import Sequence

from portfolio_engine.schemas.portfolio import (
    ExpectedImpact,
    PortfolioAsset,
    PortfolioMetrics,
    RebalancingActions,
    RebalancingSuggestion,
    TradeAction,
)

OVERWEIGHT_THRESHOLD_PCT = 40.0
HIGH_SEVERITY_THRESHOLD_PCT = 60.0
TARGET_ALLOCATION_PCT = 30.0
OVERWEIGHT_TRIM_FRACTION = 0.25

LOW_YIELD_APY = 2.0
MATERIAL_VALUE = 1000.0
STAKING_FRACTION = 0.3

# Flat estimates; live gas and fee data is not consulted.
OVERWEIGHT_COST = 50.0
OVERWEIGHT_TIME = "2-3 days"
YIELD_COST = 25.0
YIELD_TIME = "1-2 hours"


def overweight_suggestions(metrics: PortfolioMetrics) -> list[RebalancingSuggestion]:
    if metrics.total_value <= 0:
        return []

    suggestions: list[RebalancingSuggestion] = []
    for asset_type, value in sorted(metrics.asset_types.items()):
        allocation = (value / metrics.total_value) * 100
        if allocation <= OVERWEIGHT_THRESHOLD_PCT:
            continue
        trim = value * OVERWEIGHT_TRIM_FRACTION
        suggestions.append(
            RebalancingSuggestion(
                id=f"overweight-{asset_type}",
                type="overweight",
                severity="high" if allocation > HIGH_SEVERITY_THRESHOLD_PCT else "medium",
                title=f"Overweight in {asset_type}",
                description=(
                    f"Your portfolio is {allocation:.1f}% allocated to {asset_type}, which may increase risk"
                ),
                current_allocation=allocation,
                suggested_allocation=TARGET_ALLOCATION_PCT,
                expected_impact=ExpectedImpact(risk=-15, return_=5, diversification=25),
                actions=RebalancingActions(
                    sell=[TradeAction(asset=asset_type, amount=trim)],
                    buy=[TradeAction(asset="mixed", amount=trim)],
                ),
                estimated_cost=OVERWEIGHT_COST,
                estimated_time=OVERWEIGHT_TIME,
            )
        )
    return suggestions


def yield_optimization_suggestion(assets: Sequence[PortfolioAsset]) -> RebalancingSuggestion | None:
    low_yield = [
        asset for asset in assets if asset.apy < LOW_YIELD_APY and asset.total_value > MATERIAL_VALUE
    ]
    if not low_yield:
        return None

    return RebalancingSuggestion(
        id="yield-optimization",
        type="yield-optimization",
        severity="medium",
        title="Optimize Yield Generation",
        description=f"You have {len(low_yield)} assets with low yield potential",
        current_allocation=0,
        suggested_allocation=0,
        expected_impact=ExpectedImpact(risk=5, return_=15, diversification=0),
        actions=RebalancingActions(
            sell=[],
            buy=[
                TradeAction(asset=f"{asset.symbol}-staking", amount=asset.total_value * STAKING_FRACTION)
                for asset in low_yield
            ],
        ),
        estimated_cost=YIELD_COST,
        estimated_time=YIELD_TIME,
    )


def generate_rebalancing_tips(assets: Sequence[PortfolioAsset], metrics: PortfolioMetrics) -> list[RebalancingSuggestion]:
    suggestions = overweight_suggestions(metrics)
    yield_tip = yield_optimization_suggestion(assets)
    if yield_tip is not None:
        suggestions.append(yield_tip)
    return suggestions
