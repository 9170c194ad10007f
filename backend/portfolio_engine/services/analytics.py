"""Dashboard-level views derived from a computed ``PortfolioOverview``."""

from __future__ import annotations

from typing import Iterable, Mapping, Sequence

import pandas as pd

from portfolio_engine.schemas.portfolio import (
    AllocationSlice,
    AssetType,
    PerformanceMetrics,
    PortfolioAnalytics,
    PortfolioAsset,
    PortfolioOverview,
    PortfolioStats,
    Timeframe,
)


def allocation_slices(buckets: Mapping[str, float]) -> list[AllocationSlice]:
    """Buckets as slices with percentages of the total, largest first."""
    total = sum(buckets.values())
    slices = [
        AllocationSlice(key=key, value=value, percentage=(value / total) * 100 if total > 0 else 0.0)
        for key, value in buckets.items()
    ]
    return sorted(slices, key=lambda item: (-item.value, item.key))


def performance_metrics(assets: Sequence[PortfolioAsset], total_pnl_percentage: float, risk_score: float) -> PerformanceMetrics:
    if not assets:
        return PerformanceMetrics(sharpe_ratio=0.0, volatility=0.0, max_drawdown=0.0, win_rate=0.0)

    frame = pd.DataFrame({"pnl": [a.pnl for a in assets], "pnl_percentage": [a.pnl_percentage for a in assets]})
    return PerformanceMetrics(
        # Not a true Sharpe ratio: there is no return series or risk-free rate here.
        sharpe_ratio=total_pnl_percentage / max(risk_score, 1.0),
        volatility=risk_score,
        max_drawdown=float(frame["pnl_percentage"].min()),
        win_rate=float((frame["pnl"] > 0).mean() * 100),
    )


def build_portfolio_analytics(overview: PortfolioOverview, timeframe: Timeframe = "30d") -> PortfolioAnalytics:
    metrics = overview.metrics
    ranked = sorted(overview.assets, key=lambda asset: asset.pnl_percentage, reverse=True)

    return PortfolioAnalytics(
        timeframe=timeframe,
        stats=PortfolioStats(
            total_value=metrics.total_value,
            total_pnl=metrics.total_pnl,
            daily_change=metrics.daily_change,
            best_performer=ranked[0] if ranked else None,
            worst_performer=ranked[-1] if ranked else None,
            top_opportunity=max(overview.yield_opportunities, key=lambda opp: opp.apy, default=None),
            risk_score=metrics.risk_score,
            diversification_score=metrics.diversification_score,
        ),
        prediction=next((p for p in overview.predictions if p.timeframe == timeframe), None),
        rebalancing_tips=[tip for tip in overview.rebalancing_tips if tip.severity == "high"],
        asset_type_distribution=allocation_slices(metrics.asset_types),
        blockchain_distribution=allocation_slices(metrics.blockchain_distribution),
        performance_metrics=performance_metrics(overview.assets, metrics.total_pnl_percentage, metrics.risk_score),
        top_performers=metrics.top_performers,
        underperformers=metrics.underperformers,
    )


def filter_assets(
    assets: Iterable[PortfolioAsset],
    *,
    types: Iterable[AssetType] | None = None,
    min_apy: float | None = None,
    max_risk: float | None = None,
) -> list[PortfolioAsset]:
    allowed = set(types) if types else None
    return [
        asset
        for asset in assets
        if (allowed is None or asset.type in allowed)
        and (min_apy is None or asset.apy >= min_apy)
        and (max_risk is None or asset.risk_score <= max_risk)
    ]
