from __future__ import annotations

from collections import defaultdict
from typing import Iterable, Sequence

from portfolio_engine import quant
from portfolio_engine.schemas.portfolio import PortfolioAsset, PortfolioMetrics

PERFORMER_COUNT = 5


def value_by(assets: Iterable[PortfolioAsset], attribute: str) -> dict[str, float]:
    buckets: dict[str, float] = defaultdict(float)
    for asset in assets:
        buckets[str(getattr(asset, attribute))] += asset.total_value
    return dict(buckets)


def rank_performers(assets: Sequence[PortfolioAsset], count: int = PERFORMER_COUNT) -> tuple[list[PortfolioAsset], list[PortfolioAsset]]:
    """Best and worst assets by ``pnl_percentage``.

    With at least *count* assets the two lists never share an entry.
    """
    ranked = sorted(assets, key=lambda asset: asset.pnl_percentage, reverse=True)
    top = ranked[:count]
    if len(ranked) < count:
        return top, ranked[::-1]
    tail = ranked[count:]
    return top, tail[-count:][::-1]


def calculate_portfolio_metrics(assets: Sequence[PortfolioAsset]) -> PortfolioMetrics:
    if not assets:
        return PortfolioMetrics()

    values = [asset.total_value for asset in assets]
    total_value = sum(values)
    cost_basis = sum(asset.balance * asset.original_price for asset in assets)
    total_pnl = sum(asset.pnl for asset in assets)

    asset_types = value_by(assets, "type")
    top, under = rank_performers(assets)

    return PortfolioMetrics(
        total_value=total_value,
        total_pnl=total_pnl,
        total_pnl_percentage=(total_pnl / cost_basis) * 100 if cost_basis > 0 else 0.0,
        daily_change=sum(asset.total_value * asset.daily_change_percentage / 100 for asset in assets),
        weekly_change=sum(asset.balance * asset.weekly_change for asset in assets),
        monthly_change=sum(asset.balance * asset.monthly_change for asset in assets),
        yearly_change=sum(asset.balance * asset.yearly_change for asset in assets),
        total_yield=sum(asset.staking_rewards for asset in assets),
        average_apy=sum(asset.apy for asset in assets) / len(assets),
        risk_score=quant.weighted_average([asset.risk_score for asset in assets], values),
        diversification_score=quant.diversification_score(asset_types),
        liquidity_ratio=quant.weighted_average([asset.liquidity_score for asset in assets], values),
        asset_count=len(assets),
        asset_types=asset_types,
        blockchain_distribution=value_by(assets, "blockchain"),
        top_performers=top,
        underperformers=under,
    )
