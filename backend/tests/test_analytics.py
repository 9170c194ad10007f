import pytest

from fakes import NOW, make_asset
from portfolio_engine.schemas.portfolio import PortfolioOverview, YieldOpportunity
from portfolio_engine.services.analytics import allocation_slices, build_portfolio_analytics, filter_assets
from portfolio_engine.services.insights import generate_predictions
from portfolio_engine.services.metrics import calculate_portfolio_metrics
from portfolio_engine.services.rebalancing import generate_rebalancing_tips


def _overview(assets, opportunities=()):
    metrics = calculate_portfolio_metrics(assets)
    return PortfolioOverview(
        owner="0xowner",
        fetched_at=NOW,
        source="fake",
        assets=assets,
        metrics=metrics,
        yield_opportunities=list(opportunities),
        insights=[],
        predictions=generate_predictions(assets),
        rebalancing_tips=generate_rebalancing_tips(assets, metrics),
    )


def _opportunity(opp_id, apy):
    return YieldOpportunity(
        id=opp_id,
        name=opp_id,
        protocol="Aave",
        type="lending",
        asset="USDC",
        apy=apy,
        tvl=1e6,
        risk="low",
        minimum_deposit=0,
        lockup_period=0,
        blockchain="ethereum",
        description="",
        audited=True,
        featured=False,
    )


def test_allocation_slices_percentages():
    slices = allocation_slices({"crypto": 750.0, "bond": 250.0})

    assert [(s.key, s.percentage) for s in slices] == [("crypto", 75.0), ("bond", 25.0)]
    assert allocation_slices({}) == []


def test_analytics_stats_and_performance():
    assets = [
        make_asset(symbol="WIN", type="crypto", current_price=7000, pnl=700, pnl_percentage=11.1, risk_score=40),
        make_asset(symbol="LOSE", type="bond", current_price=3000, pnl=-300, pnl_percentage=-9.1, risk_score=10),
    ]
    overview = _overview(assets, [_opportunity("low", 3.0), _opportunity("best", 9.0)])

    analytics = build_portfolio_analytics(overview, "90d")

    assert analytics.stats.best_performer.symbol == "WIN"
    assert analytics.stats.worst_performer.symbol == "LOSE"
    assert analytics.stats.top_opportunity.id == "best"
    assert analytics.prediction.timeframe == "90d"
    assert [tip.id for tip in analytics.rebalancing_tips] == ["overweight-crypto"]
    assert analytics.asset_type_distribution[0].key == "crypto"
    assert analytics.asset_type_distribution[0].percentage == pytest.approx(70)
    assert analytics.blockchain_distribution[0].percentage == pytest.approx(100)
    perf = analytics.performance_metrics
    assert perf.max_drawdown == pytest.approx(-9.1)
    assert perf.win_rate == pytest.approx(50)
    assert perf.volatility == overview.metrics.risk_score
    assert perf.sharpe_ratio == pytest.approx(overview.metrics.total_pnl_percentage / overview.metrics.risk_score)


def test_analytics_on_empty_portfolio():
    analytics = build_portfolio_analytics(_overview([]))

    assert analytics.stats.best_performer is None
    assert analytics.stats.top_opportunity is None
    assert analytics.performance_metrics.win_rate == 0
    assert analytics.asset_type_distribution == []


def test_filter_assets():
    assets = [
        make_asset(symbol="A", type="crypto", apy=1, risk_score=80),
        make_asset(symbol="B", type="bond", apy=5, risk_score=10),
        make_asset(symbol="C", type="real-estate", apy=7, risk_score=30),
    ]

    assert [a.symbol for a in filter_assets(assets)] == ["A", "B", "C"]
    assert [a.symbol for a in filter_assets(assets, types=["bond", "real-estate"])] == ["B", "C"]
    assert [a.symbol for a in filter_assets(assets, min_apy=5, max_risk=20)] == ["B"]
