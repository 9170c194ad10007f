import pytest

from fakes import make_asset
from portfolio_engine.schemas.portfolio import PortfolioMetrics
from portfolio_engine.services.metrics import calculate_portfolio_metrics, rank_performers


def test_empty_portfolio_returns_zero_metrics():
    metrics = calculate_portfolio_metrics([])

    assert metrics == PortfolioMetrics()
    assert metrics.total_value == 0
    assert metrics.asset_count == 0
    assert metrics.top_performers == []
    assert metrics.underperformers == []


def test_totals_and_distributions():
    assets = [
        make_asset(symbol="DAPT", type="real-estate", balance=10, current_price=100, original_price=80, pnl=200,
                   pnl_percentage=25, staking_rewards=12, apy=6, risk_score=10, liquidity_score=20),
        make_asset(symbol="WETH", type="crypto", blockchain="arbitrum", balance=1, current_price=3000,
                   original_price=3000, apy=2, risk_score=60, liquidity_score=80, weekly_change=-50),
    ]

    metrics = calculate_portfolio_metrics(assets)

    assert metrics.total_value == pytest.approx(4000)
    assert sum(metrics.asset_types.values()) == pytest.approx(metrics.total_value)
    assert metrics.asset_types == {"real-estate": 1000, "crypto": 3000}
    assert metrics.blockchain_distribution == {"ethereum": 1000, "arbitrum": 3000}
    assert metrics.total_pnl == pytest.approx(200)
    assert metrics.total_pnl_percentage == pytest.approx(200 / 3800 * 100)
    assert metrics.weekly_change == pytest.approx(-50)
    assert metrics.total_yield == pytest.approx(12)
    assert metrics.average_apy == pytest.approx(4)
    assert metrics.risk_score == pytest.approx((10 * 1000 + 60 * 3000) / 4000)
    assert metrics.liquidity_ratio == pytest.approx((20 * 1000 + 80 * 3000) / 4000)
    assert metrics.diversification_score == pytest.approx(100 - (0.25**2 + 0.75**2) * 100)


def test_diversification_distinct_types_beats_single_type():
    mixed = [
        make_asset(symbol="A", type="crypto", current_price=1000),
        make_asset(symbol="B", type="bond", current_price=1000),
        make_asset(symbol="C", type="commodity", current_price=1000),
    ]
    same = [make_asset(symbol=s, type="crypto", current_price=1000) for s in ("A", "B", "C")]

    mixed_score = calculate_portfolio_metrics(mixed).diversification_score
    same_score = calculate_portfolio_metrics(same).diversification_score

    assert same_score == 0
    assert mixed_score > same_score
    assert 0 <= mixed_score <= 100


def test_even_split_score_grows_with_type_count():
    types = ["crypto", "bond", "commodity", "real-estate", "equity", "nft"]
    scores = []
    for count in (2, 3, 4, 6):
        assets = [make_asset(symbol=f"T{i}", type=types[i], current_price=1000) for i in range(count)]
        scores.append(calculate_portfolio_metrics(assets).diversification_score)

    assert all(lower < higher for lower, higher in zip(scores, scores[1:]))
    assert all(0 < score <= 100 for score in scores)
    assert scores[-1] == pytest.approx(100 - 100 / 6)


def test_performers_do_not_overlap_with_enough_assets():
    assets = [make_asset(symbol=f"T{i}", pnl_percentage=float(i * 10)) for i in range(7)]

    top, under = rank_performers(assets)

    assert [a.symbol for a in top] == ["T6", "T5", "T4", "T3", "T2"]
    assert [a.symbol for a in under] == ["T0", "T1"]
    assert not {a.id for a in top} & {a.id for a in under}


def test_performers_with_few_assets_return_what_exists():
    assets = [make_asset(symbol="A", pnl_percentage=5), make_asset(symbol="B", pnl_percentage=-3)]

    top, under = rank_performers(assets)

    assert [a.symbol for a in top] == ["A", "B"]
    assert [a.symbol for a in under] == ["B", "A"]
