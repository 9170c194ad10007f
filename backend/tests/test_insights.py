import pytest

from fakes import NOW, make_asset
from portfolio_engine.schemas.portfolio import MarketInsight
from portfolio_engine.services.insights import (
    MAX_CONFIDENCE,
    MIN_CONFIDENCE,
    MIN_GROWTH,
    TIMEFRAME_MULTIPLIERS,
    filter_relevant_insights,
    generate_predictions,
    prediction_confidence,
    trend_score,
)


def _insight(insight_id, relevant, confidence, symbols=()):
    return MarketInsight(
        id=insight_id,
        type="trend",
        title=insight_id,
        description="",
        impact="neutral",
        confidence=confidence,
        relevant_assets=relevant,
        relevant_symbols=list(symbols),
        actionable=False,
        timestamp=NOW,
        source="test",
    )


def test_predictions_cover_every_timeframe_with_ordered_scenarios():
    assets = [
        make_asset(symbol="A", current_price=1000, monthly_change=50, risk_score=40),
        make_asset(symbol="B", type="bond", current_price=500, monthly_change=-5, risk_score=5),
    ]

    predictions = generate_predictions(assets)

    assert [p.timeframe for p in predictions] == list(TIMEFRAME_MULTIPLIERS)
    for prediction in predictions:
        scenarios = prediction.scenarios
        assert scenarios.pessimistic <= scenarios.realistic <= scenarios.optimistic
        assert scenarios.realistic == prediction.predicted_value
        assert scenarios.optimistic == pytest.approx(prediction.predicted_value * 1.2)
        assert MIN_CONFIDENCE <= prediction.confidence <= MAX_CONFIDENCE
        assert [f.name for f in prediction.factors] == ["Market Trend", "Portfolio Diversification", "Volatility"]

    changes = [p.predicted_change for p in predictions]
    assert changes == sorted(changes)


def test_prediction_value_uses_trend_and_multiplier():
    assets = [make_asset(current_price=1000, monthly_change=100)]

    trend = trend_score(assets)
    one_year = next(p for p in generate_predictions(assets) if p.timeframe == "1y")

    assert trend == pytest.approx(0.1)
    assert one_year.predicted_value == pytest.approx(1100)
    assert one_year.predicted_change == pytest.approx(10)


def test_steep_decline_keeps_positive_ordered_scenarios():
    assets = [make_asset(current_price=10, monthly_change=-50)]

    for prediction in generate_predictions(assets):
        scenarios = prediction.scenarios
        assert prediction.predicted_value > 0
        assert prediction.predicted_change != 0
        assert scenarios.pessimistic < scenarios.realistic < scenarios.optimistic, prediction.timeframe

    one_year = next(p for p in generate_predictions(assets) if p.timeframe == "1y")
    assert one_year.predicted_value == pytest.approx(10 * MIN_GROWTH)


def test_empty_portfolio_predictions_are_zero():
    predictions = generate_predictions([])
    assert len(predictions) == len(TIMEFRAME_MULTIPLIERS)
    assert all(p.predicted_value == 0 and p.predicted_change == 0 for p in predictions)


def test_confidence_clamped_at_floor():
    assert prediction_confidence(0) == MAX_CONFIDENCE
    assert prediction_confidence(100) == MIN_CONFIDENCE


def test_relevant_insights_match_holdings_by_confidence():
    assets = [make_asset(symbol="PAXG", type="commodity"), make_asset(symbol="USDC", blockchain="polygon")]
    insights = [
        _insight("estate", ["real-estate"], 90),
        _insight("gold", ["commodity"], 60),
        _insight("poly", ["Polygon"], 80),
        _insight("usdc", [], 70, symbols=["usdc"]),
    ]

    relevant = filter_relevant_insights(insights, assets)

    assert [i.id for i in relevant] == ["poly", "usdc", "gold"]


def test_symbols_only_match_symbol_targeted_insights():
    assets = [make_asset(symbol="BOND", type="crypto")]
    insights = [
        _insight("bonds", ["bond"], 80),
        _insight("bond-token", [], 60, symbols=["BOND"]),
    ]

    relevant = filter_relevant_insights(insights, assets)

    assert [i.id for i in relevant] == ["bond-token"]


def test_diversification_factor_on_twenty_point_scale():
    assets = [make_asset(symbol="A", type="crypto"), make_asset(symbol="B", type="bond")]

    factor = next(f for f in generate_predictions(assets)[0].factors if f.name == "Portfolio Diversification")

    assert factor.impact == pytest.approx(10.0)
    assert 0 <= factor.impact <= 20
