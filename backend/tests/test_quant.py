import pytest

from portfolio_engine import quant
from portfolio_engine.quant.risk import NEUTRAL_RISK_SCORE


def test_period_change_clamps_to_series_length():
    prices = [110.0, 105.0, 100.0]
    assert quant.period_change(prices, 1) == pytest.approx(5.0)
    assert quant.period_change(prices, 365) == pytest.approx(10.0)
    assert quant.period_change([110.0], 7) == 0.0


def test_diversification_bounds():
    assert quant.diversification_score({}) == 0.0
    assert quant.diversification_score({"crypto": 3000.0}) == 0.0

    two = quant.diversification_score({"crypto": 1000.0, "bond": 1000.0})
    three = quant.diversification_score({"crypto": 1000.0, "bond": 1000.0, "commodity": 1000.0})
    assert 0.0 < two < three <= 100.0
    assert two == pytest.approx(50.0)


def test_concentration_hhi_of_even_split():
    assert quant.concentration_hhi([1.0, 1.0, 1.0, 1.0]) == pytest.approx(0.25)
    assert quant.concentration_hhi([]) == 0.0


def test_volatility_risk_score_short_history_is_neutral():
    assert quant.volatility_risk_score([100.0] * 5) == NEUTRAL_RISK_SCORE


def test_volatility_risk_score_flat_and_clamped():
    assert quant.volatility_risk_score([100.0] * 30) == 0.0
    swings = [100.0 if i % 2 == 0 else 200.0 for i in range(30)]
    assert quant.volatility_risk_score(swings) == 100.0


def test_liquidity_score_handles_unknown_market_cap():
    assert quant.liquidity_score(5_000.0, 0.0) == 0.0
    assert quant.liquidity_score(None, 1_000_000.0) == 0.0
    assert quant.liquidity_score(10_000.0, 1_000_000.0) == pytest.approx(10.0)
    assert quant.liquidity_score(2_000_000.0, 1_000_000.0) == 100.0


def test_weighted_average_zero_weights():
    assert quant.weighted_average([10.0, 20.0], [0.0, 0.0]) == 0.0
    assert quant.weighted_average([10.0, 20.0], [1.0, 3.0]) == pytest.approx(17.5)
