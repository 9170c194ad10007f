import pytest
from fastapi.testclient import TestClient

from fakes import NOW, CountingCatalog, FakeBalances, FakeMarket
from portfolio_engine.core.dependencies import get_defi_aggregator, get_portfolio_service
from portfolio_engine.main import app
from portfolio_engine.services.cache import TTLCache
from portfolio_engine.services.defi_aggregator import DeFiAggregator
from portfolio_engine.services.portfolio_service import PortfolioService


client = TestClient(app)


def test_health():
    response = client.get('/health')
    assert response.status_code == 200
    assert response.json()['status'] == 'ok'


def test_demo_portfolio_and_analytics():
    portfolio = client.get('/api/portfolio/0xdemo')
    assert portfolio.status_code == 200
    payload = portfolio.json()
    assert payload['source'] == 'synthetic'
    assert len(payload['assets']) == 5
    assert payload['metrics']['totalValue'] > 0
    assert len(payload['predictions']) == 5

    analytics = client.get('/api/portfolio/0xdemo/analytics', params={'timeframe': '7d'})
    assert analytics.status_code == 200
    body = analytics.json()
    assert body['prediction']['timeframe'] == '7d'
    assert sum(s['percentage'] for s in body['assetTypeDistribution']) == pytest.approx(100)


def test_defi_opportunities_endpoint():
    response = client.get('/api/defi/opportunities', params={'assets': 'USDC,WETH', 'riskTolerance': 'low'})
    assert response.status_code == 200
    payload = response.json()
    assert payload['riskTolerance'] == 'low'
    assert payload['crossChain'] == []
    assert all(m['utilization'] <= 80 for m in payload['lending'])
    assert 'supplyAPY' in payload['lending'][0]

    bad = client.get('/api/defi/opportunities', params={'riskTolerance': 'reckless'})
    assert bad.status_code == 422


def test_unavailable_sources_map_to_503():
    app.dependency_overrides[get_portfolio_service] = lambda: PortfolioService(
        FakeBalances(fail=True), FakeMarket(), CountingCatalog(), TTLCache(0), clock=lambda: NOW
    )
    failing = {
        'get_protocols', 'get_lending_opportunities', 'get_yield_strategies', 'get_cross_chain_opportunities',
        'get_liquidity_pools', 'get_arbitrage_opportunities', 'get_defi_insights',
    }
    app.dependency_overrides[get_defi_aggregator] = lambda: DeFiAggregator(CountingCatalog(failing), TTLCache(0))
    try:
        assert client.get('/api/portfolio/0xdemo').status_code == 503
        assert client.get('/api/defi/opportunities').status_code == 503
    finally:
        app.dependency_overrides.clear()
