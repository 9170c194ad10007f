import anyio
import pytest

from fakes import NOW, FakeMarket
from portfolio_engine.services.enrichment import asset_id, classify_asset, enrich_portfolio_assets
from portfolio_engine.schemas.sources import BalanceRecord


@pytest.mark.parametrize(
    ("name", "metadata", "expected"),
    [
        ("Downtown Apartment", None, "real-estate"),
        ("Paxos Gold", None, "commodity"),
        ("Gold Bond ETF", None, "commodity"),
        ("US Treasury Bill Token", None, "bond"),
        ("Tokenized Apple Stock", None, "equity"),
        ("Bored Ape", {"tokenStandard": "ERC-721"}, "nft"),
        ("Mystery Token", {"description": "Backed by a residential property"}, "real-estate"),
        ("Wrapped Ether", None, "crypto"),
        (None, None, "crypto"),
    ],
)
def test_classify_asset(name, metadata, expected):
    assert classify_asset(name, metadata) == expected


def test_asset_id_is_stable_and_lowercase():
    record = BalanceRecord.model_validate({"contractAddress": "0xABC", "network": "Ethereum", "balance": 1})
    assert asset_id(record) == "ethereum:0xabc:0"


def test_enrich_builds_value_and_pnl():
    balances = [
        {
            "contractAddress": "0xhouse",
            "network": "ethereum",
            "balance": 10,
            "name": "Downtown Apartment",
            "symbol": "DAPT",
            "originalPrice": 4,
            "apy": 6.5,
            "metadata": {"location": "Austin, TX", "documents": ["ipfs://deed"]},
        }
    ]
    market = FakeMarket(
        quotes={"0xhouse": {"price": 5, "change24h": 0.1, "changePercent24h": 2.0, "volume24h": 100, "marketCap": 10_000}},
        histories={"0xhouse": [5.0] * 8 + [4.0] * 23},
    )

    assets = anyio.run(lambda: enrich_portfolio_assets(balances, market.quotes, market, now=NOW))

    assert len(assets) == 1
    asset = assets[0]
    assert asset.total_value == pytest.approx(50.0)
    assert asset.total_value == pytest.approx(asset.balance * asset.current_price, rel=1e-9)
    assert asset.pnl == pytest.approx(10.0)
    assert asset.pnl_percentage == pytest.approx(25.0)
    assert asset.type == "real-estate"
    assert asset.weekly_change == pytest.approx(0.0)
    assert asset.monthly_change == pytest.approx(1.0)
    assert asset.liquidity_score == pytest.approx(10.0)
    assert asset.location == "Austin, TX"
    assert asset.metadata.documents == ["ipfs://deed"]
    assert asset.metadata.last_updated == NOW


def test_missing_original_price_means_zero_pnl():
    balances = [{"contractAddress": "0xeth", "network": "ethereum", "balance": 2, "name": "Wrapped Ether"}]
    market = FakeMarket(quotes={"0xeth": {"price": 3000}})

    [asset] = anyio.run(lambda: enrich_portfolio_assets(balances, market.quotes, market, now=NOW))

    assert asset.original_price == 3000
    assert asset.pnl == 0
    assert asset.pnl_percentage == 0
    assert asset.apy == 0
    assert asset.liquidity_score == 0


def test_failed_assets_are_skipped_and_order_kept():
    balances = [
        {"contractAddress": "0xb", "network": "ethereum", "balance": 1, "name": "Second"},
        {"contractAddress": "0xnoquote", "network": "ethereum", "balance": 1},
        {"contractAddress": "0xbad", "network": "ethereum", "balance": -5},
        {"contractAddress": "0xhist", "network": "ethereum", "balance": 1},
        {"contractAddress": "0xa", "network": "ethereum", "balance": 1, "name": "First"},
        {"contractAddress": "0xa", "network": "ethereum", "balance": 1, "name": "First again"},
    ]
    market = FakeMarket(
        quotes={"0xa": {"price": 1}, "0xb": {"price": 2}, "0xbad": {"price": 1}, "0xhist": {"price": 1}},
        broken_history={"0xhist"},
    )

    assets = anyio.run(lambda: enrich_portfolio_assets(balances, market.quotes, market, now=NOW))

    assert [asset.name for asset in assets] == ["Second", "First"]


def test_slow_history_times_out_and_is_skipped():
    class SlowMarket(FakeMarket):
        async def get_price_history(self, identifier, days):
            if identifier == "0xslow":
                await anyio.sleep(5)
            return await super().get_price_history(identifier, days)

    balances = [
        {"contractAddress": "0xslow", "network": "ethereum", "balance": 1},
        {"contractAddress": "0xfast", "network": "ethereum", "balance": 1},
    ]
    market = SlowMarket(quotes={"0xslow": {"price": 1}, "0xfast": {"price": 1}})

    assets = anyio.run(lambda: enrich_portfolio_assets(balances, market.quotes, market, timeout=0.05, now=NOW))

    assert [asset.contract_address for asset in assets] == ["0xfast"]
