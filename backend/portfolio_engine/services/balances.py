from __future__ import annotations

import copy
from typing import Any, Mapping

DEMO_BALANCES: list[dict[str, Any]] = [
    {
        "contractAddress": "0x7a3f0c1e2b9d4c5a6e8f0b1c2d3e4f5a6b7c8d9e",
        "tokenId": "1",
        "network": "ethereum",
        "balance": "40",
        "name": "Downtown Apartment Token",
        "symbol": "DAPT",
        "originalPrice": 118.0,
        "stakingRewards": 310.0,
        "apy": 6.4,
        "metadata": {
            "description": "Fractional ownership of a residential building",
            "location": "Austin, TX",
            "lastAppraisal": "2024-11-02",
            "documents": ["ipfs://QmDeed", "ipfs://QmAppraisal"],
        },
    },
    {
        "contractAddress": "0x45804880de22913dafe09f4980848ece6ecbaf78",
        "network": "ethereum",
        "balance": 3.5,
        "name": "Paxos Gold",
        "symbol": "PAXG",
        "originalPrice": 1850.0,
        "apy": 0.0,
        "metadata": {"description": "Each token is backed by one troy ounce of gold", "certification": "LBMA"},
    },
    {
        "contractAddress": "0x1b2c3d4e5f60718293a4b5c6d7e8f90a1b2c3d4e",
        "network": "polygon",
        "balance": 120,
        "name": "US Treasury Bill Token",
        "symbol": "TBILL",
        "originalPrice": 99.2,
        "stakingRewards": 42.5,
        "apy": 4.9,
    },
    {
        "contractAddress": "0xc02aaa39b223fe8d0a0e5c4f27ead9083c756cc2",
        "network": "ethereum",
        "balance": 2.75,
        "name": "Wrapped Ether",
        "symbol": "WETH",
        "originalPrice": 2140.0,
        "apy": 1.95,
    },
    {
        "contractAddress": "0xa0b86991c6218b36c1d19d4a2e9eb0ce3606eb48",
        "network": "ethereum",
        "balance": 5200,
        "name": "USD Coin",
        "symbol": "USDC",
        "originalPrice": 1.0,
        "apy": 4.85,
    },
]


class StaticBalanceSource:
    """In-memory balances keyed by owner, used for demos and offline runs."""

    def __init__(
        self,
        holdings: Mapping[str, list[dict[str, Any]]] | None = None,
        default: list[dict[str, Any]] | None = None,
    ) -> None:
        self._holdings = {owner.lower(): list(rows) for owner, rows in (holdings or {}).items()}
        self._default = list(DEMO_BALANCES if default is None else default)

    async def get_portfolio_balances(self, owner: str) -> list[dict[str, Any]]:
        rows = self._holdings.get((owner or "").strip().lower(), self._default)
        return copy.deepcopy(rows)
