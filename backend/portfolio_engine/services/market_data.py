from __future__ import annotations

import hashlib
from datetime import datetime, timedelta, timezone
from typing import Any, Sequence

import numpy as np

SYNTHETIC_PERIODS = 400


def _seed_for(identifier: str) -> int:
    digest = hashlib.sha256(identifier.strip().lower().encode("utf-8")).digest()
    return int.from_bytes(digest[:4], "big")


def _synthetic_closes(identifier: str) -> np.ndarray:
    """Chronological close prices, stable for a given identifier across processes."""
    rng = np.random.default_rng(_seed_for(identifier))
    drift = rng.uniform(-0.0005, 0.0012)
    vol = rng.uniform(0.004, 0.045)
    returns = rng.normal(drift, vol, size=SYNTHETIC_PERIODS)
    price0 = rng.uniform(0.8, 2500.0)
    return price0 * np.exp(np.cumsum(returns))


class SyntheticMarketData:
    """Deterministic simulated market feed.

    Quotes carry ``simulated=True`` so downstream consumers can tell they are
    not measured data.
    """

    name = "synthetic"

    def __init__(self, now: datetime | None = None) -> None:
        self._now = now

    def _today(self) -> datetime:
        now = self._now or datetime.now(timezone.utc)
        return now.replace(hour=0, minute=0, second=0, microsecond=0)

    async def get_quotes(self, identifiers: Sequence[str]) -> dict[str, dict[str, Any]]:
        quotes: dict[str, dict[str, Any]] = {}
        for identifier in identifiers:
            if not identifier:
                continue
            closes = _synthetic_closes(identifier)
            rng = np.random.default_rng(_seed_for(identifier) + 1)
            price = float(closes[-1])
            prev = float(closes[-2])
            supply = float(rng.uniform(1e5, 5e8))
            market_cap = price * supply
            quotes[identifier] = {
                "price": price,
                "change24h": price - prev,
                "changePercent24h": (price / prev - 1.0) * 100.0 if prev else 0.0,
                "volume24h": market_cap * float(rng.uniform(0.001, 0.12)),
                "marketCap": market_cap,
                "name": None,
                "symbol": None,
                "simulated": True,
            }
        return quotes

    async def get_price_history(self, identifier: str, days: int) -> list[dict[str, Any]]:
        closes = _synthetic_closes(identifier)
        count = max(2, min(int(days) + 1, len(closes)))
        today = self._today()
        newest_first = closes[::-1][:count]
        return [
            {"timestamp": today - timedelta(days=offset), "price": float(price)}
            for offset, price in enumerate(newest_first)
        ]
