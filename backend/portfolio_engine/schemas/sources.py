from datetime import datetime
from typing import Any

from pydantic import Field

from portfolio_engine.schemas.base import CamelModel


class BalanceRecord(CamelModel):
    contract_address: str = Field(min_length=1)
    token_id: str | None = None
    network: str = Field(min_length=1)
    balance: float = Field(ge=0, allow_inf_nan=False)
    name: str | None = None
    symbol: str | None = None
    original_price: float | None = Field(default=None, ge=0)
    staking_rewards: float = 0.0
    apy: float | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)


class MarketQuote(CamelModel):
    price: float = Field(ge=0, allow_inf_nan=False)
    change_24h: float = 0.0
    change_percent_24h: float = 0.0
    volume_24h: float = 0.0
    market_cap: float = 0.0
    name: str | None = None
    symbol: str | None = None
    simulated: bool = False


class PricePoint(CamelModel):
    timestamp: datetime
    price: float
