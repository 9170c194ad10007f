from datetime import datetime
from typing import Literal

from pydantic import Field

from portfolio_engine.schemas.base import CamelModel, Impact, RiskTier, RiskTolerance


class ProtocolFees(CamelModel):
    deposit: float = 0.0
    withdrawal: float = 0.0
    performance: float = 0.0


class DeFiProtocol(CamelModel):
    id: str
    name: str
    category: Literal["lending", "dex", "yield-farming", "staking", "options", "insurance"]
    blockchain: str
    tvl: float
    apy: float
    risk: RiskTier
    audited: bool
    contract_address: str
    website: str
    description: str
    features: list[str] = Field(default_factory=list)
    minimum_deposit: float
    fees: ProtocolFees
    lockup_period: int = 0
    auto_compound: bool = False
    verified: bool = False
    logo: str = ""


class LendingOpportunity(CamelModel):
    protocol: str
    asset: str
    supply_apy: float = Field(alias="supplyAPY")
    borrow_apy: float = Field(alias="borrowAPY")
    utilization: float = Field(ge=0, le=100)
    total_supply: float
    total_borrow: float
    collateral_factor: float
    liquidation_threshold: float
    reserve_factor: float
    blockchain: str
    contract_address: str
    price_oracle: str
    last_updated: datetime


class StrategyStep(CamelModel):
    action: Literal["supply", "borrow", "swap", "stake", "compound"]
    protocol: str
    asset: str
    amount: float
    apy: float
    description: str


class StrategyRequirements(CamelModel):
    minimum_amount: float
    assets: list[str]
    experience: Literal["beginner", "intermediate", "advanced"]


class StrategyAutomation(CamelModel):
    available: bool
    cost: float
    features: list[str] = Field(default_factory=list)


class YieldStrategy(CamelModel):
    id: str
    name: str
    description: str
    category: Literal["conservative", "moderate", "aggressive"]
    expected_apy: float = Field(alias="expectedAPY")
    risk_score: float = Field(ge=0, le=100)
    tvl: float
    protocols: list[str]
    steps: list[StrategyStep]
    requirements: StrategyRequirements
    risks: list[str]
    time_commitment: str
    automation: StrategyAutomation


class CrossChainOpportunity(CamelModel):
    id: str
    name: str
    source_chain: str
    target_chain: str
    asset: str
    source_apy: float = Field(alias="sourceAPY")
    target_apy: float = Field(alias="targetAPY")
    bridge_fee: float
    gas_cost: float
    total_yield: float
    estimated_time: str
    bridge_protocol: str
    target_protocol: str
    risk_factors: list[str]
    profit_potential: float


class PoolToken(CamelModel):
    symbol: str
    address: str
    weight: float
    reserve: float


class PoolReward(CamelModel):
    token: str
    apy: float
    emissions: float


class LiquidityPool(CamelModel):
    id: str
    protocol: str
    name: str
    tokens: list[PoolToken]
    total_liquidity: float
    volume_24h: float
    fees_24h: float
    apy: float
    impermanent_loss: float
    blockchain: str
    contract_address: str
    swap_fee: float
    rewards: list[PoolReward] = Field(default_factory=list)


class ArbitrageOpportunity(CamelModel):
    id: str
    asset: str
    buy_exchange: str
    sell_exchange: str
    buy_price: float
    sell_price: float
    price_discrepancy: float
    profit_percent: float
    volume: float
    gas_cost: float
    net_profit: float
    time_window: int
    blockchain: str
    risk: RiskTier
    complexity: Literal["simple", "moderate", "complex"]


class DeFiInsight(CamelModel):
    id: str
    type: Literal["market-move", "protocol-update", "yield-change", "risk-alert"]
    title: str
    description: str
    impact: Impact
    urgency: RiskTier
    protocols: list[str]
    recommended_action: str
    estimated_impact: float
    timestamp: datetime
    source: str


class DeFiOpportunities(CamelModel):
    risk_tolerance: RiskTolerance
    protocols: list[DeFiProtocol]
    lending: list[LendingOpportunity]
    strategies: list[YieldStrategy]
    cross_chain: list[CrossChainOpportunity]
    liquidity_pools: list[LiquidityPool]
    arbitrage: list[ArbitrageOpportunity]
    insights: list[DeFiInsight]
    degraded: list[str] = Field(default_factory=list)
