from datetime import datetime
from typing import Literal

from pydantic import Field

from portfolio_engine.schemas.base import CamelModel, Impact, RiskTier

AssetType = Literal["real-estate", "commodity", "equity", "bond", "crypto", "nft"]
Timeframe = Literal["1d", "7d", "30d", "90d", "1y"]


class AssetMetadata(CamelModel):
    description: str = ""
    image: str | None = None
    documents: list[str] = Field(default_factory=list)
    certification: str | None = None
    last_updated: datetime


class PortfolioAsset(CamelModel):
    id: str
    name: str
    symbol: str
    type: AssetType
    contract_address: str
    token_id: str | None = None
    blockchain: str
    balance: float
    current_price: float
    total_value: float
    original_price: float
    pnl: float
    pnl_percentage: float
    daily_change: float
    daily_change_percentage: float
    weekly_change: float
    monthly_change: float
    yearly_change: float
    apy: float
    staking_rewards: float
    location: str | None = None
    last_appraisal: str | None = None
    risk_score: float = Field(ge=0, le=100)
    liquidity_score: float = Field(ge=0, le=100)
    metadata: AssetMetadata


class PortfolioMetrics(CamelModel):
    total_value: float = 0.0
    total_pnl: float = 0.0
    total_pnl_percentage: float = 0.0
    daily_change: float = 0.0
    weekly_change: float = 0.0
    monthly_change: float = 0.0
    yearly_change: float = 0.0
    total_yield: float = 0.0
    average_apy: float = 0.0
    risk_score: float = 0.0
    diversification_score: float = 0.0
    liquidity_ratio: float = 0.0
    asset_count: int = 0
    asset_types: dict[str, float] = Field(default_factory=dict)
    blockchain_distribution: dict[str, float] = Field(default_factory=dict)
    top_performers: list[PortfolioAsset] = Field(default_factory=list)
    underperformers: list[PortfolioAsset] = Field(default_factory=list)


class YieldOpportunity(CamelModel):
    id: str
    name: str
    protocol: str
    type: Literal["lending", "staking", "liquidity-mining", "yield-farming"]
    asset: str
    apy: float
    tvl: float
    risk: RiskTier
    minimum_deposit: float
    lockup_period: int
    blockchain: str
    description: str
    rewards: list[str] = Field(default_factory=list)
    audited: bool
    featured: bool


class MarketInsight(CamelModel):
    id: str
    type: Literal["trend", "opportunity", "risk", "alert"]
    title: str
    description: str
    impact: Impact
    confidence: float = Field(ge=0, le=100)
    relevant_assets: list[str]
    relevant_symbols: list[str] = Field(default_factory=list)
    actionable: bool
    recommendation: str | None = None
    timestamp: datetime
    source: str


class PredictionFactor(CamelModel):
    name: str
    impact: float
    description: str


class PredictionScenarios(CamelModel):
    optimistic: float
    realistic: float
    pessimistic: float


class PortfolioPrediction(CamelModel):
    timeframe: Timeframe
    predicted_value: float
    predicted_change: float
    confidence: float = Field(ge=0, le=100)
    factors: list[PredictionFactor]
    scenarios: PredictionScenarios


class ExpectedImpact(CamelModel):
    risk: float
    return_: float = Field(alias="return")
    diversification: float


class TradeAction(CamelModel):
    asset: str
    amount: float


class RebalancingActions(CamelModel):
    sell: list[TradeAction] = Field(default_factory=list)
    buy: list[TradeAction] = Field(default_factory=list)


class RebalancingSuggestion(CamelModel):
    id: str
    type: Literal["overweight", "underweight", "risk-adjustment", "yield-optimization"]
    severity: RiskTier
    title: str
    description: str
    current_allocation: float
    suggested_allocation: float
    expected_impact: ExpectedImpact
    actions: RebalancingActions
    estimated_cost: float
    estimated_time: str


class PortfolioOverview(CamelModel):
    owner: str
    fetched_at: datetime
    source: str
    assets: list[PortfolioAsset]
    metrics: PortfolioMetrics
    yield_opportunities: list[YieldOpportunity]
    insights: list[MarketInsight]
    predictions: list[PortfolioPrediction]
    rebalancing_tips: list[RebalancingSuggestion]


class AllocationSlice(CamelModel):
    key: str
    value: float
    percentage: float


class PerformanceMetrics(CamelModel):
    sharpe_ratio: float
    volatility: float
    max_drawdown: float
    win_rate: float


class PortfolioStats(CamelModel):
    total_value: float
    total_pnl: float
    daily_change: float
    best_performer: PortfolioAsset | None = None
    worst_performer: PortfolioAsset | None = None
    top_opportunity: YieldOpportunity | None = None
    risk_score: float
    diversification_score: float


class PortfolioAnalytics(CamelModel):
    timeframe: Timeframe
    stats: PortfolioStats
    prediction: PortfolioPrediction | None = None
    rebalancing_tips: list[RebalancingSuggestion]
    asset_type_distribution: list[AllocationSlice]
    blockchain_distribution: list[AllocationSlice]
    performance_metrics: PerformanceMetrics
    top_performers: list[PortfolioAsset]
    underperformers: list[PortfolioAsset]
