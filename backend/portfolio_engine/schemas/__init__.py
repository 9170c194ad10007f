from portfolio_engine.schemas.defi import DeFiInsight, DeFiOpportunities
from portfolio_engine.schemas.portfolio import (
    MarketInsight,
    PortfolioAnalytics,
    PortfolioAsset,
    PortfolioMetrics,
    PortfolioOverview,
    PortfolioPrediction,
    RebalancingSuggestion,
    YieldOpportunity,
)
from portfolio_engine.schemas.sources import BalanceRecord, MarketQuote, PricePoint

__all__ = [
    "BalanceRecord",
    "DeFiInsight",
    "DeFiOpportunities",
    "MarketInsight",
    "MarketQuote",
    "PortfolioAnalytics",
    "PortfolioAsset",
    "PortfolioMetrics",
    "PortfolioOverview",
    "PortfolioPrediction",
    "PricePoint",
    "RebalancingSuggestion",
    "YieldOpportunity",
]
