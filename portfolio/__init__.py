"""
Portfolio Package.

Components:
- aggregator: PortfolioAggregator
- types: Portfolio, Position
- config: PortfolioConfig
"""

from portfolio.aggregator import PortfolioAggregator
from portfolio.config import PortfolioConfig
from portfolio.types import Portfolio, Position

__all__ = [
    "PortfolioAggregator",
    "PortfolioConfig",
    "Portfolio",
    "Position",
]
