"""
Reference Data Package.

Services over users, instruments and market data.

Components:
- users: UserService
- instruments: InstrumentService (lookup and cached search)
- market_data: MarketDataService (latest price)
- search_cache: AsyncTTLCache
"""

from reference_data.config import SearchCacheConfig
from reference_data.instruments import InstrumentService
from reference_data.market_data import MarketDataService
from reference_data.search_cache import AsyncTTLCache, make_search_key
from reference_data.users import UserService

__all__ = [
    "SearchCacheConfig",
    "InstrumentService",
    "MarketDataService",
    "UserService",
    "AsyncTTLCache",
    "make_search_key",
]
