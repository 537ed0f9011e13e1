"""
Reference Data - Market Data Service.
"""

from typing import Optional

from core.domain import MarketData
from core.exceptions import MarketDataNotFoundError
from storage.repositories.market_data import MarketDataRepository


class MarketDataService:
    """Latest-price lookup."""

    def __init__(self, repository: MarketDataRepository):
        self._repository = repository

    async def find_latest(self, instrument_id: int) -> Optional[MarketData]:
        """Latest market data for an instrument, or None."""
        return await self._repository.get_latest(instrument_id)

    async def get_latest(self, instrument_id: int) -> MarketData:
        """
        Latest market data for an instrument.

        Raises:
            MarketDataNotFoundError: If the instrument has no market data
        """
        market_data = await self._repository.get_latest(instrument_id)
        if market_data is None:
            raise MarketDataNotFoundError(instrument_id)
        return market_data
