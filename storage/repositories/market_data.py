"""
Market Data Repository.

Read-only access to daily market data. The latest entry for an
instrument is the one with the greatest date.
"""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from core.domain import MarketData
from storage.models.brokerage import MarketDataModel
from storage.repositories.base import BaseRepository


class MarketDataRepository(BaseRepository[MarketDataModel]):
    """Repository for market data."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        super().__init__(session_factory, MarketDataModel, "MarketDataRepository")

    async def get_latest(self, instrument_id: int) -> Optional[MarketData]:
        """
        Get the most recent market data for an instrument.

        Returns:
            Latest entry, or None when the instrument has no data
        """
        stmt = (
            select(MarketDataModel)
            .where(MarketDataModel.instrument_id == instrument_id)
            .order_by(MarketDataModel.quote_date.desc(), MarketDataModel.id.desc())
            .limit(1)
        )
        model = await self._fetch_one(stmt, "get_latest")
        if model is None:
            return None
        return MarketData(
            id=model.id,
            instrument_id=model.instrument_id,
            high=model.high,
            low=model.low,
            open=model.open,
            close=model.close,
            previous_close=model.previous_close,
            date=model.quote_date,
        )
