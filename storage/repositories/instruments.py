"""
Instrument Repository.

============================================================
PURPOSE
============================================================
Read-only access to instruments.

- Lookup by id
- Lookup by exact ticker
- Case-insensitive partial search on ticker OR name

Partial search relies on ILIKE; on PostgreSQL the trigram
indexes in ``storage/migrations/search_index.sql`` keep it
off a sequential scan.

============================================================
"""

from typing import List, Optional

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from core.domain import Instrument, InstrumentType
from storage.models.brokerage import InstrumentModel
from storage.repositories.base import BaseRepository


class InstrumentRepository(BaseRepository[InstrumentModel]):
    """Repository for instruments."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        super().__init__(session_factory, InstrumentModel, "InstrumentRepository")

    async def get_by_id(self, instrument_id: int) -> Optional[Instrument]:
        """Get an instrument by id, or None."""
        model = await self._get_by_id(instrument_id)
        return self._model_to_instrument(model) if model is not None else None

    async def get_by_ticker(self, ticker: str) -> Optional[Instrument]:
        """Get an instrument by exact ticker, or None."""
        stmt = select(InstrumentModel).where(InstrumentModel.ticker == ticker)
        model = await self._fetch_one(stmt, "get_by_ticker")
        return self._model_to_instrument(model) if model is not None else None

    async def search_partial(self, query: str, limit: int) -> List[Instrument]:
        """
        Search instruments whose ticker or name contains ``query``.

        Args:
            query: Case-insensitive fragment
            limit: Maximum number of results

        Returns:
            Matching instruments ordered by ticker
        """
        pattern = f"%{self._escape_like(query)}%"
        stmt = (
            select(InstrumentModel)
            .where(
                or_(
                    InstrumentModel.ticker.ilike(pattern, escape="\\"),
                    InstrumentModel.name.ilike(pattern, escape="\\"),
                )
            )
            .order_by(InstrumentModel.ticker.asc(), InstrumentModel.id.asc())
            .limit(limit)
        )
        models = await self._fetch_all(stmt, "search_partial")
        return [self._model_to_instrument(m) for m in models]

    @staticmethod
    def _escape_like(value: str) -> str:
        return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")

    @staticmethod
    def _model_to_instrument(model: InstrumentModel) -> Instrument:
        return Instrument(
            id=model.id,
            ticker=model.ticker,
            name=model.name,
            type=InstrumentType(model.type),
        )
