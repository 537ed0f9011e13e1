"""
Reference Data - Instrument Service.

============================================================
RESPONSIBILITY
============================================================
- Exact lookup by ticker (order placement)
- Lookup by id (portfolio metadata)
- Cached partial search by ticker or name

============================================================
SEARCH RULES
============================================================
- The query is trimmed
- Fewer than 3 characters: empty result, no database access
- Cache key: lower-cased query + ":" + result limit
- The repository receives the trimmed query with its case intact

============================================================
"""

import logging
from typing import List, Optional

from core.constants import MIN_SEARCH_QUERY_LENGTH
from core.domain import Instrument
from core.exceptions import InstrumentNotFoundError
from reference_data.config import SearchCacheConfig
from reference_data.search_cache import AsyncTTLCache, make_search_key
from storage.repositories.instruments import InstrumentRepository


logger = logging.getLogger(__name__)


class InstrumentService:
    """Instrument lookup and search."""

    def __init__(
        self,
        repository: InstrumentRepository,
        cache: Optional[AsyncTTLCache[List[Instrument]]] = None,
        config: Optional[SearchCacheConfig] = None,
    ):
        self._repository = repository
        self._config = config or SearchCacheConfig()
        if cache is None:
            cache = AsyncTTLCache(
                max_size=self._config.max_size,
                ttl_seconds=self._config.ttl_seconds,
            )
        self._cache = cache

    @property
    def cache(self) -> AsyncTTLCache[List[Instrument]]:
        return self._cache

    # =========================================================
    # LOOKUPS
    # =========================================================

    async def get_by_ticker(self, ticker: str) -> Instrument:
        """
        Get an instrument by exact ticker.

        Raises:
            InstrumentNotFoundError: If the ticker is unknown
        """
        instrument = await self._repository.get_by_ticker(ticker)
        if instrument is None:
            raise InstrumentNotFoundError(ticker)
        return instrument

    async def find_by_id(self, instrument_id: int) -> Optional[Instrument]:
        """Get an instrument by id, or None."""
        return await self._repository.get_by_id(instrument_id)

    # =========================================================
    # SEARCH
    # =========================================================

    async def search(self, raw_query: str) -> List[Instrument]:
        """
        Search instruments by ticker or name fragment.

        Args:
            raw_query: User-supplied query

        Returns:
            Up to ``limit`` instruments ordered by ticker
        """
        query = (raw_query or "").strip()
        if len(query) < MIN_SEARCH_QUERY_LENGTH:
            return []

        limit = self._config.limit
        key = make_search_key(query, limit)

        cached = self._cache.lookup(key)
        if cached.present:
            logger.info(f"Instrument search cache HIT for key={key}")
            return list(cached.value)

        logger.info(f"Instrument search cache MISS for key={key}")
        results = await self._cache.get_or_compute(
            key,
            lambda: self._repository.search_partial(query, limit),
        )
        return list(results)
