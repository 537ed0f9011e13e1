"""
Reference Data - Configuration.
"""

from dataclasses import dataclass


# ============================================================
# INSTRUMENT SEARCH CONFIGURATION
# ============================================================

@dataclass(frozen=True)
class SearchCacheConfig:
    """
    Instrument search cache configuration.

    Results are cached per normalized query and limit.
    """

    max_size: int = 1000
    """Maximum number of cached queries."""

    ttl_minutes: int = 3
    """Entries expire this many minutes after being written."""

    limit: int = 10
    """Maximum number of instruments returned per search."""

    @property
    def ttl_seconds(self) -> float:
        return self.ttl_minutes * 60.0
