"""
Repository Layer Package.

============================================================
PURPOSE
============================================================
The Repository Layer is the ONLY gateway to persistent storage.
All database access MUST go through repository classes.

============================================================
ARCHITECTURE PRINCIPLES
============================================================
1. One repository per table
2. Session factory injection: one short-lived session per call
3. Explicit methods returning domain types, never ORM rows
4. The order ledger is append-only
5. All DB errors wrapped in repository exceptions

============================================================
REPOSITORIES
============================================================
- UserRepository: account holders
- InstrumentRepository: instruments and partial search
- MarketDataRepository: latest daily market data
- OrderRepository: order ledger

============================================================
"""

from storage.repositories.base import BaseRepository
from storage.repositories.exceptions import (
    ConnectionError,
    DuplicateRecordError,
    IntegrityError,
    QueryError,
    RepositoryException,
)
from storage.repositories.instruments import InstrumentRepository
from storage.repositories.market_data import MarketDataRepository
from storage.repositories.orders import OrderRepository
from storage.repositories.users import UserRepository

__all__ = [
    "BaseRepository",
    "RepositoryException",
    "DuplicateRecordError",
    "IntegrityError",
    "ConnectionError",
    "QueryError",
    "UserRepository",
    "InstrumentRepository",
    "MarketDataRepository",
    "OrderRepository",
]
