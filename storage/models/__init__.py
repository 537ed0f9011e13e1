"""
Storage Models Package.

All ORM models for the brokerage database.

============================================================
MODEL ORGANIZATION
============================================================

Brokerage (brokerage.py)
- UserModel
- InstrumentModel
- MarketDataModel
- OrderModel

============================================================
"""

from storage.models.base import Base
from storage.models.brokerage import (
    InstrumentModel,
    MarketDataModel,
    OrderModel,
    UserModel,
)

__all__ = [
    "Base",
    "InstrumentModel",
    "MarketDataModel",
    "OrderModel",
    "UserModel",
]
