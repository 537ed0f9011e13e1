"""
Order Engine - Types.

============================================================
PURPOSE
============================================================
Immutable records passed between the stages of the order
acceptance pipeline.

    OrderRequest
        -> validate
    ResolvedOrderContext (user, instrument, market data)
        -> price and size
    Order (FILLED / NEW)
        -> funds and holdings check
    Order (possibly REJECTED)
        -> save

No stage mutates its input; each returns a new record.

============================================================
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from core.domain import (
    Instrument,
    MarketData,
    OrderSide,
    OrderType,
    User,
)


# ============================================================
# REQUEST
# ============================================================

@dataclass(frozen=True)
class OrderRequest:
    """
    Order submission as received from a client.

    Every field is optional here; the validator decides what is
    missing or inconsistent.
    """

    instrument_ticker: Optional[str] = None
    """Ticker of the instrument to trade."""

    user_id: Optional[int] = None
    """Submitting user."""

    type: Optional[OrderType] = None
    """MARKET or LIMIT."""

    side: Optional[OrderSide] = None
    """BUY or SELL (cash sides are rejected)."""

    size: Optional[int] = None
    """Number of shares. Exclusive with amount."""

    amount: Optional[Decimal] = None
    """Currency amount to invest. Exclusive with size."""

    price: Optional[Decimal] = None
    """Limit price. LIMIT only."""

    @property
    def has_size(self) -> bool:
        return self.size is not None and self.size > 0

    @property
    def has_amount(self) -> bool:
        return self.amount is not None and self.amount > 0


# ============================================================
# RESOLVED CONTEXT
# ============================================================

@dataclass(frozen=True)
class ResolvedOrderContext:
    """
    A validated request together with the entities it references.

    market_data is set for MARKET orders only.
    """

    request: OrderRequest
    user: User
    instrument: Instrument
    market_data: Optional[MarketData] = None


__all__ = [
    "OrderRequest",
    "ResolvedOrderContext",
]
