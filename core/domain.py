"""
Core Module - Domain Types.

============================================================
PURPOSE
============================================================
Entity types shared by every layer: storage maps rows into
them, services compute on them, the API serializes them.

All entities are frozen dataclasses. An order is built once,
its status may be replaced (``dataclasses.replace``) before the
single save, and it is never mutated afterwards.

============================================================
"""

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Optional


# ============================================================
# ENUMS
# ============================================================

class OrderSide(str, Enum):
    """Order side."""

    BUY = "BUY"
    SELL = "SELL"

    CASH_IN = "CASH_IN"
    """Deposit. Size is the number of currency units."""

    CASH_OUT = "CASH_OUT"
    """Withdrawal. Size is the number of currency units."""

    @property
    def is_trade(self) -> bool:
        return self in (OrderSide.BUY, OrderSide.SELL)


class OrderType(str, Enum):
    """Order type."""

    MARKET = "MARKET"
    """Execute at the latest close."""

    LIMIT = "LIMIT"
    """Rest at the requested price."""


class OrderStatus(str, Enum):
    """
    Order status.

    Decided at acceptance time; there is no later transition.
    """

    NEW = "NEW"
    """Accepted LIMIT order awaiting a match."""

    FILLED = "FILLED"
    """Executed immediately (MARKET) or a cash movement."""

    REJECTED = "REJECTED"
    """Failed the funds or holdings check."""


class InstrumentType(str, Enum):
    """Instrument type."""

    ACCIONES = "ACCIONES"
    """Equity."""

    MONEDA = "MONEDA"
    """Currency (the synthetic cash instrument)."""


# ============================================================
# REFERENCE ENTITIES
# ============================================================

@dataclass(frozen=True)
class User:
    """Brokerage account holder."""

    id: int
    email: str
    account_number: str


@dataclass(frozen=True)
class Instrument:
    """Tradeable instrument."""

    id: int
    ticker: str
    name: str
    type: InstrumentType


@dataclass(frozen=True)
class MarketData:
    """One day of prices for an instrument."""

    instrument_id: int
    close: Optional[Decimal]
    date: date
    id: Optional[int] = None
    high: Optional[Decimal] = None
    low: Optional[Decimal] = None
    open: Optional[Decimal] = None
    previous_close: Optional[Decimal] = None


# ============================================================
# ORDER
# ============================================================

@dataclass(frozen=True)
class Order:
    """
    Order ledger entry.

    Invariants:
    - size > 0 (whole shares, or currency units for cash sides)
    - price has 2 fractional digits
    """

    instrument_id: int
    """Instrument traded (the cash instrument for CASH_IN/CASH_OUT)."""

    user_id: int
    """Owner of the order."""

    side: OrderSide
    """BUY, SELL, CASH_IN or CASH_OUT."""

    type: OrderType
    """MARKET or LIMIT."""

    size: int
    """Shares, or currency units for cash sides."""

    price: Decimal
    """Execution price (2 decimals, half-up)."""

    status: OrderStatus
    """NEW, FILLED or REJECTED."""

    datetime: datetime
    """Acceptance timestamp (UTC)."""

    id: Optional[int] = None
    """Ledger id, assigned on save."""

    @property
    def notional(self) -> Decimal:
        """price × size."""
        return self.price * self.size
