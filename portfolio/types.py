"""
Portfolio - Types.

Derived, read-only views computed fresh on every request.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import List, Optional


@dataclass(frozen=True)
class Position:
    """Holding of one instrument."""

    instrument_id: int
    ticker: str
    name: str

    quantity: int
    """Net shares held (always > 0)."""

    average_price: Decimal
    """Volume-weighted average buy price (8 places)."""

    last_price: Optional[Decimal]
    """Latest close, or None without market data."""

    value: Decimal
    """quantity × last close (0 without market data)."""

    pnl_percent: Decimal
    """(last / average - 1) × 100, or 0 when either is missing."""


@dataclass(frozen=True)
class Portfolio:
    """A user's cash and positions."""

    user_id: int
    email: str
    account_number: str

    buying_power: Decimal
    """Cash available from the filled ledger."""

    total_value: Decimal
    """buying_power + Σ position values."""

    positions: List[Position] = field(default_factory=list)
