"""
Brokerage Domain ORM Models.

============================================================
PURPOSE
============================================================
Models for users, instruments, daily market data and the
order ledger.

Column names follow the existing brokerage schema
(lower-case, no separators: ``instrumentid``, ``accountnumber``).

============================================================
DATA LIFECYCLE ROLE
============================================================
- users / instruments / marketdata: reference data, read-only here
- orders: APPEND-ONLY ledger, one row per submission

============================================================
"""

from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy import (
    Date,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
)
from sqlalchemy.orm import Mapped, mapped_column

from storage.models.base import Base


class UserModel(Base):
    """Brokerage account holder."""

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    account_number: Mapped[str] = mapped_column("accountnumber", String(20), nullable=False)


class InstrumentModel(Base):
    """Tradeable instrument (or the synthetic cash instrument)."""

    __tablename__ = "instruments"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    ticker: Mapped[str] = mapped_column(String(10), nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    type: Mapped[str] = mapped_column(String(10), nullable=False)


class MarketDataModel(Base):
    """
    Daily market data for one instrument.

    The row with the greatest ``date`` is the latest price.
    """

    __tablename__ = "marketdata"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    instrument_id: Mapped[int] = mapped_column(
        "instrumentid",
        Integer,
        ForeignKey("instruments.id"),
        nullable=False,
    )
    high: Mapped[Optional[Decimal]] = mapped_column(Numeric(10, 2))
    low: Mapped[Optional[Decimal]] = mapped_column(Numeric(10, 2))
    open: Mapped[Optional[Decimal]] = mapped_column(Numeric(10, 2))
    close: Mapped[Optional[Decimal]] = mapped_column(Numeric(10, 2))
    previous_close: Mapped[Optional[Decimal]] = mapped_column("previousclose", Numeric(10, 2))
    quote_date: Mapped[date] = mapped_column("date", Date, nullable=False)


class OrderModel(Base):
    """
    Order ledger row.

    ============================================================
    DATA LIFECYCLE
    ============================================================
    - Mutability: IMMUTABLE once inserted
    - Status is decided before the single insert
    - FILLED rows are replayed to derive cash and holdings

    ============================================================
    """

    __tablename__ = "orders"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    instrument_id: Mapped[int] = mapped_column(
        "instrumentid",
        Integer,
        ForeignKey("instruments.id"),
        nullable=False,
    )
    user_id: Mapped[int] = mapped_column(
        "userid",
        Integer,
        ForeignKey("users.id"),
        nullable=False,
    )
    size: Mapped[int] = mapped_column(Integer, nullable=False)
    price: Mapped[Decimal] = mapped_column(Numeric(18, 2), nullable=False)
    type: Mapped[str] = mapped_column(String(10), nullable=False)
    side: Mapped[str] = mapped_column(String(10), nullable=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False)
    placed_at: Mapped[datetime] = mapped_column("datetime", DateTime(timezone=True), nullable=False)


Index("ix_marketdata_instrument_date", MarketDataModel.instrument_id, MarketDataModel.quote_date)
Index("ix_orders_user_status", OrderModel.user_id, OrderModel.status)
