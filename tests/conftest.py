"""
Shared test fixtures.

Domain objects and an order factory used across the order
engine, portfolio and API tests.
"""

from datetime import datetime, timezone
from decimal import Decimal

import pytest

from core.clock import MockClock
from core.domain import (
    Instrument,
    InstrumentType,
    MarketData,
    Order,
    OrderSide,
    OrderStatus,
    OrderType,
    User,
)


# ============================================================
# TIME
# ============================================================

@pytest.fixture
def fixed_time() -> datetime:
    return datetime(2024, 7, 15, 14, 30, tzinfo=timezone.utc)


@pytest.fixture
def clock(fixed_time) -> MockClock:
    return MockClock(fixed_time)


# ============================================================
# REFERENCE ENTITIES
# ============================================================

@pytest.fixture
def user() -> User:
    return User(id=1, email="emiliano@test.com", account_number="10001")


@pytest.fixture
def instrument() -> Instrument:
    return Instrument(id=47, ticker="PAMP", name="Pampa Holding S.A.", type=InstrumentType.ACCIONES)


@pytest.fixture
def other_instrument() -> Instrument:
    return Instrument(id=31, ticker="YPFD", name="Y.P.F. S.A.", type=InstrumentType.ACCIONES)


@pytest.fixture
def cash_instrument() -> Instrument:
    return Instrument(id=66, ticker="ARS", name="PESOS", type=InstrumentType.MONEDA)


@pytest.fixture
def market_data(instrument) -> MarketData:
    return MarketData(
        id=1,
        instrument_id=instrument.id,
        close=Decimal("100.00"),
        previous_close=Decimal("98.50"),
        date=datetime(2024, 7, 12).date(),
    )


# ============================================================
# ORDERS
# ============================================================

@pytest.fixture
def make_order(fixed_time, user, instrument):
    """Factory for FILLED ledger entries."""

    def _make(
        side: OrderSide,
        size: int,
        price: str = "1.00",
        instrument_id: int = instrument.id,
        user_id: int = user.id,
        status: OrderStatus = OrderStatus.FILLED,
        order_type: OrderType = OrderType.MARKET,
    ) -> Order:
        return Order(
            instrument_id=instrument_id,
            user_id=user_id,
            side=side,
            type=order_type,
            size=size,
            price=Decimal(price),
            status=status,
            datetime=fixed_time,
        )

    return _make


@pytest.fixture
def make_cash_in(make_order, cash_instrument):
    """Factory for CASH_IN ledger entries."""

    def _make(units: int) -> Order:
        return make_order(OrderSide.CASH_IN, units, instrument_id=cash_instrument.id)

    return _make
