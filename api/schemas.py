"""
Pydantic Schemas for the Brokerage API.

Field names are snake_case in Python and camelCase on the wire.
Decimal values are serialized as JSON strings to keep their scale.
"""

from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from core.domain import (
    Instrument,
    InstrumentType,
    Order,
    OrderSide,
    OrderStatus,
    OrderType,
)
from order_engine.types import OrderRequest
from portfolio.types import Portfolio, Position


class CamelModel(BaseModel):
    """Base model with camelCase aliases."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


# =============================================================
# INSTRUMENTS
# =============================================================

class InstrumentResponse(CamelModel):
    id: int
    ticker: str
    name: str
    type: InstrumentType

    @classmethod
    def from_domain(cls, instrument: Instrument) -> "InstrumentResponse":
        return cls(
            id=instrument.id,
            ticker=instrument.ticker,
            name=instrument.name,
            type=instrument.type,
        )


# =============================================================
# ORDERS
# =============================================================

class OrderCreateRequest(CamelModel):
    """
    Order submission body.

    Every field is optional at this level so that rule violations
    are reported by the order validator with a specific message.
    """

    instrument_ticker: Optional[str] = None
    user_id: Optional[int] = None
    type: Optional[OrderType] = None
    side: Optional[OrderSide] = None
    size: Optional[int] = None
    amount: Optional[Decimal] = None
    price: Optional[Decimal] = None

    def to_domain(self) -> OrderRequest:
        return OrderRequest(
            instrument_ticker=self.instrument_ticker,
            user_id=self.user_id,
            type=self.type,
            side=self.side,
            size=self.size,
            amount=self.amount,
            price=self.price,
        )


class OrderResponse(CamelModel):
    id: Optional[int]
    instrument_id: int
    user_id: int
    side: OrderSide
    type: OrderType
    size: int
    price: Decimal
    status: OrderStatus
    placed_at: datetime = Field(alias="datetime")

    @classmethod
    def from_domain(cls, order: Order) -> "OrderResponse":
        return cls(
            id=order.id,
            instrument_id=order.instrument_id,
            user_id=order.user_id,
            side=order.side,
            type=order.type,
            size=order.size,
            price=order.price,
            status=order.status,
            placed_at=order.datetime,
        )


# =============================================================
# PORTFOLIO
# =============================================================

class PositionResponse(CamelModel):
    instrument_id: int
    ticker: str
    name: str
    quantity: int
    average_price: Decimal
    last_price: Optional[Decimal] = None
    value: Decimal
    pnl_percent: Decimal

    @classmethod
    def from_domain(cls, position: Position) -> "PositionResponse":
        return cls(
            instrument_id=position.instrument_id,
            ticker=position.ticker,
            name=position.name,
            quantity=position.quantity,
            average_price=position.average_price,
            last_price=position.last_price,
            value=position.value,
            pnl_percent=position.pnl_percent,
        )


class PortfolioResponse(CamelModel):
    user_id: int
    email: str
    account_number: str
    buying_power: Decimal
    total_value: Decimal
    positions: List[PositionResponse]

    @classmethod
    def from_domain(cls, portfolio: Portfolio) -> "PortfolioResponse":
        return cls(
            user_id=portfolio.user_id,
            email=portfolio.email,
            account_number=portfolio.account_number,
            buying_power=portfolio.buying_power,
            total_value=portfolio.total_value,
            positions=[PositionResponse.from_domain(p) for p in portfolio.positions],
        )


# =============================================================
# COMMON
# =============================================================

class ErrorResponse(BaseModel):
    status: int
    message: str


class HealthResponse(BaseModel):
    status: str
    database: str
