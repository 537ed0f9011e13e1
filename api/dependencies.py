"""
API Dependencies.

============================================================
PURPOSE
============================================================
Composition root: wires repositories, services and engines
into a ServiceContainer stored on ``app.state.container``.
Routers reach services through the getters below.

============================================================
"""

from dataclasses import dataclass
from typing import Optional

from fastapi import Depends, Request

from core.clock import ClockProtocol
from core.config import AppConfig
from order_engine.ledger import OrderLedger
from order_engine.order_service import OrderService
from portfolio.aggregator import PortfolioAggregator
from reference_data.instruments import InstrumentService
from reference_data.market_data import MarketDataService
from reference_data.search_cache import AsyncTTLCache
from reference_data.users import UserService
from storage.database import Database
from storage.repositories import (
    InstrumentRepository,
    MarketDataRepository,
    OrderRepository,
    UserRepository,
)


@dataclass
class ServiceContainer:
    """Services shared by every request."""

    instrument_service: InstrumentService
    order_service: OrderService
    portfolio_aggregator: PortfolioAggregator
    database: Optional[Database] = None


def build_container(
    config: AppConfig,
    database: Database,
    clock: Optional[ClockProtocol] = None,
) -> ServiceContainer:
    """
    Wire the application on top of a connected database.

    Args:
        config: Application configuration
        database: Connected database
        clock: Order timestamp source (defaults to the system clock)
    """
    session_factory = database.session_factory

    user_repository = UserRepository(session_factory)
    instrument_repository = InstrumentRepository(session_factory)
    market_data_repository = MarketDataRepository(session_factory)
    order_repository = OrderRepository(session_factory)

    user_service = UserService(user_repository)
    instrument_service = InstrumentService(
        instrument_repository,
        cache=AsyncTTLCache(
            max_size=config.search.max_size,
            ttl_seconds=config.search.ttl_seconds,
        ),
        config=config.search,
    )
    market_data_service = MarketDataService(market_data_repository)
    ledger = OrderLedger(order_repository)

    return ServiceContainer(
        instrument_service=instrument_service,
        order_service=OrderService(
            user_service=user_service,
            instrument_service=instrument_service,
            market_data_service=market_data_service,
            ledger=ledger,
            order_repository=order_repository,
            clock=clock,
        ),
        portfolio_aggregator=PortfolioAggregator(
            user_service=user_service,
            ledger=ledger,
            instrument_service=instrument_service,
            market_data_service=market_data_service,
            config=config.portfolio,
        ),
        database=database,
    )


# =============================================================
# GETTERS
# =============================================================

def get_container(request: Request) -> ServiceContainer:
    return request.app.state.container


def get_instrument_service(
    container: ServiceContainer = Depends(get_container),
) -> InstrumentService:
    return container.instrument_service


def get_order_service(
    container: ServiceContainer = Depends(get_container),
) -> OrderService:
    return container.order_service


def get_portfolio_aggregator(
    container: ServiceContainer = Depends(get_container),
) -> PortfolioAggregator:
    return container.portfolio_aggregator
