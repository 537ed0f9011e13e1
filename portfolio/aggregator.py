"""
Portfolio - Aggregator.

============================================================
RESPONSIBILITY
============================================================
Builds a user's portfolio from the FILLED order ledger.

1. Load the user
2. Load FILLED orders once (shared by positions and cash)
3. Group BUY/SELL orders by instrument
4. Per instrument, concurrently fetch metadata and latest price
5. Build positions, then cash and total value

============================================================
DATA INCONSISTENCY
============================================================
Replayed holdings below zero mean the ledger is corrupt for
that instrument. PortfolioConfig.fail_on_data_corruption:
- True: raise DataCorruptionError, cancel remaining lookups
- False: log a warning and omit that position

An instrument id with no instrument row is logged and omitted.

============================================================
"""

import asyncio
import logging
from decimal import ROUND_HALF_UP, Decimal
from typing import Awaitable, Dict, List, Optional, Tuple

from core.constants import AVERAGE_PRICE_QUANTUM, HUNDRED
from core.domain import Instrument, MarketData, Order, OrderSide
from core.exceptions import DataCorruptionError
from order_engine.ledger import (
    OrderLedger,
    calculate_buying_power,
    calculate_net_holdings,
)
from portfolio.config import PortfolioConfig
from portfolio.types import Portfolio, Position
from reference_data.instruments import InstrumentService
from reference_data.market_data import MarketDataService
from reference_data.users import UserService


logger = logging.getLogger(__name__)

ZERO = Decimal("0")


# ============================================================
# POSITION MATH
# ============================================================

def average_buy_price(orders: List[Order]) -> Decimal:
    """Σ price×size / Σ size over BUY orders, 8 places half-up (0 without buys)."""
    buys = [o for o in orders if o.side == OrderSide.BUY]
    bought = sum(o.size for o in buys)
    if bought <= 0:
        return ZERO
    cost = sum((o.notional for o in buys), ZERO)
    return (cost / Decimal(bought)).quantize(AVERAGE_PRICE_QUANTUM, rounding=ROUND_HALF_UP)


def pnl_percent(last_price: Optional[Decimal], average_price: Decimal) -> Decimal:
    """(last / average - 1) × 100 with the ratio at 8 places; 0 if either is not positive."""
    if last_price is None or last_price <= 0 or average_price <= 0:
        return ZERO
    ratio = (last_price / average_price).quantize(AVERAGE_PRICE_QUANTUM, rounding=ROUND_HALF_UP)
    return (ratio - 1) * HUNDRED


def group_trades_by_instrument(orders: List[Order]) -> Dict[int, List[Order]]:
    """BUY/SELL orders grouped by instrument id, in first-seen order."""
    groups: Dict[int, List[Order]] = {}
    for order in orders:
        if order.side.is_trade:
            groups.setdefault(order.instrument_id, []).append(order)
    return groups


async def gather_or_cancel(*aws: Awaitable) -> list:
    """
    Run awaitables concurrently.

    On the first failure, cancel the rest and re-raise.
    """
    tasks = [asyncio.ensure_future(aw) for aw in aws]
    try:
        return await asyncio.gather(*tasks)
    except BaseException:
        for task in tasks:
            if not task.done():
                task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise


# ============================================================
# AGGREGATOR
# ============================================================

class PortfolioAggregator:
    """
    Computes portfolios.

    Usage:
        aggregator = PortfolioAggregator(users, ledger, instruments, market_data)
        portfolio = await aggregator.get_portfolio(user_id)
    """

    def __init__(
        self,
        user_service: UserService,
        ledger: OrderLedger,
        instrument_service: InstrumentService,
        market_data_service: MarketDataService,
        config: Optional[PortfolioConfig] = None,
    ):
        self._user_service = user_service
        self._ledger = ledger
        self._instrument_service = instrument_service
        self._market_data_service = market_data_service
        self._config = config or PortfolioConfig()
        self._fail_on_data_corruption = self._config.fail_on_data_corruption

    async def get_portfolio(self, user_id: int) -> Portfolio:
        """
        Build the portfolio of a user.

        Raises:
            UserNotFoundError: If the user does not exist
            DataCorruptionError: Negative holdings with fail-on-corruption set
        """
        user = await self._user_service.get(user_id)
        filled_orders = await self._ledger.get_filled_orders(user.id)

        groups = group_trades_by_instrument(filled_orders)
        results = await gather_or_cancel(
            *(self._build_position(instrument_id, orders) for instrument_id, orders in groups.items())
        )
        positions = [p for p in results if p is not None]

        buying_power = calculate_buying_power(filled_orders)
        total_value = buying_power + sum((p.value for p in positions), ZERO)

        logger.debug(
            f"Portfolio user={user.id}: {len(positions)} positions, "
            f"buying_power={buying_power}, total={total_value}"
        )

        return Portfolio(
            user_id=user.id,
            email=user.email,
            account_number=user.account_number,
            buying_power=buying_power,
            total_value=total_value,
            positions=positions,
        )

    async def _lookup(self, instrument_id: int) -> Tuple[Optional[Instrument], Optional[MarketData]]:
        instrument, market_data = await gather_or_cancel(
            self._instrument_service.find_by_id(instrument_id),
            self._market_data_service.find_latest(instrument_id),
        )
        return instrument, market_data

    async def _build_position(self, instrument_id: int, orders: List[Order]) -> Optional[Position]:
        quantity = calculate_net_holdings(orders)
        if quantity == 0:
            return None

        instrument, market_data = await self._lookup(instrument_id)

        if instrument is None:
            logger.warning(f"Instrument {instrument_id} not found, skipping position")
            return None

        if quantity < 0:
            if self._fail_on_data_corruption:
                raise DataCorruptionError(instrument.ticker, quantity)
            logger.warning(f"Inconsistent trades for instrument {instrument.ticker} — skipping position")
            return None

        last_price = market_data.close if market_data is not None else None
        average_price = average_buy_price(orders)
        value = last_price * quantity if last_price is not None else ZERO

        return Position(
            instrument_id=instrument.id,
            ticker=instrument.ticker,
            name=instrument.name,
            quantity=quantity,
            average_price=average_price,
            last_price=last_price,
            value=value,
            pnl_percent=pnl_percent(last_price, average_price),
        )
