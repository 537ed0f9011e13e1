"""
Order Engine - Order Service.

============================================================
RESPONSIBILITY
============================================================
Accepts order submissions.

    validate -> resolve -> price/size -> funds/holdings -> save

- Invalid requests raise before any lookup
- Unknown user / instrument / market data raise NotFoundError
- Insufficient cash or holdings is NOT an error: the order is
  persisted as REJECTED and returned
- Exactly one save per submission that reaches the last stage

============================================================
CONCURRENCY
============================================================
No lock spans read-decide-write. Two concurrent submissions
for the same user may both pass against the same ledger
snapshot.

============================================================
"""

import dataclasses
import logging
from typing import List, Optional

from core.clock import ClockProtocol, get_clock
from core.domain import Order, OrderSide, OrderStatus, OrderType
from order_engine.ledger import (
    OrderLedger,
    calculate_buying_power,
    calculate_net_holdings,
)
from order_engine.sizing import build_order
from order_engine.types import OrderRequest, ResolvedOrderContext
from order_engine.validation import OrderRequestValidator
from reference_data.instruments import InstrumentService
from reference_data.market_data import MarketDataService
from reference_data.users import UserService
from storage.repositories.orders import OrderRepository


logger = logging.getLogger(__name__)


# ============================================================
# FUNDS AND HOLDINGS STAGE
# ============================================================

def check_funds_and_holdings(order: Order, filled_orders: List[Order]) -> Order:
    """
    Reject an order the user cannot afford or cover.

    Args:
        order: Built order with its initial status
        filled_orders: The user's FILLED ledger

    Returns:
        The order unchanged, or a REJECTED copy
    """
    if order.side == OrderSide.BUY:
        required = order.notional
        available = calculate_buying_power(filled_orders)
        if available < required:
            logger.warning(
                f"Order REJECTED: insufficient cash. needed={required}, available={available}"
            )
            return dataclasses.replace(order, status=OrderStatus.REJECTED)

    elif order.side == OrderSide.SELL:
        held = calculate_net_holdings(filled_orders, order.instrument_id)
        if held < order.size:
            logger.warning(
                f"Order REJECTED: insufficient holdings. have={held}, tryingToSell={order.size}"
            )
            return dataclasses.replace(order, status=OrderStatus.REJECTED)

    return order


# ============================================================
# ORDER SERVICE
# ============================================================

class OrderService:
    """
    Order acceptance pipeline.

    Usage:
        service = OrderService(users, instruments, market_data, ledger, orders)
        order = await service.submit(OrderRequest(...))
    """

    def __init__(
        self,
        user_service: UserService,
        instrument_service: InstrumentService,
        market_data_service: MarketDataService,
        ledger: OrderLedger,
        order_repository: OrderRepository,
        clock: Optional[ClockProtocol] = None,
        validator: Optional[OrderRequestValidator] = None,
    ):
        self._user_service = user_service
        self._instrument_service = instrument_service
        self._market_data_service = market_data_service
        self._ledger = ledger
        self._order_repository = order_repository
        self._clock = clock or get_clock()
        self._validator = validator or OrderRequestValidator()

    async def submit(self, request: OrderRequest) -> Order:
        """
        Submit an order.

        Returns:
            The persisted order (FILLED, NEW or REJECTED)

        Raises:
            OrderValidationError: Request violates a rule
            OrderSizingError: Amount buys zero shares
            UserNotFoundError / InstrumentNotFoundError /
            MarketDataNotFoundError: Referenced entity missing
        """
        self._validator.validate(request)

        context = await self._resolve(request)
        order = build_order(context, self._clock)

        filled_orders = await self._ledger.get_filled_orders(order.user_id)
        order = check_funds_and_holdings(order, filled_orders)

        saved = await self._order_repository.save(order)
        logger.info(
            f"Order {saved.id} {saved.status.value}: user={saved.user_id} "
            f"{saved.type.value} {saved.side.value} {saved.size} "
            f"{context.instrument.ticker} @ {saved.price}"
        )
        return saved

    async def _resolve(self, request: OrderRequest) -> ResolvedOrderContext:
        user = await self._user_service.get(request.user_id)
        instrument = await self._instrument_service.get_by_ticker(request.instrument_ticker.strip())

        market_data = None
        if request.type == OrderType.MARKET:
            market_data = await self._market_data_service.get_latest(instrument.id)

        return ResolvedOrderContext(
            request=request,
            user=user,
            instrument=instrument,
            market_data=market_data,
        )
