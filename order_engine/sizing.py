"""
Order Engine - Pricing and Sizing.

============================================================
RULES
============================================================
- Execution price: latest close (MARKET) or limit price
  (LIMIT), quantized to 2 places ROUND_HALF_UP
- Size from amount: exact integer part of amount / execution
  price, never rounded up; zero shares is an error
- Initial status: FILLED for MARKET, NEW for LIMIT

============================================================
"""

from decimal import ROUND_HALF_UP, Decimal

from core.constants import PRICE_QUANTUM
from core.domain import Order, OrderStatus, OrderType
from core.exceptions import MarketDataNotFoundError, OrderSizingError
from core.clock import ClockProtocol
from order_engine.types import OrderRequest, ResolvedOrderContext


def quantize_price(price: Decimal) -> Decimal:
    """Round a price to 2 places, half-up."""
    return price.quantize(PRICE_QUANTUM, rounding=ROUND_HALF_UP)


def resolve_execution_price(context: ResolvedOrderContext) -> Decimal:
    """
    Execution price for a resolved request.

    Raises:
        MarketDataNotFoundError: MARKET order whose latest entry has no close
    """
    request = context.request
    if request.type == OrderType.MARKET:
        market_data = context.market_data
        if market_data is None or market_data.close is None:
            raise MarketDataNotFoundError(context.instrument.id)
        return quantize_price(market_data.close)
    return quantize_price(request.price)


def size_from_amount(amount: Decimal, price: Decimal) -> int:
    """
    Whole shares an amount buys at ``price`` (rounded down).

    Raises:
        OrderSizingError: If the result is zero shares
    """
    size = int(amount // price)
    if size <= 0:
        raise OrderSizingError(amount, price)
    return size


def resolve_size(request: OrderRequest, price: Decimal) -> int:
    """Requested size, or the size derived from the requested amount."""
    if request.has_amount:
        return size_from_amount(request.amount, price)
    return request.size


def initial_status(order_type: OrderType) -> OrderStatus:
    """FILLED for MARKET orders, NEW for LIMIT orders."""
    return OrderStatus.FILLED if order_type == OrderType.MARKET else OrderStatus.NEW


def build_order(context: ResolvedOrderContext, clock: ClockProtocol) -> Order:
    """
    Build the order for a resolved request.

    Args:
        context: Validated request and its entities
        clock: Source of the acceptance timestamp

    Returns:
        Unsaved order with its initial status
    """
    request = context.request
    price = resolve_execution_price(context)
    return Order(
        instrument_id=context.instrument.id,
        user_id=context.user.id,
        side=request.side,
        type=request.type,
        size=resolve_size(request, price),
        price=price,
        status=initial_status(request.type),
        datetime=clock.now(),
    )
