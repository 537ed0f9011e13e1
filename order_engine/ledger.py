"""
Order Engine - Ledger.

============================================================
RESPONSIBILITY
============================================================
Replays a user's FILLED orders into balances.

- OrderLedger: reads the FILLED orders of a user
- calculate_buying_power: available cash
- calculate_net_holdings: shares held of an instrument

The calculators are pure functions over a list of orders and
are shared by order placement and portfolio aggregation.

============================================================
FORMULAS
============================================================
buying_power = Σ size(CASH_IN) - Σ size(CASH_OUT)
             - Σ price×size(BUY) + Σ price×size(SELL)

net_holdings = Σ size(BUY) - Σ size(SELL)

No intermediate rounding. Results do not depend on order.

============================================================
"""

from decimal import Decimal
from typing import Iterable, List, Optional

from core.domain import Order, OrderSide, OrderStatus
from storage.repositories.orders import OrderRepository


# ============================================================
# CALCULATORS
# ============================================================

def calculate_buying_power(orders: Iterable[Order]) -> Decimal:
    """
    Compute available cash from filled orders.

    Cash sides count ``size`` as currency units. The result may
    be negative; callers decide what that means.
    """
    cash_in = Decimal("0")
    cash_out = Decimal("0")
    bought = Decimal("0")
    sold = Decimal("0")

    for order in orders:
        if order.side == OrderSide.CASH_IN:
            cash_in += Decimal(order.size)
        elif order.side == OrderSide.CASH_OUT:
            cash_out += Decimal(order.size)
        elif order.side == OrderSide.BUY:
            bought += order.notional
        elif order.side == OrderSide.SELL:
            sold += order.notional

    return cash_in - cash_out - bought + sold


def calculate_net_holdings(
    orders: Iterable[Order],
    instrument_id: Optional[int] = None,
) -> int:
    """
    Compute net shares bought minus sold.

    Args:
        orders: Filled orders
        instrument_id: Only count orders for this instrument
            (None: count every order given)

    Returns:
        Net quantity (negative means the ledger is inconsistent)
    """
    net = 0
    for order in orders:
        if instrument_id is not None and order.instrument_id != instrument_id:
            continue
        if order.side == OrderSide.BUY:
            net += order.size
        elif order.side == OrderSide.SELL:
            net -= order.size
    return net


# ============================================================
# LEDGER READER
# ============================================================

class OrderLedger:
    """Read access to a user's executed orders."""

    def __init__(self, order_repository: OrderRepository):
        self._order_repository = order_repository

    async def get_filled_orders(self, user_id: int) -> List[Order]:
        """All FILLED orders of a user."""
        return await self._order_repository.find_by_user_and_status(
            user_id, OrderStatus.FILLED
        )
