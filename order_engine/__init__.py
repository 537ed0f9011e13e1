"""
Order Engine Package.

Order acceptance pipeline and ledger replay.

Components:
- types: OrderRequest, ResolvedOrderContext
- validation: OrderRequestValidator
- sizing: execution price and size derivation
- ledger: OrderLedger, buying power and holdings calculators
- order_service: OrderService
"""

from order_engine.ledger import (
    OrderLedger,
    calculate_buying_power,
    calculate_net_holdings,
)
from order_engine.order_service import OrderService, check_funds_and_holdings
from order_engine.types import OrderRequest, ResolvedOrderContext
from order_engine.validation import OrderRequestValidator

__all__ = [
    "OrderLedger",
    "calculate_buying_power",
    "calculate_net_holdings",
    "OrderService",
    "check_funds_and_holdings",
    "OrderRequest",
    "ResolvedOrderContext",
    "OrderRequestValidator",
]
