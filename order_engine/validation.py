"""
Order Engine - Request Validation.

============================================================
RESPONSIBILITY
============================================================
Request-level checks that need no database access.

Rules, evaluated in order (first failure wins):
1. instrument ticker present and not blank
2. user id present
3. type present
4. side present
5. side is not CASH_IN / CASH_OUT
6. MARKET: price omitted
7. LIMIT: price present and > 0
8. exactly one of size / amount supplied and positive

============================================================
"""

from core.domain import OrderSide, OrderType
from core.exceptions import OrderValidationError
from order_engine.types import OrderRequest


class OrderRequestValidator:
    """Validates order requests before any lookup."""

    def validate(self, request: OrderRequest) -> OrderRequest:
        """
        Validate a request.

        Returns:
            The same request, unchanged

        Raises:
            OrderValidationError: Naming the first violated rule
        """
        if request.instrument_ticker is None or not request.instrument_ticker.strip():
            raise OrderValidationError(
                "instrument ticker is null or blank", field="instrumentTicker"
            )
        if request.user_id is None:
            raise OrderValidationError("user id is null", field="userId")
        if request.type is None:
            raise OrderValidationError("type is null", field="type")
        if request.side is None:
            raise OrderValidationError("side is null", field="side")
        if request.side in (OrderSide.CASH_IN, OrderSide.CASH_OUT):
            raise OrderValidationError(
                "CASH_IN/CASH_OUT are not supported by this endpoint", field="side"
            )

        if request.type == OrderType.MARKET and request.price is not None:
            raise OrderValidationError("price must be omitted for MARKET", field="price")
        if request.type == OrderType.LIMIT and (request.price is None or request.price <= 0):
            raise OrderValidationError("price must be > 0 for LIMIT", field="price")

        if request.has_size == request.has_amount:
            raise OrderValidationError("provide exactly one of size or amount")

        return request
