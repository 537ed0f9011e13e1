"""
Tests for ledger replay: buying power and net holdings.
"""

from decimal import Decimal
from unittest.mock import AsyncMock

import pytest

from core.domain import OrderSide, OrderStatus
from order_engine.ledger import (
    OrderLedger,
    calculate_buying_power,
    calculate_net_holdings,
)


# ============================================================
# BUYING POWER
# ============================================================

class TestBuyingPower:
    """Tests for calculate_buying_power."""

    def test_empty_ledger_is_zero(self):
        assert calculate_buying_power([]) == Decimal("0")

    def test_formula(self, make_order, make_cash_in):
        orders = [
            make_cash_in(1000),
            make_order(OrderSide.CASH_OUT, 100, instrument_id=66),
            make_order(OrderSide.BUY, 10, "20.00"),
            make_order(OrderSide.SELL, 5, "30.00"),
        ]

        # 1000 - 100 - 200 + 150
        assert calculate_buying_power(orders) == Decimal("850.00")

    def test_order_independent(self, make_order, make_cash_in):
        orders = [
            make_cash_in(5000),
            make_order(OrderSide.BUY, 7, "123.45"),
            make_order(OrderSide.SELL, 3, "130.10"),
            make_order(OrderSide.CASH_OUT, 250, instrument_id=66),
            make_order(OrderSide.BUY, 1, "0.99"),
        ]

        expected = calculate_buying_power(orders)
        assert calculate_buying_power(list(reversed(orders))) == expected
        assert calculate_buying_power(orders[2:] + orders[:2]) == expected

    def test_no_intermediate_rounding(self, make_order, make_cash_in):
        orders = [
            make_cash_in(1),
            make_order(OrderSide.BUY, 3, "0.33"),
        ]

        assert calculate_buying_power(orders) == Decimal("0.01")

    def test_may_be_negative(self, make_order):
        orders = [make_order(OrderSide.BUY, 2, "10.00")]

        assert calculate_buying_power(orders) == Decimal("-20.00")


# ============================================================
# NET HOLDINGS
# ============================================================

class TestNetHoldings:
    """Tests for calculate_net_holdings."""

    def test_empty_is_zero(self):
        assert calculate_net_holdings([]) == 0

    def test_buys_minus_sells(self, make_order):
        orders = [
            make_order(OrderSide.BUY, 10, "5.00"),
            make_order(OrderSide.BUY, 5, "6.00"),
            make_order(OrderSide.SELL, 3, "7.00"),
        ]

        assert calculate_net_holdings(orders) == 12

    def test_cash_orders_ignored(self, make_order, make_cash_in):
        orders = [
            make_cash_in(1000),
            make_order(OrderSide.BUY, 4, "5.00"),
        ]

        assert calculate_net_holdings(orders) == 4

    def test_instrument_filter(self, make_order):
        orders = [
            make_order(OrderSide.BUY, 10, "5.00", instrument_id=47),
            make_order(OrderSide.BUY, 99, "5.00", instrument_id=31),
            make_order(OrderSide.SELL, 4, "5.00", instrument_id=47),
        ]

        assert calculate_net_holdings(orders, instrument_id=47) == 6
        assert calculate_net_holdings(orders, instrument_id=31) == 99
        assert calculate_net_holdings(orders, instrument_id=1) == 0

    def test_negative_when_oversold(self, make_order):
        orders = [
            make_order(OrderSide.BUY, 2, "5.00"),
            make_order(OrderSide.SELL, 5, "5.00"),
        ]

        assert calculate_net_holdings(orders) == -3


# ============================================================
# LEDGER READER
# ============================================================

class TestOrderLedger:
    """Tests for OrderLedger."""

    @pytest.mark.asyncio
    async def test_reads_filled_orders(self, make_order):
        filled = [make_order(OrderSide.BUY, 1, "10.00")]
        repository = AsyncMock()
        repository.find_by_user_and_status = AsyncMock(return_value=filled)

        result = await OrderLedger(repository).get_filled_orders(1)

        assert result == filled
        repository.find_by_user_and_status.assert_awaited_once_with(1, OrderStatus.FILLED)
