"""
Order Repository.

============================================================
PURPOSE
============================================================
Persistence for the order ledger.

- Append one order per submission
- Fetch a user's orders by status (the FILLED ledger)

============================================================
DATA LIFECYCLE
============================================================
- Orders are IMMUTABLE once inserted
- No update or delete operations

============================================================
"""

from typing import List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from core.domain import Order, OrderSide, OrderStatus, OrderType
from storage.models.brokerage import OrderModel
from storage.repositories.base import BaseRepository


class OrderRepository(BaseRepository[OrderModel]):
    """Repository for the order ledger."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        super().__init__(session_factory, OrderModel, "OrderRepository")

    # =========================================================
    # WRITE
    # =========================================================

    async def save(self, order: Order) -> Order:
        """
        Insert an order.

        Args:
            order: Order to persist (id is ignored)

        Returns:
            The persisted order, with its ledger id
        """
        model = self._order_to_model(order)
        saved = await self._insert(model)
        self._logger.debug(
            f"Saved order id={saved.id} user={saved.user_id} "
            f"side={saved.side} status={saved.status}"
        )
        return self._model_to_order(saved)

    # =========================================================
    # READ
    # =========================================================

    async def find_by_user_and_status(
        self,
        user_id: int,
        status: OrderStatus,
    ) -> List[Order]:
        """
        Get a user's orders with the given status, oldest first.

        Args:
            user_id: Owner id
            status: Status to filter on

        Returns:
            List of orders (possibly empty)
        """
        stmt = (
            select(OrderModel)
            .where(OrderModel.user_id == user_id)
            .where(OrderModel.status == status.value)
            .order_by(OrderModel.placed_at.asc(), OrderModel.id.asc())
        )
        models = await self._fetch_all(stmt, "find_by_user_and_status")
        return [self._model_to_order(m) for m in models]

    # =========================================================
    # MAPPING
    # =========================================================

    @staticmethod
    def _order_to_model(order: Order) -> OrderModel:
        return OrderModel(
            instrument_id=order.instrument_id,
            user_id=order.user_id,
            size=order.size,
            price=order.price,
            type=order.type.value,
            side=order.side.value,
            status=order.status.value,
            placed_at=order.datetime,
        )

    @staticmethod
    def _model_to_order(model: OrderModel) -> Order:
        return Order(
            id=model.id,
            instrument_id=model.instrument_id,
            user_id=model.user_id,
            side=OrderSide(model.side),
            type=OrderType(model.type),
            size=model.size,
            price=model.price,
            status=OrderStatus(model.status),
            datetime=model.placed_at,
        )
