"""
Order Placement Endpoints.
"""

from fastapi import APIRouter, Depends

from api.dependencies import get_order_service
from api.schemas import OrderCreateRequest, OrderResponse
from core.constants import API_PREFIX
from order_engine.order_service import OrderService

router = APIRouter(prefix=f"{API_PREFIX}/order", tags=["Orders"])


@router.post("", response_model=OrderResponse)
async def create_order(
    body: OrderCreateRequest,
    service: OrderService = Depends(get_order_service),
):
    """
    Submit an order.

    A REJECTED order (insufficient cash or holdings) is still a
    successful response: it is persisted and returned.
    """
    order = await service.submit(body.to_domain())
    return OrderResponse.from_domain(order)
