"""REST API endpoints for orders and fulfillment."""

from fastapi import APIRouter, Depends, Query
from typing import Any

from tally.api.deps import get_order_service
from tally.domain.order_status import OrderStatus
from tally.schemas.orders import (
    OrderCreateRequest,
    OrderResponse,
    ShipRequest,
    StatusUpdateRequest,
)
from tally.services.order_service import OrderService

router = APIRouter(prefix="/api/orders", tags=["orders"])


@router.get("/")
async def list_orders(
    status: OrderStatus | None = Query(default=None),
    service: OrderService = Depends(get_order_service),
) -> dict[str, Any]:
    """List orders newest first, with lines and products."""
    orders = await service.list_orders(status=status.value if status else None)
    return {
        "orders": [OrderResponse.model_validate(order) for order in orders],
        "count": len(orders),
    }


@router.post("/", status_code=201, response_model=OrderResponse)
async def create_order(
    request: OrderCreateRequest,
    service: OrderService = Depends(get_order_service),
):
    """Create a manual order; its code is returned in the response."""
    return await service.create_order(
        customer_name=request.customer_name,
        lines=[(line.product_id, line.qty) for line in request.lines],
        channel=request.channel,
    )


@router.get("/code/{code}", response_model=OrderResponse)
async def get_order_by_code(code: str, service: OrderService = Depends(get_order_service)):
    """Find an order by short code; case and surrounding spaces are ignored."""
    return await service.find_by_code(code)


@router.get("/{order_id}", response_model=OrderResponse)
async def get_order(order_id: str, service: OrderService = Depends(get_order_service)):
    return await service.get_order(order_id)


@router.patch("/{order_id}/status", response_model=OrderResponse)
async def update_status(
    order_id: str,
    request: StatusUpdateRequest,
    service: OrderService = Depends(get_order_service),
):
    """Change an order's status.

    Disallowed transitions answer 422; a failed write answers 503 and
    leaves the order unchanged.
    """
    return await service.update_status(
        order_id, request.status, carrier=request.carrier, tracking=request.tracking
    )


@router.post("/{order_id}/start", response_model=OrderResponse)
async def start_order(order_id: str, service: OrderService = Depends(get_order_service)):
    return await service.start_progress(order_id)


@router.post("/{order_id}/ship", response_model=OrderResponse)
async def ship_order(
    order_id: str,
    request: ShipRequest,
    service: OrderService = Depends(get_order_service),
):
    return await service.mark_shipped(order_id, carrier=request.carrier, tracking=request.tracking)
