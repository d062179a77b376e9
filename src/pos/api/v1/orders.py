"""Order API endpoints."""

from fastapi import APIRouter, Query

from pos.api.deps import CurrentUser, OrderServiceDep
from pos.schemas.common import Meta, Response
from pos.schemas.order import OrderDraft, OrderListResponse, OrderResponse

router = APIRouter()


@router.post("", response_model=Response[OrderResponse])
async def create_order(
    draft: OrderDraft,
    service: OrderServiceDep,
    current_user: CurrentUser,
):
    """Create an order for the authenticated cashier.

    Totals are computed from current product prices; the request only
    carries the amount paid.
    """
    order = await service.create_order(draft, user_id=current_user.id)
    return Response(data=OrderResponse.from_domain(order))


@router.get("", response_model=Response[OrderListResponse])
async def list_orders(
    service: OrderServiceDep,
    current_user: CurrentUser,
    skip: int = Query(0, ge=0),
    limit: int = Query(10, ge=1, le=100),
):
    """List orders with their lines, payment and products."""
    orders = await service.list_orders(skip=skip, limit=limit)
    return Response(
        data=OrderListResponse(
            meta=Meta(total=len(orders), limit=limit, skip=skip),
            orders=[OrderResponse.from_domain(o) for o in orders],
        )
    )


@router.get("/{order_id}", response_model=Response[OrderResponse])
async def get_order(
    order_id: int,
    service: OrderServiceDep,
    current_user: CurrentUser,
):
    order = await service.get_order(order_id)
    return Response(data=OrderResponse.from_domain(order))
