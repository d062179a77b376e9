"""Payment method API endpoints."""

from fastapi import APIRouter, Query

from pos.api.deps import AdminUser, CurrentUser, PaymentServiceDep
from pos.schemas.common import Meta, Response
from pos.schemas.payment import (
    PaymentCreate,
    PaymentListResponse,
    PaymentResponse,
    PaymentUpdate,
)

router = APIRouter()


@router.get("", response_model=Response[PaymentListResponse])
async def list_payments(
    service: PaymentServiceDep,
    current_user: CurrentUser,
    skip: int = Query(0, ge=0),
    limit: int = Query(10, ge=1, le=100),
):
    payments = await service.list_payments(skip=skip, limit=limit)
    return Response(
        data=PaymentListResponse(
            meta=Meta(total=len(payments), limit=limit, skip=skip),
            payments=[PaymentResponse.from_domain(p) for p in payments],
        )
    )


@router.get("/{payment_id}", response_model=Response[PaymentResponse])
async def get_payment(
    payment_id: int,
    service: PaymentServiceDep,
    current_user: CurrentUser,
):
    payment = await service.get_payment(payment_id)
    return Response(data=PaymentResponse.from_domain(payment))


@router.post("", response_model=Response[PaymentResponse])
async def create_payment(
    payment_data: PaymentCreate,
    service: PaymentServiceDep,
    admin: AdminUser,
):
    """Create a new payment method (admin only)."""
    payment = await service.create_payment(payment_data)
    return Response(data=PaymentResponse.from_domain(payment))


@router.put("/{payment_id}", response_model=Response[PaymentResponse])
async def update_payment(
    payment_id: int,
    payment_data: PaymentUpdate,
    service: PaymentServiceDep,
    admin: AdminUser,
):
    payment = await service.update_payment(payment_id, payment_data)
    return Response(data=PaymentResponse.from_domain(payment))


@router.delete("/{payment_id}", response_model=Response)
async def delete_payment(
    payment_id: int,
    service: PaymentServiceDep,
    admin: AdminUser,
):
    await service.delete_payment(payment_id)
    return Response(message="Payment deleted")
