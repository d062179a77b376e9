"""Order schemas for request/response validation."""

from datetime import datetime
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from pos.schemas.common import Meta, Money
from pos.schemas.payment import Payment, PaymentResponse
from pos.schemas.product import Product, ProductResponse
from pos.schemas.user import User


class OrderProductDraft(BaseModel):
    """A requested line: which product and how many."""

    model_config = ConfigDict(populate_by_name=True)

    product_id: int = Field(..., ge=1)
    quantity: int = Field(..., gt=0, alias="qty")


class OrderDraft(BaseModel):
    """Client-supplied order request. Totals are computed server-side."""

    payment_id: int = Field(..., ge=1)
    customer_name: str = Field(..., min_length=1, max_length=255)
    total_paid: Decimal = Field(..., ge=0, max_digits=12, decimal_places=2)
    products: list[OrderProductDraft] = Field(..., min_length=1)


class OrderProduct(BaseModel):
    """Persisted order line.

    ``price`` is the unit price captured when the order was created; later
    product price changes never touch it.
    """

    id: int
    order_id: int
    product_id: int
    quantity: int
    price: Decimal
    total_price: Decimal
    created_at: datetime | None = None
    updated_at: datetime | None = None
    product: Product | None = None

    model_config = {"from_attributes": True}


class Order(BaseModel):
    """Persisted order with optional enrichment (user, payment, line products)."""

    id: int
    user_id: int
    payment_id: int
    customer_name: str
    total_price: Decimal
    total_paid: Decimal
    total_return: Decimal
    receipt_code: UUID
    created_at: datetime | None = None
    updated_at: datetime | None = None
    user: User | None = None
    payment: Payment | None = None
    products: list[OrderProduct] = []

    model_config = {"from_attributes": True}


class OrderProductResponse(BaseModel):
    id: int
    order_id: int
    product_id: int
    qty: int
    price: Money
    total_normal_price: Money
    total_final_price: Money
    product: ProductResponse | None
    created_at: datetime | None
    updated_at: datetime | None


class OrderResponse(BaseModel):
    """Schema for order response."""

    id: int
    user_id: int
    payment_type_id: int
    customer_name: str
    total_price: Money
    total_paid: Money
    total_return: Money
    receipt_id: str
    products: list[OrderProductResponse]
    payment_type: PaymentResponse | None
    created_at: datetime | None
    updated_at: datetime | None

    @classmethod
    def from_domain(cls, order: Order) -> "OrderResponse":
        return cls(
            id=order.id,
            user_id=order.user_id,
            payment_type_id=order.payment_id,
            customer_name=order.customer_name,
            total_price=order.total_price,
            total_paid=order.total_paid,
            total_return=order.total_return,
            receipt_id=str(order.receipt_code),
            products=[
                OrderProductResponse(
                    id=line.id,
                    order_id=line.order_id,
                    product_id=line.product_id,
                    qty=line.quantity,
                    price=line.price,
                    total_normal_price=line.total_price,
                    total_final_price=line.total_price,
                    product=ProductResponse.from_domain(line.product),
                    created_at=line.created_at,
                    updated_at=line.updated_at,
                )
                for line in order.products
            ],
            payment_type=PaymentResponse.from_domain(order.payment),
            created_at=order.created_at,
            updated_at=order.updated_at,
        )


class OrderListResponse(BaseModel):
    """Schema for order list response."""

    meta: Meta
    orders: list[OrderResponse]
