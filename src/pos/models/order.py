"""Order and order line models."""

import uuid
from decimal import Decimal
from typing import TYPE_CHECKING, List

from sqlalchemy import BigInteger, CheckConstraint, ForeignKey, Index, Integer, Numeric, String
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from pos.core.database import Base
from pos.models.base import IdMixin, TimestampMixin

if TYPE_CHECKING:
    from pos.models.payment import Payment
    from pos.models.user import User


class Order(Base, IdMixin, TimestampMixin):
    """Order model representing a completed sale."""

    __tablename__ = "orders"

    user_id: Mapped[int] = mapped_column(
        BigInteger,
        ForeignKey("users.id"),
        nullable=False,
    )
    payment_id: Mapped[int] = mapped_column(
        BigInteger,
        ForeignKey("payments.id"),
        nullable=False,
    )
    customer_name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )
    total_price: Mapped[Decimal] = mapped_column(
        Numeric(12, 2),
        nullable=False,
    )
    total_paid: Mapped[Decimal] = mapped_column(
        Numeric(12, 2),
        nullable=False,
    )
    total_return: Mapped[Decimal] = mapped_column(
        Numeric(12, 2),
        nullable=False,
    )
    receipt_code: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        unique=True,
        nullable=False,
        default=uuid.uuid4,
    )

    # Relationships
    user: Mapped["User"] = relationship("User", back_populates="orders")
    payment: Mapped["Payment"] = relationship("Payment", back_populates="orders")
    products: Mapped[List["OrderProduct"]] = relationship(
        "OrderProduct",
        back_populates="order",
        cascade="all, delete-orphan",
        order_by="OrderProduct.id",
    )

    __table_args__ = (
        CheckConstraint("total_return >= 0", name="chk_order_return_positive"),
        Index("idx_orders_user", "user_id"),
    )


class OrderProduct(Base, IdMixin, TimestampMixin):
    """A single line of an order with the unit price captured at sale time."""

    __tablename__ = "order_products"

    order_id: Mapped[int] = mapped_column(
        BigInteger,
        ForeignKey("orders.id", ondelete="CASCADE"),
        nullable=False,
    )
    product_id: Mapped[int] = mapped_column(
        BigInteger,
        ForeignKey("products.id"),
        nullable=False,
    )
    quantity: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
    )
    price: Mapped[Decimal] = mapped_column(
        Numeric(12, 2),
        nullable=False,
    )
    total_price: Mapped[Decimal] = mapped_column(
        Numeric(12, 2),
        nullable=False,
    )

    order: Mapped["Order"] = relationship("Order", back_populates="products")

    __table_args__ = (
        CheckConstraint("quantity > 0", name="chk_order_product_qty_positive"),
        Index("idx_order_products_order", "order_id"),
    )
