"""Product model for merchandise data."""

import uuid
from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import BigInteger, CheckConstraint, ForeignKey, Index, Integer, Numeric, String
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from pos.core.database import Base
from pos.models.base import IdMixin, TimestampMixin

if TYPE_CHECKING:
    from pos.models.category import Category


class Product(Base, IdMixin, TimestampMixin):
    """Product model representing a merchandise item."""

    __tablename__ = "products"

    category_id: Mapped[int] = mapped_column(
        BigInteger,
        ForeignKey("categories.id", ondelete="RESTRICT"),
        nullable=False,
    )
    sku: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        unique=True,
        nullable=False,
        default=uuid.uuid4,
    )
    name: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
    )
    stock: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
    )
    price: Mapped[Decimal] = mapped_column(
        Numeric(12, 2),
        nullable=False,
    )
    image: Mapped[str | None] = mapped_column(
        String(500),
        nullable=True,
    )

    # Relationships
    category: Mapped["Category"] = relationship("Category", back_populates="products")

    __table_args__ = (
        CheckConstraint("stock >= 0", name="chk_product_stock_positive"),
        CheckConstraint("price > 0", name="chk_product_price_positive"),
        Index("idx_products_category", "category_id"),
    )
