"""Category model for grouping products."""

from typing import TYPE_CHECKING, List

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from pos.core.database import Base
from pos.models.base import IdMixin, TimestampMixin

if TYPE_CHECKING:
    from pos.models.product import Product


class Category(Base, IdMixin, TimestampMixin):
    __tablename__ = "categories"

    name: Mapped[str] = mapped_column(
        String(100),
        unique=True,
        nullable=False,
    )

    products: Mapped[List["Product"]] = relationship(
        "Product", back_populates="category"
    )
