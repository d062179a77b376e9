"""Payment method model."""

from typing import TYPE_CHECKING, List

from sqlalchemy import CheckConstraint, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from pos.core.database import Base
from pos.models.base import IdMixin, TimestampMixin

if TYPE_CHECKING:
    from pos.models.order import Order


class Payment(Base, IdMixin, TimestampMixin):
    """Payment model representing a tender type accepted at the register."""

    __tablename__ = "payments"

    name: Mapped[str] = mapped_column(
        String(100),
        unique=True,
        nullable=False,
    )
    type: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
    )
    logo: Mapped[str | None] = mapped_column(
        String(500),
        nullable=True,
    )

    orders: Mapped[List["Order"]] = relationship("Order", back_populates="payment")

    __table_args__ = (
        CheckConstraint("type IN ('CASH', 'E-WALLET', 'EDC')", name="chk_payment_type"),
    )
