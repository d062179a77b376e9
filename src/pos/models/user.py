"""User model for cashiers and administrators."""

from typing import TYPE_CHECKING, List

from sqlalchemy import CheckConstraint, Index, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from pos.core.database import Base
from pos.models.base import IdMixin, TimestampMixin

if TYPE_CHECKING:
    from pos.models.order import Order


class User(Base, IdMixin, TimestampMixin):
    """User model representing a store operator."""

    __tablename__ = "users"

    name: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
    )
    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
    )
    password: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )
    role: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default="cashier",
    )

    # Relationships
    orders: Mapped[List["Order"]] = relationship("Order", back_populates="user")

    __table_args__ = (
        CheckConstraint("role IN ('admin', 'cashier')", name="chk_user_role"),
        Index("idx_users_email", "email"),
    )
