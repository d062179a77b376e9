"""SQLAlchemy ORM models."""

from pos.models.base import IdMixin, TimestampMixin
from pos.models.category import Category
from pos.models.order import Order, OrderProduct
from pos.models.payment import Payment
from pos.models.product import Product
from pos.models.user import User

__all__ = [
    "IdMixin",
    "TimestampMixin",
    "User",
    "Category",
    "Payment",
    "Product",
    "Order",
    "OrderProduct",
]
