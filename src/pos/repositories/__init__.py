"""Entity repositories: interfaces and Postgres implementations."""

from pos.repositories.base import (
    CategoryRepository,
    NewOrder,
    NewOrderLine,
    OrderRepository,
    PaymentRepository,
    ProductRepository,
    UserRepository,
)
from pos.repositories.category_repository import PostgresCategoryRepository
from pos.repositories.order_repository import PostgresOrderRepository
from pos.repositories.payment_repository import PostgresPaymentRepository
from pos.repositories.product_repository import PostgresProductRepository
from pos.repositories.user_repository import PostgresUserRepository

__all__ = [
    "UserRepository",
    "CategoryRepository",
    "PaymentRepository",
    "ProductRepository",
    "OrderRepository",
    "NewOrder",
    "NewOrderLine",
    "PostgresUserRepository",
    "PostgresCategoryRepository",
    "PostgresPaymentRepository",
    "PostgresProductRepository",
    "PostgresOrderRepository",
]
