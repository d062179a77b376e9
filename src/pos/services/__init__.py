"""Business logic services."""

from pos.services.auth_service import AuthService
from pos.services.cache_service import CacheService, ReadThroughCache
from pos.services.category_service import CategoryService
from pos.services.order_service import OrderService
from pos.services.payment_service import PaymentService
from pos.services.product_service import ProductService
from pos.services.user_service import UserService

__all__ = [
    "AuthService",
    "CacheService",
    "ReadThroughCache",
    "CategoryService",
    "OrderService",
    "PaymentService",
    "ProductService",
    "UserService",
]
