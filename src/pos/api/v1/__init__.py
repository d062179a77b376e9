"""API v1 routers."""

from pos.api.v1 import categories, orders, payments, products, users

__all__ = ["categories", "orders", "payments", "products", "users"]
