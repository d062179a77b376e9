"""Pydantic schemas for request/response validation."""

from pos.schemas.category import Category, CategoryCreate, CategoryResponse, CategoryUpdate
from pos.schemas.common import ErrorResponse, Meta, Response
from pos.schemas.order import Order, OrderDraft, OrderProduct, OrderProductDraft, OrderResponse
from pos.schemas.payment import Payment, PaymentCreate, PaymentResponse, PaymentUpdate
from pos.schemas.product import Product, ProductCreate, ProductResponse, ProductUpdate
from pos.schemas.user import (
    TokenResponse,
    User,
    UserLogin,
    UserRegister,
    UserResponse,
    UserUpdate,
)

__all__ = [
    "Response",
    "ErrorResponse",
    "Meta",
    "User",
    "UserRegister",
    "UserLogin",
    "UserUpdate",
    "UserResponse",
    "TokenResponse",
    "Category",
    "CategoryCreate",
    "CategoryUpdate",
    "CategoryResponse",
    "Payment",
    "PaymentCreate",
    "PaymentUpdate",
    "PaymentResponse",
    "Product",
    "ProductCreate",
    "ProductUpdate",
    "ProductResponse",
    "Order",
    "OrderDraft",
    "OrderProduct",
    "OrderProductDraft",
    "OrderResponse",
]
