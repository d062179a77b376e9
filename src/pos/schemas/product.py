"""Product schemas for request/response validation."""

from datetime import datetime
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, Field

from pos.schemas.category import Category, CategoryResponse
from pos.schemas.common import Meta, Money


class ProductCreate(BaseModel):
    """Schema for product creation request."""

    category_id: int = Field(..., ge=1)
    name: str = Field(..., min_length=1, max_length=255)
    image: str | None = Field(None, max_length=500)
    price: Decimal = Field(..., gt=0, max_digits=12, decimal_places=2)
    stock: int = Field(..., ge=0)


class ProductUpdate(BaseModel):
    """Schema for product update request. Omitted fields keep their value."""

    category_id: int | None = Field(None, ge=1)
    name: str | None = Field(None, min_length=1, max_length=255)
    image: str | None = Field(None, max_length=500)
    price: Decimal | None = Field(None, gt=0, max_digits=12, decimal_places=2)
    stock: int | None = Field(None, ge=0)


class Product(BaseModel):
    """Product as returned by repositories and stored in the cache."""

    id: int
    category_id: int
    sku: UUID
    name: str
    stock: int
    price: Decimal
    image: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    category: Category | None = None

    model_config = {"from_attributes": True}


class ProductResponse(BaseModel):
    """Schema for product response."""

    id: int
    sku: str
    name: str
    stock: int
    price: Money
    image: str | None
    category: CategoryResponse | None
    created_at: datetime | None
    updated_at: datetime | None

    @classmethod
    def from_domain(cls, product: Product | None) -> "ProductResponse | None":
        if product is None:
            return None
        return cls(
            id=product.id,
            sku=str(product.sku),
            name=product.name,
            stock=product.stock,
            price=product.price,
            image=product.image,
            category=CategoryResponse.from_domain(product.category),
            created_at=product.created_at,
            updated_at=product.updated_at,
        )


class ProductListResponse(BaseModel):
    """Schema for product list response."""

    meta: Meta
    products: list[ProductResponse]
