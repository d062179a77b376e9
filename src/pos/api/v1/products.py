"""Product management API endpoints."""

from fastapi import APIRouter, Query

from pos.api.deps import AdminUser, CurrentUser, ProductServiceDep
from pos.schemas.common import Meta, Response
from pos.schemas.product import (
    ProductCreate,
    ProductListResponse,
    ProductResponse,
    ProductUpdate,
)

router = APIRouter()


@router.get("", response_model=Response[ProductListResponse])
async def list_products(
    service: ProductServiceDep,
    current_user: CurrentUser,
    q: str | None = Query(None, max_length=100),
    category_id: int | None = Query(None, ge=1),
    skip: int = Query(0, ge=0),
    limit: int = Query(10, ge=1, le=100),
):
    """Get products with optional name search and category filter."""
    products = await service.list_products(
        search=q, category_id=category_id, skip=skip, limit=limit
    )
    return Response(
        data=ProductListResponse(
            meta=Meta(total=len(products), limit=limit, skip=skip),
            products=[ProductResponse.from_domain(p) for p in products],
        )
    )


@router.get("/{product_id}", response_model=Response[ProductResponse])
async def get_product(
    product_id: int,
    service: ProductServiceDep,
    current_user: CurrentUser,
):
    """Get product by ID."""
    product = await service.get_product(product_id)
    return Response(data=ProductResponse.from_domain(product))


@router.post("", response_model=Response[ProductResponse])
async def create_product(
    product_data: ProductCreate,
    service: ProductServiceDep,
    admin: AdminUser,
):
    """Create a new product (admin only)."""
    product = await service.create_product(product_data)
    return Response(data=ProductResponse.from_domain(product))


@router.put("/{product_id}", response_model=Response[ProductResponse])
async def update_product(
    product_id: int,
    product_data: ProductUpdate,
    service: ProductServiceDep,
    admin: AdminUser,
):
    """Update a product (admin only)."""
    product = await service.update_product(product_id, product_data)
    return Response(data=ProductResponse.from_domain(product))


@router.delete("/{product_id}", response_model=Response)
async def delete_product(
    product_id: int,
    service: ProductServiceDep,
    admin: AdminUser,
):
    """Delete a product (admin only)."""
    await service.delete_product(product_id)
    return Response(message="Product deleted")
