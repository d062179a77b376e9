"""Category management API endpoints."""

from fastapi import APIRouter, Query

from pos.api.deps import AdminUser, CategoryServiceDep, CurrentUser
from pos.schemas.category import (
    CategoryCreate,
    CategoryListResponse,
    CategoryResponse,
    CategoryUpdate,
)
from pos.schemas.common import Meta, Response

router = APIRouter()


@router.get("", response_model=Response[CategoryListResponse])
async def list_categories(
    service: CategoryServiceDep,
    current_user: CurrentUser,
    skip: int = Query(0, ge=0),
    limit: int = Query(10, ge=1, le=100),
):
    categories = await service.list_categories(skip=skip, limit=limit)
    return Response(
        data=CategoryListResponse(
            meta=Meta(total=len(categories), limit=limit, skip=skip),
            categories=[CategoryResponse.from_domain(c) for c in categories],
        )
    )


@router.get("/{category_id}", response_model=Response[CategoryResponse])
async def get_category(
    category_id: int,
    service: CategoryServiceDep,
    current_user: CurrentUser,
):
    category = await service.get_category(category_id)
    return Response(data=CategoryResponse.from_domain(category))


@router.post("", response_model=Response[CategoryResponse])
async def create_category(
    category_data: CategoryCreate,
    service: CategoryServiceDep,
    admin: AdminUser,
):
    """Create a new category (admin only)."""
    category = await service.create_category(category_data)
    return Response(data=CategoryResponse.from_domain(category))


@router.put("/{category_id}", response_model=Response[CategoryResponse])
async def update_category(
    category_id: int,
    category_data: CategoryUpdate,
    service: CategoryServiceDep,
    admin: AdminUser,
):
    """Rename a category (admin only)."""
    category = await service.update_category(category_id, category_data)
    return Response(data=CategoryResponse.from_domain(category))


@router.delete("/{category_id}", response_model=Response)
async def delete_category(
    category_id: int,
    service: CategoryServiceDep,
    admin: AdminUser,
):
    """Delete a category (admin only). Fails while products still use it."""
    await service.delete_category(category_id)
    return Response(message="Category deleted")
