"""Category schemas for request/response validation."""

from datetime import datetime

from pydantic import BaseModel, Field

from pos.schemas.common import Meta


class CategoryCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)


class CategoryUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=100)


class Category(BaseModel):
    """Category as returned by repositories and stored in the cache."""

    id: int
    name: str
    created_at: datetime | None = None
    updated_at: datetime | None = None

    model_config = {"from_attributes": True}


class CategoryResponse(BaseModel):
    id: int
    name: str

    @classmethod
    def from_domain(cls, category: Category | None) -> "CategoryResponse | None":
        if category is None:
            return None
        return cls(id=category.id, name=category.name)


class CategoryListResponse(BaseModel):
    meta: Meta
    categories: list[CategoryResponse]
