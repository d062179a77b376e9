"""Postgres category repository."""

from typing import Any

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from pos.core.exceptions import ConflictingDataError
from pos.models.category import Category as CategoryModel
from pos.repositories.base import ensure_found, only_changed, storage_errors, to_domain
from pos.schemas.category import Category


class PostgresCategoryRepository:
    """Category storage backed by SQLAlchemy."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(self, name: str) -> Category:
        category = CategoryModel(name=name)
        async with storage_errors(self.db):
            self.db.add(category)
            await self.db.commit()
            await self.db.refresh(category)
        return to_domain(category, Category)

    async def get_by_id(self, category_id: int) -> Category:
        async with storage_errors(self.db):
            result = await self.db.execute(
                select(CategoryModel).where(CategoryModel.id == category_id)
            )
            category = ensure_found(result.scalar_one_or_none(), "category", category_id)
        return to_domain(category, Category)

    async def list(self, skip: int, limit: int) -> list[Category]:
        async with storage_errors(self.db):
            result = await self.db.execute(
                select(CategoryModel).order_by(CategoryModel.id).offset(skip).limit(limit)
            )
            categories = result.scalars().all()
        return [to_domain(c, Category) for c in categories]

    async def update(self, category_id: int, **fields: Any) -> Category:
        async with storage_errors(self.db):
            result = await self.db.execute(
                select(CategoryModel).where(CategoryModel.id == category_id)
            )
            category = ensure_found(result.scalar_one_or_none(), "category", category_id)
            for key, value in only_changed(fields, ("name",)).items():
                setattr(category, key, value)
            await self.db.commit()
            await self.db.refresh(category)
        return to_domain(category, Category)

    async def delete(self, category_id: int) -> None:
        async with storage_errors(self.db, foreign_key_error=ConflictingDataError):
            await self.db.execute(delete(CategoryModel).where(CategoryModel.id == category_id))
            await self.db.commit()
