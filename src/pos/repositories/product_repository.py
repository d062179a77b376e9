"""Postgres product repository."""

from decimal import Decimal
from typing import Any

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from pos.core.exceptions import ConflictingDataError
from pos.models.product import Product as ProductModel
from pos.repositories.base import ensure_found, only_changed, storage_errors, to_domain
from pos.schemas.product import Product

UPDATABLE = ("category_id", "name", "image", "price", "stock")


class PostgresProductRepository:
    """Product storage backed by SQLAlchemy."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(
        self,
        category_id: int,
        name: str,
        image: str | None,
        price: Decimal,
        stock: int,
    ) -> Product:
        product = ProductModel(
            category_id=category_id,
            name=name,
            image=image,
            price=price,
            stock=stock,
        )
        async with storage_errors(self.db):
            self.db.add(product)
            await self.db.commit()
            await self.db.refresh(product)
        return to_domain(product, Product)

    async def get_by_id(self, product_id: int) -> Product:
        async with storage_errors(self.db):
            result = await self.db.execute(
                select(ProductModel).where(ProductModel.id == product_id)
            )
            product = ensure_found(result.scalar_one_or_none(), "product", product_id)
        return to_domain(product, Product)

    async def list(
        self,
        search: str | None,
        category_id: int | None,
        skip: int,
        limit: int,
    ) -> list[Product]:
        """List products ordered by id.

        Args:
            search: Case-insensitive name substring, ignored when empty
            category_id: Restrict to one category, ignored when None
            skip: Number of records to skip
            limit: Maximum number of records to return
        """
        query = select(ProductModel).order_by(ProductModel.id).offset(skip).limit(limit)
        if category_id:
            query = query.where(ProductModel.category_id == category_id)
        if search:
            query = query.where(ProductModel.name.ilike(f"%{search}%"))

        async with storage_errors(self.db):
            result = await self.db.execute(query)
            products = result.scalars().all()
        return [to_domain(p, Product) for p in products]

    async def update(self, product_id: int, **fields: Any) -> Product:
        async with storage_errors(self.db):
            result = await self.db.execute(
                select(ProductModel).where(ProductModel.id == product_id)
            )
            product = ensure_found(result.scalar_one_or_none(), "product", product_id)
            for key, value in only_changed(fields, UPDATABLE).items():
                setattr(product, key, value)
            await self.db.commit()
            await self.db.refresh(product)
        return to_domain(product, Product)

    async def delete(self, product_id: int) -> None:
        async with storage_errors(self.db, foreign_key_error=ConflictingDataError):
            await self.db.execute(delete(ProductModel).where(ProductModel.id == product_id))
            await self.db.commit()
