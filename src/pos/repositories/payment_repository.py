"""Postgres payment repository."""

from typing import Any

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from pos.core.exceptions import ConflictingDataError
from pos.models.payment import Payment as PaymentModel
from pos.repositories.base import ensure_found, only_changed, storage_errors, to_domain
from pos.schemas.payment import Payment

UPDATABLE = ("name", "type", "logo")


class PostgresPaymentRepository:
    """Payment storage backed by SQLAlchemy."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(self, name: str, type: str, logo: str | None) -> Payment:
        payment = PaymentModel(name=name, type=type, logo=logo)
        async with storage_errors(self.db):
            self.db.add(payment)
            await self.db.commit()
            await self.db.refresh(payment)
        return to_domain(payment, Payment)

    async def get_by_id(self, payment_id: int) -> Payment:
        async with storage_errors(self.db):
            result = await self.db.execute(
                select(PaymentModel).where(PaymentModel.id == payment_id)
            )
            payment = ensure_found(result.scalar_one_or_none(), "payment", payment_id)
        return to_domain(payment, Payment)

    async def list(self, skip: int, limit: int) -> list[Payment]:
        async with storage_errors(self.db):
            result = await self.db.execute(
                select(PaymentModel).order_by(PaymentModel.id).offset(skip).limit(limit)
            )
            payments = result.scalars().all()
        return [to_domain(p, Payment) for p in payments]

    async def update(self, payment_id: int, **fields: Any) -> Payment:
        async with storage_errors(self.db):
            result = await self.db.execute(
                select(PaymentModel).where(PaymentModel.id == payment_id)
            )
            payment = ensure_found(result.scalar_one_or_none(), "payment", payment_id)
            for key, value in only_changed(fields, UPDATABLE).items():
                setattr(payment, key, value)
            await self.db.commit()
            await self.db.refresh(payment)
        return to_domain(payment, Payment)

    async def delete(self, payment_id: int) -> None:
        async with storage_errors(self.db, foreign_key_error=ConflictingDataError):
            await self.db.execute(delete(PaymentModel).where(PaymentModel.id == payment_id))
            await self.db.commit()
