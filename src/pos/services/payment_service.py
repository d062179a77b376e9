"""Payment service for CRUD operations."""

from pos.core.exceptions import NoUpdatedDataError
from pos.repositories.base import PaymentRepository
from pos.schemas.payment import Payment, PaymentCreate, PaymentUpdate
from pos.services.cache_keys import (
    PAYMENT,
    collection_pattern,
    generate_cache_key,
    generate_cache_key_params,
)
from pos.services.cache_service import CacheService, ReadThroughCache


class PaymentService:
    """Service class for payment method operations."""

    def __init__(self, repo: PaymentRepository, cache: CacheService):
        self.repo = repo
        self.cached = ReadThroughCache(cache)

    async def create_payment(self, data: PaymentCreate) -> Payment:
        payment = await self.repo.create(name=data.name, type=data.type, logo=data.logo)

        await self.cached.store(generate_cache_key(PAYMENT[0], payment.id), payment)
        await self.cached.invalidate(patterns=(collection_pattern(PAYMENT[1]),))

        return payment

    async def get_payment(self, payment_id: int) -> Payment:
        return await self.cached.fetch(
            generate_cache_key(PAYMENT[0], payment_id),
            Payment,
            lambda: self.repo.get_by_id(payment_id),
        )

    async def list_payments(self, skip: int = 0, limit: int = 10) -> list[Payment]:
        params = generate_cache_key_params(skip=skip, limit=limit)
        return await self.cached.fetch(
            generate_cache_key(PAYMENT[1], params),
            list[Payment],
            lambda: self.repo.list(skip, limit),
        )

    async def update_payment(self, payment_id: int, data: PaymentUpdate) -> Payment:
        """Update name, type or logo of a payment method.

        Raises:
            DataNotFoundError: Payment does not exist
            NoUpdatedDataError: Nothing supplied or nothing differs
            ConflictingDataError: Name already taken
        """
        existing = await self.repo.get_by_id(payment_id)
        changes = {
            field: value
            for field, value in data.model_dump(exclude_none=True).items()
            if getattr(existing, field) != value
        }
        if not changes:
            raise NoUpdatedDataError()

        payment = await self.repo.update(payment_id, **changes)

        key = generate_cache_key(PAYMENT[0], payment_id)
        await self.cached.invalidate(key)
        await self.cached.store(key, payment)
        await self.cached.invalidate(patterns=(collection_pattern(PAYMENT[1]),))

        return payment

    async def delete_payment(self, payment_id: int) -> None:
        await self.repo.get_by_id(payment_id)
        await self.repo.delete(payment_id)

        await self.cached.invalidate(
            generate_cache_key(PAYMENT[0], payment_id),
            patterns=(collection_pattern(PAYMENT[1]),),
        )
