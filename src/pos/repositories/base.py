"""Repository interfaces and shared storage helpers.

Services depend on the ``Protocol`` classes below; the Postgres
implementations live next to this module. All repositories return pydantic
domain objects, never ORM rows, so nothing lazy-loads after the session ends.
"""

from contextlib import asynccontextmanager
from decimal import Decimal
from typing import Any, AsyncIterator, Protocol, Sequence, TypeVar

from pydantic import BaseModel
from sqlalchemy import inspect as sa_inspect
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from pos.core.exceptions import (
    ConflictingDataError,
    DataNotFoundError,
    InternalError,
    POSError,
)
from pos.schemas.category import Category
from pos.schemas.order import Order
from pos.schemas.payment import Payment
from pos.schemas.product import Product
from pos.schemas.user import User, UserCredentials

M = TypeVar("M", bound=BaseModel)

UNIQUE_VIOLATION = "23505"
FOREIGN_KEY_VIOLATION = "23503"


def classify_integrity_error(
    error: IntegrityError,
    foreign_key_error: type[POSError] = DataNotFoundError,
) -> POSError:
    """Map a constraint violation to the domain taxonomy.

    A foreign key violation means a dangling reference on insert/update, but a
    row that is still referenced on delete; callers pick which via
    ``foreign_key_error``.
    """
    orig = error.orig
    code = getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)
    if code == UNIQUE_VIOLATION:
        return ConflictingDataError()
    if code == FOREIGN_KEY_VIOLATION:
        return foreign_key_error()
    return InternalError(str(orig))


@asynccontextmanager
async def storage_errors(
    db: AsyncSession,
    foreign_key_error: type[POSError] = DataNotFoundError,
) -> AsyncIterator[None]:
    """Roll back and translate SQLAlchemy failures raised inside the block."""
    try:
        yield
    except IntegrityError as e:
        await db.rollback()
        raise classify_integrity_error(e, foreign_key_error) from e
    except SQLAlchemyError as e:
        await db.rollback()
        raise InternalError(str(e)) from e


def to_domain(row: Any, schema: type[M], **extra: Any) -> M:
    """Build a domain object from the column attributes of an ORM row.

    Relationships are only included when passed explicitly in ``extra``.
    """
    data = {
        attr.key: getattr(row, attr.key)
        for attr in sa_inspect(row).mapper.column_attrs
    }
    data.update(extra)
    return schema.model_validate(data)


class UserRepository(Protocol):
    async def create(self, name: str, email: str, password: str, role: str) -> User: ...

    async def get_by_id(self, user_id: int) -> User: ...

    async def get_by_email(self, email: str) -> UserCredentials: ...

    async def list(self, skip: int, limit: int) -> list[User]: ...

    async def update(self, user_id: int, **fields: Any) -> User: ...

    async def delete(self, user_id: int) -> None: ...


class CategoryRepository(Protocol):
    async def create(self, name: str) -> Category: ...

    async def get_by_id(self, category_id: int) -> Category: ...

    async def list(self, skip: int, limit: int) -> list[Category]: ...

    async def update(self, category_id: int, **fields: Any) -> Category: ...

    async def delete(self, category_id: int) -> None: ...


class PaymentRepository(Protocol):
    async def create(self, name: str, type: str, logo: str | None) -> Payment: ...

    async def get_by_id(self, payment_id: int) -> Payment: ...

    async def list(self, skip: int, limit: int) -> list[Payment]: ...

    async def update(self, payment_id: int, **fields: Any) -> Payment: ...

    async def delete(self, payment_id: int) -> None: ...


class ProductRepository(Protocol):
    async def create(
        self,
        category_id: int,
        name: str,
        image: str | None,
        price: Decimal,
        stock: int,
    ) -> Product: ...

    async def get_by_id(self, product_id: int) -> Product: ...

    async def list(
        self,
        search: str | None,
        category_id: int | None,
        skip: int,
        limit: int,
    ) -> list[Product]: ...

    async def update(self, product_id: int, **fields: Any) -> Product: ...

    async def delete(self, product_id: int) -> None: ...


class NewOrderLine(BaseModel):
    """Priced line handed to the order repository."""

    product_id: int
    quantity: int
    price: Decimal
    total_price: Decimal


class NewOrder(BaseModel):
    """Fully priced order handed to the order repository."""

    user_id: int
    payment_id: int
    customer_name: str
    total_price: Decimal
    total_paid: Decimal
    total_return: Decimal
    products: list[NewOrderLine]


class OrderRepository(Protocol):
    async def create(self, order: NewOrder, decrement_stock: bool = True) -> Order: ...

    async def get_by_id(self, order_id: int) -> Order: ...

    async def list(self, skip: int, limit: int) -> list[Order]: ...


def ensure_found(row: Any, what: str, key: Any) -> Any:
    """Raise ``DataNotFoundError`` when a lookup returned nothing."""
    if row is None:
        raise DataNotFoundError(f"{what} {key} not found")
    return row


def only_changed(fields: dict[str, Any], allowed: Sequence[str]) -> dict[str, Any]:
    """Keep non-None values for the given column names."""
    return {k: v for k, v in fields.items() if k in allowed and v is not None}
