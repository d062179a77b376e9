"""Pytest configuration and fixtures for testing."""

from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest

from pos.repositories.base import NewOrder, NewOrderLine
from pos.schemas.category import Category
from pos.schemas.order import Order, OrderProduct
from pos.schemas.payment import Payment
from pos.schemas.product import Product
from pos.schemas.user import User
from pos.services.cache_service import CacheService


def _scan_iter_over(keys: list[str]) -> MagicMock:
    """Build a ``scan_iter`` replacement yielding ``keys``."""

    async def scan_iter(match=None, count=None):
        for key in keys:
            yield key

    return MagicMock(side_effect=scan_iter)


@pytest.fixture
def scan_iter_over():
    """Factory for fake ``scan_iter`` results."""
    return _scan_iter_over


# Mock Redis client fixture
@pytest.fixture
def mock_redis() -> AsyncMock:
    """Create a mock Redis client."""
    redis = AsyncMock()

    # Mock common Redis operations
    redis.get = AsyncMock(return_value=None)
    redis.set = AsyncMock(return_value=True)
    redis.delete = AsyncMock(return_value=1)
    redis.scan_iter = _scan_iter_over([])

    return redis


@pytest.fixture
def cache(mock_redis: AsyncMock) -> CacheService:
    return CacheService(mock_redis)


# Domain object fixtures
@pytest.fixture
def cashier() -> User:
    return User(id=1, name="Cashier", email="cashier@example.com", role="cashier")


@pytest.fixture
def cash_payment() -> Payment:
    return Payment(id=1, name="Cash", type="CASH")


@pytest.fixture
def drinks() -> Category:
    return Category(id=1, name="Drinks")


@pytest.fixture
def iced_tea() -> Product:
    """Product priced 5000 with 100 in stock."""
    return Product(
        id=1,
        category_id=1,
        sku=uuid4(),
        name="Iced Tea",
        stock=100,
        price=Decimal("5000"),
    )


@pytest.fixture
def fried_rice() -> Product:
    return Product(
        id=2,
        category_id=1,
        sku=uuid4(),
        name="Fried Rice",
        stock=3,
        price=Decimal("12500.50"),
    )


def persisted(new_order: NewOrder, order_id: int = 1) -> Order:
    """What the order repository returns for ``new_order``."""
    return Order(
        id=order_id,
        user_id=new_order.user_id,
        payment_id=new_order.payment_id,
        customer_name=new_order.customer_name,
        total_price=new_order.total_price,
        total_paid=new_order.total_paid,
        total_return=new_order.total_return,
        receipt_code=uuid4(),
        products=[
            OrderProduct(
                id=i + 1,
                order_id=order_id,
                product_id=line.product_id,
                quantity=line.quantity,
                price=line.price,
                total_price=line.total_price,
            )
            for i, line in enumerate(new_order.products)
        ],
    )


# Mock repository fixtures
@pytest.fixture
def product_repo(iced_tea: Product, fried_rice: Product) -> AsyncMock:
    """Product repository serving the two sample products."""
    from pos.core.exceptions import DataNotFoundError

    products = {iced_tea.id: iced_tea, fried_rice.id: fried_rice}

    async def get_by_id(product_id: int) -> Product:
        if product_id not in products:
            raise DataNotFoundError()
        return products[product_id]

    repo = AsyncMock()
    repo.get_by_id = AsyncMock(side_effect=get_by_id)
    return repo


@pytest.fixture
def category_repo(drinks: Category) -> AsyncMock:
    repo = AsyncMock()
    repo.get_by_id = AsyncMock(return_value=drinks)
    return repo


@pytest.fixture
def user_repo(cashier: User) -> AsyncMock:
    repo = AsyncMock()
    repo.get_by_id = AsyncMock(return_value=cashier)
    return repo


@pytest.fixture
def payment_repo(cash_payment: Payment) -> AsyncMock:
    repo = AsyncMock()
    repo.get_by_id = AsyncMock(return_value=cash_payment)
    return repo


@pytest.fixture
def order_repo() -> AsyncMock:
    """Order repository echoing back whatever it is asked to persist."""
    repo = AsyncMock()

    async def create(new_order: NewOrder, decrement_stock: bool = True) -> Order:
        return persisted(new_order)

    repo.create = AsyncMock(side_effect=create)
    return repo


@pytest.fixture
def make_order():
    """Factory turning a ``NewOrder`` into a persisted ``Order``."""
    return persisted


@pytest.fixture
def new_order() -> NewOrder:
    """One line of Iced Tea paid exactly."""
    return NewOrder(
        user_id=1,
        payment_id=1,
        customer_name="Jane",
        total_price=Decimal("5000"),
        total_paid=Decimal("5000"),
        total_return=Decimal("0"),
        products=[
            NewOrderLine(
                product_id=1,
                quantity=1,
                price=Decimal("5000"),
                total_price=Decimal("5000"),
            )
        ],
    )
