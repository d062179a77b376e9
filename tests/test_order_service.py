"""Tests for order creation and cached order reads."""

from decimal import Decimal
from unittest.mock import AsyncMock

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from pos.core.exceptions import (
    DataNotFoundError,
    InsufficientPaymentError,
    InsufficientStockError,
    InternalError,
)
from pos.schemas.order import Order, OrderDraft
from pos.services.cache_keys import serialize
from pos.services.order_service import OrderService


def draft(total_paid, *lines) -> OrderDraft:
    return OrderDraft.model_validate(
        {
            "payment_id": 1,
            "customer_name": "John Doe",
            "total_paid": total_paid,
            "products": [{"product_id": pid, "qty": qty} for pid, qty in lines],
        }
    )


@pytest.fixture
def service(order_repo, product_repo, category_repo, user_repo, payment_repo, cache):
    return OrderService(
        order_repo=order_repo,
        product_repo=product_repo,
        category_repo=category_repo,
        user_repo=user_repo,
        payment_repo=payment_repo,
        cache=cache,
        ttl=0,
        decrement_stock=True,
    )


class TestCreateOrder:
    """Validation and pricing of new orders."""

    @pytest.mark.asyncio
    async def test_exact_payment(self, service, order_repo):
        """5000 x 2 paid with 10000 leaves no change."""
        order = await service.create_order(draft(10000, (1, 2)), user_id=1)

        assert order.total_price == Decimal("10000")
        assert order.total_paid == Decimal("10000")
        assert order.total_return == Decimal("0")
        assert order.products[0].quantity == 2
        assert order.products[0].price == Decimal("5000")
        assert order.products[0].total_price == Decimal("10000")

        new_order = order_repo.create.await_args.args[0]
        assert new_order.user_id == 1
        assert new_order.total_price == Decimal("10000")
        assert order_repo.create.await_args.kwargs["decrement_stock"] is True

    @pytest.mark.asyncio
    async def test_change_is_returned(self, service):
        order = await service.create_order(draft(20000, (1, 3)), user_id=1)

        assert order.total_price == Decimal("15000")
        assert order.total_return == Decimal("5000")

    @pytest.mark.asyncio
    async def test_lines_accumulate(self, service):
        """12500.50 x 3 + 5000 x 2 = 47501.50."""
        order = await service.create_order(draft(50000, (2, 3), (1, 2)), user_id=1)

        assert order.total_price == Decimal("47501.50")
        assert order.total_return == Decimal("2498.50")
        assert [line.product_id for line in order.products] == [2, 1]

    @pytest.mark.asyncio
    async def test_stock_exceeded(self, service, order_repo):
        with pytest.raises(InsufficientStockError):
            await service.create_order(draft(10_000_000, (1, 200)), user_id=1)

        order_repo.create.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_quantity_equal_to_stock_is_allowed(self, service):
        order = await service.create_order(draft("37501.50", (2, 3)), user_id=1)

        assert order.total_return == Decimal("0")

    @pytest.mark.asyncio
    async def test_underpaid(self, service, order_repo):
        with pytest.raises(InsufficientPaymentError):
            await service.create_order(draft(1000, (1, 1)), user_id=1)

        order_repo.create.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_stock_checked_before_payment(self, service):
        """A stock failure wins even when the payment is also short."""
        with pytest.raises(InsufficientStockError):
            await service.create_order(draft(0, (1, 1), (2, 4)), user_id=1)

    @pytest.mark.asyncio
    async def test_unknown_product(self, service, order_repo):
        with pytest.raises(DataNotFoundError):
            await service.create_order(draft(10000, (99, 1)), user_id=1)

        order_repo.create.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_enriched_with_user_payment_and_products(
        self, service, cashier, cash_payment, drinks
    ):
        order = await service.create_order(draft(10000, (1, 2)), user_id=1)

        assert order.user == cashier
        assert order.payment == cash_payment
        assert order.products[0].product.name == "Iced Tea"
        assert order.products[0].product.category == drinks

    @pytest.mark.asyncio
    async def test_storage_failure_leaves_cache_alone(self, service, order_repo, mock_redis):
        order_repo.create = AsyncMock(side_effect=InternalError("db down"))

        with pytest.raises(InternalError):
            await service.create_order(draft(10000, (1, 2)), user_id=1)

        mock_redis.set.assert_not_awaited()
        mock_redis.delete.assert_not_awaited()


class TestCreateOrderCache:
    """Cache maintenance after an order is written."""

    @pytest.mark.asyncio
    async def test_order_cached_and_pages_invalidated(self, service, mock_redis):
        order = await service.create_order(draft(10000, (1, 2)), user_id=1)

        key, payload = mock_redis.set.await_args.args
        assert key == "order:1"
        assert Order.model_validate_json(payload) == order

        mock_redis.delete.assert_any_await("product:1")
        patterns = [c.kwargs["match"] for c in mock_redis.scan_iter.call_args_list]
        assert "orders:*" in patterns
        assert "products:*" in patterns

    @pytest.mark.asyncio
    async def test_no_product_invalidation_without_decrement(
        self, order_repo, product_repo, category_repo, user_repo, payment_repo, cache, mock_redis
    ):
        service = OrderService(
            order_repo,
            product_repo,
            category_repo,
            user_repo,
            payment_repo,
            cache,
            ttl=0,
            decrement_stock=False,
        )

        await service.create_order(draft(10000, (1, 2)), user_id=1)

        assert order_repo.create.await_args.kwargs["decrement_stock"] is False
        mock_redis.delete.assert_not_awaited()
        patterns = [c.kwargs["match"] for c in mock_redis.scan_iter.call_args_list]
        assert patterns == ["orders:*"]

    @pytest.mark.asyncio
    async def test_ttl_applied(
        self, order_repo, product_repo, category_repo, user_repo, payment_repo, cache, mock_redis
    ):
        service = OrderService(
            order_repo, product_repo, category_repo, user_repo, payment_repo, cache, ttl=300
        )

        await service.create_order(draft(10000, (1, 2)), user_id=1)

        assert mock_redis.set.await_args.kwargs == {"ex": 300}

    @pytest.mark.asyncio
    async def test_cache_write_failure_still_succeeds(self, service, mock_redis, order_repo):
        mock_redis.set = AsyncMock(side_effect=RedisConnectionError("gone"))
        mock_redis.delete = AsyncMock(side_effect=RedisConnectionError("gone"))

        order = await service.create_order(draft(10000, (1, 2)), user_id=1)

        assert order.id == 1
        order_repo.create.assert_awaited_once()


class TestGetOrder:
    """Read-through behavior of single order reads."""

    @pytest.mark.asyncio
    async def test_cache_hit_skips_storage(self, service, mock_redis, order_repo):
        cached = await service.create_order(draft(10000, (1, 2)), user_id=1)
        mock_redis.get = AsyncMock(return_value=serialize(cached))

        order = await service.get_order(1)

        assert order == cached
        assert order.total_price == Decimal("10000")
        order_repo.get_by_id.assert_not_awaited()
        mock_redis.get.assert_awaited_once_with("order:1")

    @pytest.mark.asyncio
    async def test_cache_miss_loads_and_stores(
        self, service, mock_redis, order_repo, make_order, new_order
    ):
        stored = make_order(new_order, order_id=7)
        order_repo.get_by_id = AsyncMock(return_value=stored)

        order = await service.get_order(7)

        assert order.id == 7
        assert order.payment is not None
        assert order.products[0].product.category is not None
        key, payload = mock_redis.set.await_args.args
        assert key == "order:7"
        assert Order.model_validate_json(payload) == order

    @pytest.mark.asyncio
    async def test_not_found(self, service, order_repo, mock_redis):
        order_repo.get_by_id = AsyncMock(side_effect=DataNotFoundError())

        with pytest.raises(DataNotFoundError):
            await service.get_order(404)

        mock_redis.set.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_corrupt_cache_entry(self, service, mock_redis, order_repo):
        mock_redis.get = AsyncMock(return_value='{"id": "not-an-order"}')

        with pytest.raises(InternalError):
            await service.get_order(1)

        order_repo.get_by_id.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_cache_read_failure(self, service, mock_redis, order_repo):
        mock_redis.get = AsyncMock(side_effect=RedisConnectionError("gone"))

        with pytest.raises(InternalError):
            await service.get_order(1)

        order_repo.get_by_id.assert_not_awaited()


class TestListOrders:
    """Paged order reads."""

    @pytest.mark.asyncio
    async def test_page_key_includes_skip_and_limit(self, service, mock_redis, order_repo):
        order_repo.list = AsyncMock(return_value=[])

        await service.list_orders(skip=0, limit=10)
        await service.list_orders(skip=10, limit=10)

        keys = [c.args[0] for c in mock_redis.get.await_args_list]
        assert keys == ["orders:skip=0&limit=10", "orders:skip=10&limit=10"]
        assert order_repo.list.await_args_list[1].args == (10, 10)

    @pytest.mark.asyncio
    async def test_pages_enriched_and_cached(
        self, service, mock_redis, order_repo, make_order, new_order
    ):
        order_repo.list = AsyncMock(
            return_value=[make_order(new_order, order_id=i) for i in (1, 2)]
        )

        orders = await service.list_orders()

        assert [o.id for o in orders] == [1, 2]
        assert all(o.user is not None for o in orders)
        key, _ = mock_redis.set.await_args.args
        assert key == "orders:skip=0&limit=10"

    @pytest.mark.asyncio
    async def test_cache_hit(self, service, mock_redis, order_repo, make_order, new_order):
        cached = [make_order(new_order, order_id=3)]
        mock_redis.get = AsyncMock(return_value=serialize(cached, list[Order]))

        orders = await service.list_orders(skip=0, limit=5)

        assert orders == cached
        order_repo.list.assert_not_awaited()

