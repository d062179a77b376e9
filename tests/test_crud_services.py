"""Tests for the cached CRUD services: categories, payments, products, users."""

from decimal import Decimal
from unittest.mock import AsyncMock, patch

import pytest

from pos.core.exceptions import (
    ConflictingDataError,
    DataNotFoundError,
    NoUpdatedDataError,
)
from pos.schemas.category import Category, CategoryCreate, CategoryUpdate
from pos.schemas.payment import Payment, PaymentCreate, PaymentUpdate
from pos.schemas.product import ProductCreate, ProductUpdate
from pos.schemas.user import User, UserRegister, UserUpdate
from pos.services.category_service import CategoryService
from pos.services.payment_service import PaymentService
from pos.services.product_service import ProductService
from pos.services.user_service import UserService


def scanned_patterns(mock_redis) -> list[str]:
    return [c.kwargs["match"] for c in mock_redis.scan_iter.call_args_list]


class TestCategoryService:
    @pytest.mark.asyncio
    async def test_create_caches_and_drops_pages(self, category_repo, cache, mock_redis, drinks):
        category_repo.create = AsyncMock(return_value=drinks)
        service = CategoryService(category_repo, cache)

        category = await service.create_category(CategoryCreate(name="Drinks"))

        assert category == drinks
        category_repo.create.assert_awaited_once_with(name="Drinks")
        assert mock_redis.set.await_args.args[0] == "category:1"
        assert scanned_patterns(mock_redis) == ["categories:*"]

    @pytest.mark.asyncio
    async def test_duplicate_name(self, category_repo, cache, mock_redis):
        category_repo.create = AsyncMock(side_effect=ConflictingDataError())
        service = CategoryService(category_repo, cache)

        with pytest.raises(ConflictingDataError):
            await service.create_category(CategoryCreate(name="Drinks"))

        mock_redis.set.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_list_key(self, category_repo, cache, mock_redis):
        category_repo.list = AsyncMock(return_value=[])
        service = CategoryService(category_repo, cache)

        await service.list_categories(skip=5, limit=5)

        mock_redis.get.assert_awaited_once_with("categories:skip=5&limit=5")
        category_repo.list.assert_awaited_once_with(5, 5)

    @pytest.mark.asyncio
    async def test_update_same_name(self, category_repo, cache, drinks):
        service = CategoryService(category_repo, cache)

        with pytest.raises(NoUpdatedDataError):
            await service.update_category(drinks.id, CategoryUpdate(name="Drinks"))

    @pytest.mark.asyncio
    async def test_update_empty(self, category_repo, cache, drinks):
        service = CategoryService(category_repo, cache)

        with pytest.raises(NoUpdatedDataError):
            await service.update_category(drinks.id, CategoryUpdate())

    @pytest.mark.asyncio
    async def test_update_refreshes_cache(self, category_repo, cache, mock_redis):
        renamed = Category(id=1, name="Beverages")
        category_repo.update = AsyncMock(return_value=renamed)
        service = CategoryService(category_repo, cache)

        category = await service.update_category(1, CategoryUpdate(name="Beverages"))

        assert category == renamed
        category_repo.update.assert_awaited_once_with(1, name="Beverages")
        mock_redis.delete.assert_any_await("category:1")
        assert mock_redis.set.await_args.args[0] == "category:1"
        assert scanned_patterns(mock_redis) == ["categories:*"]

    @pytest.mark.asyncio
    async def test_delete_missing(self, category_repo, cache):
        category_repo.get_by_id = AsyncMock(side_effect=DataNotFoundError())
        service = CategoryService(category_repo, cache)

        with pytest.raises(DataNotFoundError):
            await service.delete_category(9)

        category_repo.delete.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_delete_in_use(self, category_repo, cache, mock_redis):
        """Categories referenced by products cannot be removed."""
        category_repo.delete = AsyncMock(side_effect=ConflictingDataError())
        service = CategoryService(category_repo, cache)

        with pytest.raises(ConflictingDataError):
            await service.delete_category(1)

        mock_redis.delete.assert_not_awaited()


class TestPaymentService:
    @pytest.mark.asyncio
    async def test_create(self, payment_repo, cache, mock_redis, cash_payment):
        payment_repo.create = AsyncMock(return_value=cash_payment)
        service = PaymentService(payment_repo, cache)

        await service.create_payment(PaymentCreate(name="Cash", type="CASH"))

        payment_repo.create.assert_awaited_once_with(name="Cash", type="CASH", logo=None)
        assert mock_redis.set.await_args.args[0] == "payment:1"
        assert scanned_patterns(mock_redis) == ["payments:*"]

    @pytest.mark.asyncio
    async def test_get_from_cache(self, payment_repo, cache, mock_redis, cash_payment):
        mock_redis.get = AsyncMock(return_value=cash_payment.model_dump_json())
        service = PaymentService(payment_repo, cache)

        payment = await service.get_payment(1)

        assert payment == cash_payment
        payment_repo.get_by_id.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_update_only_changed_fields(self, payment_repo, cache):
        payment_repo.update = AsyncMock(
            return_value=Payment(id=1, name="Cash", type="CASH", logo="cash.png")
        )
        service = PaymentService(payment_repo, cache)

        await service.update_payment(1, PaymentUpdate(name="Cash", logo="cash.png"))

        payment_repo.update.assert_awaited_once_with(1, logo="cash.png")

    @pytest.mark.asyncio
    async def test_update_identical(self, payment_repo, cache):
        service = PaymentService(payment_repo, cache)

        with pytest.raises(NoUpdatedDataError):
            await service.update_payment(1, PaymentUpdate(name="Cash", type="CASH"))

        payment_repo.update.assert_not_awaited()


class TestProductService:
    @pytest.fixture
    def service(self, product_repo, category_repo, cache):
        return ProductService(product_repo, category_repo, cache)

    @pytest.mark.asyncio
    async def test_create_attaches_category(
        self, service, product_repo, iced_tea, drinks, mock_redis
    ):
        product_repo.create = AsyncMock(return_value=iced_tea)

        product = await service.create_product(
            ProductCreate(category_id=1, name="Iced Tea", price=Decimal("5000"), stock=100)
        )

        assert product.category == drinks
        assert mock_redis.set.await_args.args[0] == "product:1"
        assert scanned_patterns(mock_redis) == ["products:*"]

    @pytest.mark.asyncio
    async def test_create_with_unknown_category(self, service, product_repo, category_repo):
        category_repo.get_by_id = AsyncMock(side_effect=DataNotFoundError())

        with pytest.raises(DataNotFoundError):
            await service.create_product(
                ProductCreate(category_id=9, name="Iced Tea", price=Decimal("5000"), stock=1)
            )

        product_repo.create.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_get_attaches_category(self, service, drinks, mock_redis):
        product = await service.get_product(1)

        assert product.name == "Iced Tea"
        assert product.category == drinks
        mock_redis.get.assert_awaited_once_with("product:1")

    @pytest.mark.asyncio
    async def test_list_key_covers_filters(self, service, product_repo, mock_redis):
        product_repo.list = AsyncMock(return_value=[])

        await service.list_products(search="tea", category_id=1, skip=0, limit=10)
        await service.list_products(skip=0, limit=10)

        keys = [c.args[0] for c in mock_redis.get.await_args_list]
        assert keys == [
            "products:skip=0&limit=10&category_id=1&search=tea",
            "products:skip=0&limit=10&category_id=&search=",
        ]
        product_repo.list.assert_any_await("tea", 1, 0, 10)

    @pytest.mark.asyncio
    async def test_update_price(self, service, product_repo, iced_tea, mock_redis):
        product_repo.update = AsyncMock(
            return_value=iced_tea.model_copy(update={"price": Decimal("6000")})
        )

        product = await service.update_product(1, ProductUpdate(price=Decimal("6000")))

        assert product.price == Decimal("6000")
        assert product.category is not None
        product_repo.update.assert_awaited_once_with(1, price=Decimal("6000"))
        mock_redis.delete.assert_any_await("product:1")

    @pytest.mark.asyncio
    async def test_update_nothing_changed(self, service, product_repo):
        with pytest.raises(NoUpdatedDataError):
            await service.update_product(1, ProductUpdate(name="Iced Tea", stock=100))

        product_repo.update.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_delete(self, service, product_repo, mock_redis):
        await service.delete_product(1)

        product_repo.delete.assert_awaited_once_with(1)
        mock_redis.delete.assert_any_await("product:1")
        assert scanned_patterns(mock_redis) == ["products:*"]


class TestUserService:
    @pytest.mark.asyncio
    async def test_register_hashes_password(self, user_repo, cache, cashier):
        user_repo.create = AsyncMock(return_value=cashier)
        service = UserService(user_repo, cache)

        with patch("pos.services.user_service.get_password_hash", return_value="hashed"):
            user = await service.register(
                UserRegister(name="Cashier", email="cashier@example.com", password="password123")
            )

        assert user == cashier
        user_repo.create.assert_awaited_once_with(
            name="Cashier",
            email="cashier@example.com",
            password="hashed",
            role="cashier",
        )

    @pytest.mark.asyncio
    async def test_register_duplicate_email(self, user_repo, cache):
        user_repo.create = AsyncMock(side_effect=ConflictingDataError())
        service = UserService(user_repo, cache)

        with patch("pos.services.user_service.get_password_hash", return_value="hashed"):
            with pytest.raises(ConflictingDataError):
                await service.register(
                    UserRegister(name="A", email="a@example.com", password="password123")
                )

    @pytest.mark.asyncio
    async def test_update_role(self, user_repo, cache, cashier):
        user_repo.update = AsyncMock(return_value=cashier.model_copy(update={"role": "admin"}))
        service = UserService(user_repo, cache)

        user = await service.update_user(1, UserUpdate(role="admin"))

        assert user.role == "admin"
        user_repo.update.assert_awaited_once_with(1, role="admin")

    @pytest.mark.asyncio
    async def test_update_password_always_counts(self, user_repo, cache, cashier):
        user_repo.update = AsyncMock(return_value=cashier)
        service = UserService(user_repo, cache)

        with patch("pos.services.user_service.get_password_hash", return_value="hashed"):
            await service.update_user(1, UserUpdate(name="Cashier", password="newpassword"))

        user_repo.update.assert_awaited_once_with(1, password="hashed")

    @pytest.mark.asyncio
    async def test_update_nothing(self, user_repo, cache):
        service = UserService(user_repo, cache)

        with pytest.raises(NoUpdatedDataError):
            await service.update_user(1, UserUpdate(email="cashier@example.com"))

    @pytest.mark.asyncio
    async def test_cached_user_has_no_password(self, user_repo, cache, mock_redis):
        service = UserService(user_repo, cache)

        await service.get_user(1)

        _, payload = mock_redis.set.await_args.args
        assert "password" not in payload
        assert User.model_validate_json(payload).email == "cashier@example.com"
