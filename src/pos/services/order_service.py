"""Order service: validation, pricing, persistence and cached reads of orders."""

import logging
from decimal import Decimal

from pos.core.config import settings
from pos.core.exceptions import InsufficientPaymentError, InsufficientStockError
from pos.repositories.base import (
    CategoryRepository,
    NewOrder,
    NewOrderLine,
    OrderRepository,
    PaymentRepository,
    ProductRepository,
    UserRepository,
)
from pos.schemas.order import Order, OrderDraft
from pos.schemas.product import Product
from pos.services.cache_keys import (
    ORDER,
    PRODUCT,
    collection_pattern,
    generate_cache_key,
    generate_cache_key_params,
)
from pos.services.cache_service import CacheService, ReadThroughCache

logger = logging.getLogger(__name__)


class OrderService:
    """Service class for order operations.

    Orders are immutable once written, so cached orders never expire unless
    ``ORDER_CACHE_TTL`` says otherwise.
    """

    def __init__(
        self,
        order_repo: OrderRepository,
        product_repo: ProductRepository,
        category_repo: CategoryRepository,
        user_repo: UserRepository,
        payment_repo: PaymentRepository,
        cache: CacheService,
        ttl: int | None = None,
        decrement_stock: bool | None = None,
    ):
        self.order_repo = order_repo
        self.product_repo = product_repo
        self.category_repo = category_repo
        self.user_repo = user_repo
        self.payment_repo = payment_repo
        self.cached = ReadThroughCache(
            cache, settings.ORDER_CACHE_TTL if ttl is None else ttl
        )
        self.decrement_stock = (
            settings.ORDER_DECREMENT_STOCK if decrement_stock is None else decrement_stock
        )

    async def create_order(self, draft: OrderDraft, user_id: int) -> Order:
        """Validate, price and persist an order, then return it enriched.

        Lines are checked in request order and the first failure aborts the
        whole order before anything is written. Totals come from current
        product prices; the client only supplies the amount tendered.

        Args:
            draft: Requested payment, customer and product lines
            user_id: Authenticated cashier creating the order

        Returns:
            Created order with user, payment and line products attached

        Raises:
            DataNotFoundError: Unknown product, payment or user
            InsufficientStockError: A line asks for more than the product stock
            InsufficientPaymentError: Amount tendered is below the total
        """
        lines: list[NewOrderLine] = []
        total_price = Decimal("0")

        for requested in draft.products:
            product = await self.product_repo.get_by_id(requested.product_id)

            if product.stock < requested.quantity:
                raise InsufficientStockError()

            line_total = product.price * requested.quantity
            lines.append(
                NewOrderLine(
                    product_id=product.id,
                    quantity=requested.quantity,
                    price=product.price,
                    total_price=line_total,
                )
            )
            total_price += line_total

        if draft.total_paid < total_price:
            raise InsufficientPaymentError()

        order = await self.order_repo.create(
            NewOrder(
                user_id=user_id,
                payment_id=draft.payment_id,
                customer_name=draft.customer_name,
                total_price=total_price,
                total_paid=draft.total_paid,
                total_return=draft.total_paid - total_price,
                products=lines,
            ),
            decrement_stock=self.decrement_stock,
        )
        logger.info(
            f"Created order {order.id} receipt={order.receipt_code} "
            f"total={order.total_price} lines={len(order.products)}"
        )

        order = await self._enrich(order)

        stale_keys: list[str] = []
        stale_patterns = [collection_pattern(ORDER[1])]
        if self.decrement_stock:
            stale_keys = [generate_cache_key(PRODUCT[0], line.product_id) for line in lines]
            stale_patterns.append(collection_pattern(PRODUCT[1]))
        await self.cached.invalidate(*stale_keys, patterns=tuple(stale_patterns))

        await self.cached.store(generate_cache_key(ORDER[0], order.id), order)

        return order

    async def get_order(self, order_id: int) -> Order:
        """Get an enriched order by ID, through the cache.

        Raises:
            DataNotFoundError: Order does not exist
        """

        async def load() -> Order:
            order = await self.order_repo.get_by_id(order_id)
            return await self._enrich(order)

        return await self.cached.fetch(generate_cache_key(ORDER[0], order_id), Order, load)

    async def list_orders(self, skip: int = 0, limit: int = 10) -> list[Order]:
        """Get a page of enriched orders, cached per (skip, limit).

        Args:
            skip: Number of records to skip
            limit: Maximum number of records to return
        """
        params = generate_cache_key_params(skip=skip, limit=limit)

        async def load() -> list[Order]:
            orders = await self.order_repo.list(skip, limit)
            return [await self._enrich(order) for order in orders]

        return await self.cached.fetch(
            generate_cache_key(ORDER[1], params), list[Order], load
        )

    async def _enrich(self, order: Order) -> Order:
        """Attach user, payment and each line's product with its category."""
        user = await self.user_repo.get_by_id(order.user_id)
        payment = await self.payment_repo.get_by_id(order.payment_id)

        lines = []
        for line in order.products:
            product = await self._resolve_product(line.product_id)
            lines.append(line.model_copy(update={"product": product}))

        return order.model_copy(update={"user": user, "payment": payment, "products": lines})

    async def _resolve_product(self, product_id: int) -> Product:
        product = await self.product_repo.get_by_id(product_id)
        category = await self.category_repo.get_by_id(product.category_id)
        return product.model_copy(update={"category": category})
