"""Postgres order repository."""

import logging

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from pos.core.exceptions import InsufficientStockError
from pos.models.order import Order as OrderModel
from pos.models.order import OrderProduct as OrderProductModel
from pos.models.product import Product as ProductModel
from pos.repositories.base import NewOrder, ensure_found, storage_errors, to_domain
from pos.schemas.order import Order, OrderProduct

logger = logging.getLogger(__name__)


def _order_to_domain(row: OrderModel) -> Order:
    return to_domain(
        row,
        Order,
        products=[to_domain(line, OrderProduct) for line in row.products],
    )


class PostgresOrderRepository:
    """Order storage backed by SQLAlchemy.

    An order and its lines are written in one transaction.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(self, order: NewOrder, decrement_stock: bool = True) -> Order:
        """Persist an order with its lines.

        When ``decrement_stock`` is set, each line's quantity is taken from the
        product inside the same transaction with a conditional UPDATE, so two
        concurrent orders cannot both consume the last units.

        Raises:
            InsufficientStockError: A product no longer has enough stock
            DataNotFoundError: User, payment or product reference is dangling
        """
        async with storage_errors(self.db):
            if decrement_stock:
                for line in order.products:
                    result = await self.db.execute(
                        update(ProductModel)
                        .where(ProductModel.id == line.product_id)
                        .where(ProductModel.stock >= line.quantity)
                        .values(stock=ProductModel.stock - line.quantity)
                        .returning(ProductModel.id)
                    )
                    if result.first() is None:
                        await self.db.rollback()
                        logger.info(
                            f"Stock for product {line.product_id} dropped below "
                            f"{line.quantity} before the order was written"
                        )
                        raise InsufficientStockError()

            row = OrderModel(
                user_id=order.user_id,
                payment_id=order.payment_id,
                customer_name=order.customer_name,
                total_price=order.total_price,
                total_paid=order.total_paid,
                total_return=order.total_return,
                products=[
                    OrderProductModel(
                        product_id=line.product_id,
                        quantity=line.quantity,
                        price=line.price,
                        total_price=line.total_price,
                    )
                    for line in order.products
                ],
            )
            self.db.add(row)
            await self.db.commit()

        return await self.get_by_id(row.id)

    async def get_by_id(self, order_id: int) -> Order:
        async with storage_errors(self.db):
            result = await self.db.execute(
                select(OrderModel)
                .options(selectinload(OrderModel.products))
                .where(OrderModel.id == order_id)
                .execution_options(populate_existing=True)
            )
            row = ensure_found(result.scalar_one_or_none(), "order", order_id)
        return _order_to_domain(row)

    async def list(self, skip: int, limit: int) -> list[Order]:
        async with storage_errors(self.db):
            result = await self.db.execute(
                select(OrderModel)
                .options(selectinload(OrderModel.products))
                .order_by(OrderModel.id)
                .offset(skip)
                .limit(limit)
            )
            rows = result.scalars().all()
        return [_order_to_domain(row) for row in rows]
