"""initial_schema

Revision ID: 001_initial
Revises:
Create Date: 2026-01-01

Creates users, payments, categories, products, orders and order_products.
Order lines carry the unit price at sale time so later product price
changes never alter past receipts.

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = '001_initial'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    ]


def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('id', sa.BigInteger(), autoincrement=True, nullable=False),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('password', sa.String(255), nullable=False),
        sa.Column('role', sa.String(20), nullable=False, server_default='cashier'),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('email'),
        sa.CheckConstraint("role IN ('admin', 'cashier')", name='chk_user_role'),
    )
    op.create_index('idx_users_email', 'users', ['email'])

    op.create_table(
        'payments',
        sa.Column('id', sa.BigInteger(), autoincrement=True, nullable=False),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('type', sa.String(20), nullable=False),
        sa.Column('logo', sa.String(500), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('name'),
        sa.CheckConstraint("type IN ('CASH', 'E-WALLET', 'EDC')", name='chk_payment_type'),
    )

    op.create_table(
        'categories',
        sa.Column('id', sa.BigInteger(), autoincrement=True, nullable=False),
        sa.Column('name', sa.String(100), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('name'),
    )

    op.create_table(
        'products',
        sa.Column('id', sa.BigInteger(), autoincrement=True, nullable=False),
        sa.Column('category_id', sa.BigInteger(), nullable=False),
        sa.Column('sku', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('stock', sa.Integer(), nullable=False),
        sa.Column('price', sa.Numeric(12, 2), nullable=False),
        sa.Column('image', sa.String(500), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['category_id'], ['categories.id'], ondelete='RESTRICT'),
        sa.UniqueConstraint('sku'),
        sa.UniqueConstraint('name'),
        sa.CheckConstraint('stock >= 0', name='chk_product_stock_positive'),
        sa.CheckConstraint('price > 0', name='chk_product_price_positive'),
    )
    op.create_index('idx_products_category', 'products', ['category_id'])

    op.create_table(
        'orders',
        sa.Column('id', sa.BigInteger(), autoincrement=True, nullable=False),
        sa.Column('user_id', sa.BigInteger(), nullable=False),
        sa.Column('payment_id', sa.BigInteger(), nullable=False),
        sa.Column('customer_name', sa.String(255), nullable=False),
        sa.Column('total_price', sa.Numeric(12, 2), nullable=False),
        sa.Column('total_paid', sa.Numeric(12, 2), nullable=False),
        sa.Column('total_return', sa.Numeric(12, 2), nullable=False),
        sa.Column('receipt_code', postgresql.UUID(as_uuid=True), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id']),
        sa.ForeignKeyConstraint(['payment_id'], ['payments.id']),
        sa.UniqueConstraint('receipt_code'),
        sa.CheckConstraint('total_return >= 0', name='chk_order_return_positive'),
    )
    op.create_index('idx_orders_user', 'orders', ['user_id'])

    op.create_table(
        'order_products',
        sa.Column('id', sa.BigInteger(), autoincrement=True, nullable=False),
        sa.Column('order_id', sa.BigInteger(), nullable=False),
        sa.Column('product_id', sa.BigInteger(), nullable=False),
        sa.Column('quantity', sa.Integer(), nullable=False),
        sa.Column('price', sa.Numeric(12, 2), nullable=False),
        sa.Column('total_price', sa.Numeric(12, 2), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['order_id'], ['orders.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['product_id'], ['products.id']),
        sa.CheckConstraint('quantity > 0', name='chk_order_product_qty_positive'),
    )
    op.create_index('idx_order_products_order', 'order_products', ['order_id'])


def downgrade() -> None:
    op.drop_index('idx_order_products_order', table_name='order_products')
    op.drop_table('order_products')
    op.drop_index('idx_orders_user', table_name='orders')
    op.drop_table('orders')
    op.drop_index('idx_products_category', table_name='products')
    op.drop_table('products')
    op.drop_table('categories')
    op.drop_table('payments')
    op.drop_index('idx_users_email', table_name='users')
    op.drop_table('users')
