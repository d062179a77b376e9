"""Seed data script for development and testing.

Creates:
- 1 admin + N cashiers
- the three payment methods (cash, e-wallet, card terminal)
- a few categories, each with some products

Environment Variables:
    CASHIER_COUNT: Number of cashier accounts to create (default: 5)
    PRODUCT_STOCK: Initial stock for every seeded product (default: 100)

Usage:
    # First time setup
    python -m scripts.seed_data

    # More cashiers, deeper stock
    CASHIER_COUNT=50 PRODUCT_STOCK=1000 python -m scripts.seed_data

Accounts:
    - Admin: admin@example.com / admin123
    - Cashiers: cashier01@example.com ~ cashierNN@example.com (password: password123)
"""

import asyncio
import os
from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from pos.core.database import async_session_maker, engine
from pos.core.redis import close_redis, get_redis
from pos.core.security import get_password_hash
from pos.models import Category, Payment, Product, User
from pos.services.cache_keys import CATEGORY, PAYMENT, PRODUCT, USER, collection_pattern
from pos.services.cache_service import CacheService

# Configuration from environment variables
CASHIER_COUNT = int(os.getenv("CASHIER_COUNT", "5"))
PRODUCT_STOCK = int(os.getenv("PRODUCT_STOCK", "100"))

PAYMENTS = [
    ("Cash", "CASH", None),
    ("QRIS", "E-WALLET", "https://example.com/logos/qris.png"),
    ("Debit Card", "EDC", "https://example.com/logos/edc.png"),
]

CATALOG = {
    "Food": [("Fried Rice", "25000.00"), ("Chicken Noodles", "22000.00")],
    "Drinks": [("Iced Tea", "5000.00"), ("Lemon Juice", "12000.00")],
    "Snacks": [("French Fries", "15000.00"), ("Spring Rolls", "10000.00")],
}


async def seed_users(session: AsyncSession) -> list[User]:
    """Create 1 admin + CASHIER_COUNT cashiers."""
    print("Seeding users...")

    # Check if users already exist
    result = await session.execute(select(User).limit(1))
    if result.scalar_one_or_none():
        print("  Users already exist, skipping...")
        result = await session.execute(select(User))
        return list(result.scalars().all())

    users = [
        User(
            name="Admin",
            email="admin@example.com",
            password=get_password_hash("admin123"),
            role="admin",
        )
    ]
    print("  Created admin: admin@example.com / admin123")

    password_hash = get_password_hash("password123")
    for i in range(1, CASHIER_COUNT + 1):
        users.append(
            User(
                name=f"Cashier {i:02d}",
                email=f"cashier{i:02d}@example.com",
                password=password_hash,
                role="cashier",
            )
        )

    session.add_all(users)
    await session.commit()

    print(f"  Created {len(users)} users")
    return users


async def seed_payments(session: AsyncSession) -> list[Payment]:
    print("Seeding payments...")

    result = await session.execute(select(Payment).limit(1))
    if result.scalar_one_or_none():
        print("  Payments already exist, skipping...")
        result = await session.execute(select(Payment))
        return list(result.scalars().all())

    payments = [Payment(name=name, type=type_, logo=logo) for name, type_, logo in PAYMENTS]
    session.add_all(payments)
    await session.commit()

    print(f"  Created {len(payments)} payments")
    return payments


async def seed_catalog(session: AsyncSession) -> list[Product]:
    """Create categories and their products."""
    print("Seeding categories and products...")

    result = await session.execute(select(Product).limit(1))
    if result.scalar_one_or_none():
        print("  Products already exist, skipping...")
        result = await session.execute(select(Product))
        return list(result.scalars().all())

    products = []
    for category_name, items in CATALOG.items():
        category = Category(name=category_name)
        session.add(category)
        await session.flush()

        for name, price in items:
            products.append(
                Product(
                    category_id=category.id,
                    name=name,
                    price=Decimal(price),
                    stock=PRODUCT_STOCK,
                )
            )

    session.add_all(products)
    await session.commit()

    for product in products:
        print(f"  {product.name}: price={product.price}, stock={product.stock}")
    return products


async def drop_cached_collections() -> None:
    """Drop cached pages so the API sees the seeded rows right away."""
    print("Invalidating cached collections...")

    cache = CacheService(await get_redis())
    for _, plural in (USER, PAYMENT, CATEGORY, PRODUCT):
        deleted = await cache.delete_by_prefix(collection_pattern(plural))
        print(f"  {plural}: {deleted} keys")


async def main():
    """Main seed function."""
    print("=" * 60)
    print("POS - Seed Data Script")
    print("=" * 60)
    print(f"  CASHIER_COUNT: {CASHIER_COUNT}")
    print(f"  PRODUCT_STOCK: {PRODUCT_STOCK}")
    print("=" * 60)

    async with async_session_maker() as session:
        users = await seed_users(session)
        payments = await seed_payments(session)
        products = await seed_catalog(session)

    await drop_cached_collections()

    print("=" * 60)
    print("Seed data complete!")
    print(f"  Users: {len(users)}")
    print(f"  Payments: {len(payments)}")
    print(f"  Products: {len(products)}")
    print("=" * 60)

    # Cleanup
    await close_redis()
    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(main())
