"""Wipe every POS table and the Redis cache.

Rows are deleted child-first so foreign keys never block the run. Redis is
flushed afterwards; otherwise cached orders and products would outlive their
rows until the next write invalidated them.

Usage:
    python -m scripts.reset_db
"""

import asyncio

from redis.exceptions import RedisError
from sqlalchemy import text

from pos.core.database import async_session_maker, engine
from pos.core.redis import close_redis, get_redis

TABLES = ["order_products", "orders", "products", "categories", "payments", "users"]


async def clear_tables() -> None:
    async with async_session_maker() as session:
        for table in TABLES:
            result = await session.execute(text(f"DELETE FROM {table}"))
            print(f"  {table:<15} {result.rowcount} rows removed")
        await session.commit()


async def flush_cache() -> None:
    try:
        redis = await get_redis()
        await redis.flushdb()
        print("  redis           flushed")
    except RedisError as e:
        print(f"  redis           skipped ({e})")
    finally:
        await close_redis()


async def main():
    print("Resetting POS data")
    try:
        await clear_tables()
        await flush_cache()
    finally:
        await engine.dispose()
    print("Done. Re-seed with: python -m scripts.seed_data")


if __name__ == "__main__":
    asyncio.run(main())
