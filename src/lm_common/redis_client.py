"""Redis client factory — used for webhook event de-duplication only.

Purchases themselves are made idempotent in PostgreSQL (unique payment id);
Redis just short-circuits redelivered events before any DB work.
"""

import redis.asyncio as aioredis

from config.settings import settings

_redis_pool: aioredis.Redis | None = None


async def get_redis() -> aioredis.Redis:
    """Get or create the Redis connection pool."""
    global _redis_pool  # noqa: PLW0603
    if _redis_pool is None:
        _redis_pool = aioredis.from_url(
            settings.REDIS_URL,
            decode_responses=True,
        )
    return _redis_pool


async def close_redis() -> None:
    """Close the Redis connection pool."""
    global _redis_pool  # noqa: PLW0603
    if _redis_pool is not None:
        await _redis_pool.aclose()
        _redis_pool = None


async def claim_once(key: str, ttl_seconds: int) -> bool:
    """Atomically mark key as seen. True on first claim, False if already set."""
    redis = await get_redis()
    claimed = await redis.set(key, "1", nx=True, ex=ttl_seconds)
    return bool(claimed)


async def release(key: str) -> None:
    """Drop a claim so a failed handler can be retried on redelivery."""
    redis = await get_redis()
    await redis.delete(key)
