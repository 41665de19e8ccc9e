"""
config/redis_client.py
Optional async Redis client, used to rate limit unauthenticated
public writes (contact form, registration).
Leaving REDIS_URL empty disables it.
"""

from typing import Optional
import redis.asyncio as aioredis

from config.settings import settings


# ── Global client (initialized on startup) ───────────────────
redis_client: Optional[aioredis.Redis] = None


async def init_redis() -> None:
    """Initialize the Redis connection pool when REDIS_URL is configured."""
    global redis_client
    if not settings.REDIS_URL:
        return
    redis_client = aioredis.from_url(
        settings.REDIS_URL,
        encoding="utf-8",
        decode_responses=True,
        max_connections=20,
    )
    # Test connection
    await redis_client.ping()


async def close_redis() -> None:
    """Close Redis connection pool."""
    global redis_client
    if redis_client:
        await redis_client.aclose()
        redis_client = None


class RateLimiter:
    """Fixed-window counter keyed per client."""

    def __init__(self, client: aioredis.Redis):
        self.client = client

    async def hit(self, key: str, limit: int, window_seconds: int = 60) -> bool:
        """
        Count one request against `key`.
        Returns True if the request is allowed, False if rate limited.
        """
        pipe = self.client.pipeline()
        pipe.incr(key)
        pipe.expire(key, window_seconds, nx=True)
        results = await pipe.execute()
        return results[0] <= limit
