"""Redis client factory for the listing cache.

The client is constructed once in the application lifespan and handed to the
cache facade; nothing here keeps a module-level connection.
"""

import redis.asyncio as aioredis

from config.settings import settings


def create_redis(url: str | None = None) -> aioredis.Redis:
    """Create a Redis client backed by its own connection pool."""
    return aioredis.from_url(
        url or settings.REDIS_URL,
        decode_responses=True,
        socket_timeout=settings.REDIS_SOCKET_TIMEOUT,
        socket_connect_timeout=settings.REDIS_SOCKET_TIMEOUT,
    )


async def close_redis(client: aioredis.Redis) -> None:
    """Close the client and release its pool."""
    await client.aclose()
