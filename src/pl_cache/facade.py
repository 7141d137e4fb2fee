"""CacheFacade — thin async wrapper over a Redis client.

Exposes get / set-with-ttl / delete / delete-by-pattern. Every Redis failure
is re-raised as CacheUnavailableError so callers can decide how to degrade;
the facade itself never swallows errors.
"""

from redis.asyncio import Redis
from redis.exceptions import RedisError

from src.pl_common.errors import CacheUnavailableError

_DELETE_BATCH = 500


class CacheFacade:
    def __init__(self, redis: Redis, scan_count: int = 500) -> None:
        self._redis = redis
        self._scan_count = scan_count

    async def get(self, key: str) -> str | None:
        try:
            return await self._redis.get(key)
        except RedisError as e:
            raise CacheUnavailableError("get", str(e)) from e

    async def set(self, key: str, value: str, ttl_seconds: int) -> None:
        try:
            await self._redis.set(key, value, ex=ttl_seconds)
        except RedisError as e:
            raise CacheUnavailableError("set", str(e)) from e

    async def delete(self, key: str) -> int:
        try:
            return int(await self._redis.delete(key))
        except RedisError as e:
            raise CacheUnavailableError("delete", str(e)) from e

    async def delete_pattern(self, pattern: str) -> int:
        """Delete every key matching a glob pattern. Returns the number deleted.

        Uses SCAN rather than KEYS so a large keyspace never blocks the server.
        Keys are deleted in batches as they are discovered.
        """
        deleted = 0
        batch: list[str] = []
        try:
            async for key in self._redis.scan_iter(match=pattern, count=self._scan_count):
                batch.append(key)
                if len(batch) >= _DELETE_BATCH:
                    deleted += int(await self._redis.delete(*batch))
                    batch = []
            if batch:
                deleted += int(await self._redis.delete(*batch))
        except RedisError as e:
            raise CacheUnavailableError("delete_pattern", str(e)) from e
        return deleted

    async def ping(self) -> bool:
        try:
            return bool(await self._redis.ping())
        except RedisError:
            return False
