"""ReadThroughAccessor — cache-aside reads for paginated listings.

    hit:  return the cached page, the store is never touched
    miss: load items + total from the store, cache the page for the TTL

Cache failures degrade to direct-store reads; they are logged, never raised.
"""

import json
import logging
from collections.abc import Awaitable, Callable
from typing import Any

from config.settings import settings
from src.pl_cache.facade import CacheFacade
from src.pl_common.errors import CacheUnavailableError
from src.pl_common.pagination import PageResponse, Pagination, page_count

logger = logging.getLogger(__name__)

ItemsLoader = Callable[[], Awaitable[list[dict[str, Any]]]]
CountLoader = Callable[[], Awaitable[int]]


class ReadThroughAccessor:
    def __init__(self, cache: CacheFacade, ttl_seconds: int | None = None) -> None:
        self._cache = cache
        self._ttl = ttl_seconds if ttl_seconds is not None else settings.CACHE_TTL_SECONDS

    async def fetch_page(
        self,
        key: str,
        page: int,
        limit: int,
        load_items: ItemsLoader,
        count_items: CountLoader,
    ) -> dict[str, Any]:
        cached = await self._read(key)
        if cached is not None:
            return cached

        items = await load_items()
        total = await count_items()
        envelope = PageResponse(
            items=items,
            pagination=Pagination(total=total, page=page, pages=page_count(total, limit)),
        ).model_dump(mode="json")

        await self._write(key, envelope)
        return envelope

    async def _read(self, key: str) -> dict[str, Any] | None:
        try:
            raw = await self._cache.get(key)
        except CacheUnavailableError as e:
            logger.warning("Cache read skipped, falling back to store: key=%s err=%s", key, e)
            return None
        if raw is None:
            return None
        try:
            decoded = json.loads(raw)
        except ValueError:
            decoded = None
        if not isinstance(decoded, dict):
            logger.warning("Discarding undecodable cache entry: key=%s", key)
            return None
        return decoded

    async def _write(self, key: str, envelope: dict[str, Any]) -> None:
        try:
            await self._cache.set(key, json.dumps(envelope), self._ttl)
        except CacheUnavailableError as e:
            logger.warning("Cache populate skipped: key=%s err=%s", key, e)
