"""Unit tests for ReadThroughAccessor."""

import json
from unittest.mock import AsyncMock

import pytest

from src.pl_cache.facade import CacheFacade
from src.pl_cache.read_through import ReadThroughAccessor
from tests.factories import InMemoryRedis

KEY = 'properties:{}:{"createdAt":-1}:1:10'


def _loaders(items: list[dict], total: int) -> tuple[AsyncMock, AsyncMock]:
    return AsyncMock(return_value=items), AsyncMock(return_value=total)


async def test_miss_loads_once_and_populates_with_ttl(
    cache: CacheFacade, fake_redis: InMemoryRedis
) -> None:
    load_items, count_items = _loaders([{"id": "p1"}], 21)

    page = await ReadThroughAccessor(cache).fetch_page(KEY, 1, 10, load_items, count_items)

    assert page == {"items": [{"id": "p1"}], "pagination": {"total": 21, "page": 1, "pages": 3}}
    load_items.assert_awaited_once()
    count_items.assert_awaited_once()
    assert json.loads(fake_redis.store[KEY]) == page
    assert fake_redis.ttls[KEY] == 300


async def test_hit_never_touches_the_store(cache: CacheFacade) -> None:
    reader = ReadThroughAccessor(cache)
    await reader.fetch_page(KEY, 1, 10, *_loaders([{"id": "p1"}], 1))

    load_items, count_items = _loaders([{"id": "other"}], 99)
    page = await reader.fetch_page(KEY, 1, 10, load_items, count_items)

    assert page["items"] == [{"id": "p1"}]
    load_items.assert_not_awaited()
    count_items.assert_not_awaited()


async def test_empty_result_is_cached_too(cache: CacheFacade, fake_redis: InMemoryRedis) -> None:
    page = await ReadThroughAccessor(cache).fetch_page(KEY, 1, 10, *_loaders([], 0))
    assert page == {"items": [], "pagination": {"total": 0, "page": 1, "pages": 0}}
    assert KEY in fake_redis.store


async def test_cache_outage_falls_back_to_store(
    cache: CacheFacade, fake_redis: InMemoryRedis
) -> None:
    fake_redis.down = True
    load_items, count_items = _loaders([{"id": "p1"}], 1)

    page = await ReadThroughAccessor(cache).fetch_page(KEY, 1, 10, load_items, count_items)

    assert page["items"] == [{"id": "p1"}]
    load_items.assert_awaited_once()


async def test_undecodable_entry_is_treated_as_miss(
    cache: CacheFacade, fake_redis: InMemoryRedis
) -> None:
    fake_redis.store[KEY] = "{not json"
    load_items, count_items = _loaders([{"id": "p1"}], 1)

    page = await ReadThroughAccessor(cache).fetch_page(KEY, 1, 10, load_items, count_items)

    assert page["pagination"]["total"] == 1
    assert json.loads(fake_redis.store[KEY]) == page


async def test_custom_ttl(cache: CacheFacade, fake_redis: InMemoryRedis) -> None:
    await ReadThroughAccessor(cache, ttl_seconds=30).fetch_page(KEY, 1, 10, *_loaders([], 0))
    assert fake_redis.ttls[KEY] == 30


@pytest.mark.parametrize("stored", ["[]", "123", '"page"', "null"])
async def test_non_object_entry_is_treated_as_miss(
    cache: CacheFacade, fake_redis: InMemoryRedis, stored: str
) -> None:
    fake_redis.store[KEY] = stored
    load_items, count_items = _loaders([{"id": "p1"}], 1)

    page = await ReadThroughAccessor(cache).fetch_page(KEY, 1, 10, load_items, count_items)

    assert page["items"] == [{"id": "p1"}]
    load_items.assert_awaited_once()
    assert json.loads(fake_redis.store[KEY]) == page
