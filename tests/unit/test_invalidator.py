"""Unit tests for write-path cache invalidation."""

import uuid
from unittest.mock import AsyncMock

from src.pl_cache.facade import CacheFacade
from src.pl_cache.invalidator import (
    WritePathInvalidator,
    favorite_write_patterns,
    property_write_patterns,
    recommendation_write_patterns,
)
from src.pl_common.errors import CacheUnavailableError
from tests.factories import InMemoryRedis

ALICE = uuid.uuid4()
BOB = uuid.uuid4()


class TestPatterns:
    def test_property_create_clears_listings_only(self) -> None:
        assert property_write_patterns(created=True) == ["properties:*"]

    def test_property_change_clears_embedding_listings(self) -> None:
        assert property_write_patterns(created=False) == [
            "properties:*", "favorites:*", "recommendations:*",
        ]

    def test_favorite_patterns_are_per_user(self) -> None:
        assert favorite_write_patterns(ALICE) == [f"favorites:{ALICE}:*"]

    def test_recommendation_clears_both_participants(self) -> None:
        assert recommendation_write_patterns(ALICE, BOB) == [
            f"recommendations:{BOB}:*",
            f"recommendations:{ALICE}:*",
        ]

    def test_recommendation_patterns_deduplicated(self) -> None:
        assert recommendation_write_patterns(ALICE, str(ALICE)) == [f"recommendations:{ALICE}:*"]


class TestWritePathInvalidator:
    async def test_property_created_keeps_favorites(
        self, cache: CacheFacade, fake_redis: InMemoryRedis
    ) -> None:
        fake_redis.store.update({
            "properties:{}:{}:1:10": "x",
            f"favorites:{ALICE}:1:10": "y",
        })
        await WritePathInvalidator(cache).property_created()
        assert list(fake_redis.store) == [f"favorites:{ALICE}:1:10"]

    async def test_favorite_changed_leaves_other_users(
        self, cache: CacheFacade, fake_redis: InMemoryRedis
    ) -> None:
        fake_redis.store.update({
            f"favorites:{ALICE}:1:10": "a",
            f"favorites:{ALICE}:2:10": "a",
            f"favorites:{BOB}:1:10": "b",
        })
        await WritePathInvalidator(cache).favorite_changed(ALICE)
        assert list(fake_redis.store) == [f"favorites:{BOB}:1:10"]

    async def test_recommendation_changed_clears_sender_sent_pages(
        self, cache: CacheFacade, fake_redis: InMemoryRedis
    ) -> None:
        fake_redis.store.update({
            f"recommendations:{ALICE}:sent:1:10": "a",
            f"recommendations:{BOB}:received:1:10": "b",
        })
        await WritePathInvalidator(cache).recommendation_changed(ALICE, BOB)
        assert fake_redis.store == {}

    async def test_failures_are_swallowed_and_remaining_patterns_tried(self) -> None:
        cache = AsyncMock(spec=CacheFacade)
        cache.delete_pattern.side_effect = [CacheUnavailableError("delete_pattern", "down"), 0, 0]

        await WritePathInvalidator(cache).property_changed()

        assert cache.delete_pattern.await_count == 3
