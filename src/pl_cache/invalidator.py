"""WritePathInvalidator — pattern-based cache invalidation after writes.

Callers invoke these only after the store write has committed. Invalidation
is intentionally coarse: any listing whose result set might have changed is
dropped, at the cost of evicting some entries that were still valid.

  property create          properties:*
  property update/delete   properties:*  favorites:*  recommendations:*
                           (favorite and recommendation pages embed the
                           property, and a delete cascades to both)
  favorite create/delete   favorites:{user}:*
  recommendation write     recommendations:{recipient}:*
                           recommendations:{sender}:*  (their "sent" pages)

A cache outage only costs staleness bounded by the TTL, so failures are
logged and swallowed.
"""

import logging
import uuid

from src.pl_cache import keys
from src.pl_cache.facade import CacheFacade
from src.pl_common.errors import CacheUnavailableError

logger = logging.getLogger(__name__)


def property_write_patterns(*, created: bool) -> list[str]:
    if created:
        return [keys.PROPERTIES_PATTERN]
    return [
        keys.PROPERTIES_PATTERN,
        keys.ALL_FAVORITES_PATTERN,
        keys.ALL_RECOMMENDATIONS_PATTERN,
    ]


def favorite_write_patterns(user_id: uuid.UUID | str) -> list[str]:
    return [keys.favorites_pattern(user_id)]


def recommendation_write_patterns(
    sender_id: uuid.UUID | str, recipient_id: uuid.UUID | str
) -> list[str]:
    patterns = [keys.recommendations_pattern(recipient_id)]
    sender_pattern = keys.recommendations_pattern(sender_id)
    if sender_pattern not in patterns:
        patterns.append(sender_pattern)
    return patterns


class WritePathInvalidator:
    def __init__(self, cache: CacheFacade) -> None:
        self._cache = cache

    async def property_created(self) -> None:
        await self._clear(property_write_patterns(created=True))

    async def property_changed(self) -> None:
        """After an update or delete of a property."""
        await self._clear(property_write_patterns(created=False))

    async def favorite_changed(self, user_id: uuid.UUID | str) -> None:
        await self._clear(favorite_write_patterns(user_id))

    async def recommendation_changed(
        self, sender_id: uuid.UUID | str, recipient_id: uuid.UUID | str
    ) -> None:
        await self._clear(recommendation_write_patterns(sender_id, recipient_id))

    async def _clear(self, patterns: list[str]) -> None:
        for pattern in patterns:
            try:
                deleted = await self._cache.delete_pattern(pattern)
            except CacheUnavailableError as e:
                logger.warning("Cache invalidation skipped: pattern=%s err=%s", pattern, e)
                continue
            logger.debug("Invalidated %d cache keys: pattern=%s", deleted, pattern)
