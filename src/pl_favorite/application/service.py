"""FavoriteApplicationService — per-user favorites with a cached list view."""

import uuid
from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.pl_cache.facade import CacheFacade
from src.pl_cache.invalidator import WritePathInvalidator
from src.pl_cache.keys import favorites_key
from src.pl_cache.read_through import ReadThroughAccessor
from src.pl_common.errors import (
    FavoriteExistsError,
    FavoriteNotFoundError,
    PropertyNotFoundError,
)
from src.pl_common.pagination import offset_for
from src.pl_favorite.application.schemas import FavoriteCheckResponse, FavoriteOut
from src.pl_favorite.domain.repository import FavoriteRepositoryProtocol
from src.pl_favorite.infrastructure.persistence import FavoriteRepository


class FavoriteApplicationService:
    def __init__(
        self,
        cache: CacheFacade,
        repo: FavoriteRepositoryProtocol | None = None,
    ) -> None:
        self._repo: FavoriteRepositoryProtocol = repo or FavoriteRepository()
        self._reader = ReadThroughAccessor(cache)
        self._invalidator = WritePathInvalidator(cache)

    async def add_favorite(
        self, db: AsyncSession, user_id: uuid.UUID, property_id: uuid.UUID
    ) -> FavoriteOut:
        if not await self._repo.property_exists(db, property_id):
            raise PropertyNotFoundError(str(property_id))
        try:
            favorite = await self._repo.add(db, user_id, property_id)
        except IntegrityError:
            # Property deleted between the existence check and the insert
            await db.rollback()
            raise PropertyNotFoundError(str(property_id)) from None
        if favorite is None:
            raise FavoriteExistsError(str(property_id))
        await db.commit()
        await self._invalidator.favorite_changed(user_id)
        return FavoriteOut.from_domain(favorite)

    async def list_favorites(
        self, db: AsyncSession, user_id: uuid.UUID, page: int, limit: int
    ) -> dict[str, Any]:
        async def load_items() -> list[dict[str, Any]]:
            found = await self._repo.list_for_user(db, user_id, offset_for(page, limit), limit)
            return [FavoriteOut.from_domain(f).model_dump() for f in found]

        async def count_items() -> int:
            return await self._repo.count_for_user(db, user_id)

        return await self._reader.fetch_page(
            favorites_key(user_id, page, limit), page, limit, load_items, count_items
        )

    async def remove_favorite(
        self, db: AsyncSession, user_id: uuid.UUID, property_id: uuid.UUID
    ) -> None:
        if not await self._repo.remove(db, user_id, property_id):
            raise FavoriteNotFoundError(str(property_id))
        await db.commit()
        await self._invalidator.favorite_changed(user_id)

    async def check_favorite(
        self, db: AsyncSession, user_id: uuid.UUID, property_id: uuid.UUID
    ) -> FavoriteCheckResponse:
        found = await self._repo.exists(db, user_id, property_id)
        return FavoriteCheckResponse(property_id=str(property_id), is_favorite=found)
