"""Repository Protocol for pl_favorite."""

import uuid
from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.pl_favorite.domain.models import Favorite


class FavoriteRepositoryProtocol(Protocol):
    async def property_exists(self, db: AsyncSession, property_id: uuid.UUID) -> bool: ...

    async def add(
        self, db: AsyncSession, user_id: uuid.UUID, property_id: uuid.UUID
    ) -> Favorite | None:
        """Insert the pair; None when it already exists."""
        ...

    async def remove(
        self, db: AsyncSession, user_id: uuid.UUID, property_id: uuid.UUID
    ) -> bool: ...

    async def exists(
        self, db: AsyncSession, user_id: uuid.UUID, property_id: uuid.UUID
    ) -> bool: ...

    async def list_for_user(
        self, db: AsyncSession, user_id: uuid.UUID, skip: int, limit: int
    ) -> list[Favorite]: ...

    async def count_for_user(self, db: AsyncSession, user_id: uuid.UUID) -> int: ...
