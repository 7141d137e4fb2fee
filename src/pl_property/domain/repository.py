"""Repository Protocol — dependency inversion for testability.

Unit tests inject a mock that conforms to this Protocol.
Infrastructure layer provides the real implementation.
"""

import uuid
from typing import Any, Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.pl_property.domain.models import NewProperty, Property


class PropertyRepositoryProtocol(Protocol):
    async def find(
        self,
        db: AsyncSession,
        predicate: dict[str, Any],
        sort: dict[str, int],
        skip: int,
        limit: int,
    ) -> list[Property]: ...

    async def count(self, db: AsyncSession, predicate: dict[str, Any]) -> int: ...

    async def get_by_id(self, db: AsyncSession, property_id: uuid.UUID) -> Property | None: ...

    async def create(
        self, db: AsyncSession, owner_id: uuid.UUID, data: NewProperty
    ) -> Property: ...

    async def create_many(
        self, db: AsyncSession, owner_id: uuid.UUID, rows: list[NewProperty]
    ) -> int: ...

    async def update(
        self, db: AsyncSession, property_id: uuid.UUID, changes: dict[str, Any]
    ) -> Property | None: ...

    async def delete(self, db: AsyncSession, property_id: uuid.UUID) -> bool: ...
