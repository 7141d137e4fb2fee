"""PropertyApplicationService — listing reads through the cache, owner-gated writes.

Writes commit before the cache is invalidated, so a concurrent read can never
re-cache a result built from an uncommitted state, and a failed write leaves
the cache untouched.
"""

import uuid
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from src.pl_cache.facade import CacheFacade
from src.pl_cache.invalidator import WritePathInvalidator
from src.pl_cache.read_through import ReadThroughAccessor
from src.pl_common.errors import PropertyNotFoundError, PropertyOwnershipError
from src.pl_property.application.schemas import (
    PropertyCreateRequest,
    PropertyOut,
    PropertySearchParams,
    PropertyUpdateRequest,
)
from src.pl_property.domain.models import Property
from src.pl_property.domain.query_builder import build_property_query
from src.pl_property.domain.repository import PropertyRepositoryProtocol
from src.pl_property.infrastructure.persistence import PropertyRepository


class PropertyApplicationService:
    def __init__(
        self,
        cache: CacheFacade,
        repo: PropertyRepositoryProtocol | None = None,
    ) -> None:
        self._repo: PropertyRepositoryProtocol = repo or PropertyRepository()
        self._reader = ReadThroughAccessor(cache)
        self._invalidator = WritePathInvalidator(cache)

    async def list_properties(
        self, db: AsyncSession, params: PropertySearchParams
    ) -> dict[str, Any]:
        query = build_property_query(params.to_filters())

        async def load_items() -> list[dict[str, Any]]:
            found = await self._repo.find(db, query.predicate, query.sort, query.skip, query.limit)
            return [PropertyOut.from_domain(p).model_dump() for p in found]

        async def count_items() -> int:
            return await self._repo.count(db, query.predicate)

        return await self._reader.fetch_page(
            query.cache_key, query.page, query.limit, load_items, count_items
        )

    async def get_property(self, db: AsyncSession, property_id: uuid.UUID) -> PropertyOut:
        prop = await self._repo.get_by_id(db, property_id)
        if prop is None:
            raise PropertyNotFoundError(str(property_id))
        return PropertyOut.from_domain(prop)

    async def create_property(
        self, db: AsyncSession, owner_id: uuid.UUID, req: PropertyCreateRequest
    ) -> PropertyOut:
        prop = await self._repo.create(db, owner_id, req.to_domain())
        await db.commit()
        await self._invalidator.property_created()
        return PropertyOut.from_domain(prop)

    async def update_property(
        self,
        db: AsyncSession,
        property_id: uuid.UUID,
        actor_id: uuid.UUID,
        req: PropertyUpdateRequest,
    ) -> PropertyOut:
        existing = await self._require_owned(db, property_id, actor_id)
        changes = req.changes()
        if not changes:
            return PropertyOut.from_domain(existing)

        updated = await self._repo.update(db, property_id, changes)
        if updated is None:
            raise PropertyNotFoundError(str(property_id))
        await db.commit()
        await self._invalidator.property_changed()
        return PropertyOut.from_domain(updated)

    async def delete_property(
        self, db: AsyncSession, property_id: uuid.UUID, actor_id: uuid.UUID
    ) -> None:
        await self._require_owned(db, property_id, actor_id)
        if not await self._repo.delete(db, property_id):
            raise PropertyNotFoundError(str(property_id))
        await db.commit()
        await self._invalidator.property_changed()

    async def _require_owned(
        self, db: AsyncSession, property_id: uuid.UUID, actor_id: uuid.UUID
    ) -> Property:
        prop = await self._repo.get_by_id(db, property_id)
        if prop is None:
            raise PropertyNotFoundError(str(property_id))
        if prop.created_by != actor_id:
            raise PropertyOwnershipError(str(property_id))
        return prop
