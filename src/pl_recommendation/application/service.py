"""RecommendationApplicationService — peer-to-peer property recommendations.

Every successful write invalidates the cached pages of both participants:
the recipient's received box and the sender's sent box.
"""

import uuid
from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.pl_cache.facade import CacheFacade
from src.pl_cache.invalidator import WritePathInvalidator
from src.pl_cache.keys import recommendations_key
from src.pl_cache.read_through import ReadThroughAccessor
from src.pl_common.enums import RecommendationBox
from src.pl_common.errors import (
    PropertyNotFoundError,
    RecommendationNotFoundError,
    SelfRecommendationError,
    UserNotFoundError,
)
from src.pl_common.pagination import offset_for
from src.pl_gateway.user.service import UserService
from src.pl_recommendation.application.schemas import RecommendationOut, RecommendRequest
from src.pl_recommendation.domain.repository import RecommendationRepositoryProtocol
from src.pl_recommendation.infrastructure.persistence import RecommendationRepository


class RecommendationApplicationService:
    def __init__(
        self,
        cache: CacheFacade,
        repo: RecommendationRepositoryProtocol | None = None,
        users: UserService | None = None,
    ) -> None:
        self._repo: RecommendationRepositoryProtocol = repo or RecommendationRepository()
        self._users = users or UserService()
        self._reader = ReadThroughAccessor(cache)
        self._invalidator = WritePathInvalidator(cache)

    async def recommend(
        self, db: AsyncSession, sender_id: uuid.UUID, req: RecommendRequest
    ) -> RecommendationOut:
        if not await self._repo.property_exists(db, req.property_id):
            raise PropertyNotFoundError(str(req.property_id))

        recipient = await self._users.find_by_email(req.recipient_email, db)
        if recipient is None:
            raise UserNotFoundError(req.recipient_email)
        if recipient.id == sender_id:
            raise SelfRecommendationError()

        try:
            rec = await self._repo.create(db, sender_id, recipient.id, req.property_id, req.message)
        except IntegrityError:
            # Property deleted between the existence check and the insert
            await db.rollback()
            raise PropertyNotFoundError(str(req.property_id)) from None
        await db.commit()
        await self._invalidator.recommendation_changed(rec.sender_id, rec.recipient_id)
        return RecommendationOut.from_domain(rec)

    async def list_recommendations(
        self,
        db: AsyncSession,
        user_id: uuid.UUID,
        box: RecommendationBox,
        page: int,
        limit: int,
    ) -> dict[str, Any]:
        async def load_items() -> list[dict[str, Any]]:
            found = await self._repo.list_for_user(
                db, user_id, box, offset_for(page, limit), limit
            )
            return [RecommendationOut.from_domain(r).model_dump() for r in found]

        async def count_items() -> int:
            return await self._repo.count_for_user(db, user_id, box)

        return await self._reader.fetch_page(
            recommendations_key(user_id, box, page, limit), page, limit, load_items, count_items
        )

    async def mark_read(
        self, db: AsyncSession, recommendation_id: uuid.UUID, user_id: uuid.UUID
    ) -> RecommendationOut:
        rec = await self._repo.mark_read(db, recommendation_id, user_id)
        if rec is None:
            raise RecommendationNotFoundError(str(recommendation_id))
        await db.commit()
        await self._invalidator.recommendation_changed(rec.sender_id, rec.recipient_id)
        return RecommendationOut.from_domain(rec)

    async def delete(
        self, db: AsyncSession, recommendation_id: uuid.UUID, user_id: uuid.UUID
    ) -> None:
        rec = await self._repo.delete_for_participant(db, recommendation_id, user_id)
        if rec is None:
            raise RecommendationNotFoundError(str(recommendation_id))
        await db.commit()
        await self._invalidator.recommendation_changed(rec.sender_id, rec.recipient_id)
