"""Repository Protocol for pl_recommendation."""

import uuid
from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.pl_common.enums import RecommendationBox
from src.pl_recommendation.domain.models import Recommendation


class RecommendationRepositoryProtocol(Protocol):
    async def property_exists(self, db: AsyncSession, property_id: uuid.UUID) -> bool: ...

    async def create(
        self,
        db: AsyncSession,
        sender_id: uuid.UUID,
        recipient_id: uuid.UUID,
        property_id: uuid.UUID,
        message: str | None,
    ) -> Recommendation: ...

    async def list_for_user(
        self,
        db: AsyncSession,
        user_id: uuid.UUID,
        box: RecommendationBox,
        skip: int,
        limit: int,
    ) -> list[Recommendation]: ...

    async def count_for_user(
        self, db: AsyncSession, user_id: uuid.UUID, box: RecommendationBox
    ) -> int: ...

    async def mark_read(
        self, db: AsyncSession, recommendation_id: uuid.UUID, recipient_id: uuid.UUID
    ) -> Recommendation | None:
        """Set is_read on a recommendation addressed to recipient_id."""
        ...

    async def delete_for_participant(
        self, db: AsyncSession, recommendation_id: uuid.UUID, user_id: uuid.UUID
    ) -> Recommendation | None:
        """Delete if user_id is the sender or the recipient; returns the deleted row."""
        ...
