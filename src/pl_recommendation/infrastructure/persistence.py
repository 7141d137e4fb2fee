"""RecommendationRepository — concrete implementation of RecommendationRepositoryProtocol.

List reads populate the property (with its owner) and the counterpart user:
the sender for the received box, the recipient for the sent box.
"""

import uuid
from typing import Any

from sqlalchemy import delete, func, insert, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import joinedload

from src.pl_common.datetime_utils import utc_now
from src.pl_common.enums import RecommendationBox
from src.pl_property.domain.models import UserSummary
from src.pl_property.infrastructure.db_models import PropertyORM
from src.pl_property.infrastructure.persistence import orm_to_property, property_exists
from src.pl_recommendation.domain.models import Recommendation
from src.pl_recommendation.infrastructure.db_models import RecommendationORM

_COLUMNS = (
    RecommendationORM.id,
    RecommendationORM.sender_id,
    RecommendationORM.recipient_id,
    RecommendationORM.property_id,
    RecommendationORM.message,
    RecommendationORM.is_read,
    RecommendationORM.created_at,
    RecommendationORM.updated_at,
)


def _row_to_recommendation(row: Any) -> Recommendation:
    return Recommendation(
        id=row.id,
        sender_id=row.sender_id,
        recipient_id=row.recipient_id,
        property_id=row.property_id,
        message=row.message,
        is_read=row.is_read,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


def _summary(user: Any) -> UserSummary:
    return UserSummary(id=user.id, name=user.name, email=user.email)


def _owner_column(box: RecommendationBox) -> Any:
    if box is RecommendationBox.RECEIVED:
        return RecommendationORM.recipient_id
    return RecommendationORM.sender_id


class RecommendationRepository:
    async def property_exists(self, db: AsyncSession, property_id: uuid.UUID) -> bool:
        return await property_exists(db, property_id)

    async def create(
        self,
        db: AsyncSession,
        sender_id: uuid.UUID,
        recipient_id: uuid.UUID,
        property_id: uuid.UUID,
        message: str | None,
    ) -> Recommendation:
        now = utc_now()
        stmt = (
            insert(RecommendationORM)
            .values(
                id=uuid.uuid4(),
                sender_id=sender_id,
                recipient_id=recipient_id,
                property_id=property_id,
                message=message,
                is_read=False,
                created_at=now,
                updated_at=now,
            )
            .returning(*_COLUMNS)
        )
        result = await db.execute(stmt)
        return _row_to_recommendation(result.one())

    async def list_for_user(
        self,
        db: AsyncSession,
        user_id: uuid.UUID,
        box: RecommendationBox,
        skip: int,
        limit: int,
    ) -> list[Recommendation]:
        counterpart = (
            RecommendationORM.sender
            if box is RecommendationBox.RECEIVED
            else RecommendationORM.recipient
        )
        stmt = (
            select(RecommendationORM)
            .options(
                joinedload(RecommendationORM.property).joinedload(PropertyORM.owner),
                joinedload(counterpart),
            )
            .where(_owner_column(box) == user_id)
            .order_by(RecommendationORM.created_at.desc(), RecommendationORM.id.desc())
            .offset(skip)
            .limit(limit)
        )
        result = await db.execute(stmt)
        items: list[Recommendation] = []
        for orm in result.scalars().all():
            rec = _row_to_recommendation(orm)
            rec.property = orm_to_property(orm.property)
            if box is RecommendationBox.RECEIVED:
                rec.sender = _summary(orm.sender)
            else:
                rec.recipient = _summary(orm.recipient)
            items.append(rec)
        return items

    async def count_for_user(
        self, db: AsyncSession, user_id: uuid.UUID, box: RecommendationBox
    ) -> int:
        result = await db.execute(
            select(func.count())
            .select_from(RecommendationORM)
            .where(_owner_column(box) == user_id)
        )
        return int(result.scalar_one())

    async def mark_read(
        self, db: AsyncSession, recommendation_id: uuid.UUID, recipient_id: uuid.UUID
    ) -> Recommendation | None:
        stmt = (
            update(RecommendationORM)
            .where(
                RecommendationORM.id == recommendation_id,
                RecommendationORM.recipient_id == recipient_id,
            )
            .values(is_read=True, updated_at=utc_now())
            .returning(*_COLUMNS)
        )
        row = (await db.execute(stmt)).first()
        return _row_to_recommendation(row) if row else None

    async def delete_for_participant(
        self, db: AsyncSession, recommendation_id: uuid.UUID, user_id: uuid.UUID
    ) -> Recommendation | None:
        stmt = (
            delete(RecommendationORM)
            .where(
                RecommendationORM.id == recommendation_id,
                or_(
                    RecommendationORM.sender_id == user_id,
                    RecommendationORM.recipient_id == user_id,
                ),
            )
            .returning(*_COLUMNS)
        )
        row = (await db.execute(stmt)).first()
        return _row_to_recommendation(row) if row else None
