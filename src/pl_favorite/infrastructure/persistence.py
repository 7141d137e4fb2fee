"""FavoriteRepository — concrete implementation of FavoriteRepositoryProtocol."""

import uuid

from sqlalchemy import ColumnElement, and_, delete, func, select
from sqlalchemy import exists as sql_exists
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import joinedload

from src.pl_common.datetime_utils import utc_now
from src.pl_favorite.domain.models import Favorite
from src.pl_favorite.infrastructure.db_models import UNIQUE_USER_PROPERTY, FavoriteORM
from src.pl_property.infrastructure.db_models import PropertyORM
from src.pl_property.infrastructure.persistence import orm_to_property, property_exists


def _pair(user_id: uuid.UUID, property_id: uuid.UUID) -> ColumnElement[bool]:
    return and_(FavoriteORM.user_id == user_id, FavoriteORM.property_id == property_id)


def _orm_to_favorite(orm: FavoriteORM) -> Favorite:
    return Favorite(
        id=orm.id,
        user_id=orm.user_id,
        property_id=orm.property_id,
        created_at=orm.created_at,
        property=orm_to_property(orm.property),
    )


class FavoriteRepository:
    async def property_exists(self, db: AsyncSession, property_id: uuid.UUID) -> bool:
        return await property_exists(db, property_id)

    async def add(
        self, db: AsyncSession, user_id: uuid.UUID, property_id: uuid.UUID
    ) -> Favorite | None:
        # ON CONFLICT DO NOTHING: concurrent duplicates resolve to "no row returned"
        now = utc_now()
        stmt = (
            pg_insert(FavoriteORM)
            .values(
                id=uuid.uuid4(),
                user_id=user_id,
                property_id=property_id,
                created_at=now,
                updated_at=now,
            )
            .on_conflict_do_nothing(constraint=UNIQUE_USER_PROPERTY)
            .returning(FavoriteORM.id, FavoriteORM.created_at)
        )
        row = (await db.execute(stmt)).first()
        if row is None:
            return None
        return Favorite(
            id=row.id,
            user_id=user_id,
            property_id=property_id,
            created_at=row.created_at,
        )

    async def remove(
        self, db: AsyncSession, user_id: uuid.UUID, property_id: uuid.UUID
    ) -> bool:
        result = await db.execute(
            delete(FavoriteORM).where(_pair(user_id, property_id)).returning(FavoriteORM.id)
        )
        return result.scalar_one_or_none() is not None

    async def exists(
        self, db: AsyncSession, user_id: uuid.UUID, property_id: uuid.UUID
    ) -> bool:
        result = await db.execute(select(sql_exists().where(_pair(user_id, property_id))))
        return bool(result.scalar())

    async def list_for_user(
        self, db: AsyncSession, user_id: uuid.UUID, skip: int, limit: int
    ) -> list[Favorite]:
        stmt = (
            select(FavoriteORM)
            .options(joinedload(FavoriteORM.property).joinedload(PropertyORM.owner))
            .where(FavoriteORM.user_id == user_id)
            .order_by(FavoriteORM.created_at.desc(), FavoriteORM.id.desc())
            .offset(skip)
            .limit(limit)
        )
        result = await db.execute(stmt)
        return [_orm_to_favorite(orm) for orm in result.scalars().all()]

    async def count_for_user(self, db: AsyncSession, user_id: uuid.UUID) -> int:
        result = await db.execute(
            select(func.count()).select_from(FavoriteORM).where(FavoriteORM.user_id == user_id)
        )
        return int(result.scalar_one())
