"""PropertyRepository — concrete implementation of PropertyRepositoryProtocol.

Translates the query builder's predicate/sort vocabulary into SQLAlchemy
Core expressions over the properties table. The owner is always populated
with a joined eager load.
"""

import uuid
from typing import Any

from sqlalchemy import ColumnElement, delete, func, insert, or_, select
from sqlalchemy import exists as sql_exists
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import InstrumentedAttribute, joinedload

from src.pl_common.datetime_utils import utc_now
from src.pl_common.errors import InternalError
from src.pl_property.domain.models import NewProperty, Property, UserSummary
from src.pl_property.infrastructure.db_models import PropertyORM

# ---------------------------------------------------------------------------
# Predicate translation
# ---------------------------------------------------------------------------

_FIELD_COLUMNS: dict[str, InstrumentedAttribute[Any]] = {
    "title": PropertyORM.title,
    "price": PropertyORM.price,
    "propertyType": PropertyORM.property_type,
    "bedrooms": PropertyORM.bedrooms,
    "bathrooms": PropertyORM.bathrooms,
    "area": PropertyORM.area,
    "location": PropertyORM.location,
    "createdAt": PropertyORM.created_at,
    "updatedAt": PropertyORM.updated_at,
}

_TEXT_COLUMNS = (PropertyORM.title, PropertyORM.description, PropertyORM.location)


def _contains_pattern(value: str) -> str:
    escaped = value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


def _column(field: str) -> InstrumentedAttribute[Any]:
    try:
        return _FIELD_COLUMNS[field]
    except KeyError:
        raise ValueError(f"Unsupported property field: {field}") from None


def _text_clause(search: str) -> ColumnElement[bool]:
    # Any term may match any of the indexed text columns
    terms = search.split()
    return or_(
        *(
            col.ilike(_contains_pattern(term), escape="\\")
            for term in terms
            for col in _TEXT_COLUMNS
        )
    )


def predicate_to_clauses(predicate: dict[str, Any]) -> list[ColumnElement[bool]]:
    clauses: list[ColumnElement[bool]] = []
    for field, condition in predicate.items():
        if field == "$text":
            clauses.append(_text_clause(condition["$search"]))
            continue
        column = _column(field)
        if not isinstance(condition, dict):
            clauses.append(column == condition)
            continue
        for op, value in condition.items():
            if op == "$gte":
                clauses.append(column >= value)
            elif op == "$lte":
                clauses.append(column <= value)
            elif op == "$icontains":
                clauses.append(column.ilike(_contains_pattern(value), escape="\\"))
            else:
                raise ValueError(f"Unsupported operator {op} on {field}")
    return clauses


def sort_to_order_by(sort: dict[str, int]) -> list[Any]:
    order_by = [
        _column(field).desc() if direction < 0 else _column(field).asc()
        for field, direction in sort.items()
    ]
    # Tie-breaker keeps offset pages stable
    order_by.append(PropertyORM.id.desc())
    return order_by


# ---------------------------------------------------------------------------
# Row mapper
# ---------------------------------------------------------------------------

def orm_to_property(orm: PropertyORM, with_owner: bool = True) -> Property:
    owner = None
    if with_owner and orm.owner is not None:
        owner = UserSummary(id=orm.owner.id, name=orm.owner.name, email=orm.owner.email)
    return Property(
        id=orm.id,
        title=orm.title,
        description=orm.description,
        price=orm.price,
        location=orm.location,
        property_type=orm.property_type,
        bedrooms=orm.bedrooms,
        bathrooms=orm.bathrooms,
        area=orm.area,
        amenities=list(orm.amenities or []),
        images=list(orm.images or []),
        created_by=orm.created_by,
        created_at=orm.created_at,
        updated_at=orm.updated_at,
        owner=owner,
    )


def _insert_values(owner_id: uuid.UUID, data: NewProperty) -> dict[str, Any]:
    now = utc_now()
    return {
        "id": uuid.uuid4(),
        "title": data.title,
        "description": data.description,
        "price": data.price,
        "location": data.location,
        "property_type": data.property_type,
        "bedrooms": data.bedrooms,
        "bathrooms": data.bathrooms,
        "area": data.area,
        "amenities": list(data.amenities),
        "images": list(data.images),
        "created_by": owner_id,
        "created_at": now,
        "updated_at": now,
    }


# ---------------------------------------------------------------------------
# Repository
# ---------------------------------------------------------------------------

_UPDATABLE = frozenset({
    "title", "description", "price", "location", "property_type",
    "bedrooms", "bathrooms", "area", "amenities", "images",
})


class PropertyRepository:
    """Writes flush only; the service commits."""

    async def find(
        self,
        db: AsyncSession,
        predicate: dict[str, Any],
        sort: dict[str, int],
        skip: int,
        limit: int,
    ) -> list[Property]:
        stmt = (
            select(PropertyORM)
            .options(joinedload(PropertyORM.owner))
            .where(*predicate_to_clauses(predicate))
            .order_by(*sort_to_order_by(sort))
            .offset(skip)
            .limit(limit)
        )
        result = await db.execute(stmt)
        return [orm_to_property(orm) for orm in result.scalars().all()]

    async def count(self, db: AsyncSession, predicate: dict[str, Any]) -> int:
        stmt = (
            select(func.count())
            .select_from(PropertyORM)
            .where(*predicate_to_clauses(predicate))
        )
        result = await db.execute(stmt)
        return int(result.scalar_one())

    async def get_by_id(self, db: AsyncSession, property_id: uuid.UUID) -> Property | None:
        stmt = (
            select(PropertyORM)
            .options(joinedload(PropertyORM.owner))
            .where(PropertyORM.id == property_id)
            .execution_options(populate_existing=True)
        )
        result = await db.execute(stmt)
        orm = result.scalar_one_or_none()
        return orm_to_property(orm) if orm else None

    async def create(
        self, db: AsyncSession, owner_id: uuid.UUID, data: NewProperty
    ) -> Property:
        values = _insert_values(owner_id, data)
        await db.execute(insert(PropertyORM).values(**values))
        created = await self.get_by_id(db, values["id"])
        if created is None:
            raise InternalError("Inserted property could not be read back")
        return created

    async def create_many(
        self, db: AsyncSession, owner_id: uuid.UUID, rows: list[NewProperty]
    ) -> int:
        if not rows:
            return 0
        await db.execute(insert(PropertyORM), [_insert_values(owner_id, r) for r in rows])
        return len(rows)

    async def update(
        self, db: AsyncSession, property_id: uuid.UUID, changes: dict[str, Any]
    ) -> Property | None:
        unknown = set(changes) - _UPDATABLE
        if unknown:
            raise ValueError(f"Fields not updatable: {sorted(unknown)}")
        orm = await db.get(PropertyORM, property_id)
        if orm is None:
            return None
        for name, value in changes.items():
            setattr(orm, name, value)
        orm.updated_at = utc_now()
        await db.flush()
        return await self.get_by_id(db, property_id)

    async def delete(self, db: AsyncSession, property_id: uuid.UUID) -> bool:
        result = await db.execute(
            delete(PropertyORM).where(PropertyORM.id == property_id).returning(PropertyORM.id)
        )
        return result.scalar_one_or_none() is not None


async def property_exists(db: AsyncSession, property_id: uuid.UUID) -> bool:
    """Existence probe used by favorites and recommendations before inserting."""
    result = await db.execute(select(sql_exists().where(PropertyORM.id == property_id)))
    return bool(result.scalar())
