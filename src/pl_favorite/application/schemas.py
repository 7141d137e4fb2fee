"""Pydantic schemas for pl_favorite responses."""

from pydantic import BaseModel

from src.pl_common.datetime_utils import iso_or_none
from src.pl_favorite.domain.models import Favorite
from src.pl_property.application.schemas import PropertyOut


class FavoriteOut(BaseModel):
    id: str
    user_id: str
    property_id: str
    property: PropertyOut | None = None
    created_at: str | None

    @classmethod
    def from_domain(cls, f: Favorite) -> "FavoriteOut":
        return cls(
            id=str(f.id),
            user_id=str(f.user_id),
            property_id=str(f.property_id),
            property=PropertyOut.from_domain(f.property) if f.property else None,
            created_at=iso_or_none(f.created_at),
        )


class FavoriteCheckResponse(BaseModel):
    property_id: str
    is_favorite: bool
