"""Pydantic schemas for pl_property requests and responses.

PropertySearchParams is bound as a query-parameter model on GET /properties
and converted into the query builder's PropertyFilters.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from src.pl_common.datetime_utils import iso_or_none
from src.pl_common.enums import PropertySortField, PropertyType, SortOrder
from src.pl_property.domain.models import NewProperty, Property, UserSummary
from src.pl_property.domain.query_builder import (
    DEFAULT_LIMIT,
    DEFAULT_PAGE,
    PropertyFilters,
)

MAX_PAGE_SIZE = 100


def _strip_required(v: str) -> str:
    v = v.strip()
    if not v:
        raise ValueError("must not be empty")
    return v


def _clean_list(values: list[str]) -> list[str]:
    return [v.strip() for v in values if v and v.strip()]


# ---------------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------------


class PropertyCreateRequest(BaseModel):
    title: str = Field(..., max_length=200)
    description: str
    price: float = Field(..., ge=0)
    location: str = Field(..., max_length=255)
    property_type: PropertyType
    bedrooms: int = Field(..., ge=0)
    bathrooms: int = Field(..., ge=0)
    area: float = Field(..., ge=0)
    amenities: list[str] = Field(default_factory=list)
    images: list[str] = Field(default_factory=list)

    @field_validator("title", "description", "location")
    @classmethod
    def not_blank(cls, v: str) -> str:
        return _strip_required(v)

    @field_validator("amenities", "images")
    @classmethod
    def drop_blank_entries(cls, v: list[str]) -> list[str]:
        return _clean_list(v)

    def to_domain(self) -> NewProperty:
        return NewProperty(
            title=self.title,
            description=self.description,
            price=self.price,
            location=self.location,
            property_type=self.property_type.value,
            bedrooms=self.bedrooms,
            bathrooms=self.bathrooms,
            area=self.area,
            amenities=self.amenities,
            images=self.images,
        )


class PropertyUpdateRequest(BaseModel):
    """Partial update: only fields present in the body are changed."""

    title: str | None = Field(None, max_length=200)
    description: str | None = None
    price: float | None = Field(None, ge=0)
    location: str | None = Field(None, max_length=255)
    property_type: PropertyType | None = None
    bedrooms: int | None = Field(None, ge=0)
    bathrooms: int | None = Field(None, ge=0)
    area: float | None = Field(None, ge=0)
    amenities: list[str] | None = None
    images: list[str] | None = None

    @field_validator("title", "description", "location")
    @classmethod
    def not_blank(cls, v: str | None) -> str | None:
        return None if v is None else _strip_required(v)

    @field_validator("amenities", "images")
    @classmethod
    def drop_blank_entries(cls, v: list[str] | None) -> list[str] | None:
        return None if v is None else _clean_list(v)

    @model_validator(mode="after")
    def no_explicit_nulls(self) -> "PropertyUpdateRequest":
        nulled = sorted(name for name in self.model_fields_set if getattr(self, name) is None)
        if nulled:
            raise ValueError(f"Fields cannot be null: {', '.join(nulled)}")
        return self

    def changes(self) -> dict[str, Any]:
        data = self.model_dump(exclude_unset=True)
        if "property_type" in data:
            data["property_type"] = PropertyType(data["property_type"]).value
        return data


class PropertySearchParams(BaseModel):
    """Accepts camelCase (minPrice, sortBy) or snake_case names; unknown ones are rejected."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="forbid")

    search: str | None = Field(None, max_length=200)
    min_price: float | None = Field(None, ge=0)
    max_price: float | None = Field(None, ge=0)
    property_type: PropertyType | None = None
    min_bedrooms: int | None = Field(None, ge=0)
    max_bedrooms: int | None = Field(None, ge=0)
    min_bathrooms: int | None = Field(None, ge=0)
    max_bathrooms: int | None = Field(None, ge=0)
    min_area: float | None = Field(None, ge=0)
    max_area: float | None = Field(None, ge=0)
    location: str | None = Field(None, max_length=255)
    sort_by: PropertySortField = PropertySortField.CREATED_AT
    sort_order: SortOrder = SortOrder.DESC
    page: int = Field(DEFAULT_PAGE, ge=1)
    limit: int = Field(DEFAULT_LIMIT, ge=1, le=MAX_PAGE_SIZE)

    @model_validator(mode="after")
    def ranges_ordered(self) -> "PropertySearchParams":
        for name in ("price", "bedrooms", "bathrooms", "area"):
            low = getattr(self, f"min_{name}")
            high = getattr(self, f"max_{name}")
            if low is not None and high is not None and low > high:
                raise ValueError(f"min_{name} must not exceed max_{name}")
        return self

    def to_filters(self) -> PropertyFilters:
        return PropertyFilters(**self.model_dump())


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------


class UserSummaryOut(BaseModel):
    id: str
    name: str
    email: str

    @classmethod
    def from_domain(cls, u: UserSummary) -> "UserSummaryOut":
        return cls(id=str(u.id), name=u.name, email=u.email)


class PropertyOut(BaseModel):
    id: str
    title: str
    description: str
    price: float
    location: str
    property_type: str
    bedrooms: int
    bathrooms: int
    area: float
    amenities: list[str]
    images: list[str]
    created_by: UserSummaryOut | str
    created_at: str | None
    updated_at: str | None

    @classmethod
    def from_domain(cls, p: Property) -> "PropertyOut":
        created_by: UserSummaryOut | str = (
            UserSummaryOut.from_domain(p.owner) if p.owner else str(p.created_by)
        )
        return cls(
            id=str(p.id),
            title=p.title,
            description=p.description,
            price=p.price,
            location=p.location,
            property_type=p.property_type,
            bedrooms=p.bedrooms,
            bathrooms=p.bathrooms,
            area=p.area,
            amenities=p.amenities,
            images=p.images,
            created_by=created_by,
            created_at=iso_or_none(p.created_at),
            updated_at=iso_or_none(p.updated_at),
        )
