"""Property search query builder.

Turns PropertyFilters into a store-agnostic predicate, a sort spec and the
deterministic cache key for the resulting page. The predicate uses document
field names and a small operator vocabulary:

    {"$text": {"$search": "sea view"}}        any term in title/description/location
    {"price": {"$gte": 100000, "$lte": 300000}}   inclusive range
    {"propertyType": "Apartment"}              exact match
    {"location": {"$icontains": "miami"}}      case-insensitive substring

Keys are inserted in a fixed order, so equal filters always serialize (and
therefore cache) identically.
"""

from dataclasses import dataclass
from typing import Any

from src.pl_cache.keys import property_list_key
from src.pl_common.enums import PropertySortField, PropertyType, SortOrder
from src.pl_common.pagination import offset_for

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10


@dataclass(frozen=True)
class PropertyFilters:
    search: str | None = None
    min_price: float | None = None
    max_price: float | None = None
    property_type: PropertyType | None = None
    min_bedrooms: int | None = None
    max_bedrooms: int | None = None
    min_bathrooms: int | None = None
    max_bathrooms: int | None = None
    min_area: float | None = None
    max_area: float | None = None
    location: str | None = None
    sort_by: PropertySortField = PropertySortField.CREATED_AT
    sort_order: SortOrder = SortOrder.DESC
    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT


@dataclass(frozen=True)
class PropertyQuery:
    predicate: dict[str, Any]
    sort: dict[str, int]
    page: int
    limit: int
    cache_key: str

    @property
    def skip(self) -> int:
        return offset_for(self.page, self.limit)


def _number(value: float | int) -> float | int:
    # 100000.0 and 100000 must produce the same key
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def _range(low: float | int | None, high: float | int | None) -> dict[str, Any] | None:
    bounds: dict[str, Any] = {}
    if low is not None:
        bounds["$gte"] = _number(low)
    if high is not None:
        bounds["$lte"] = _number(high)
    return bounds or None


def _text(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    return value or None


def build_predicate(filters: PropertyFilters) -> dict[str, Any]:
    predicate: dict[str, Any] = {}

    search = _text(filters.search)
    if search:
        predicate["$text"] = {"$search": search}

    price = _range(filters.min_price, filters.max_price)
    if price:
        predicate["price"] = price

    if filters.property_type is not None:
        predicate["propertyType"] = PropertyType(filters.property_type).value

    for field, low, high in (
        ("bedrooms", filters.min_bedrooms, filters.max_bedrooms),
        ("bathrooms", filters.min_bathrooms, filters.max_bathrooms),
        ("area", filters.min_area, filters.max_area),
    ):
        bounds = _range(low, high)
        if bounds:
            predicate[field] = bounds

    location = _text(filters.location)
    if location:
        predicate["location"] = {"$icontains": location}

    return predicate


def build_sort(filters: PropertyFilters) -> dict[str, int]:
    direction = -1 if SortOrder(filters.sort_order) is SortOrder.DESC else 1
    return {PropertySortField(filters.sort_by).value: direction}


def build_property_query(filters: PropertyFilters) -> PropertyQuery:
    if filters.page < 1:
        raise ValueError(f"page must be >= 1, got {filters.page}")
    if filters.limit < 1:
        raise ValueError(f"limit must be >= 1, got {filters.limit}")

    predicate = build_predicate(filters)
    sort = build_sort(filters)
    return PropertyQuery(
        predicate=predicate,
        sort=sort,
        page=filters.page,
        limit=filters.limit,
        cache_key=property_list_key(predicate, sort, filters.page, filters.limit),
    )
