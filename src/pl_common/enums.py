"""Global enums — must match DB CHECK constraints exactly."""

from enum import Enum


class PropertyType(str, Enum):
    APARTMENT = "Apartment"
    HOUSE = "House"
    VILLA = "Villa"
    CONDO = "Condo"
    TOWNHOUSE = "Townhouse"


class PropertySortField(str, Enum):
    """Sortable listing fields, named as they appear in the sort spec."""
    CREATED_AT = "createdAt"
    UPDATED_AT = "updatedAt"
    PRICE = "price"
    BEDROOMS = "bedrooms"
    BATHROOMS = "bathrooms"
    AREA = "area"
    TITLE = "title"


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


class RecommendationBox(str, Enum):
    RECEIVED = "received"
    SENT = "sent"
