"""Domain models for pl_property — pure dataclasses, no business logic."""

import uuid
from dataclasses import dataclass, field
from datetime import datetime


@dataclass
class UserSummary:
    """Populated user reference: the public part of a user row."""

    id: uuid.UUID
    name: str
    email: str


@dataclass
class Property:
    id: uuid.UUID
    title: str
    description: str
    price: float
    location: str
    property_type: str
    bedrooms: int
    bathrooms: int
    area: float
    created_by: uuid.UUID
    created_at: datetime
    updated_at: datetime
    amenities: list[str] = field(default_factory=list)
    images: list[str] = field(default_factory=list)
    owner: UserSummary | None = None


@dataclass
class NewProperty:
    """Validated field values for an insert; id and timestamps come from the store."""

    title: str
    description: str
    price: float
    location: str
    property_type: str
    bedrooms: int
    bathrooms: int
    area: float
    amenities: list[str] = field(default_factory=list)
    images: list[str] = field(default_factory=list)
