"""Domain models for pl_favorite."""

import uuid
from dataclasses import dataclass
from datetime import datetime

from src.pl_property.domain.models import Property


@dataclass
class Favorite:
    id: uuid.UUID
    user_id: uuid.UUID
    property_id: uuid.UUID
    created_at: datetime
    property: Property | None = None  # populated on list reads
