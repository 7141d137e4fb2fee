"""Domain models for pl_recommendation."""

import uuid
from dataclasses import dataclass
from datetime import datetime

from src.pl_property.domain.models import Property, UserSummary


@dataclass
class Recommendation:
    id: uuid.UUID
    sender_id: uuid.UUID
    recipient_id: uuid.UUID
    property_id: uuid.UUID
    message: str | None
    is_read: bool
    created_at: datetime
    updated_at: datetime
    # Populated on list reads only
    property: Property | None = None
    sender: UserSummary | None = None
    recipient: UserSummary | None = None

    def involves(self, user_id: uuid.UUID) -> bool:
        return user_id in (self.sender_id, self.recipient_id)
