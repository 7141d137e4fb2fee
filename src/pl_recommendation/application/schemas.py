"""Pydantic schemas for pl_recommendation requests and responses."""

import uuid

from pydantic import BaseModel, EmailStr, Field, field_validator

from src.pl_common.datetime_utils import iso_or_none
from src.pl_property.application.schemas import PropertyOut, UserSummaryOut
from src.pl_recommendation.domain.models import Recommendation


class RecommendRequest(BaseModel):
    property_id: uuid.UUID
    recipient_email: EmailStr
    message: str | None = Field(None, max_length=2000)

    @field_validator("message")
    @classmethod
    def strip_message(cls, v: str | None) -> str | None:
        if v is None:
            return None
        return v.strip() or None


class RecommendationOut(BaseModel):
    id: str
    sender_id: str
    recipient_id: str
    property_id: str
    message: str | None
    is_read: bool
    property: PropertyOut | None = None
    sender: UserSummaryOut | None = None
    recipient: UserSummaryOut | None = None
    created_at: str | None
    updated_at: str | None

    @classmethod
    def from_domain(cls, r: Recommendation) -> "RecommendationOut":
        return cls(
            id=str(r.id),
            sender_id=str(r.sender_id),
            recipient_id=str(r.recipient_id),
            property_id=str(r.property_id),
            message=r.message,
            is_read=r.is_read,
            property=PropertyOut.from_domain(r.property) if r.property else None,
            sender=UserSummaryOut.from_domain(r.sender) if r.sender else None,
            recipient=UserSummaryOut.from_domain(r.recipient) if r.recipient else None,
            created_at=iso_or_none(r.created_at),
            updated_at=iso_or_none(r.updated_at),
        )
