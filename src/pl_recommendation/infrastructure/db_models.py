"""SQLAlchemy ORM model for the recommendations table.

Alembic migration 005_create_recommendations.py is the authoritative DDL
source. ck_recommendations_not_self rejects self-recommendations at the
store level as well.
"""

import uuid
from datetime import datetime

from sqlalchemy import Boolean, CheckConstraint, DateTime, ForeignKey, Text, text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from src.pl_common.database import Base
from src.pl_gateway.user.db_models import UserModel
from src.pl_property.infrastructure.db_models import PropertyORM


class RecommendationORM(Base):
    __tablename__ = "recommendations"
    __table_args__ = (
        CheckConstraint("sender_id <> recipient_id", name="ck_recommendations_not_self"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        server_default=text("gen_random_uuid()"),
    )
    sender_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    recipient_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    property_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("properties.id", ondelete="CASCADE"), nullable=False
    )
    message: Mapped[str | None] = mapped_column(Text)
    is_read: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=text("NOW()")
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=text("NOW()")
    )

    sender: Mapped[UserModel] = relationship(foreign_keys=[sender_id], lazy="raise")
    recipient: Mapped[UserModel] = relationship(foreign_keys=[recipient_id], lazy="raise")
    property: Mapped[PropertyORM] = relationship(lazy="raise")
