"""Tracked link model."""

import uuid

from sqlalchemy import Boolean, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base
from app.models.mixins import TenantMixin, TimestampMixin, uuid_column

STRATEGY_SINGLE = "single"
STRATEGY_FALLBACK = "fallback"


class TrackedLink(TenantMixin, TimestampMixin, Base):
    """Public short link printed on a QR code or NFC tag."""

    __tablename__ = "tracked_links"

    id: Mapped[uuid.UUID] = uuid_column()
    activation_id: Mapped[uuid.UUID | None] = mapped_column(
        ForeignKey("activations.id"), nullable=True, index=True
    )
    zone_id: Mapped[uuid.UUID | None] = mapped_column(
        ForeignKey("zones.id"), nullable=True, index=True
    )
    agent_id: Mapped[uuid.UUID | None] = mapped_column(
        ForeignKey("agents.id"), nullable=True, index=True
    )
    slug: Mapped[str] = mapped_column(String(64), unique=True)
    destination_strategy: Mapped[str] = mapped_column(
        String(32), default=STRATEGY_SINGLE
    )
    single_url: Mapped[str | None] = mapped_column(String(2048))
    fallback_url: Mapped[str | None] = mapped_column(String(2048))
    description: Mapped[str | None] = mapped_column(Text)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)
    is_default: Mapped[bool] = mapped_column(Boolean, default=False)
