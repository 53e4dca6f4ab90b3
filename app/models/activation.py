"""Activation hierarchy models."""

import uuid

from sqlalchemy import ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base
from app.models.mixins import TenantMixin, TimestampMixin, uuid_column


class Activation(TenantMixin, TimestampMixin, Base):
    """Marketing campaign container."""

    __tablename__ = "activations"

    id: Mapped[uuid.UUID] = uuid_column()
    name: Mapped[str] = mapped_column(String(255))
    status: Mapped[str] = mapped_column(String(50), default="live")
    default_redirect_url: Mapped[str | None] = mapped_column(String(2048))
    redirect_android_url: Mapped[str | None] = mapped_column(String(2048))
    redirect_ios_url: Mapped[str | None] = mapped_column(String(2048))


class District(TenantMixin, TimestampMixin, Base):
    """Grouping of zones inside an activation."""

    __tablename__ = "districts"

    id: Mapped[uuid.UUID] = uuid_column()
    activation_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("activations.id"), index=True
    )
    name: Mapped[str] = mapped_column(String(255))


class Zone(TenantMixin, TimestampMixin, Base):
    """Physical area where agents operate."""

    __tablename__ = "zones"

    id: Mapped[uuid.UUID] = uuid_column()
    activation_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("activations.id"), index=True
    )
    district_id: Mapped[uuid.UUID | None] = mapped_column(
        ForeignKey("districts.id"), nullable=True, index=True
    )
    name: Mapped[str] = mapped_column(String(255))
