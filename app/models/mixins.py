"""Shared model helpers."""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, ForeignKey, Uuid
from sqlalchemy.orm import Mapped, mapped_column


def utcnow() -> datetime:
    """Return the current UTC time."""
    return datetime.now(timezone.utc)


class TimestampMixin:
    """Common timestamp columns."""

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)


class TenantMixin:
    """Owning organization column used for tenant scoping."""

    organization_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("organizations.id"), index=True
    )


def uuid_column() -> Mapped[uuid.UUID]:
    """Return a UUID primary-key column.

    Returns
    -------
    Mapped[uuid.UUID]
        SQLAlchemy mapped UUID column.
    """
    return mapped_column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
