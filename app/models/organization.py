"""Organization model."""

import uuid

from sqlalchemy import ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base
from app.models.mixins import TimestampMixin, uuid_column


class Organization(TimestampMixin, Base):
    """Tenant owning every activation, agent and link."""

    __tablename__ = "organizations"

    id: Mapped[uuid.UUID] = uuid_column()
    name: Mapped[str] = mapped_column(String(255))
    owner_user_id: Mapped[uuid.UUID | None] = mapped_column(
        ForeignKey("users.id"), nullable=True, index=True
    )
    plan: Mapped[str] = mapped_column(String(50), default="free")
