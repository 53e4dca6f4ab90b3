"""Tracked link schemas."""

from datetime import datetime
from uuid import UUID

from app.schemas.common import APIModel, OkResponse, RequestModel, Text, Url


class LinkUpdateRequest(RequestModel):
    """Editable link fields; ``redirect_url`` switches to a single destination."""

    description: Text | None = None
    redirect_url: Url | None = None


class LinkResponse(APIModel):
    """Tracked link record."""

    id: UUID
    slug: str
    activation_id: UUID | None
    zone_id: UUID | None
    agent_id: UUID | None
    destination_strategy: str
    single_url: str | None
    fallback_url: str | None
    description: str | None
    is_active: bool
    is_default: bool
    created_at: datetime


class LinkListResponse(OkResponse):
    """Link list envelope."""

    links: list[LinkResponse]
