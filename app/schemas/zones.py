"""Zone and agent schemas."""

from datetime import datetime
from uuid import UUID

from app.schemas.common import APIModel, Name, OkResponse, RequestModel, Text
from app.schemas.links import LinkResponse


class ZoneCreateRequest(RequestModel):
    """Create a zone inside a district."""

    name: Name
    district_id: UUID


class ZoneUpdateRequest(RequestModel):
    """Editable zone fields; ``district_id`` may be cleared with null."""

    name: Name | None = None
    district_id: UUID | None = None


class ZoneResponse(APIModel):
    """Zone reference."""

    id: UUID
    name: str


class ZoneRecord(APIModel):
    """Full zone record."""

    id: UUID
    name: str
    activation_id: UUID
    organization_id: UUID
    district_id: UUID | None


class ZoneCreatedResponse(OkResponse):
    """Created zone envelope."""

    zone: ZoneResponse


class ZoneLabel(APIModel):
    """Zone with a human-readable path label."""

    id: UUID
    label: str


class ZoneListResponse(OkResponse):
    """Zone list envelope."""

    zones: list[ZoneLabel]


class AgentCreateRequest(RequestModel):
    """Create an agent in a zone."""

    name: Name


class AgentUpdateRequest(RequestModel):
    """Editable agent fields."""

    name: Name | None = None
    notes: Text | None = None
    phone: Text | None = None
    email: Text | None = None
    active: bool | None = None


class AgentZoneRequest(RequestModel):
    """Assign an agent to a zone."""

    zone_id: UUID


class AgentResponse(APIModel):
    """Agent record."""

    id: UUID
    name: str
    zone_id: UUID | None
    email: str | None
    phone: str | None
    notes: str | None
    active: bool
    created_at: datetime


class AgentWithLinks(AgentResponse):
    """Agent plus its tracked links."""

    links: list[LinkResponse]


class AgentListResponse(OkResponse):
    """Agent list envelope."""

    agents: list[AgentResponse]


class AgentCreatedResponse(OkResponse):
    """Created agent and its link."""

    agent: AgentResponse
    link: LinkResponse


class ZoneDetailResponse(OkResponse):
    """Zone with its default link and agents."""

    zone: ZoneRecord
    default_link: LinkResponse | None
    agents: list[AgentWithLinks]
