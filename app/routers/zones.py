"""Zone routes."""

from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import get_settings
from app.database import get_session
from app.routers.dependencies import commit_session, guarded_id, json_body
from app.schemas.common import OkResponse
from app.schemas.links import LinkResponse
from app.schemas.zones import (
    AgentCreatedResponse,
    AgentCreateRequest,
    AgentResponse,
    AgentWithLinks,
    ZoneCreatedResponse,
    ZoneCreateRequest,
    ZoneDetailResponse,
    ZoneLabel,
    ZoneListResponse,
    ZoneRecord,
    ZoneResponse,
    ZoneUpdateRequest,
)
from app.services.guard import ResourceKind, require_in_org
from app.services.tenancy import require_organization
from app.services.zones import (
    create_agent_in_zone,
    create_zone,
    delete_zone,
    list_zone_labels,
    update_zone,
    zone_detail,
)

router = APIRouter(prefix="/api/zones", tags=["zones"])

guarded_zone = guarded_id(ResourceKind.ZONE, "zone_id")


@router.get("", response_model=ZoneListResponse)
async def list_zones(
    organization_id: UUID = Depends(require_organization),
    session: AsyncSession = Depends(get_session),
) -> ZoneListResponse:
    """List the organization's zones with readable labels."""
    labels = await list_zone_labels(session, organization_id)
    return ZoneListResponse(
        zones=[ZoneLabel(id=zone_id, label=label) for zone_id, label in labels]
    )


@router.post("/create", response_model=ZoneCreatedResponse)
async def create(
    organization_id: UUID = Depends(require_organization),
    payload: ZoneCreateRequest = Depends(json_body(ZoneCreateRequest)),
    session: AsyncSession = Depends(get_session),
) -> ZoneCreatedResponse:
    """Create a zone inside one of the organization's districts."""
    await require_in_org(session, ResourceKind.DISTRICT, payload.district_id, organization_id)
    zone = await create_zone(session, district_id=payload.district_id, name=payload.name)
    await commit_session(session)
    return ZoneCreatedResponse(zone=ZoneResponse.model_validate(zone))


@router.patch("/{zone_id}", response_model=OkResponse)
async def patch_zone(
    zone_id: UUID = Depends(guarded_zone),
    organization_id: UUID = Depends(require_organization),
    payload: ZoneUpdateRequest = Depends(json_body(ZoneUpdateRequest)),
    session: AsyncSession = Depends(get_session),
) -> OkResponse:
    """Rename a zone or move it to another district."""
    changes = payload.model_dump(exclude_unset=True)
    if changes.get("name", "") is None:
        del changes["name"]
    if changes.get("district_id") is not None:
        await require_in_org(
            session, ResourceKind.DISTRICT, changes["district_id"], organization_id
        )
    await update_zone(session, zone_id, changes)
    await commit_session(session)
    return OkResponse()


@router.delete("/{zone_id}", response_model=OkResponse)
async def remove_zone(
    zone_id: UUID = Depends(guarded_zone),
    session: AsyncSession = Depends(get_session),
) -> OkResponse:
    """Delete a zone."""
    await delete_zone(session, zone_id)
    await commit_session(session)
    return OkResponse()


@router.get("/{zone_id}/detail", response_model=ZoneDetailResponse)
async def get_detail(
    zone_id: UUID = Depends(guarded_zone),
    session: AsyncSession = Depends(get_session),
) -> ZoneDetailResponse:
    """Return a zone with its default link and agents."""
    zone, default_link, agents = await zone_detail(session, zone_id)
    return ZoneDetailResponse(
        zone=ZoneRecord.model_validate(zone),
        default_link=(
            LinkResponse.model_validate(default_link) if default_link is not None else None
        ),
        agents=[
            AgentWithLinks(
                **AgentResponse.model_validate(agent).model_dump(),
                links=[LinkResponse.model_validate(link) for link in links],
            )
            for agent, links in agents
        ],
    )


@router.post("/{zone_id}/agents", response_model=AgentCreatedResponse)
async def add_agent(
    zone_id: UUID = Depends(guarded_zone),
    payload: AgentCreateRequest = Depends(json_body(AgentCreateRequest)),
    session: AsyncSession = Depends(get_session),
) -> AgentCreatedResponse:
    """Create an agent in the zone with a tracked link."""
    agent, link = await create_agent_in_zone(
        session,
        zone_id=zone_id,
        name=payload.name,
        slug_length=get_settings().slug_length,
    )
    await commit_session(session)
    return AgentCreatedResponse(
        agent=AgentResponse.model_validate(agent),
        link=LinkResponse.model_validate(link),
    )
