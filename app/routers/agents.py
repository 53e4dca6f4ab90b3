"""Agent routes."""

from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_session
from app.routers.dependencies import commit_session, guarded_id, json_body
from app.schemas.common import OkResponse
from app.schemas.zones import (
    AgentListResponse,
    AgentResponse,
    AgentUpdateRequest,
    AgentZoneRequest,
)
from app.services.guard import ResourceKind, require_in_org
from app.services.tenancy import require_organization
from app.services.zones import assign_agent_zone, delete_agent, list_agents, update_agent

router = APIRouter(prefix="/api/agents", tags=["agents"])

guarded_agent = guarded_id(ResourceKind.AGENT, "agent_id")


@router.get("", response_model=AgentListResponse)
async def list_items(
    organization_id: UUID = Depends(require_organization),
    session: AsyncSession = Depends(get_session),
) -> AgentListResponse:
    """List the organization's agents."""
    agents = await list_agents(session, organization_id)
    return AgentListResponse(agents=[AgentResponse.model_validate(row) for row in agents])


@router.patch("/{agent_id}", response_model=OkResponse)
async def patch_agent(
    agent_id: UUID = Depends(guarded_agent),
    organization_id: UUID = Depends(require_organization),
    payload: AgentUpdateRequest = Depends(json_body(AgentUpdateRequest)),
    session: AsyncSession = Depends(get_session),
) -> OkResponse:
    """Edit an agent's contact details or active flag."""
    await update_agent(
        session, agent_id, organization_id, payload.model_dump(exclude_none=True)
    )
    await commit_session(session)
    return OkResponse()


@router.delete("/{agent_id}", response_model=OkResponse)
async def remove_agent(
    agent_id: UUID = Depends(guarded_agent),
    session: AsyncSession = Depends(get_session),
) -> OkResponse:
    """Delete an agent."""
    await delete_agent(session, agent_id)
    await commit_session(session)
    return OkResponse()


@router.put("/{agent_id}/zone", response_model=OkResponse)
async def put_zone(
    agent_id: UUID = Depends(guarded_agent),
    organization_id: UUID = Depends(require_organization),
    payload: AgentZoneRequest = Depends(json_body(AgentZoneRequest)),
    session: AsyncSession = Depends(get_session),
) -> OkResponse:
    """Assign the agent to a zone of the same organization."""
    await require_in_org(
        session, ResourceKind.ZONE, payload.zone_id, organization_id, detail="Invalid zone"
    )
    await assign_agent_zone(session, agent_id, payload.zone_id, organization_id)
    await commit_session(session)
    return OkResponse()
