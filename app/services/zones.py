"""Zone and agent operations."""

from __future__ import annotations

import logging
from uuid import UUID

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.errors import Forbidden, InvalidInput
from app.models.activation import Activation, District, Zone
from app.models.agent import Agent
from app.models.link import STRATEGY_SINGLE, TrackedLink
from app.services.links import unique_slug

logger = logging.getLogger(__name__)


async def create_zone(session: AsyncSession, *, district_id: UUID, name: str) -> Zone:
    """Create a zone, copying organization and activation from its district.

    Parameters
    ----------
    session : AsyncSession
        Active database session.
    district_id : UUID
        Parent district; ownership must already be checked.
    name : str
        Zone name.

    Returns
    -------
    Zone
        Persisted zone row.
    """
    district = await session.get(District, district_id)
    if district is None:
        raise Forbidden()
    zone = Zone(
        organization_id=district.organization_id,
        activation_id=district.activation_id,
        district_id=district.id,
        name=name,
    )
    session.add(zone)
    await session.flush()
    return zone


async def update_zone(session: AsyncSession, zone_id: UUID, changes: dict[str, object]) -> None:
    """Rename a zone or move it between districts of the same activation."""
    if not changes:
        raise InvalidInput("No changes")
    district_id = changes.get("district_id")
    if district_id is not None:
        zone = await session.get(Zone, zone_id)
        district = await session.get(District, district_id)
        if zone is None or district is None:
            raise Forbidden()
        if district.activation_id != zone.activation_id:
            raise InvalidInput("District belongs to another activation")
    await session.execute(update(Zone).where(Zone.id == zone_id).values(**changes))


async def delete_zone(session: AsyncSession, zone_id: UUID) -> None:
    """Delete a zone; its agents and links are detached."""
    await session.execute(
        update(Agent).where(Agent.zone_id == zone_id).values(zone_id=None)
    )
    await session.execute(
        update(TrackedLink).where(TrackedLink.zone_id == zone_id).values(zone_id=None)
    )
    await session.execute(delete(Zone).where(Zone.id == zone_id))


async def list_zone_labels(
    session: AsyncSession, organization_id: UUID
) -> list[tuple[UUID, str]]:
    """List zones with an ``Activation - District / Zone`` label.

    Parameters
    ----------
    session : AsyncSession
        Active database session.
    organization_id : UUID
        Caller's organization.

    Returns
    -------
    list[tuple[UUID, str]]
        Zone identifiers and labels ordered by zone name.
    """
    result = await session.execute(
        select(Zone, District.name, Activation.name)
        .outerjoin(
            District,
            (District.id == Zone.district_id)
            & (District.organization_id == organization_id),
        )
        .outerjoin(
            Activation,
            (Activation.id == Zone.activation_id)
            & (Activation.organization_id == organization_id),
        )
        .where(Zone.organization_id == organization_id)
        .order_by(Zone.name.asc())
    )
    labels = []
    for zone, district_name, activation_name in result.all():
        parts = []
        if activation_name:
            parts.append(activation_name)
        path = " / ".join(part for part in (district_name, zone.name) if part)
        if path:
            parts.append(path)
        labels.append((zone.id, " - ".join(parts) if parts else zone.name))
    return labels


async def zone_detail(
    session: AsyncSession, zone_id: UUID
) -> tuple[Zone, TrackedLink | None, list[tuple[Agent, list[TrackedLink]]]]:
    """Load a zone with its default link and its agents' links."""
    zone = await session.get(Zone, zone_id)
    if zone is None:
        raise Forbidden()
    result = await session.execute(
        select(TrackedLink).where(
            TrackedLink.zone_id == zone_id,
            TrackedLink.is_default.is_(True),
        )
    )
    default_link = result.scalars().first()

    result = await session.execute(
        select(Agent).where(Agent.zone_id == zone_id).order_by(Agent.created_at.desc())
    )
    agents = list(result.scalars().all())
    links_by_agent: dict[UUID, list[TrackedLink]] = {agent.id: [] for agent in agents}
    if agents:
        result = await session.execute(
            select(TrackedLink).where(TrackedLink.agent_id.in_(list(links_by_agent)))
        )
        for link in result.scalars().all():
            links_by_agent[link.agent_id].append(link)
    return zone, default_link, [(agent, links_by_agent[agent.id]) for agent in agents]


async def list_agents(session: AsyncSession, organization_id: UUID) -> list[Agent]:
    """List an organization's agents, newest first."""
    result = await session.execute(
        select(Agent)
        .where(Agent.organization_id == organization_id)
        .order_by(Agent.created_at.desc())
    )
    return list(result.scalars().all())


async def create_agent_in_zone(
    session: AsyncSession, *, zone_id: UUID, name: str, slug_length: int
) -> tuple[Agent, TrackedLink]:
    """Create an agent in a zone together with the agent's tracked link.

    The link points at the activation's default redirect URL.

    Parameters
    ----------
    session : AsyncSession
        Active database session.
    zone_id : UUID
        Target zone; ownership must already be checked.
    name : str
        Agent name.
    slug_length : int
        Length of the generated slug.

    Returns
    -------
    tuple[Agent, TrackedLink]
        New agent and link rows.
    """
    zone = await session.get(Zone, zone_id)
    if zone is None:
        raise Forbidden()
    activation = await session.get(Activation, zone.activation_id)
    redirect = (activation.default_redirect_url or "").strip() if activation else ""

    agent = Agent(organization_id=zone.organization_id, zone_id=zone.id, name=name)
    session.add(agent)
    await session.flush()

    link = TrackedLink(
        organization_id=zone.organization_id,
        activation_id=zone.activation_id,
        zone_id=zone.id,
        agent_id=agent.id,
        slug=await unique_slug(session, slug_length),
        destination_strategy=STRATEGY_SINGLE,
        single_url=redirect or None,
        fallback_url=redirect or None,
        description=f"{name} agent link",
        is_active=True,
        is_default=False,
    )
    session.add(link)
    await session.flush()
    logger.info("Created agent %s in zone %s", agent.id, zone.id)
    return agent, link


async def update_agent(
    session: AsyncSession, agent_id: UUID, organization_id: UUID, changes: dict[str, object]
) -> None:
    """Apply field changes to an agent."""
    if not changes:
        raise InvalidInput("No changes")
    await session.execute(
        update(Agent)
        .where(Agent.id == agent_id, Agent.organization_id == organization_id)
        .values(**changes)
    )


async def assign_agent_zone(
    session: AsyncSession, agent_id: UUID, zone_id: UUID, organization_id: UUID
) -> None:
    """Move an agent into a zone; both must be checked against the organization."""
    await session.execute(
        update(Agent)
        .where(Agent.id == agent_id, Agent.organization_id == organization_id)
        .values(zone_id=zone_id)
    )


async def delete_agent(session: AsyncSession, agent_id: UUID) -> None:
    """Delete an agent; its links stay and lose the agent reference."""
    await session.execute(
        update(TrackedLink).where(TrackedLink.agent_id == agent_id).values(agent_id=None)
    )
    await session.execute(delete(Agent).where(Agent.id == agent_id))
