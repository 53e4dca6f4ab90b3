"""Activation and district operations."""

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
from app.services.zones import create_agent_in_zone, create_zone

logger = logging.getLogger(__name__)

DEFAULT_DISTRICT_NAME = "Ungrouped"
STRUCTURE_DISTRICT_NAME = "Main District"
STRUCTURE_ZONE_NAME = "Zone 1"


async def list_activations(session: AsyncSession, organization_id: UUID) -> list[Activation]:
    """List an organization's activations, newest first."""
    result = await session.execute(
        select(Activation)
        .where(Activation.organization_id == organization_id)
        .order_by(Activation.created_at.desc())
    )
    return list(result.scalars().all())


async def create_activation(
    session: AsyncSession,
    *,
    organization_id: UUID,
    name: str,
    default_redirect_url: str | None = None,
    redirect_android_url: str | None = None,
    redirect_ios_url: str | None = None,
) -> Activation:
    """Create an activation owned by an organization.

    Parameters
    ----------
    session : AsyncSession
        Active database session.
    organization_id : UUID
        Caller's organization.
    name : str
        Activation name.
    default_redirect_url : str | None, default=None
        Landing URL used by newly generated links.
    redirect_android_url : str | None, default=None
        Destination for Android visitors.
    redirect_ios_url : str | None, default=None
        Destination for iOS visitors.

    Returns
    -------
    Activation
        Persisted activation row.
    """
    activation = Activation(
        organization_id=organization_id,
        name=name,
        default_redirect_url=default_redirect_url or None,
        redirect_android_url=redirect_android_url or None,
        redirect_ios_url=redirect_ios_url or None,
    )
    session.add(activation)
    await session.flush()
    logger.info("Created activation %s", activation.id, extra={"org_id": organization_id})
    return activation


async def update_activation(
    session: AsyncSession, activation_id: UUID, changes: dict[str, object]
) -> Activation:
    """Apply field changes to an activation.

    Parameters
    ----------
    session : AsyncSession
        Active database session.
    activation_id : UUID
        Activation identifier; ownership must already be checked.
    changes : dict[str, object]
        Column values to set.

    Returns
    -------
    Activation
        Updated activation row.
    """
    if not changes:
        raise InvalidInput("No changes")
    activation = await session.get(Activation, activation_id)
    if activation is None:
        raise Forbidden()
    for field, value in changes.items():
        setattr(activation, field, value)
    await session.flush()
    return activation


async def update_redirects(
    session: AsyncSession, activation_id: UUID, changes: dict[str, str | None]
) -> Activation:
    """Update redirect configuration; blank values clear a field."""
    cleaned = {field: (value or None) for field, value in changes.items()}
    return await update_activation(session, activation_id, cleaned)


async def delete_activation(session: AsyncSession, activation_id: UUID) -> None:
    """Delete an activation together with its districts, zones and links.

    Agents survive and lose their zone assignment.
    """
    zone_ids = select(Zone.id).where(Zone.activation_id == activation_id)
    await session.execute(
        update(Agent).where(Agent.zone_id.in_(zone_ids)).values(zone_id=None)
    )
    await session.execute(
        delete(TrackedLink).where(TrackedLink.activation_id == activation_id)
    )
    await session.execute(delete(Zone).where(Zone.activation_id == activation_id))
    await session.execute(
        delete(District).where(District.activation_id == activation_id)
    )
    await session.execute(delete(Activation).where(Activation.id == activation_id))
    logger.info("Deleted activation %s", activation_id)


async def list_districts(session: AsyncSession, activation_id: UUID) -> list[District]:
    """List an activation's districts in creation order."""
    result = await session.execute(
        select(District)
        .where(District.activation_id == activation_id)
        .order_by(District.created_at.asc())
    )
    return list(result.scalars().all())


async def create_district(
    session: AsyncSession, *, activation_id: UUID, name: str
) -> District:
    """Create a district, copying the activation's organization.

    Parameters
    ----------
    session : AsyncSession
        Active database session.
    activation_id : UUID
        Parent activation; ownership must already be checked.
    name : str
        District name.

    Returns
    -------
    District
        Persisted district row.
    """
    activation = await session.get(Activation, activation_id)
    if activation is None:
        raise Forbidden()
    district = District(
        organization_id=activation.organization_id,
        activation_id=activation.id,
        name=name,
    )
    session.add(district)
    await session.flush()
    return district


async def rename_district(session: AsyncSession, district_id: UUID, name: str) -> None:
    """Rename a district."""
    await session.execute(
        update(District).where(District.id == district_id).values(name=name)
    )


async def delete_district(session: AsyncSession, district_id: UUID) -> None:
    """Delete a district; its zones become ungrouped."""
    await session.execute(
        update(Zone).where(Zone.district_id == district_id).values(district_id=None)
    )
    await session.execute(delete(District).where(District.id == district_id))


async def quick_create(
    session: AsyncSession,
    *,
    organization_id: UUID,
    name: str,
    redirect_url: str,
    zone_count: int,
    agents_per_zone: int,
    slug_length: int,
) -> Activation:
    """Create an activation with a default district, zones, agents and links.

    Parameters
    ----------
    session : AsyncSession
        Active database session.
    organization_id : UUID
        Caller's organization.
    name : str
        Activation name.
    redirect_url : str
        Destination for every generated link.
    zone_count : int
        Number of zones to create.
    agents_per_zone : int
        Number of agents, each with one link, per zone.
    slug_length : int
        Length of generated slugs.

    Returns
    -------
    Activation
        The new activation.
    """
    activation = await create_activation(
        session,
        organization_id=organization_id,
        name=name,
        default_redirect_url=redirect_url,
    )
    district = await create_district(
        session, activation_id=activation.id, name=DEFAULT_DISTRICT_NAME
    )
    for zone_index in range(zone_count):
        zone = Zone(
            organization_id=district.organization_id,
            activation_id=district.activation_id,
            district_id=district.id,
            name=f"Zone {zone_index + 1}",
        )
        session.add(zone)
        await session.flush()
        for agent_index in range(agents_per_zone):
            agent = Agent(
                organization_id=zone.organization_id,
                zone_id=zone.id,
                name=f"Agent {agent_index + 1}",
                active=True,
            )
            session.add(agent)
            await session.flush()
            session.add(
                TrackedLink(
                    organization_id=zone.organization_id,
                    activation_id=activation.id,
                    zone_id=zone.id,
                    agent_id=agent.id,
                    slug=await unique_slug(session, slug_length),
                    destination_strategy=STRATEGY_SINGLE,
                    single_url=redirect_url,
                    fallback_url=redirect_url,
                    description=f"{zone.name} agent link",
                    is_active=True,
                )
            )
            await session.flush()
    return activation


async def create_structure(
    session: AsyncSession,
    *,
    organization_id: UUID,
    name: str,
    default_redirect_url: str,
    redirect_android_url: str | None,
    redirect_ios_url: str | None,
    districts: list[tuple[str, list[str]]],
) -> Activation:
    """Create an activation with named districts and zones.

    Parameters
    ----------
    session : AsyncSession
        Active database session.
    organization_id : UUID
        Caller's organization.
    name : str
        Activation name.
    default_redirect_url : str
        Landing URL for links generated later.
    redirect_android_url : str | None
        Destination for Android visitors.
    redirect_ios_url : str | None
        Destination for iOS visitors.
    districts : list[tuple[str, list[str]]]
        District names with their zone names. An empty list creates
        ``Main District``; a district without zones gets ``Zone 1``.

    Returns
    -------
    Activation
        The new activation.
    """
    activation = await create_activation(
        session,
        organization_id=organization_id,
        name=name,
        default_redirect_url=default_redirect_url,
        redirect_android_url=redirect_android_url,
        redirect_ios_url=redirect_ios_url,
    )
    for district_name, zone_names in districts or [(STRUCTURE_DISTRICT_NAME, [])]:
        district = await create_district(
            session, activation_id=activation.id, name=district_name
        )
        for zone_name in zone_names or [STRUCTURE_ZONE_NAME]:
            await create_zone(session, district_id=district.id, name=zone_name)
    return activation


async def create_guided(
    session: AsyncSession,
    *,
    organization_id: UUID,
    name: str,
    redirect_url: str,
    zones: list[tuple[str, list[str]]],
    slug_length: int,
) -> Activation:
    """Create an activation from named zones, each with named agents.

    Zones are placed in an ``Ungrouped`` district and every agent receives a
    tracked link to ``redirect_url``. Blank zone and agent names are skipped.
    """
    activation = await create_activation(
        session,
        organization_id=organization_id,
        name=name,
        default_redirect_url=redirect_url,
    )
    district = await create_district(
        session, activation_id=activation.id, name=DEFAULT_DISTRICT_NAME
    )
    for zone_name, agent_names in zones:
        if not zone_name:
            continue
        zone = await create_zone(session, district_id=district.id, name=zone_name)
        for agent_name in agent_names:
            if agent_name:
                await create_agent_in_zone(
                    session, zone_id=zone.id, name=agent_name, slug_length=slug_length
                )
    return activation
