"""Organization and profile operations."""

from __future__ import annotations

import logging
from uuid import UUID

from sqlalchemy import delete, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.errors import NoTenant
from app.models.activation import Activation, Zone
from app.models.agent import Agent
from app.models.link import TrackedLink
from app.models.organization import Organization
from app.models.user import Profile, User
from app.services.activations import delete_activation

logger = logging.getLogger(__name__)

DEMO_PREFIXES = ("demo", "sample")


async def create_organization(session: AsyncSession, *, user: User, name: str) -> Organization:
    """Create an organization owned by the user and link their profile.

    Parameters
    ----------
    session : AsyncSession
        Active database session.
    user : User
        Authenticated owner.
    name : str
        Organization name.

    Returns
    -------
    Organization
        Persisted organization row.
    """
    organization = Organization(name=name, owner_user_id=user.id, plan="free")
    session.add(organization)
    await session.flush()

    profile = await session.get(Profile, user.id)
    if profile is None:
        session.add(Profile(id=user.id, organization_id=organization.id))
    else:
        profile.organization_id = organization.id
    await session.flush()
    logger.info("Created organization %s", organization.id, extra={"org_id": organization.id})
    return organization


async def rename_organization(
    session: AsyncSession, organization_id: UUID, name: str
) -> Organization:
    """Rename the caller's organization."""
    organization = await session.get(Organization, organization_id)
    if organization is None:
        raise NoTenant()
    organization.name = name
    await session.flush()
    return organization


async def load_profile(
    session: AsyncSession, user: User, organization_id: UUID | None
) -> tuple[Profile | None, Organization | None]:
    """Return the user's profile and resolved organization."""
    profile = await session.get(Profile, user.id)
    organization = None
    if organization_id is not None:
        organization = await session.get(Organization, organization_id)
    return profile, organization


async def update_profile(session: AsyncSession, user: User, full_name: str) -> Profile:
    """Set the user's display name, creating the profile when absent."""
    profile = await session.get(Profile, user.id)
    if profile is None:
        profile = Profile(id=user.id, full_name=full_name)
        session.add(profile)
    else:
        profile.full_name = full_name
    await session.flush()
    return profile


def _demo_name(column):
    return or_(*(column.ilike(f"{prefix}%") for prefix in DEMO_PREFIXES))


async def purge_demo_rows(session: AsyncSession, organization_id: UUID) -> None:
    """Delete the organization's demo and sample rows.

    Rows match when their name (or a link's slug or description) starts with
    ``Demo`` or ``Sample``, case-insensitively.
    """
    await session.execute(
        delete(TrackedLink).where(
            TrackedLink.organization_id == organization_id,
            or_(_demo_name(TrackedLink.slug), _demo_name(TrackedLink.description)),
        )
    )

    demo_agents = select(Agent.id).where(
        Agent.organization_id == organization_id, _demo_name(Agent.name)
    )
    await session.execute(
        update(TrackedLink)
        .where(TrackedLink.agent_id.in_(demo_agents))
        .values(agent_id=None)
    )
    await session.execute(
        delete(Agent).where(Agent.organization_id == organization_id, _demo_name(Agent.name))
    )

    demo_zones = select(Zone.id).where(
        Zone.organization_id == organization_id, _demo_name(Zone.name)
    )
    await session.execute(
        update(Agent).where(Agent.zone_id.in_(demo_zones)).values(zone_id=None)
    )
    await session.execute(
        update(TrackedLink).where(TrackedLink.zone_id.in_(demo_zones)).values(zone_id=None)
    )
    await session.execute(
        delete(Zone).where(Zone.organization_id == organization_id, _demo_name(Zone.name))
    )

    result = await session.execute(
        select(Activation.id).where(
            Activation.organization_id == organization_id, _demo_name(Activation.name)
        )
    )
    for activation_id in result.scalars().all():
        await delete_activation(session, activation_id)
    logger.info("Purged demo rows", extra={"org_id": organization_id})
