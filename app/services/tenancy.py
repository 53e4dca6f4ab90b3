"""Organization membership resolution."""

from __future__ import annotations

from uuid import UUID

from fastapi import Depends
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_session
from app.errors import NoTenant
from app.models.organization import Organization
from app.models.user import Profile, User
from app.services.auth import current_user, require_user


async def resolve_organization(session: AsyncSession, user: User) -> UUID | None:
    """Map an identity to its organization.

    The profile link wins; otherwise the most recently created organization
    owned by the user is used.

    Parameters
    ----------
    session : AsyncSession
        Active database session.
    user : User
        Authenticated user.

    Returns
    -------
    UUID | None
        Organization identifier, or ``None`` when the user has no tenant.
    """
    result = await session.execute(
        select(Profile.organization_id).where(Profile.id == user.id)
    )
    organization_id = result.scalar_one_or_none()
    if organization_id is not None:
        return organization_id

    result = await session.execute(
        select(Organization.id)
        .where(Organization.owner_user_id == user.id)
        .order_by(Organization.created_at.desc())
        .limit(1)
    )
    return result.scalar_one_or_none()


async def optional_organization(
    user: User | None = Depends(current_user),
    session: AsyncSession = Depends(get_session),
) -> UUID | None:
    """Resolve the caller's organization, tolerating a missing one.

    Parameters
    ----------
    user : User | None
        Session user, if any.
    session : AsyncSession
        Active database session.

    Returns
    -------
    UUID | None
        Organization identifier or ``None``.
    """
    user = await require_user(user)
    return await resolve_organization(session, user)


async def require_organization(
    organization_id: UUID | None = Depends(optional_organization),
) -> UUID:
    """Resolve the caller's organization or fail with 400.

    Parameters
    ----------
    organization_id : UUID | None
        Resolved organization identifier.

    Returns
    -------
    UUID
        Organization identifier.
    """
    if organization_id is None:
        raise NoTenant()
    return organization_id
