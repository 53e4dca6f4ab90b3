"""Tracked link operations."""

from __future__ import annotations

import logging
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.errors import Forbidden, InvalidInput, StoreError
from app.models.link import STRATEGY_SINGLE, TrackedLink
from app.services.security import generate_slug

logger = logging.getLogger(__name__)

SLUG_ATTEMPTS = 5


async def unique_slug(session: AsyncSession, length: int) -> str:
    """Generate a slug not yet used by any link.

    Parameters
    ----------
    session : AsyncSession
        Active database session.
    length : int
        Slug length.

    Returns
    -------
    str
        Unused slug.
    """
    for _ in range(SLUG_ATTEMPTS):
        slug = generate_slug(length)
        result = await session.execute(
            select(TrackedLink.id).where(TrackedLink.slug == slug)
        )
        if result.scalar_one_or_none() is None:
            return slug
    raise StoreError("Could not allocate a unique slug")


async def list_links(
    session: AsyncSession, organization_id: UUID, activation_id: UUID | None = None
) -> list[TrackedLink]:
    """List an organization's links, newest first."""
    query = select(TrackedLink).where(TrackedLink.organization_id == organization_id)
    if activation_id is not None:
        query = query.where(TrackedLink.activation_id == activation_id)
    result = await session.execute(query.order_by(TrackedLink.created_at.desc()))
    return list(result.scalars().all())


async def update_link(
    session: AsyncSession,
    link_id: UUID,
    *,
    description: str | None = None,
    redirect_url: str | None = None,
) -> TrackedLink:
    """Edit a link's description or point it at a single URL.

    Parameters
    ----------
    session : AsyncSession
        Active database session.
    link_id : UUID
        Link identifier; ownership must already be checked.
    description : str | None, default=None
        New description.
    redirect_url : str | None, default=None
        New destination; switches the link to the ``single`` strategy.

    Returns
    -------
    TrackedLink
        Updated link row.
    """
    if description is None and redirect_url is None:
        raise InvalidInput("No changes")
    link = await session.get(TrackedLink, link_id)
    if link is None:
        raise Forbidden()
    if description is not None:
        link.description = description
    if redirect_url is not None:
        link.destination_strategy = STRATEGY_SINGLE
        link.single_url = redirect_url
    await session.flush()
    logger.info("Updated link %s", link.id, extra={"slug": link.slug})
    return link


async def delete_link(session: AsyncSession, link_id: UUID) -> None:
    """Delete a link."""
    await session.execute(delete(TrackedLink).where(TrackedLink.id == link_id))
