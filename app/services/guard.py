"""Tenant-scoped authorization guard."""

from __future__ import annotations

import enum
import logging
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.errors import Forbidden
from app.models.activation import Activation, District, Zone
from app.models.agent import Agent
from app.models.link import TrackedLink

logger = logging.getLogger(__name__)


class ResourceKind(str, enum.Enum):
    """Organization-scoped resource kinds."""

    ACTIVATION = "activation"
    DISTRICT = "district"
    ZONE = "zone"
    AGENT = "agent"
    LINK = "link"


_MODELS = {
    ResourceKind.ACTIVATION: Activation,
    ResourceKind.DISTRICT: District,
    ResourceKind.ZONE: Zone,
    ResourceKind.AGENT: Agent,
    ResourceKind.LINK: TrackedLink,
}


async def authorize(
    session: AsyncSession,
    kind: ResourceKind,
    resource_id: UUID,
    organization_id: UUID,
) -> bool:
    """Check that a resource belongs to an organization.

    Parameters
    ----------
    session : AsyncSession
        Active database session.
    kind : ResourceKind
        Kind of resource.
    resource_id : UUID
        Resource identifier.
    organization_id : UUID
        Caller's organization.

    Returns
    -------
    bool
        ``True`` only when the row exists and carries ``organization_id``.
        Lookup failures count as a denial.
    """
    model = _MODELS[kind]
    try:
        result = await session.execute(
            select(model.organization_id).where(model.id == resource_id)
        )
        owner = result.scalar_one_or_none()
    except SQLAlchemyError:
        logger.warning("Guard lookup failed for %s %s", kind.value, resource_id, exc_info=True)
        return False
    allowed = owner is not None and owner == organization_id
    if not allowed:
        logger.debug(
            "Denied %s %s for organization %s",
            kind.value,
            resource_id,
            organization_id,
            extra={"org_id": organization_id},
        )
    return allowed


async def require_in_org(
    session: AsyncSession,
    kind: ResourceKind,
    resource_id: UUID,
    organization_id: UUID,
    *,
    detail: str = "Forbidden",
) -> None:
    """Raise 403 unless the resource belongs to the organization.

    Parameters
    ----------
    session : AsyncSession
        Active database session.
    kind : ResourceKind
        Kind of resource.
    resource_id : UUID
        Resource identifier.
    organization_id : UUID
        Caller's organization.
    detail : str, default="Forbidden"
        Error message returned to the caller.

    Returns
    -------
    None
        Raises ``Forbidden`` on denial.
    """
    if not await authorize(session, kind, resource_id, organization_id):
        raise Forbidden(detail)
