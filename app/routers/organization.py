"""Organization routes."""

from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_session
from app.models.user import User
from app.routers.dependencies import commit_session, json_body
from app.schemas.auth import OrganizationSummary
from app.schemas.common import OkResponse
from app.schemas.organization import (
    OrganizationCreatedResponse,
    OrganizationNameRequest,
    OrganizationUpdatedResponse,
)
from app.services.auth import require_user
from app.services.organizations import (
    create_organization,
    purge_demo_rows,
    rename_organization,
)
from app.services.tenancy import require_organization

router = APIRouter(prefix="/api/organization", tags=["organization"])
admin_router = APIRouter(prefix="/api/admin", tags=["organization"])


@router.post("/create", response_model=OrganizationCreatedResponse)
async def create(
    user: User = Depends(require_user),
    payload: OrganizationNameRequest = Depends(json_body(OrganizationNameRequest)),
    session: AsyncSession = Depends(get_session),
) -> OrganizationCreatedResponse:
    """Create an organization owned by the caller."""
    organization = await create_organization(session, user=user, name=payload.name)
    await commit_session(session)
    return OrganizationCreatedResponse(
        organization=OrganizationSummary.model_validate(organization)
    )


@router.patch("/update", response_model=OrganizationUpdatedResponse)
async def update(
    organization_id: UUID = Depends(require_organization),
    payload: OrganizationNameRequest = Depends(json_body(OrganizationNameRequest)),
    session: AsyncSession = Depends(get_session),
) -> OrganizationUpdatedResponse:
    """Rename the caller's organization."""
    organization = await rename_organization(session, organization_id, payload.name)
    await commit_session(session)
    return OrganizationUpdatedResponse(name=organization.name)


@admin_router.post("/purge-demo", response_model=OkResponse)
async def purge_demo(
    organization_id: UUID = Depends(require_organization),
    session: AsyncSession = Depends(get_session),
) -> OkResponse:
    """Delete the organization's ``Demo*`` and ``Sample*`` rows."""
    await purge_demo_rows(session, organization_id)
    await commit_session(session)
    return OkResponse()
