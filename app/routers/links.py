"""Tracked link routes."""

from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_session
from app.routers.dependencies import commit_session, guarded_id, json_body
from app.schemas.common import OkResponse
from app.schemas.links import LinkListResponse, LinkResponse, LinkUpdateRequest
from app.services.guard import ResourceKind
from app.services.links import delete_link, list_links, update_link
from app.services.tenancy import require_organization

router = APIRouter(prefix="/api/links", tags=["links"])

guarded_link = guarded_id(ResourceKind.LINK, "link_id")


@router.get("", response_model=LinkListResponse)
async def list_items(
    activation_id: UUID | None = None,
    organization_id: UUID = Depends(require_organization),
    session: AsyncSession = Depends(get_session),
) -> LinkListResponse:
    """List the organization's links, optionally for one activation."""
    links = await list_links(session, organization_id, activation_id)
    return LinkListResponse(links=[LinkResponse.model_validate(row) for row in links])


@router.patch("/{link_id}", response_model=OkResponse)
async def patch_link(
    link_id: UUID = Depends(guarded_link),
    payload: LinkUpdateRequest = Depends(json_body(LinkUpdateRequest)),
    session: AsyncSession = Depends(get_session),
) -> OkResponse:
    """Edit a link's description or destination."""
    await update_link(
        session,
        link_id,
        description=payload.description,
        redirect_url=payload.redirect_url,
    )
    await commit_session(session)
    return OkResponse()


@router.delete("/{link_id}", response_model=OkResponse)
async def remove_link(
    link_id: UUID = Depends(guarded_link),
    session: AsyncSession = Depends(get_session),
) -> OkResponse:
    """Delete a link."""
    await delete_link(session, link_id)
    await commit_session(session)
    return OkResponse()
