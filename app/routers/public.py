"""Public redirect routes."""

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import RedirectResponse
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_session
from app.services.redirects import resolve_destination

router = APIRouter(tags=["public"])


@router.get("/l/{slug}", name="resolve_link")
async def resolve_link(
    slug: str,
    request: Request,
    session: AsyncSession = Depends(get_session),
) -> RedirectResponse:
    """Redirect a visitor to the link's current destination.

    Always a temporary redirect so that destination edits apply immediately.
    """
    destination = await resolve_destination(
        session, slug, request.headers.get("user-agent")
    )
    return RedirectResponse(destination, status_code=status.HTTP_302_FOUND)


@router.get("/r/{slug}")
async def legacy_redirect(slug: str, request: Request) -> RedirectResponse:
    """Forward the legacy short path to ``/l/{slug}``."""
    return RedirectResponse(
        str(request.url_for("resolve_link", slug=slug)),
        status_code=status.HTTP_302_FOUND,
    )
