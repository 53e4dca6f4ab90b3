"""Public short-link resolution."""

from __future__ import annotations

import logging
import re

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import get_settings
from app.models.activation import Activation
from app.models.link import STRATEGY_SINGLE, TrackedLink

logger = logging.getLogger(__name__)

_IOS_PATTERN = re.compile(r"iphone|ipad|ipod")


def detect_platform(user_agent: str | None) -> str | None:
    """Classify a user agent as ``android``, ``ios`` or neither.

    Parameters
    ----------
    user_agent : str | None
        Raw ``User-Agent`` header.

    Returns
    -------
    str | None
        Platform name, or ``None`` for anything else.
    """
    if not user_agent:
        return None
    lowered = user_agent.lower()
    if "android" in lowered:
        return "android"
    if _IOS_PATTERN.search(lowered):
        return "ios"
    return None


def pick_link_url(link: TrackedLink) -> str | None:
    """Select the URL a link's destination strategy points at."""
    if link.destination_strategy == STRATEGY_SINGLE:
        return link.single_url or None
    return link.fallback_url or None


async def _platform_override(
    session: AsyncSession, link: TrackedLink, platform: str
) -> str | None:
    activation = await session.get(Activation, link.activation_id)
    if activation is None:
        return None
    if platform == "android":
        return activation.redirect_android_url or None
    return activation.redirect_ios_url or None


async def resolve_destination(
    session: AsyncSession, slug: str, user_agent: str | None = None
) -> str:
    """Compute where a public slug should redirect.

    Parameters
    ----------
    session : AsyncSession
        Active database session.
    slug : str
        Public link token.
    user_agent : str | None, default=None
        Visitor ``User-Agent`` used for activation platform overrides.

    Returns
    -------
    str
        Destination URL. Unknown or inactive slugs, links without a usable
        URL and store failures resolve to the configured default destination.
    """
    default = get_settings().default_destination
    platform = detect_platform(user_agent)
    try:
        result = await session.execute(
            select(TrackedLink).where(
                TrackedLink.slug == slug,
                TrackedLink.is_active.is_(True),
            )
        )
        link = result.scalar_one_or_none()
        if link is None:
            logger.debug("No active link for slug %s", slug, extra={"slug": slug})
            return default
        if platform is not None and link.activation_id is not None:
            override = await _platform_override(session, link, platform)
            if override:
                return override
    except SQLAlchemyError:
        logger.warning(
            "Link lookup failed for slug %s", slug, exc_info=True, extra={"slug": slug}
        )
        return default

    return pick_link_url(link) or default
