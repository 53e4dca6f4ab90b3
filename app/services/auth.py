"""Session resolution and authentication."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone

from fastapi import Depends, Request
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import get_settings
from app.database import get_session
from app.errors import InvalidInput, Unauthenticated
from app.models.user import Profile, User, UserSession
from app.services.security import (
    generate_session_token,
    hash_secret,
    lookup_hash,
    verify_secret,
)

logger = logging.getLogger(__name__)


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


async def resolve_identity(session: AsyncSession, raw_token: str | None) -> User | None:
    """Resolve the user behind a raw session token.

    Parameters
    ----------
    session : AsyncSession
        Active database session.
    raw_token : str | None
        Token read from the session cookie.

    Returns
    -------
    User | None
        Authenticated user, or ``None`` when the token is absent, unknown,
        revoked or expired.
    """
    if not raw_token:
        return None
    result = await session.execute(
        select(UserSession).where(
            UserSession.token_lookup == lookup_hash(raw_token),
            UserSession.revoked_at.is_(None),
        )
    )
    for row in result.scalars().all():
        if not verify_secret(raw_token, row.token_hash):
            continue
        if _as_utc(row.expires_at) <= datetime.now(timezone.utc):
            return None
        return await session.get(User, row.user_id)
    return None


async def current_user(
    request: Request,
    session: AsyncSession = Depends(get_session),
) -> User | None:
    """Return the session user without enforcing authentication."""
    raw_token = request.cookies.get(get_settings().session_cookie_name)
    return await resolve_identity(session, raw_token)


async def require_user(user: User | None = Depends(current_user)) -> User:
    """Authenticate the caller.

    Parameters
    ----------
    user : User | None
        Session user, if any.

    Returns
    -------
    User
        Authenticated user row.
    """
    if user is None:
        raise Unauthenticated()
    return user


async def register_user(
    session: AsyncSession, *, email: str, password: str, full_name: str
) -> User:
    """Create an identity and its empty profile.

    Parameters
    ----------
    session : AsyncSession
        Active database session.
    email : str
        Login email, compared case-insensitively.
    password : str
        Raw password.
    full_name : str
        Display name stored on the profile.

    Returns
    -------
    User
        Persisted user row.
    """
    email = email.lower()
    existing = await session.execute(select(User.id).where(User.email == email))
    if existing.scalar_one_or_none() is not None:
        raise InvalidInput("Email already registered")
    user = User(email=email, password_hash=hash_secret(password))
    session.add(user)
    await session.flush()
    session.add(Profile(id=user.id, full_name=full_name))
    await session.flush()
    logger.info("Registered user %s", user.id, extra={"user_id": user.id})
    return user


async def authenticate(session: AsyncSession, *, email: str, password: str) -> User:
    """Check login credentials.

    Parameters
    ----------
    session : AsyncSession
        Active database session.
    email : str
        Login email.
    password : str
        Raw password.

    Returns
    -------
    User
        Matching user row.
    """
    result = await session.execute(select(User).where(User.email == email.lower()))
    user = result.scalar_one_or_none()
    if user is None or not verify_secret(password, user.password_hash):
        raise Unauthenticated("Invalid email or password")
    return user


async def change_password(session: AsyncSession, *, user: User, password: str) -> None:
    """Replace a user's password hash."""
    user.password_hash = hash_secret(password)
    await session.flush()


async def start_session(session: AsyncSession, user: User) -> str:
    """Issue a new login session.

    Parameters
    ----------
    session : AsyncSession
        Active database session.
    user : User
        Authenticated user.

    Returns
    -------
    str
        Raw session token to place in the cookie.
    """
    raw_token = generate_session_token()
    session.add(
        UserSession(
            user_id=user.id,
            token_hash=hash_secret(raw_token),
            token_lookup=lookup_hash(raw_token),
            expires_at=datetime.now(timezone.utc)
            + timedelta(seconds=get_settings().session_ttl_seconds),
        )
    )
    await session.flush()
    logger.info("Started session for user %s", user.id, extra={"user_id": user.id})
    return raw_token


async def end_session(session: AsyncSession, raw_token: str | None) -> None:
    """Revoke the session matching a raw token, if any."""
    if not raw_token:
        return
    result = await session.execute(
        select(UserSession).where(
            UserSession.token_lookup == lookup_hash(raw_token),
            UserSession.revoked_at.is_(None),
        )
    )
    for row in result.scalars().all():
        if verify_secret(raw_token, row.token_hash):
            row.revoked_at = datetime.now(timezone.utc)
            logger.info("Ended session for user %s", row.user_id)
    await session.flush()
