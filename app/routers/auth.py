"""Authentication and profile routes."""

from uuid import UUID

from fastapi import APIRouter, Depends, Request, Response
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import get_settings
from app.database import get_session
from app.models.user import User
from app.routers.dependencies import commit_session, json_body
from app.schemas.auth import (
    LoginRequest,
    OrganizationSummary,
    PasswordUpdateRequest,
    ProfileData,
    ProfileResponse,
    ProfileUpdateRequest,
    SessionResponse,
    SignupRequest,
    UserResponse,
)
from app.schemas.common import OkResponse
from app.services.auth import (
    authenticate,
    change_password,
    end_session,
    register_user,
    require_user,
    start_session,
)
from app.services.organizations import load_profile, update_profile
from app.services.tenancy import optional_organization

router = APIRouter(prefix="/api/auth", tags=["auth"])
profile_router = APIRouter(prefix="/api/profile", tags=["auth"])


def _set_session_cookie(response: Response, token: str) -> None:
    settings = get_settings()
    response.set_cookie(
        settings.session_cookie_name,
        token,
        max_age=settings.session_ttl_seconds,
        httponly=True,
        secure=settings.session_cookie_secure,
        samesite="lax",
    )


@router.post("/signup", response_model=SessionResponse)
async def signup(
    payload: SignupRequest,
    response: Response,
    session: AsyncSession = Depends(get_session),
) -> SessionResponse:
    """Create an account and log it in."""
    user = await register_user(
        session,
        email=payload.email,
        password=payload.password,
        full_name=payload.full_name.strip(),
    )
    token = await start_session(session, user)
    await commit_session(session)
    _set_session_cookie(response, token)
    return SessionResponse(user=UserResponse.model_validate(user))


@router.post("/login", response_model=SessionResponse)
async def login(
    payload: LoginRequest,
    response: Response,
    session: AsyncSession = Depends(get_session),
) -> SessionResponse:
    """Exchange credentials for a session cookie."""
    user = await authenticate(session, email=payload.email, password=payload.password)
    token = await start_session(session, user)
    await commit_session(session)
    _set_session_cookie(response, token)
    return SessionResponse(user=UserResponse.model_validate(user))


@router.post("/logout", response_model=OkResponse)
async def logout(
    request: Request,
    response: Response,
    session: AsyncSession = Depends(get_session),
) -> OkResponse:
    """Revoke the current session and clear its cookie."""
    cookie_name = get_settings().session_cookie_name
    await end_session(session, request.cookies.get(cookie_name))
    await commit_session(session)
    response.delete_cookie(cookie_name)
    return OkResponse()


@router.post("/update-password", response_model=OkResponse)
async def update_password(
    user: User = Depends(require_user),
    payload: PasswordUpdateRequest = Depends(json_body(PasswordUpdateRequest)),
    session: AsyncSession = Depends(get_session),
) -> OkResponse:
    """Replace the caller's password."""
    await change_password(session, user=user, password=payload.password)
    await commit_session(session)
    return OkResponse()


@profile_router.get("", response_model=ProfileResponse)
async def get_profile(
    user: User = Depends(require_user),
    organization_id: UUID | None = Depends(optional_organization),
    session: AsyncSession = Depends(get_session),
) -> ProfileResponse:
    """Return the caller's profile and organization."""
    profile, organization = await load_profile(session, user, organization_id)
    return ProfileResponse(
        data=ProfileData(
            email=user.email,
            full_name=profile.full_name if profile is not None else "",
            organization=(
                OrganizationSummary.model_validate(organization)
                if organization is not None
                else None
            ),
        )
    )


@profile_router.patch("", response_model=OkResponse)
async def patch_profile(
    user: User = Depends(require_user),
    payload: ProfileUpdateRequest = Depends(json_body(ProfileUpdateRequest)),
    session: AsyncSession = Depends(get_session),
) -> OkResponse:
    """Update the caller's display name."""
    await update_profile(session, user, payload.full_name)
    await commit_session(session)
    return OkResponse()
