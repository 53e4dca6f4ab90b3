"""Authentication and profile schemas."""

from typing import Annotated
from uuid import UUID

from pydantic import Field, StringConstraints

from app.schemas.common import APIModel, Name, OkResponse, RequestModel

Email = Annotated[
    str,
    StringConstraints(
        strip_whitespace=True,
        to_lower=True,
        min_length=3,
        max_length=320,
        pattern=r"^[^@\s]+@[^@\s]+$",
    ),
]


class SignupRequest(RequestModel):
    """Create an account."""

    email: Email
    password: str = Field(min_length=8, max_length=256)
    full_name: str = Field(default="", max_length=255)


class LoginRequest(RequestModel):
    """Password login."""

    email: Email
    password: str = Field(min_length=1, max_length=256)


class PasswordUpdateRequest(RequestModel):
    """Replace the caller's password."""

    password: str = Field(min_length=8, max_length=256)


class ProfileUpdateRequest(RequestModel):
    """Profile fields a user may edit."""

    full_name: Name


class UserResponse(APIModel):
    """Public identity fields."""

    id: UUID
    email: str


class SessionResponse(OkResponse):
    """Result of signup or login."""

    user: UserResponse


class OrganizationSummary(APIModel):
    """Organization reference."""

    id: UUID
    name: str


class ProfileData(APIModel):
    """Profile payload."""

    email: str
    full_name: str
    organization: OrganizationSummary | None


class ProfileResponse(OkResponse):
    """Profile envelope."""

    data: ProfileData
