"""Activation and district schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import AliasChoices, Field

from app.schemas.common import (
    APIModel,
    Name,
    OkResponse,
    RequestModel,
    RequiredUrl,
    Text,
    Url,
)


class ActivationCreateRequest(RequestModel):
    """Create an activation."""

    name: Name
    default_redirect_url: Url | None = None


class ActivationUpdateRequest(RequestModel):
    """Editable activation fields."""

    name: Name | None = None
    default_redirect_url: Url | None = None
    status: str | None = Field(default=None, pattern="^(draft|live|paused|ended)$")


class RedirectsUpdateRequest(RequestModel):
    """Activation redirect configuration; blank overrides are cleared."""

    default_redirect_url: Url | None = None
    redirect_android_url: Url | None = None
    redirect_ios_url: Url | None = None


class QuickCreateRequest(RequestModel):
    """Create an activation with its default structure."""

    name: Name
    redirect_url: RequiredUrl
    zones: int = Field(default=1, ge=1, le=5)
    agents_per_zone: int = Field(
        default=1,
        ge=1,
        le=50,
        validation_alias=AliasChoices("agents_per_zone", "agentsPerZone"),
    )


class StructureZoneInput(RequestModel):
    """Zone to create inside a district."""

    name: Name


class StructureDistrictInput(RequestModel):
    """District to create, with its zones."""

    name: Name
    zones: list[StructureZoneInput] = Field(default_factory=list)


class StructureCreateRequest(RequestModel):
    """Create an activation with explicit districts and zones.

    Without districts a single ``Main District`` is created; a district
    without zones receives ``Zone 1``.
    """

    name: Name
    default_redirect_url: RequiredUrl
    redirect_android_url: Url | None = None
    redirect_ios_url: Url | None = None
    districts: list[StructureDistrictInput] = Field(default_factory=list)


class GuidedZoneInput(RequestModel):
    """Zone with the names of its agents; blank names are skipped."""

    name: Text = ""
    agents: list[Text] = Field(default_factory=list)


class GuidedCreateRequest(RequestModel):
    """Create an activation from named zones and agents."""

    name: Name
    redirect_url: RequiredUrl
    zones: list[GuidedZoneInput] = Field(min_length=1)


class ActivationSummary(APIModel):
    """Activation list item."""

    id: UUID
    name: str
    created_at: datetime


class ActivationResponse(APIModel):
    """Full activation record."""

    id: UUID
    organization_id: UUID
    name: str
    status: str
    default_redirect_url: str | None
    redirect_android_url: str | None
    redirect_ios_url: str | None
    created_at: datetime


class ActivationListResponse(OkResponse):
    """Activation list envelope."""

    items: list[ActivationSummary]


class ActivationCreatedResponse(OkResponse):
    """Created activation envelope."""

    activation: ActivationResponse


class ActivationDetailResponse(OkResponse):
    """Single activation envelope."""

    data: ActivationResponse


class QuickCreateResponse(OkResponse):
    """Quick-create result."""

    activation_id: UUID


class DistrictCreateRequest(RequestModel):
    """Create a district under the activation in the path."""

    name: Name


class DistrictCreateWithActivationRequest(RequestModel):
    """Create a district naming its activation in the body."""

    name: Name
    activation_id: UUID


class DistrictUpdateRequest(RequestModel):
    """Rename a district."""

    name: Name


class DistrictResponse(APIModel):
    """District record."""

    id: UUID
    name: str
    created_at: datetime


class DistrictListResponse(OkResponse):
    """District list envelope."""

    districts: list[DistrictResponse]


class DistrictCreatedResponse(OkResponse):
    """Created district envelope."""

    district: DistrictResponse
