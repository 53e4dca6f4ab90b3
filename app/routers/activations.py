"""Activation routes."""

from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import get_settings
from app.database import get_session
from app.models.activation import Activation
from app.routers.dependencies import commit_session, guarded_id, json_body
from app.schemas.activations import (
    ActivationCreatedResponse,
    ActivationCreateRequest,
    ActivationDetailResponse,
    ActivationListResponse,
    ActivationResponse,
    ActivationSummary,
    ActivationUpdateRequest,
    DistrictCreatedResponse,
    DistrictCreateRequest,
    DistrictListResponse,
    DistrictResponse,
    GuidedCreateRequest,
    QuickCreateRequest,
    QuickCreateResponse,
    RedirectsUpdateRequest,
    StructureCreateRequest,
)
from app.schemas.common import OkResponse
from app.services.activations import (
    create_activation,
    create_district,
    create_guided,
    create_structure,
    delete_activation,
    list_activations,
    list_districts,
    quick_create,
    update_activation,
    update_redirects,
)
from app.services.guard import ResourceKind
from app.services.tenancy import optional_organization, require_organization

router = APIRouter(prefix="/api/activations", tags=["activations"])

guarded_activation = guarded_id(ResourceKind.ACTIVATION, "activation_id")


@router.get("/list", response_model=ActivationListResponse)
async def list_items(
    organization_id: UUID | None = Depends(optional_organization),
    session: AsyncSession = Depends(get_session),
) -> ActivationListResponse:
    """List the caller's activations; empty without an organization."""
    if organization_id is None:
        return ActivationListResponse(items=[])
    activations = await list_activations(session, organization_id)
    return ActivationListResponse(
        items=[ActivationSummary.model_validate(row) for row in activations]
    )


@router.post("", response_model=ActivationCreatedResponse)
async def create(
    organization_id: UUID = Depends(require_organization),
    payload: ActivationCreateRequest = Depends(json_body(ActivationCreateRequest)),
    session: AsyncSession = Depends(get_session),
) -> ActivationCreatedResponse:
    """Create an activation."""
    activation = await create_activation(
        session,
        organization_id=organization_id,
        name=payload.name,
        default_redirect_url=payload.default_redirect_url,
    )
    await commit_session(session)
    return ActivationCreatedResponse(
        activation=ActivationResponse.model_validate(activation)
    )


@router.post("/quick-create", response_model=QuickCreateResponse)
async def create_quick(
    organization_id: UUID = Depends(require_organization),
    payload: QuickCreateRequest = Depends(json_body(QuickCreateRequest)),
    session: AsyncSession = Depends(get_session),
) -> QuickCreateResponse:
    """Create an activation with zones, agents and their links."""
    activation = await quick_create(
        session,
        organization_id=organization_id,
        name=payload.name,
        redirect_url=payload.redirect_url,
        zone_count=payload.zones,
        agents_per_zone=payload.agents_per_zone,
        slug_length=get_settings().slug_length,
    )
    await commit_session(session)
    return QuickCreateResponse(activation_id=activation.id)


@router.post("/create-structure", response_model=QuickCreateResponse)
async def create_with_structure(
    organization_id: UUID = Depends(require_organization),
    payload: StructureCreateRequest = Depends(json_body(StructureCreateRequest)),
    session: AsyncSession = Depends(get_session),
) -> QuickCreateResponse:
    """Create an activation with named districts and zones."""
    activation = await create_structure(
        session,
        organization_id=organization_id,
        name=payload.name,
        default_redirect_url=payload.default_redirect_url,
        redirect_android_url=payload.redirect_android_url,
        redirect_ios_url=payload.redirect_ios_url,
        districts=[
            (district.name, [zone.name for zone in district.zones])
            for district in payload.districts
        ],
    )
    await commit_session(session)
    return QuickCreateResponse(activation_id=activation.id)


@router.post("/create-guided", response_model=QuickCreateResponse)
async def create_with_agents(
    organization_id: UUID = Depends(require_organization),
    payload: GuidedCreateRequest = Depends(json_body(GuidedCreateRequest)),
    session: AsyncSession = Depends(get_session),
) -> QuickCreateResponse:
    """Create an activation from named zones and their agents."""
    activation = await create_guided(
        session,
        organization_id=organization_id,
        name=payload.name,
        redirect_url=payload.redirect_url,
        zones=[(zone.name, zone.agents) for zone in payload.zones],
        slug_length=get_settings().slug_length,
    )
    await commit_session(session)
    return QuickCreateResponse(activation_id=activation.id)


@router.get("/{activation_id}", response_model=ActivationDetailResponse)
async def get_activation(
    activation_id: UUID = Depends(guarded_activation),
    session: AsyncSession = Depends(get_session),
) -> ActivationDetailResponse:
    """Return one activation."""
    activation = await session.get(Activation, activation_id)
    return ActivationDetailResponse(data=ActivationResponse.model_validate(activation))


@router.patch("/{activation_id}", response_model=OkResponse)
async def patch_activation(
    activation_id: UUID = Depends(guarded_activation),
    payload: ActivationUpdateRequest = Depends(json_body(ActivationUpdateRequest)),
    session: AsyncSession = Depends(get_session),
) -> OkResponse:
    """Edit name, status or default redirect."""
    await update_activation(
        session, activation_id, payload.model_dump(exclude_none=True)
    )
    await commit_session(session)
    return OkResponse()


@router.delete("/{activation_id}", response_model=OkResponse)
async def remove_activation(
    activation_id: UUID = Depends(guarded_activation),
    session: AsyncSession = Depends(get_session),
) -> OkResponse:
    """Delete an activation and its structure."""
    await delete_activation(session, activation_id)
    await commit_session(session)
    return OkResponse()


@router.patch("/{activation_id}/redirects", response_model=OkResponse)
async def patch_redirects(
    activation_id: UUID = Depends(guarded_activation),
    payload: RedirectsUpdateRequest = Depends(json_body(RedirectsUpdateRequest)),
    session: AsyncSession = Depends(get_session),
) -> OkResponse:
    """Update the activation's default and platform redirects."""
    await update_redirects(session, activation_id, payload.model_dump(exclude_unset=True))
    await commit_session(session)
    return OkResponse()


@router.get("/{activation_id}/districts", response_model=DistrictListResponse)
async def get_districts(
    activation_id: UUID = Depends(guarded_activation),
    session: AsyncSession = Depends(get_session),
) -> DistrictListResponse:
    """List the activation's districts."""
    districts = await list_districts(session, activation_id)
    return DistrictListResponse(
        districts=[DistrictResponse.model_validate(row) for row in districts]
    )


@router.post("/{activation_id}/districts", response_model=DistrictCreatedResponse)
async def post_district(
    activation_id: UUID = Depends(guarded_activation),
    payload: DistrictCreateRequest = Depends(json_body(DistrictCreateRequest)),
    session: AsyncSession = Depends(get_session),
) -> DistrictCreatedResponse:
    """Create a district under the activation."""
    district = await create_district(session, activation_id=activation_id, name=payload.name)
    await commit_session(session)
    return DistrictCreatedResponse(district=DistrictResponse.model_validate(district))
