"""District routes."""

from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_session
from app.routers.dependencies import commit_session, guarded_id, json_body
from app.schemas.activations import (
    DistrictCreatedResponse,
    DistrictCreateWithActivationRequest,
    DistrictResponse,
    DistrictUpdateRequest,
)
from app.schemas.common import OkResponse
from app.services.activations import create_district, delete_district, rename_district
from app.services.guard import ResourceKind, require_in_org
from app.services.tenancy import require_organization

router = APIRouter(prefix="/api/districts", tags=["districts"])

guarded_district = guarded_id(ResourceKind.DISTRICT, "district_id")


@router.post("", response_model=DistrictCreatedResponse)
async def create(
    organization_id: UUID = Depends(require_organization),
    payload: DistrictCreateWithActivationRequest = Depends(
        json_body(DistrictCreateWithActivationRequest)
    ),
    session: AsyncSession = Depends(get_session),
) -> DistrictCreatedResponse:
    """Create a district under the activation named in the body."""
    await require_in_org(
        session, ResourceKind.ACTIVATION, payload.activation_id, organization_id
    )
    district = await create_district(
        session, activation_id=payload.activation_id, name=payload.name
    )
    await commit_session(session)
    return DistrictCreatedResponse(district=DistrictResponse.model_validate(district))


@router.patch("/{district_id}", response_model=OkResponse)
async def patch_district(
    district_id: UUID = Depends(guarded_district),
    payload: DistrictUpdateRequest = Depends(json_body(DistrictUpdateRequest)),
    session: AsyncSession = Depends(get_session),
) -> OkResponse:
    """Rename a district."""
    await rename_district(session, district_id, payload.name)
    await commit_session(session)
    return OkResponse()


@router.delete("/{district_id}", response_model=OkResponse)
async def remove_district(
    district_id: UUID = Depends(guarded_district),
    session: AsyncSession = Depends(get_session),
) -> OkResponse:
    """Delete a district."""
    await delete_district(session, district_id)
    await commit_session(session)
    return OkResponse()
