"""Organization schemas."""

from app.schemas.auth import OrganizationSummary
from app.schemas.common import Name, OkResponse, RequestModel


class OrganizationNameRequest(RequestModel):
    """Create or rename an organization."""

    name: Name


class OrganizationCreatedResponse(OkResponse):
    """Created organization envelope."""

    organization: OrganizationSummary


class OrganizationUpdatedResponse(OkResponse):
    """Renamed organization envelope."""

    name: str
