"""ORM models."""

from app.models.activation import Activation, District, Zone
from app.models.agent import Agent
from app.models.link import TrackedLink
from app.models.organization import Organization
from app.models.user import Profile, User, UserSession

__all__ = [
    "Activation",
    "Agent",
    "District",
    "Organization",
    "Profile",
    "TrackedLink",
    "User",
    "UserSession",
    "Zone",
]
