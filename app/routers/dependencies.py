"""Shared router helpers."""

from collections.abc import Awaitable, Callable
from typing import TypeVar
from uuid import UUID

from fastapi import Depends, Request
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_session
from app.errors import INVALID_JSON_MESSAGE, Forbidden, InvalidInput
from app.schemas.common import RequestModel
from app.services.guard import ResourceKind, require_in_org
from app.services.tenancy import require_organization

RequestT = TypeVar("RequestT", bound=RequestModel)


async def commit_session(session: AsyncSession) -> None:
    """Commit the current transaction.

    Parameters
    ----------
    session : AsyncSession
        Active database session.

    Returns
    -------
    None
        Commits current transaction.
    """
    await session.commit()


def guarded_id(
    kind: ResourceKind, path_param: str
) -> Callable[..., Awaitable[UUID]]:
    """Build a dependency that authorizes a path identifier.

    The dependency runs after session and organization resolution and before
    the request body is validated. Malformed identifiers are denied like
    missing rows.

    Parameters
    ----------
    kind : ResourceKind
        Kind of resource named by the path parameter.
    path_param : str
        Name of the path parameter holding the identifier.

    Returns
    -------
    Callable[..., Awaitable[UUID]]
        FastAPI dependency returning the authorized identifier.
    """

    async def dependency(
        request: Request,
        organization_id: UUID = Depends(require_organization),
        session: AsyncSession = Depends(get_session),
    ) -> UUID:
        try:
            resource_id = UUID(request.path_params[path_param])
        except (KeyError, ValueError):
            raise Forbidden() from None
        await require_in_org(session, kind, resource_id, organization_id)
        return resource_id

    return dependency


def json_body(model: type[RequestT]) -> Callable[[Request], Awaitable[RequestT]]:
    """Build a dependency that parses the JSON request body into ``model``.

    Declared after the session, organization and guard dependencies of a
    route, the body is only read once those checks have passed, so a
    malformed body never masks a 401, 400 or 403 answer.

    Parameters
    ----------
    model : type[RequestT]
        Request schema to validate against.

    Returns
    -------
    Callable[[Request], Awaitable[RequestT]]
        FastAPI dependency returning the validated body.
    """

    async def dependency(request: Request) -> RequestT:
        try:
            raw = await request.json()
        except ValueError:
            raise InvalidInput(INVALID_JSON_MESSAGE) from None
        try:
            return model.model_validate(raw)
        except ValidationError as exc:
            raise RequestValidationError(exc.errors(include_url=False), body=raw) from None

    return dependency
