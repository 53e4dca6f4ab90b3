"""FastAPI application factory."""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

import app.models  # noqa: F401
from app.config import get_settings
from app.database import Base, engine
from app.errors import INVALID_JSON_MESSAGE
from app.logging_config import configure_logging
from app.routers.activations import router as activations_router
from app.routers.agents import router as agents_router
from app.routers.auth import profile_router
from app.routers.auth import router as auth_router
from app.routers.districts import router as districts_router
from app.routers.links import router as links_router
from app.routers.organization import admin_router
from app.routers.organization import router as organization_router
from app.routers.public import router as public_router
from app.routers.zones import router as zones_router

settings = get_settings()
configure_logging(level=settings.log_level, json_format=settings.log_json)
logger = logging.getLogger(__name__)

REQUIRED_ERROR_TYPES = {"missing", "string_too_short", "too_short"}


@asynccontextmanager
async def lifespan(_: FastAPI) -> AsyncIterator[None]:
    """Initialize database schema on startup.

    Yields
    ------
    None
        Runs the application lifespan.
    """
    async with engine.begin() as connection:
        await connection.run_sync(Base.metadata.create_all)
    logger.info("%s started", settings.app_name)
    yield


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"ok": False, "error": message})


def validation_message(exc: RequestValidationError) -> str:
    """Describe the first validation failure as a short field message.

    Parameters
    ----------
    exc : RequestValidationError
        Validation failure raised by FastAPI.

    Returns
    -------
    str
        ``"Invalid JSON body"`` for unparsable bodies, ``"<field> required"``
        for missing or blank fields, ``"<field> must be a valid URL"`` for
        rejected URLs, otherwise ``"<field>: <reason>"``.
    """
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    error_type = first.get("type")
    if error_type == "json_invalid":
        return INVALID_JSON_MESSAGE
    parts = [str(part) for part in first.get("loc", ()) if part not in ("body", "query", "path")]
    field = ".".join(parts) or "body"
    if error_type in REQUIRED_ERROR_TYPES:
        return f"{field} required"
    if error_type == "url_invalid":
        return f"{field} must be a valid URL"
    return f"{field}: {first.get('msg', 'invalid')}"


app = FastAPI(title=settings.app_name, lifespan=lifespan)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(_: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render HTTP errors with the ``ok``/``error`` envelope."""
    return _error(exc.status_code, str(exc.detail))


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Render request validation failures as 400."""
    message = validation_message(exc)
    logger.debug("Validation error on %s %s: %s", request.method, request.url.path, message)
    return _error(status.HTTP_400_BAD_REQUEST, message)


@app.exception_handler(SQLAlchemyError)
async def store_exception_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    """Surface store failures as 400 with the driver message."""
    logger.warning("Store error on %s %s", request.method, request.url.path, exc_info=exc)
    orig = getattr(exc, "orig", None)
    return _error(status.HTTP_400_BAD_REQUEST, str(orig) if orig is not None else str(exc))


app.include_router(public_router)
app.include_router(auth_router)
app.include_router(profile_router)
app.include_router(organization_router)
app.include_router(admin_router)
app.include_router(activations_router)
app.include_router(districts_router)
app.include_router(zones_router)
app.include_router(agents_router)
app.include_router(links_router)
