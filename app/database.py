"""Database primitives."""

from collections.abc import AsyncGenerator

from sqlalchemy import MetaData, event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from app.config import get_settings

NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


class Base(DeclarativeBase):
    """Base declarative model class."""

    metadata = MetaData(naming_convention=NAMING_CONVENTION)


def build_engine(database_url: str) -> AsyncEngine:
    """Create an async engine; SQLite connections enforce foreign keys.

    Parameters
    ----------
    database_url : str
        SQLAlchemy async database URL.

    Returns
    -------
    AsyncEngine
        Configured engine.
    """
    async_engine = create_async_engine(database_url)
    if async_engine.dialect.name == "sqlite":

        @event.listens_for(async_engine.sync_engine, "connect")
        def _enable_foreign_keys(dbapi_connection, _record) -> None:
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    return async_engine


def build_session_factory(async_engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Return a session factory bound to an engine."""
    return async_sessionmaker(async_engine, expire_on_commit=False, class_=AsyncSession)


engine = build_engine(get_settings().database_url)
SessionLocal = build_session_factory(engine)


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """Yield a request-scoped database session.

    Yields
    ------
    AsyncSession
        Active async SQLAlchemy session; uncommitted work is rolled back
        when the request ends.
    """
    async with SessionLocal() as session:
        yield session
