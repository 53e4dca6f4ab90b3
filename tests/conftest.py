"""Pytest fixtures."""

from collections.abc import AsyncIterator, Awaitable, Callable, Iterator
from pathlib import Path

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.config import get_settings
from app.database import Base, build_engine, build_session_factory, get_session
from app.main import app

PASSWORD = "correct-horse-battery"

Register = Callable[..., Awaitable[dict[str, str]]]


@pytest.fixture(autouse=True)
def _clear_settings_cache() -> Iterator[None]:
    """Reset cached settings around each test.

    Yields
    ------
    None
        Clears the settings cache before and after the test.
    """
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture()
async def session_factory(tmp_path: Path) -> AsyncIterator[async_sessionmaker[AsyncSession]]:
    """Create a fresh SQLite schema for one test.

    Parameters
    ----------
    tmp_path : Path
        Temporary directory for test database.

    Yields
    ------
    async_sessionmaker[AsyncSession]
        Session factory bound to the test database.
    """
    engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    async with engine.begin() as connection:
        await connection.run_sync(Base.metadata.create_all)
    yield build_session_factory(engine)
    await engine.dispose()


@pytest.fixture()
async def db_session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncIterator[AsyncSession]:
    """Yield a session for direct store access in tests."""
    async with session_factory() as session:
        yield session


@pytest.fixture()
async def client(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncIterator[AsyncClient]:
    """Create a test HTTP client backed by the test database.

    Parameters
    ----------
    session_factory : async_sessionmaker[AsyncSession]
        Factory for the test database.

    Yields
    ------
    AsyncClient
        Configured test client.
    """

    async def _override_session() -> AsyncIterator[AsyncSession]:
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_session] = _override_session
    transport = ASGITransport(app=app)
    async with AsyncClient(
        transport=transport,
        base_url="http://testserver",
    ) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture()
def register(client: AsyncClient) -> Register:
    """Return a helper that signs up a user and returns auth headers.

    Parameters
    ----------
    client : AsyncClient
        Test HTTP client.

    Returns
    -------
    Register
        ``await register(email, organization=None)`` returning request headers
        carrying the session cookie. When ``organization`` is given, the user
        also creates and joins that organization.
    """

    async def _register(email: str, *, organization: str | None = None) -> dict[str, str]:
        response = await client.post(
            "/api/auth/signup",
            json={"email": email, "password": PASSWORD, "full_name": "Field Lead"},
        )
        assert response.status_code == 200, response.text
        cookie_name = get_settings().session_cookie_name
        headers = {"Cookie": f"{cookie_name}={response.cookies[cookie_name]}"}
        client.cookies.clear()
        if organization is not None:
            created = await client.post(
                "/api/organization/create",
                headers=headers,
                json={"name": organization},
            )
            assert created.status_code == 200, created.text
        return headers

    return _register
