"""Public redirect tests."""

import pytest
from sqlalchemy import text
from sqlalchemy.exc import OperationalError

from app.config import get_settings
from app.models import Activation, Organization, TrackedLink
from app.services.redirects import detect_platform, resolve_destination

IPHONE_UA = "Mozilla/5.0 (iPhone; CPU iPhone OS 17_0 like Mac OS X) AppleWebKit/605.1.15"
ANDROID_UA = "Mozilla/5.0 (Linux; Android 14; Pixel 8) AppleWebKit/537.36"


async def _link(db_session, **fields) -> TrackedLink:
    organization = Organization(name="Acme")
    db_session.add(organization)
    await db_session.flush()
    activation_fields = fields.pop("activation", None)
    activation_id = None
    if activation_fields is not None:
        activation = Activation(
            organization_id=organization.id, name="Launch", **activation_fields
        )
        db_session.add(activation)
        await db_session.flush()
        activation_id = activation.id
    link = TrackedLink(organization_id=organization.id, activation_id=activation_id, **fields)
    db_session.add(link)
    await db_session.commit()
    return link


class TestRedirectRoutes:
    """HTTP redirect behavior."""

    @pytest.mark.asyncio
    async def test_single_strategy_redirects_to_single_url(self, client, db_session) -> None:
        """Send an active single-strategy link to its single URL.

        Returns
        -------
        None
            Asserts a temporary redirect to the configured URL.
        """
        await _link(
            db_session,
            slug="promo1",
            is_active=True,
            destination_strategy="single",
            single_url="https://example.com/ios",
        )

        response = await client.get("/l/promo1")
        assert response.status_code == 302
        assert response.headers["location"] == "https://example.com/ios"

    @pytest.mark.asyncio
    async def test_fallback_strategy_redirects_to_fallback_url(
        self, client, db_session
    ) -> None:
        """Send any non-single strategy to the fallback URL.

        Returns
        -------
        None
            Asserts a temporary redirect to the fallback URL.
        """
        await _link(
            db_session,
            slug="promo1",
            destination_strategy="fallback",
            single_url="https://example.com/ios",
            fallback_url="https://example.com/android",
        )

        response = await client.get("/l/promo1")
        assert response.status_code == 302
        assert response.headers["location"] == "https://example.com/android"

    @pytest.mark.asyncio
    async def test_unknown_slug_goes_home(self, client) -> None:
        """Redirect an unknown slug to the site root.

        Returns
        -------
        None
            Asserts the default destination.
        """
        response = await client.get("/l/missing")
        assert response.status_code == 302
        assert response.headers["location"] == "/"

    @pytest.mark.asyncio
    async def test_inactive_and_empty_links_match_unknown_slug(
        self, client, db_session
    ) -> None:
        """Treat inactive links and links without a URL like unknown slugs.

        Returns
        -------
        None
            Asserts identical fallback destinations.
        """
        await _link(
            db_session,
            slug="paused",
            is_active=False,
            single_url="https://example.com/paused",
        )
        await _link(db_session, slug="blank", destination_strategy="single", single_url=None)
        await _link(db_session, slug="empty", destination_strategy="fallback", fallback_url="")

        locations = set()
        for slug in ("paused", "blank", "empty", "nope"):
            response = await client.get(f"/l/{slug}")
            assert response.status_code == 302
            locations.add(response.headers["location"])
        assert locations == {"/"}

    @pytest.mark.asyncio
    async def test_destination_edits_apply_immediately(self, client, register) -> None:
        """Never serve a cached destination after a link edit.

        Returns
        -------
        None
            Asserts the second visit follows the new URL.
        """
        headers = await register("lead@example.com", organization="Acme")
        created = await client.post(
            "/api/activations/quick-create",
            headers=headers,
            json={"name": "Launch", "redirect_url": "https://example.com/a"},
        )
        assert created.status_code == 200
        links = (await client.get("/api/links", headers=headers)).json()["links"]
        link = links[0]

        first = await client.get(f"/l/{link['slug']}")
        assert first.status_code == 302
        assert first.headers["location"] == "https://example.com/a"

        patched = await client.patch(
            f"/api/links/{link['id']}",
            headers=headers,
            json={"redirect_url": "https://example.com/b"},
        )
        assert patched.status_code == 200

        second = await client.get(f"/l/{link['slug']}")
        assert second.status_code == 302
        assert second.headers["location"] == "https://example.com/b"

    @pytest.mark.asyncio
    async def test_short_alias_forwards_to_link_route(self, client) -> None:
        """Forward ``/r/{slug}`` to ``/l/{slug}``.

        Returns
        -------
        None
            Asserts the alias redirect.
        """
        response = await client.get("/r/promo1")
        assert response.status_code == 302
        assert response.headers["location"].endswith("/l/promo1")

    @pytest.mark.asyncio
    async def test_platform_override_from_activation(self, client, db_session) -> None:
        """Prefer the activation's platform URL for matching devices.

        Returns
        -------
        None
            Asserts iOS, Android and desktop destinations.
        """
        await _link(
            db_session,
            slug="smart",
            single_url="https://example.com/web",
            activation={
                "redirect_ios_url": "https://apps.apple.com/app/acme",
                "redirect_android_url": "https://play.google.com/store/apps/acme",
            },
        )

        ios = await client.get("/l/smart", headers={"User-Agent": IPHONE_UA})
        android = await client.get("/l/smart", headers={"User-Agent": ANDROID_UA})
        desktop = await client.get("/l/smart", headers={"User-Agent": "curl/8.0"})
        assert ios.headers["location"] == "https://apps.apple.com/app/acme"
        assert android.headers["location"] == "https://play.google.com/store/apps/acme"
        assert desktop.headers["location"] == "https://example.com/web"
        assert {ios.status_code, android.status_code, desktop.status_code} == {302}

    @pytest.mark.asyncio
    async def test_store_failure_still_redirects(self, client, db_session) -> None:
        """Answer a temporary redirect home when the link store is unavailable.

        Returns
        -------
        None
            Asserts a 302 to the default destination instead of an error body.
        """
        await _link(
            db_session,
            slug="promo1",
            destination_strategy="single",
            single_url="https://example.com/ios",
        )
        await db_session.execute(text("DROP TABLE tracked_links"))
        await db_session.commit()

        response = await client.get("/l/promo1")
        assert response.status_code == 302
        assert response.headers["location"] == "/"


class TestResolveDestination:
    """Service-level resolution."""

    @pytest.mark.asyncio
    async def test_configured_default_destination(self, db_session, monkeypatch) -> None:
        """Use the configured default for unresolvable slugs.

        Returns
        -------
        None
            Asserts the settings-driven default.
        """
        monkeypatch.setenv("ACTIVATION_TRACKER_DEFAULT_DESTINATION", "https://acme.test/")
        get_settings.cache_clear()

        assert await resolve_destination(db_session, "nothing") == "https://acme.test/"

    @pytest.mark.asyncio
    async def test_override_lookup_failure_uses_default(
        self, db_session, monkeypatch
    ) -> None:
        """Fall back to the default when the activation lookup fails.

        Returns
        -------
        None
            Asserts the default destination.
        """
        await _link(
            db_session,
            slug="smart",
            single_url="https://example.com/web",
            activation={"redirect_ios_url": "https://apps.apple.com/app/acme"},
        )

        async def _broken(*args, **kwargs):
            raise OperationalError("SELECT", {}, Exception("database is locked"))

        monkeypatch.setattr(db_session, "get", _broken)
        assert await resolve_destination(db_session, "smart", IPHONE_UA) == "/"

    @pytest.mark.parametrize(
        ("user_agent", "expected"),
        [
            (IPHONE_UA, "ios"),
            ("Mozilla/5.0 (iPad; CPU OS 16_0 like Mac OS X)", "ios"),
            (ANDROID_UA, "android"),
            ("Mozilla/5.0 (Windows NT 10.0; Win64; x64)", None),
            (None, None),
        ],
    )
    def test_detect_platform(self, user_agent, expected) -> None:
        """Classify user agents.

        Returns
        -------
        None
            Asserts platform detection.
        """
        assert detect_platform(user_agent) == expected
