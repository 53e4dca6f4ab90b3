"""Seed a demo account, organization and activation through the HTTP API."""

from __future__ import annotations

import os
from dataclasses import dataclass

import anyio
import httpx


@dataclass(frozen=True, slots=True)
class DemoSeed:
    """Demo account definition.

    Attributes
    ----------
    email : str
        Login email for the demo user.
    password : str
        Login password for the demo user.
    organization : str
        Organization name created for the user.
    activation : str
        Name of the quick-created activation.
    redirect_url : str
        Destination for every generated link.
    zones : int
        Number of zones to generate.
    agents_per_zone : int
        Number of agents per zone.
    """

    email: str
    password: str
    organization: str = "Demo Organization"
    activation: str = "Demo Activation"
    redirect_url: str = "https://example.com"
    zones: int = 2
    agents_per_zone: int = 2


async def ensure_session(client: httpx.AsyncClient, seed: DemoSeed) -> None:
    """Sign up the demo user, or log in when the email already exists.

    Parameters
    ----------
    client : httpx.AsyncClient
        API client; keeps the session cookie.
    seed : DemoSeed
        Demo definition.

    Returns
    -------
    None
        Leaves an authenticated session cookie on the client.
    """
    credentials = {"email": seed.email, "password": seed.password}
    response = await client.post("/api/auth/signup", json=credentials)
    if response.status_code == 400:
        response = await client.post("/api/auth/login", json=credentials)
    response.raise_for_status()


async def ensure_organization(client: httpx.AsyncClient, seed: DemoSeed) -> str:
    """Return the caller's organization name, creating one when missing."""
    response = await client.get("/api/profile")
    response.raise_for_status()
    organization = response.json()["data"]["organization"]
    if organization:
        return organization["name"]

    response = await client.post(
        "/api/organization/create", json={"name": seed.organization}
    )
    response.raise_for_status()
    return response.json()["organization"]["name"]


async def create_activation(client: httpx.AsyncClient, seed: DemoSeed) -> list[str]:
    """Quick-create the demo activation and return its link slugs.

    Parameters
    ----------
    client : httpx.AsyncClient
        Authenticated API client.
    seed : DemoSeed
        Demo definition.

    Returns
    -------
    list[str]
        Slugs of the generated links.
    """
    response = await client.post(
        "/api/activations/quick-create",
        json={
            "name": seed.activation,
            "redirect_url": seed.redirect_url,
            "zones": seed.zones,
            "agents_per_zone": seed.agents_per_zone,
        },
    )
    response.raise_for_status()
    activation_id = response.json()["activation_id"]

    response = await client.get("/api/links", params={"activation_id": activation_id})
    response.raise_for_status()
    return [link["slug"] for link in response.json()["links"]]


async def main() -> None:
    """Seed the demo data and print the generated link paths.

    Returns
    -------
    None
        Prints a short summary.
    """
    base_url = os.environ.get("ACTIVATION_TRACKER_BASE_URL", "http://127.0.0.1:8000")
    seed = DemoSeed(
        email=os.environ.get("ACTIVATION_TRACKER_DEMO_EMAIL", "demo@example.com"),
        password=os.environ.get("ACTIVATION_TRACKER_DEMO_PASSWORD", "demo-password-123"),
    )
    async with httpx.AsyncClient(base_url=base_url, timeout=10.0) as client:
        await ensure_session(client, seed)
        organization = await ensure_organization(client, seed)
        slugs = await create_activation(client, seed)
    print(f"seeded {seed.activation} for {organization}")
    for slug in slugs:
        print(f"  {base_url}/l/{slug}")


if __name__ == "__main__":
    anyio.run(main)
