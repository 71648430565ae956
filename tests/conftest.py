"""Shared pytest fixtures for Portal client tests."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from typing import Any

import httpx
import pytest

from portal.core.api.management.client import PortalClient
from tests.fixtures.fake_portal import FakePortal

TOKEN = "secret"

# ============================================================================
# Environment Fixtures
# ============================================================================


@pytest.fixture(autouse=True)
def clean_portal_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep PORTAL_* variables from the developer's shell out of tests."""
    monkeypatch.delenv("PORTAL_HOST", raising=False)
    monkeypatch.delenv("PORTAL_TOKEN", raising=False)


# ============================================================================
# Fake Server Fixtures
# ============================================================================


@pytest.fixture
def fake_portal() -> FakePortal:
    """Create a stateful in-memory Portal server."""
    return FakePortal(token=TOKEN)


@pytest.fixture
def portal(fake_portal: FakePortal) -> Iterator[PortalClient]:
    """PortalClient wired to the fake server."""
    with PortalClient("127.0.0.1", TOKEN, transport=fake_portal.transport) as client:
        yield client


@pytest.fixture
def respond() -> Iterator[Callable[..., tuple[PortalClient, list[httpx.Request]]]]:
    """Build a client whose server answers every request with one canned response.

    Returns:
        Factory taking (status, json=..., content=...) and returning
        (client, recorded requests)
    """
    clients: list[PortalClient] = []

    def factory(
        status: int, *, json: Any = None, content: bytes | str | None = None
    ) -> tuple[PortalClient, list[httpx.Request]]:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            if content is not None:
                return httpx.Response(status, content=content)
            return httpx.Response(status, json=json)

        client = PortalClient("127.0.0.1", TOKEN, transport=httpx.MockTransport(handler))
        clients.append(client)
        return client, seen

    yield factory

    for client in clients:
        client.close()
