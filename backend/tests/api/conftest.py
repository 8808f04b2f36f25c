"""
Fixtures for API tests.

Each test gets its own application built around a container with fast,
credential-free fakes. Every client session gets its own FlakySessionStore,
kept in the ``stores`` dict by session ID.
"""

from typing import Optional

import pytest
from fastapi.testclient import TestClient

from api import create_app
from api.dependencies import ServiceContainer
from modules.descriptions.models import DescriptionRequest, GeneratedDescription

SESSION_COOKIE = "copywise_session"


class FakeDescriptionService:
    """Records requests and returns canned copy."""

    def __init__(self):
        self.requests: list[DescriptionRequest] = []

    async def generate(self, request: DescriptionRequest) -> GeneratedDescription:
        self.requests.append(request)
        return GeneratedDescription(description=f"All about {request.product_name}", model="fake")

    async def regenerate(self, previous_description: str, feedback: Optional[str] = None) -> GeneratedDescription:
        return GeneratedDescription(description=f"{previous_description} (revised)", model="fake")


@pytest.fixture
def descriptions() -> FakeDescriptionService:
    return FakeDescriptionService()


@pytest.fixture
def stores() -> dict:
    return {}


@pytest.fixture
def store_of(stores):
    """Look up the store behind a client's session cookie."""

    def lookup(client: TestClient):
        return stores[client.cookies.get(SESSION_COOKIE)]

    return lookup


@pytest.fixture
def container(settings, stores, make_store, identity, descriptions) -> ServiceContainer:
    return ServiceContainer(
        settings,
        store_factory=lambda session_id: stores.setdefault(session_id, make_store()),
        identity=identity,
        descriptions=descriptions,
    )


@pytest.fixture
def app(container):
    return create_app(container)


@pytest.fixture
def client(app):
    """Client with the lifespan run, so sessions are restored."""
    with TestClient(app) as client:
        yield client
