"""
Shared test fixtures and utilities.

This module provides common test infrastructure used across all test modules.
The application is wired through a ServiceContainer built on in-memory
stores and a fake OAuth provider, so no test talks to Supabase or Google.
"""

from urllib.parse import parse_qs, urlparse

import pytest
from fastapi.testclient import TestClient

from api.app import create_app
from api.dependencies import ServiceContainer, get_container, reset_container
from shared.config import Settings, get_settings
from shared.database import reset_client_cache

from tests.fakes import FakeOAuthProvider, InMemoryIdentityStore, InMemoryTaskStore
from modules.auth.session_store import InMemorySessionStore


TEST_SESSION_SECRET = "test-session-secret-for-testing-only"


def login(client: TestClient, oauth: FakeOAuthProvider, code: str = "good-code", **profile):
    """
    Run the full login handshake against the app.

    Registers ``code`` with the fake provider, starts the login to get a
    state cookie, then hits the callback. Returns the callback response.
    """
    oauth.register(code, **profile)
    start = client.get("/auth/login", follow_redirects=False)
    assert start.status_code == 302
    state = parse_qs(urlparse(start.headers["location"]).query)["state"][0]
    return client.get(
        "/auth/login/callback",
        params={"code": code, "state": state},
        follow_redirects=False,
    )


@pytest.fixture(autouse=True)
def reset_singletons():
    """Reset cached settings, clients and the container around each test."""
    get_settings.cache_clear()
    reset_client_cache()
    reset_container()
    yield
    get_settings.cache_clear()
    reset_client_cache()
    reset_container()


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        session_secret=TEST_SESSION_SECRET,
        google_client_id="test-client-id",
        google_client_secret="test-client-secret",
    )


@pytest.fixture
def identity_store() -> InMemoryIdentityStore:
    return InMemoryIdentityStore()


@pytest.fixture
def session_store() -> InMemorySessionStore:
    return InMemorySessionStore()


@pytest.fixture
def task_store() -> InMemoryTaskStore:
    return InMemoryTaskStore()


@pytest.fixture
def oauth() -> FakeOAuthProvider:
    return FakeOAuthProvider()


@pytest.fixture
def container(settings, identity_store, session_store, task_store, oauth) -> ServiceContainer:
    return ServiceContainer(
        settings=settings,
        accounts=identity_store,
        session_store=session_store,
        task_store=task_store,
        oauth=oauth,
    )


@pytest.fixture
def app(container):
    application = create_app()
    application.dependency_overrides[get_container] = lambda: container
    yield application
    application.dependency_overrides.clear()


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app)


@pytest.fixture
def auth_client(client, oauth) -> TestClient:
    """A client holding a valid session cookie for ada@example.com."""
    response = login(client, oauth)
    assert response.status_code == 302
    assert response.headers["location"] == "/dashboard"
    return client
