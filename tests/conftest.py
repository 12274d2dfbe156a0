"""
Global pytest fixtures for the Aka Platform test suite.

Responsibilities:
    - Provide a fresh FastAPI TestClient via the app factory for integration tests
    - Provide an isolated in-memory AliasStore for direct testing
    - Provide an AliasResolver configured with a known shared secret

Why an app factory?
    Using `create_app()` ensures each test gets fresh in-memory state,
    eliminating cross-test flakiness.
"""

import pytest
from fastapi.testclient import TestClient

from main import create_app
from aka_platform.config import Settings
from aka_platform.resolver.alias_resolver import AliasResolver
from aka_platform.storage.storage import AliasStore

SECRET = "s3cret-key"


@pytest.fixture
def settings() -> Settings:
    """Settings with a known shared secret and the in-memory backend."""
    return Settings(AUTHORIZATION_KEY=SECRET, STORAGE_BACKEND="memory")


@pytest.fixture
def storage() -> AliasStore:
    """Provide a fresh in-memory AliasStore."""
    return AliasStore()


@pytest.fixture
def resolver() -> AliasResolver:
    """Provide an AliasResolver expecting SECRET."""
    return AliasResolver(shared_secret=SECRET)


@pytest.fixture
def client(settings: Settings, storage: AliasStore) -> TestClient:
    """
    Provide a TestClient over a new app instance sharing the `storage` fixture.

    Notes:
        - Redirects are not followed so tests can assert on 302 + Location.
    """
    app = create_app(settings=settings, storage=storage)
    return TestClient(app, follow_redirects=False)


@pytest.fixture
def auth_headers() -> dict:
    return {"X-Authorization": SECRET}
