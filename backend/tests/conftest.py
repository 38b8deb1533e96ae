"""
Inkwell Backend: Test Configuration (conftest.py)
====================================================

Shared pytest fixtures.

Environment overrides are applied before anything from `inkwell` is
imported: settings, the engine and the credential singleton are all built
at import time.

Fixtures:
    store:           fresh InMemoryStore per test
    credentials:     CredentialService with the test settings (bcrypt rounds = 4)
    test_client:     httpx AsyncClient on the app, get_store overridden with `store`
    signup:          helper that registers a user over HTTP and returns its token
"""

import os

os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["JWT_SECRET"] = "test-secret-not-for-production-0123456789"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["FRONTEND_URL"] = "http://localhost:5173"
os.environ["API_PREFIX"] = "/api/v1"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from fakes import InMemoryStore
from inkwell.config import settings
from inkwell.repositories import get_store
from inkwell.services.credentials import CredentialService

API = "/api/v1"


@pytest.fixture
def store():
    return InMemoryStore()


@pytest.fixture
def credentials():
    return CredentialService(settings)


@pytest.fixture
def auth_header():
    def build(token: str) -> dict:
        return {"Authorization": f"Bearer {token}"}
    return build


@pytest_asyncio.fixture
async def test_client(store):
    """
    HTTPX AsyncClient talking to the app through ASGITransport.

    The lifespan does not run, so the engine is never disposed between tests.
    """
    from inkwell.main import app

    async def override_store():
        yield store

    app.dependency_overrides[get_store] = override_store
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture
def signup(test_client):
    """Register a user and return the bearer token from the response."""
    async def register(name: str, email: str = None, password: str = "p1-secret") -> str:
        response = await test_client.post(
            f"{API}/user/signup",
            json={"email": email or f"{name}@x.com", "name": name, "password": password},
        )
        assert response.status_code == 200, response.text
        return response.json()["token"]
    return register
