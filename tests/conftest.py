"""
Pytest configuration and shared fixtures.

This file provides common fixtures for all tests.
"""

import os

# Settings require SECRET_KEY; set it before anything imports app.config
os.environ.setdefault("SECRET_KEY", "test-secret-key-for-image-guard-tests")

from collections.abc import AsyncGenerator, Generator  # noqa: E402

import pytest  # noqa: E402
from fastapi import FastAPI  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from app.core.security import create_access_token  # noqa: E402
from app.core.sessions import SessionRegistry, get_session_registry  # noqa: E402
from app.main import app as main_app  # noqa: E402
from app.schemas.guard import ConnectionEntityType, ConnectionIdentity  # noqa: E402
from app.schemas.image import ImageDescriptor  # noqa: E402
from app.schemas.viewer import Viewer  # noqa: E402
from app.services.visibility_store import VisibilityStore  # noqa: E402


@pytest.fixture(scope="session")
def anyio_backend():
    """Use asyncio backend for async tests."""
    return "asyncio"


# =============================================================================
# Engine Fixtures
# =============================================================================


@pytest.fixture
def store() -> VisibilityStore:
    """A fresh, empty visibility store."""
    return VisibilityStore()


@pytest.fixture
def anonymous_viewer() -> Viewer:
    return Viewer.anonymous()


@pytest.fixture
def member_viewer() -> Viewer:
    """Signed-in viewer who blurs adult content."""
    return Viewer(authenticated=True, user_id=1, blur_nsfw=True)


@pytest.fixture
def no_blur_viewer() -> Viewer:
    """Signed-in viewer who chose not to blur adult content."""
    return Viewer(authenticated=True, user_id=2, blur_nsfw=False)


@pytest.fixture
def moderator_viewer() -> Viewer:
    """Moderator who chose not to blur adult content."""
    return Viewer(authenticated=True, user_id=3, blur_nsfw=False, is_moderator=True)


@pytest.fixture
def model_connection() -> ConnectionIdentity:
    return ConnectionIdentity(entity_type=ConnectionEntityType.model, entity_id=7)


@pytest.fixture
def adult_image() -> ImageDescriptor:
    return ImageDescriptor(id=42, nsfw=True, name="adult.png")


@pytest.fixture
def safe_image() -> ImageDescriptor:
    return ImageDescriptor(id=43, nsfw=False, name="safe.png")


# =============================================================================
# API Fixtures
# =============================================================================


@pytest.fixture
def session_registry() -> SessionRegistry:
    """Isolated session registry so tests never share reveal state."""
    return SessionRegistry(max_sessions=100)


@pytest.fixture
def app(session_registry: SessionRegistry) -> Generator[FastAPI, None, None]:
    """
    FastAPI app wired to the isolated session registry.
    """
    main_app.dependency_overrides[get_session_registry] = lambda: session_registry

    yield main_app

    main_app.dependency_overrides.clear()


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """
    Create async HTTP client for testing API endpoints.

    The client keeps cookies, so consecutive requests share one guard session.

    Usage:
        async def test_endpoint(client):
            response = await client.get("/api/v1/guard/state")
            assert response.status_code == 200
    """
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac


@pytest.fixture
def member_headers() -> dict[str, str]:
    """Authorization header for a signed-in viewer who blurs adult content."""
    return {"Authorization": f"Bearer {create_access_token(1, blur_nsfw=True)}"}


@pytest.fixture
def moderator_headers() -> dict[str, str]:
    """Authorization header for a moderator who does not blur adult content."""
    token = create_access_token(3, blur_nsfw=False, is_moderator=True)
    return {"Authorization": f"Bearer {token}"}
