"""
Tests for meta API endpoints.

These tests cover the /api/v1/meta endpoints including:
- Get public configuration
- Root and health endpoints
"""

import pytest
from httpx import AsyncClient

from app.config import settings


@pytest.mark.api
class TestGetPublicConfig:
    """Tests for GET /api/v1/meta/config endpoint."""

    async def test_config_values_match_settings(self, client: AsyncClient):
        """Test that returned values match the settings from app.config."""
        response = await client.get("/api/v1/meta/config")
        assert response.status_code == 200

        data = response.json()
        assert data["login_path"] == settings.LOGIN_PATH
        assert data["login_prompt_message"] == settings.LOGIN_PROMPT_MESSAGE
        assert data["guard_session_cookie"] == settings.GUARD_SESSION_COOKIE
        assert data["default_blur_nsfw"] is settings.DEFAULT_BLUR_NSFW


@pytest.mark.api
class TestServiceEndpoints:
    """Tests for / and /health."""

    async def test_root(self, client: AsyncClient):
        response = await client.get("/")
        assert response.status_code == 200
        assert response.json()["name"] == settings.PROJECT_NAME

    async def test_health(self, client: AsyncClient):
        response = await client.get("/health")
        assert response.json() == {"status": "healthy"}

    async def test_request_id_echoed(self, client: AsyncClient):
        response = await client.get("/health", headers={"X-Request-ID": "abc"})
        assert response.headers["X-Request-ID"] == "abc"
