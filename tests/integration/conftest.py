"""
Integration Test Fixtures.

Fixtures for integration tests - uses a real database and the real
FastAPI application. These fixtures build on the root conftest.py
database fixtures.
"""

from collections.abc import AsyncGenerator, Generator
from typing import Any
from unittest.mock import MagicMock, patch

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from modules.notebook.core.database import get_db_session

TEST_JWT_SECRET = "test-secret-key-for-testing-only"


# =============================================================================
# Settings Fixtures
# =============================================================================


def _create_mock_settings() -> Any:
    """Create a mock settings object (no config/.env needed)."""
    settings = MagicMock()
    settings.db_password = "test"
    settings.jwt_secret = TEST_JWT_SECRET
    settings.gemini_api_key = ""
    return settings


@pytest.fixture
def mock_settings() -> Generator[Any, None, None]:
    """Patch secrets everywhere they are read."""
    settings = _create_mock_settings()
    with patch("modules.notebook.core.config.get_settings", return_value=settings), \
         patch("modules.notebook.core.security.get_settings", return_value=settings):
        yield settings


# =============================================================================
# API Client Fixtures
# =============================================================================


@pytest.fixture
def app(mock_settings: Any, db_session: AsyncSession) -> Generator[FastAPI, None, None]:
    """
    Create the application with the test database session.

    ASGITransport does not run the lifespan, so the database dependency
    is overridden and app.state.text_client starts out empty.
    """
    from modules.notebook.main import create_app

    async def override_get_db_session() -> AsyncGenerator[AsyncSession, None]:
        yield db_session

    application = create_app()
    application.dependency_overrides[get_db_session] = override_get_db_session
    application.state.text_client = None

    yield application

    application.dependency_overrides.clear()


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """
    Create a test client bound to the application.

    Usage:
        async def test_health_endpoint(client: AsyncClient):
            response = await client.get("/health")
            assert response.status_code == 200
    """
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as test_client:
        yield test_client


# =============================================================================
# Authentication Fixtures
# =============================================================================


def bearer_headers(owner: str) -> dict[str, str]:
    """Authorization header carrying a token for owner."""
    from modules.notebook.core.security import create_access_token

    token = create_access_token(data={"sub": owner})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def auth_headers(mock_settings: Any, owner_id: str) -> dict[str, str]:
    """
    Provide authentication headers for API requests.

    Usage:
        async def test_protected_endpoint(client: AsyncClient, auth_headers: dict):
            response = await client.get("/api/v1/notes", headers=auth_headers)
            assert response.status_code == 200
    """
    return bearer_headers(owner_id)


@pytest.fixture
def other_auth_headers(mock_settings: Any, other_owner_id: str) -> dict[str, str]:
    """Authentication headers for a second owner."""
    return bearer_headers(other_owner_id)


# =============================================================================
# Fakes
# =============================================================================


class FakeTextGenerator:
    """Stands in for TextGenerationClient; returns canned answers."""

    model = "fake-model"

    def __init__(self, answer: str = "- point one\n- point two") -> None:
        self.answer = answer
        self.prompts: list[str] = []
        self.healthy = True

    async def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        return self.answer

    async def is_healthy(self) -> bool:
        return self.healthy


@pytest.fixture
def fake_generator() -> FakeTextGenerator:
    return FakeTextGenerator()


# =============================================================================
# API Response Assertion Helpers
# =============================================================================


class ApiAssertions:
    """Helper class for API response assertions."""

    @staticmethod
    def assert_success(response: Any, expected_status: int = 200) -> dict[str, Any]:
        """Assert API response is successful and return its JSON."""
        assert response.status_code == expected_status, (
            f"Expected status {expected_status}, got {response.status_code}: "
            f"{response.text}"
        )
        data = response.json()
        assert data.get("success") is True, f"Response not successful: {data}"
        return data

    @staticmethod
    def assert_error(
        response: Any,
        expected_status: int,
        expected_code: str | None = None,
    ) -> dict[str, Any]:
        """Assert API response is an error envelope and return its JSON."""
        assert response.status_code == expected_status, (
            f"Expected status {expected_status}, got {response.status_code}: "
            f"{response.text}"
        )
        data = response.json()
        assert data.get("success") is False, f"Response should be error: {data}"
        assert data.get("error") is not None, f"Missing error details: {data}"

        if expected_code:
            actual_code = data["error"].get("code")
            assert actual_code == expected_code, (
                f"Expected error code {expected_code}, got {actual_code}"
            )

        return data

    @staticmethod
    def assert_validation_error(
        response: Any,
        field: str | None = None,
    ) -> dict[str, Any]:
        """Assert API response is a request validation error (422)."""
        data = ApiAssertions.assert_error(response, 422, "VAL_REQUEST_INVALID")

        if field:
            errors = data["error"].get("details", {}).get("validation_errors", [])
            fields = [e.get("field", "") for e in errors]
            assert any(field in f for f in fields), (
                f"Expected validation error for field '{field}', "
                f"got errors for: {fields}"
            )

        return data


@pytest.fixture
def api() -> ApiAssertions:
    """Provide API assertion helpers."""
    return ApiAssertions()
