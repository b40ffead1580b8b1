"""
Backend-specific test fixtures and configuration.

These fixtures extend the global fixtures with helpers for testing the
FastAPI routes and the MCP server.
"""

import sys
from pathlib import Path
from unittest.mock import patch

import pytest

# Add backend to path
sys.path.insert(0, str(Path(__file__).parent.parent.parent / "backend"))


# =============================================================================
# App Override Helpers
# =============================================================================

@pytest.fixture
def app_with_mocks(mock_mongo_client, test_settings):
    """
    FastAPI app whose lifespan connects to the mock MongoDB client.
    """
    async def get_mongo():
        return mock_mongo_client

    with patch("jsondb.main.get_mongo_client", side_effect=get_mongo), \
         patch("jsondb.main.get_settings", return_value=test_settings):
        from jsondb.main import app
        yield app


@pytest.fixture
def client_with_mocks(app_with_mocks):
    """TestClient using the mocked app (runs the lifespan)."""
    from fastapi.testclient import TestClient

    with TestClient(app_with_mocks) as c:
        yield c


@pytest.fixture
def client():
    """TestClient without lifespan, for routes that need no database."""
    from fastapi.testclient import TestClient
    from jsondb.main import app

    return TestClient(app)


@pytest.fixture
def call_tool_http(client_with_mocks):
    """POST a tool call and return the decoded envelope."""
    def _call(name: str, arguments=None) -> dict:
        response = client_with_mocks.post(f"/tools/{name}", json=arguments)
        assert response.status_code == 200
        return response.json()
    return _call
