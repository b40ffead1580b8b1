"""
Global test fixtures for json-db-collection.

This module provides shared fixtures for all tests including:
- Mock MongoDB (mongomock-motor)
- Application context bound to the mock database
- Settings overrides
"""

import sys
from pathlib import Path

import pytest
import pytest_asyncio

# Add backend to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "backend"))


# =============================================================================
# Settings Fixtures
# =============================================================================

@pytest.fixture
def test_settings():
    """Settings pointing at a throwaway database name."""
    from jsondb.config import Settings

    return Settings(
        mongo_uri="mongodb://test:27017",
        mongo_database="json_db_test",
        catalog_collection="local_json_db_collection",
        collection_prefix="jsondb.",
        auto_register_on_write=False,
    )


# =============================================================================
# MongoDB Fixtures (mongomock-motor)
# =============================================================================

@pytest.fixture
def mock_mongo_client():
    """
    Create an async mock MongoDB client without an event loop.

    Use this one when the client is handed to a FastAPI TestClient.
    """
    try:
        from mongomock_motor import AsyncMongoMockClient
    except ImportError:
        pytest.skip("mongomock-motor not installed")
    client = AsyncMongoMockClient()
    yield client
    client.close()


@pytest_asyncio.fixture
async def mock_async_mongo_client():
    """
    Create an async mock MongoDB client using mongomock-motor.
    """
    try:
        from mongomock_motor import AsyncMongoMockClient
    except ImportError:
        pytest.skip("mongomock-motor not installed")
    client = AsyncMongoMockClient()
    yield client
    client.close()


@pytest_asyncio.fixture
async def mock_json_db(mock_async_mongo_client, test_settings):
    """Provide the mock MongoDB database holding the JSON databases."""
    yield mock_async_mongo_client[test_settings.mongo_database]


# =============================================================================
# Context Fixtures
# =============================================================================

@pytest_asyncio.fixture
async def app_context(mock_async_mongo_client, test_settings):
    """A fresh, started AppContext on the mock database."""
    from jsondb.context import build_context

    context = await build_context(mock_async_mongo_client, test_settings)
    yield context


@pytest_asyncio.fixture
async def auto_register_context(mock_async_mongo_client, test_settings):
    """AppContext with auto_register_on_write enabled."""
    from jsondb.context import build_context

    settings = test_settings.model_copy(update={"auto_register_on_write": True})
    context = await build_context(mock_async_mongo_client, settings)
    yield context


@pytest.fixture
def json_db_service(app_context):
    """JsonDbService bound to the fresh context."""
    from jsondb.services.json_db_service import JsonDbService

    return JsonDbService(app_context)


# =============================================================================
# Envelope Helpers
# =============================================================================

@pytest.fixture
def result_text():
    """Extract the single text item of a ToolResult."""
    def _text(result) -> str:
        assert len(result.content) == 1
        assert result.content[0].type == "text"
        return result.content[0].text
    return _text
