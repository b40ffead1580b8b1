"""
Tests for the database catalog.

These tests cover:
- Registration and exact-name lookup
- Uniqueness enforced by the name index, created on first registration if needed
- Newest-first listing
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from pymongo.errors import ServerSelectionTimeoutError

from jsondb.core.errors import DatabaseExistsError, StorageError
from jsondb.database.catalog import Catalog


@pytest_asyncio.fixture
async def catalog(mock_json_db):
    catalog = Catalog(mock_json_db["local_json_db_collection"])
    await catalog.ensure_indexes()
    return catalog


class TestCatalogRegistration:
    """Tests for register and find_by_name."""

    @pytest.mark.asyncio
    async def test_register_returns_record(self, catalog):
        record = await catalog.register("A", 1700000000000)

        assert record.name == "A"
        assert record.created == 1700000000000

    @pytest.mark.asyncio
    async def test_find_by_name_exact_match(self, catalog):
        await catalog.register("A", 1)
        await catalog.register("AB", 2)

        rows = await catalog.find_by_name("A")

        assert len(rows) == 1
        assert rows[0].doc["name"] == "A"
        assert rows[0].doc["created"] == 1

    @pytest.mark.asyncio
    async def test_find_by_name_no_match(self, catalog):
        assert await catalog.find_by_name("missing") == []
        assert await catalog.contains("missing") is False

    @pytest.mark.asyncio
    async def test_duplicate_register_raises_conflict(self, catalog):
        await catalog.register("A", 1)

        with pytest.raises(DatabaseExistsError, match="Database already exists: A"):
            await catalog.register("A", 2)

        rows = await catalog.find_by_name("A")
        assert len(rows) == 1
        assert rows[0].doc["created"] == 1

    @pytest.mark.asyncio
    async def test_name_index_is_unique(self, catalog):
        indexes = await catalog.collection.index_information()

        name_indexes = [idx for idx in indexes.values() if idx["key"] == [("name", 1)]]
        assert len(name_indexes) == 1
        assert name_indexes[0].get("unique") is True


class TestCatalogIndexRetry:
    """Registration creates the name index when startup did not."""

    @pytest.mark.asyncio
    async def test_register_creates_missing_index(self, mock_json_db):
        catalog = Catalog(mock_json_db["local_json_db_collection"])
        assert catalog.indexes_ready is False

        await catalog.register("A", 1)

        assert catalog.indexes_ready is True
        with pytest.raises(DatabaseExistsError):
            await catalog.register("A", 2)
        assert len(await catalog.find_by_name("A")) == 1

    @pytest.mark.asyncio
    async def test_register_refused_when_index_cannot_be_created(self):
        collection = MagicMock()
        collection.create_index = AsyncMock(side_effect=ServerSelectionTimeoutError("no servers"))
        collection.insert_one = AsyncMock()
        catalog = Catalog(collection)

        with pytest.raises(StorageError, match="no servers"):
            await catalog.register("A", 1)

        collection.insert_one.assert_not_awaited()
        assert catalog.indexes_ready is False

    @pytest.mark.asyncio
    async def test_index_created_once(self):
        collection = MagicMock()
        collection.create_index = AsyncMock()
        collection.insert_one = AsyncMock()
        catalog = Catalog(collection)

        await catalog.register("A", 1)
        await catalog.register("B", 2)

        collection.create_index.assert_awaited_once_with("name", unique=True)
        assert collection.insert_one.await_count == 2


class TestCatalogListing:
    """Tests for list_all."""

    @pytest.mark.asyncio
    async def test_list_all_newest_first(self, catalog):
        for name in ("first", "second", "third"):
            await catalog.register(name, 1)

        rows = await catalog.list_all()

        assert [row.doc["name"] for row in rows] == ["third", "second", "first"]

    @pytest.mark.asyncio
    async def test_list_all_empty(self, catalog):
        assert await catalog.list_all() == []
