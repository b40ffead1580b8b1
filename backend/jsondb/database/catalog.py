"""
Catalog of registered JSON databases.

One record per database name. A unique index on ``name`` makes
registration an atomic insert-if-absent, so two concurrent creates of the
same name cannot both succeed.
"""
import logging

from motor.motor_asyncio import AsyncIOMotorCollection
from pymongo import DESCENDING
from pymongo.errors import DuplicateKeyError, PyMongoError

from jsondb.core.errors import DatabaseExistsError, StorageError
from jsondb.database.store import ID_FIELD, storage_errors
from jsondb.models.database_record import DatabaseRecord
from jsondb.models.query_row import QueryRow

logger = logging.getLogger(__name__)

NAME_FIELD = "name"


class Catalog:
    """Durable record of registered database names."""

    def __init__(self, collection: AsyncIOMotorCollection):
        self.collection = collection
        self.indexes_ready = False

    async def ensure_indexes(self) -> None:
        """Create the unique name index."""
        with storage_errors():
            await self.collection.create_index(NAME_FIELD, unique=True)
        self.indexes_ready = True

    async def register(self, name: str, created_at: int) -> DatabaseRecord:
        """
        Append a DatabaseRecord.

        The unique name index is created first if startup did not manage
        to, so no record is written without it.

        Raises:
            DatabaseExistsError: If a record with this name already exists
            StorageError: If the index or the record cannot be written
        """
        if not self.indexes_ready:
            await self.ensure_indexes()

        record = DatabaseRecord(name=name, created=created_at)
        try:
            await self.collection.insert_one(record.model_dump())
        except DuplicateKeyError as e:
            raise DatabaseExistsError(name) from e
        except PyMongoError as e:
            raise StorageError(str(e)) from e
        logger.info(f"Registered database '{name}' in catalog")
        return record

    async def find_by_name(self, name: str) -> list[QueryRow]:
        """Exact-name lookup; zero or one rows."""
        with storage_errors():
            docs = await self.collection.find({NAME_FIELD: name}).to_list(length=None)
        return [self._to_row(doc) for doc in docs]

    async def contains(self, name: str) -> bool:
        return len(await self.find_by_name(name)) > 0

    async def list_all(self) -> list[QueryRow]:
        """All records, newest first."""
        with storage_errors():
            cursor = self.collection.find({}).sort(ID_FIELD, DESCENDING)
            docs = await cursor.to_list(length=None)
        return [self._to_row(doc) for doc in docs]

    @staticmethod
    def _to_row(doc: dict) -> QueryRow:
        return QueryRow(key=doc.get(NAME_FIELD), id=str(doc[ID_FIELD]), doc=doc)
