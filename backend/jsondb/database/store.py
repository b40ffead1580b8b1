"""
MongoDB-backed document store.

Each named JSON database is one collection inside the configured MongoDB
database. Documents keep a string ``_id``: generated from an ObjectId on
first put, or taken from the caller when the document already carries one.
"""
import logging
from contextlib import contextmanager
from typing import Any, Iterator, Optional

from bson import ObjectId
from bson.errors import InvalidDocument
from motor.motor_asyncio import AsyncIOMotorCollection, AsyncIOMotorDatabase
from pymongo import ASCENDING, DESCENDING
from pymongo.errors import PyMongoError

from jsondb.core.errors import DocumentNotFoundError, StorageError
from jsondb.models.query_row import QueryRow

logger = logging.getLogger(__name__)

ID_FIELD = "_id"
CREATED_FIELD = "created"


@contextmanager
def storage_errors() -> Iterator[None]:
    """Re-raise driver failures as StorageError, keeping the driver message."""
    try:
        yield
    except PyMongoError as e:
        raise StorageError(str(e)) from e


def collection_name(database_name: str, prefix: str) -> str:
    """MongoDB collection backing the JSON database ``database_name``."""
    return f"{prefix}{database_name}"


def field_value(doc: dict, dotted_key: str, default=None):
    """Read a (possibly dotted) field from a document."""
    cur: Any = doc
    for part in dotted_key.split("."):
        if isinstance(cur, dict) and part in cur:
            cur = cur[part]
        else:
            return default
    return cur


class DocumentStore:
    """Opened handle on one named JSON database."""

    def __init__(self, name: str, collection: AsyncIOMotorCollection):
        self.name = name
        self.collection = collection
        self._indexed_fields: set[str] = {ID_FIELD}

    @classmethod
    async def open(
        cls, db: AsyncIOMotorDatabase, name: str, prefix: str = ""
    ) -> "DocumentStore":
        """Open the store for ``name``, creating its base index if needed."""
        store = cls(name, db[collection_name(name, prefix)])
        await store.ensure_index(CREATED_FIELD)
        return store

    async def ensure_index(self, field: str) -> None:
        """Create a secondary index on ``field`` once per handle."""
        if field in self._indexed_fields:
            return
        try:
            await self.collection.create_index(field)
        except PyMongoError as e:
            # Index might already exist with different options
            logger.debug(f"Index on {self.name}.{field} not created: {e}")
        self._indexed_fields.add(field)

    async def put(self, doc: dict[str, Any]) -> str:
        """
        Write a document and return its identity.

        A document without ``_id`` gets a fresh one; a document with an
        ``_id`` replaces the stored document with that identity.

        Raises:
            StorageError: If the document cannot be encoded or written
        """
        doc_id = doc.get(ID_FIELD)
        doc_id = str(ObjectId()) if doc_id is None else str(doc_id)
        body = {**doc, ID_FIELD: doc_id}

        with storage_errors():
            try:
                await self.collection.replace_one({ID_FIELD: doc_id}, body, upsert=True)
            except (InvalidDocument, OverflowError, ValueError) as e:
                # Raised while encoding, before the driver talks to the server
                raise StorageError(f"Document cannot be stored: {e}") from e
        return doc_id

    async def get(self, doc_id: str) -> dict[str, Any]:
        """Fetch one document by identity."""
        with storage_errors():
            doc = await self.collection.find_one({ID_FIELD: doc_id})
        if doc is None:
            raise DocumentNotFoundError(doc_id)
        return doc

    async def delete(self, doc_id: str) -> bool:
        """Remove a document. Returns False when nothing was stored under the id."""
        with storage_errors():
            result = await self.collection.delete_one({ID_FIELD: doc_id})
        return result.deleted_count > 0

    async def query(
        self,
        field: str,
        descending: bool = False,
        include_docs: bool = True,
        limit: Optional[int] = None,
    ) -> list[QueryRow]:
        """
        Query documents ordered by ``field``.

        Only documents where ``field`` is present are returned; ties are
        ordered by ``_id`` in the same direction.

        Args:
            field: Field to sort by (dotted paths allowed)
            descending: Sort from highest to lowest
            include_docs: Attach the full document to each row
            limit: Maximum number of rows, None for all

        Returns:
            Ordered list of QueryRow
        """
        await self.ensure_index(field)

        direction = DESCENDING if descending else ASCENDING
        sort_keys = [(field, direction)]
        if field != ID_FIELD:
            sort_keys.append((ID_FIELD, direction))

        with storage_errors():
            cursor = self.collection.find({field: {"$exists": True}}).sort(sort_keys)
            if limit:
                cursor = cursor.limit(limit)
            docs = await cursor.to_list(length=None)

        return [
            QueryRow(
                key=field_value(doc, field),
                id=str(doc[ID_FIELD]),
                doc=doc if include_docs else None,
            )
            for doc in docs
        ]
