"""
JSON database service: catalog management and document CRUD/query.
"""
import logging
from typing import Any

from jsondb.context import AppContext
from jsondb.core.clock import now_ms
from jsondb.core.errors import DatabaseExistsError
from jsondb.database.store import CREATED_FIELD, DocumentStore
from jsondb.models.database_record import DatabaseRecord

logger = logging.getLogger(__name__)


class JsonDbService:
    """Service for database and document operations."""

    def __init__(self, context: AppContext):
        self.context = context
        self.catalog = context.catalog
        self.registry = context.registry

    # ==================== Databases ====================

    async def create_database(self, name: str) -> DatabaseRecord:
        """
        Create and register a new JSON database.

        Args:
            name: Database name

        Returns:
            The catalog record written

        Raises:
            DatabaseExistsError: If the name is already in the catalog
        """
        if await self.catalog.contains(name):
            raise DatabaseExistsError(name)

        await self.registry.resolve(name)
        record = await self.catalog.register(name, now_ms())
        self.context.registered_names.add(name)
        return record

    async def list_databases(self) -> list[str]:
        """Names of all registered databases, newest first."""
        rows = await self.catalog.list_all()
        return [row.doc["name"] for row in rows if row.doc and row.doc.get("name")]

    # ==================== Documents ====================

    async def save_doc(self, name: str, doc: dict[str, Any]) -> str:
        """Save a document, stamping ``created``. Returns the document id."""
        store = await self._resolve(name)
        doc_id = await store.put({**doc, CREATED_FIELD: now_ms()})
        logger.debug(f"Saved {doc_id} to '{name}'")
        return doc_id

    async def query_docs(self, name: str, sort_field: str) -> list[dict[str, Any]]:
        """All documents having ``sort_field``, ordered by it descending."""
        store = await self._resolve(name)
        rows = await store.query(sort_field, descending=True, include_docs=True)
        return [row.doc for row in rows]

    async def load_doc(self, name: str, doc_id: str) -> dict[str, Any]:
        """
        Load one document.

        Raises:
            DocumentNotFoundError: If no document has this id
        """
        store = await self._resolve(name)
        doc = await store.get(doc_id)
        logger.debug(f"Loaded {doc_id} from '{name}': {doc}")
        return doc

    async def delete_doc(self, name: str, doc_id: str) -> None:
        """Delete one document. Deleting a missing id is not an error."""
        store = await self._resolve(name)
        if not await store.delete(doc_id):
            logger.info(f"Delete of missing document {doc_id} in '{name}' ignored")

    # ==================== Helpers ====================

    async def _resolve(self, name: str) -> DocumentStore:
        """Resolve the handle for a CRUD operation, opening it if needed."""
        store = await self.registry.resolve(name)
        if self.context.settings.auto_register_on_write:
            await self._ensure_registered(name)
        return store

    async def _ensure_registered(self, name: str) -> None:
        if name in self.context.registered_names:
            return
        if not await self.catalog.contains(name):
            try:
                await self.catalog.register(name, now_ms())
            except DatabaseExistsError:
                # Registered concurrently
                pass
        self.context.registered_names.add(name)
