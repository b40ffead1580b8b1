"""
Application context owning the catalog and the database registry.

Created once per process (or per test) and passed to every operation
handler.
"""
import logging
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

from jsondb.config import Settings, get_settings
from jsondb.database.catalog import Catalog
from jsondb.database.registry import DatabaseRegistry
from jsondb.database.store import DocumentStore

logger = logging.getLogger(__name__)


class AppContext:
    """Process-wide state shared by the tool handlers."""

    def __init__(self, db: AsyncIOMotorDatabase, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()
        self.db = db
        self.catalog = Catalog(db[self.settings.catalog_collection])
        self.registry = DatabaseRegistry(self._open_store)
        # Names known to be in the catalog (auto_register_on_write only)
        self.registered_names: set[str] = set()

    async def _open_store(self, name: str) -> DocumentStore:
        return await DocumentStore.open(self.db, name, self.settings.collection_prefix)

    async def startup(self) -> None:
        """Prepare catalog indexes."""
        await self.catalog.ensure_indexes()
        logger.info(
            f"Catalog ready: {self.settings.catalog_collection}"
        )


async def build_context(
    client: AsyncIOMotorClient, settings: Optional[Settings] = None
) -> AppContext:
    """Create and start a context on ``client``."""
    settings = settings or get_settings()
    context = AppContext(client[settings.mongo_database], settings)
    await context.startup()
    return context
