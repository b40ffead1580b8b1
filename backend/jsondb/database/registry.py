"""
In-process registry of opened JSON database handles.

Handles are opened on first use and kept for the process lifetime. Opening
is guarded by a lock per database name, so concurrent first uses of the
same name share one handle.
"""
import asyncio
import logging
from typing import Awaitable, Callable, Optional

from jsondb.database.store import DocumentStore

logger = logging.getLogger(__name__)

StoreOpener = Callable[[str], Awaitable[DocumentStore]]


class DatabaseRegistry:
    """Map of database name to opened DocumentStore."""

    def __init__(self, opener: StoreOpener):
        self._opener = opener
        self._handles: dict[str, DocumentStore] = {}
        self._locks: dict[str, asyncio.Lock] = {}

    async def resolve(self, name: str) -> DocumentStore:
        """Return the handle for ``name``, opening and installing it if absent."""
        handle = self._handles.get(name)
        if handle is not None:
            return handle

        lock = self._locks.setdefault(name, asyncio.Lock())
        async with lock:
            handle = self._handles.get(name)
            if handle is None:
                handle = await self._opener(name)
                self._handles[name] = handle
                logger.info(f"Opened JSON database '{name}'")
        return handle

    def get(self, name: str) -> Optional[DocumentStore]:
        return self._handles.get(name)

    def names(self) -> list[str]:
        return list(self._handles)

    def __contains__(self, name: str) -> bool:
        return name in self._handles

    def __len__(self) -> int:
        return len(self._handles)
