"""
Database module - MongoDB connection, document stores, catalog and registry.
"""
from jsondb.database.connections import (
    get_mongo_client,
    close_connections,
    get_database,
)
from jsondb.database.catalog import Catalog
from jsondb.database.registry import DatabaseRegistry
from jsondb.database.store import DocumentStore

__all__ = [
    "get_mongo_client",
    "close_connections",
    "get_database",
    "Catalog",
    "DatabaseRegistry",
    "DocumentStore",
]
