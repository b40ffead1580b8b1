"""
Application configuration loaded from environment variables.
"""
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Server identity (reported to MCP clients)
    server_name: str = "json-db-collection"
    server_version: str = "0.0.1"

    # MongoDB
    mongo_uri: str = "mongodb://localhost:27017"
    mongo_database: str = "json_db_collection"
    mongo_server_selection_timeout_ms: int = 5000

    # Layout of the JSON databases inside mongo_database
    catalog_collection: str = "local_json_db_collection"
    collection_prefix: str = "jsondb."

    # Register databases reached only through save/query/load/delete
    auto_register_on_write: bool = False

    # Logging
    log_level: str = "INFO"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
