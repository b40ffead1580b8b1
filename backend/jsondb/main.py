"""
json-db-collection HTTP API - FastAPI Application

Serves the JSON database tools over HTTP, next to the MCP stdio server.
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from jsondb.config import get_settings
from jsondb.context import AppContext
from jsondb.core.logging_config import configure_logging
from jsondb.database.connections import get_mongo_client, close_connections
from jsondb.routers import health, tools

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    Startup:
    - Initialize the database connection
    - Create the application context and catalog indexes

    Shutdown:
    - Close the database connection
    """
    configure_logging()
    settings = get_settings()
    logger.info(f"Starting up {settings.server_name} API...")

    client = await get_mongo_client()
    context = AppContext(client[settings.mongo_database], settings)
    try:
        await context.startup()
        logger.info("Catalog indexes created")
    except Exception as e:
        logger.warning(f"Catalog indexes not created, retrying on first registration: {e}")
    app.state.context = context

    yield

    logger.info(f"Shutting down {settings.server_name} API...")
    app.state.context = None
    await close_connections()
    logger.info("Database connections closed")


settings = get_settings()

app = FastAPI(
    title="json-db-collection API",
    description="""
## JSON document database collection

Create named JSON document databases and save, query, load and delete
documents in them.

### Tools
- `GET /tools` lists the tools and their input schemas
- `POST /tools/{name}` calls a tool with a JSON object of arguments

Every call answers with `{"content": [{"type": "text", "text": ...}], "isError": ...}`.
    """,
    version=settings.server_version,
    lifespan=lifespan,
)

app.include_router(health.router)
app.include_router(tools.router)


@app.get("/", tags=["Root"])
async def root():
    """Root endpoint with API information."""
    return {
        "name": settings.server_name,
        "version": settings.server_version,
        "docs": "/docs",
        "health": "/health",
        "tools": "/tools",
    }
