"""
MCP stdio server exposing the JSON database tools.

Usage:
    json-db-collection
    python -m jsondb

Client configuration:
    {
        "mcpServers": {
            "json-db-collection": {
                "command": "json-db-collection"
            }
        }
    }
"""
import asyncio
import logging
import sys

from mcp import types
from mcp.server import Server
from mcp.server.stdio import stdio_server

from jsondb.config import get_settings
from jsondb.context import AppContext, build_context
from jsondb.core.logging_config import configure_logging
from jsondb.database.connections import close_connections, get_mongo_client
from jsondb.services.tool_service import call_tool, list_tools

logger = logging.getLogger(__name__)


def create_server(context: AppContext) -> Server:
    """Build an MCP server bound to ``context``."""
    settings = context.settings
    server = Server(settings.server_name, version=settings.server_version)

    @server.list_tools()
    async def handle_list_tools() -> list[types.Tool]:
        return [
            types.Tool(
                name=tool.name,
                description=tool.description,
                inputSchema=tool.input_schema,
            )
            for tool in list_tools()
        ]

    # Arguments are validated by the tool's own model so that invalid input
    # gets the same error envelope as every other failure
    @server.call_tool(validate_input=False)
    async def handle_call_tool(name: str, arguments: dict | None) -> types.CallToolResult:
        result = await call_tool(context, name, arguments)
        return types.CallToolResult(
            content=[types.TextContent(type="text", text=item.text) for item in result.content],
            isError=result.is_error,
        )

    return server


async def serve() -> None:
    """Connect to MongoDB and serve MCP over stdio until the client disconnects."""
    settings = get_settings()
    try:
        client = await get_mongo_client()
        context = await build_context(client, settings)
        server = create_server(context)

        logger.info(f"Starting {settings.server_name} v{settings.server_version} on stdio")
        async with stdio_server() as (read_stream, write_stream):
            await server.run(read_stream, write_stream, server.create_initialization_options())
    finally:
        await close_connections()


def main() -> None:
    """Console entry point."""
    configure_logging()
    try:
        asyncio.run(serve())
    except KeyboardInterrupt:
        logger.info("Interrupted")
    except Exception as e:
        logger.exception(f"Server error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
