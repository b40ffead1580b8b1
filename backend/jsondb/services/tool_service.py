"""
Tool catalog and dispatcher.

Every tool validates its arguments against a pydantic model, runs one
JsonDbService operation and returns a ToolResult. No exception leaves
``call_tool``: failures become ``isError`` results with an
``"Error: <message>"`` text item.
"""
import json
import logging
from collections.abc import Mapping
from typing import Any, Awaitable, Callable, NamedTuple, Type

from pydantic import ValidationError

from jsondb.context import AppContext
from jsondb.core.errors import (
    ArgumentValidationError,
    DatabaseExistsError,
    DocumentNotFoundError,
    JsonDbError,
    UnknownToolError,
)
from jsondb.schemas.tools import (
    CreateDatabaseArgs,
    DeleteDocArgs,
    ListDatabasesArgs,
    LoadDocArgs,
    QueryDocsArgs,
    SaveDocArgs,
    ToolArgs,
    ToolDefinition,
    ToolResult,
)
from jsondb.services.json_db_service import JsonDbService

logger = logging.getLogger(__name__)


def _to_json(data: Any) -> str:
    return json.dumps(data, default=str)


# ==================== Handlers ====================


async def _create_database(service: JsonDbService, args: CreateDatabaseArgs) -> str:
    await service.create_database(args.database_name)
    return f"Created JSON document database: {args.database_name}"


async def _list_databases(service: JsonDbService, args: ListDatabasesArgs) -> str:
    return _to_json(await service.list_databases())


async def _save_doc(service: JsonDbService, args: SaveDocArgs) -> str:
    doc_id = await service.save_doc(args.database_name, args.doc)
    return f"Saved document with ID: {doc_id} to database: {args.database_name}"


async def _query_docs(service: JsonDbService, args: QueryDocsArgs) -> str:
    return _to_json(await service.query_docs(args.database_name, args.sort_field))


async def _load_doc(service: JsonDbService, args: LoadDocArgs) -> str:
    return _to_json(await service.load_doc(args.database_name, args.id))


async def _delete_doc(service: JsonDbService, args: DeleteDocArgs) -> str:
    await service.delete_doc(args.database_name, args.id)
    return f"Deleted document with ID: {args.id}"


class Tool(NamedTuple):
    name: str
    description: str
    args_model: Type[ToolArgs]
    handler: Callable[[JsonDbService, Any], Awaitable[str]]


TOOLS: dict[str, Tool] = {
    tool.name: tool
    for tool in (
        Tool(
            "create_json_doc_database",
            "Create a JSON document database",
            CreateDatabaseArgs,
            _create_database,
        ),
        Tool(
            "list_json_doc_databases",
            "Returns the list of JSON document databases. "
            "Use this to understand which databases are available before trying to access JSON documents.",
            ListDatabasesArgs,
            _list_databases,
        ),
        Tool(
            "save_json_doc_to_db",
            "Save a JSON document to a document database",
            SaveDocArgs,
            _save_doc,
        ),
        Tool(
            "query_json_docs_from_db",
            "Query JSON documents sorted by a field from a document database. "
            "If no sortField is provided, use the _id field.",
            QueryDocsArgs,
            _query_docs,
        ),
        Tool(
            "load_json_doc_from_db",
            "Load a JSON document by ID from a document database",
            LoadDocArgs,
            _load_doc,
        ),
        Tool(
            "delete_json_doc_from_db",
            "Delete a JSON document by ID from a document database",
            DeleteDocArgs,
            _delete_doc,
        ),
    )
}


# ==================== Catalog ====================


def input_schema(args_model: Type[ToolArgs]) -> dict[str, Any]:
    """JSON Schema of a tool's arguments, as published to clients."""
    schema = args_model.model_json_schema(by_alias=True)
    schema.setdefault("properties", {})
    schema.setdefault("required", [])
    return schema


def list_tools() -> list[ToolDefinition]:
    """Definitions of every available tool."""
    return [
        ToolDefinition(
            name=tool.name,
            description=tool.description,
            input_schema=input_schema(tool.args_model),
        )
        for tool in TOOLS.values()
    ]


# ==================== Dispatch ====================


def _format_validation_error(tool_name: str, error: ValidationError) -> str:
    details = "; ".join(
        f"{'.'.join(str(p) for p in err['loc']) or 'arguments'}: {err['msg']}"
        for err in error.errors()
    )
    return f"Invalid arguments for {tool_name}: {details}"


def parse_arguments(tool: Tool, arguments: Any) -> ToolArgs:
    """
    Validate raw arguments against the tool's model.

    Raises:
        ArgumentValidationError: If the arguments are not an object or do not match
    """
    if arguments is None:
        arguments = {}
    if not isinstance(arguments, Mapping):
        raise ArgumentValidationError(
            f"Invalid arguments for {tool.name}: arguments: "
            f"expected a JSON object, got {type(arguments).__name__}"
        )
    try:
        return tool.args_model.model_validate(dict(arguments))
    except ValidationError as e:
        raise ArgumentValidationError(_format_validation_error(tool.name, e)) from e


async def call_tool(context: AppContext, name: str, arguments: Any = None) -> ToolResult:
    """
    Run a tool by name.

    Args:
        context: Application context
        name: Tool name
        arguments: Raw tool arguments, expected to be a JSON object

    Returns:
        ToolResult; ``is_error`` is set on any failure
    """
    try:
        tool = TOOLS.get(name)
        if tool is None:
            raise UnknownToolError(name)
        args = parse_arguments(tool, arguments)
        text = await tool.handler(JsonDbService(context), args)
        return ToolResult.text(text)
    except (ArgumentValidationError, UnknownToolError, DatabaseExistsError, DocumentNotFoundError) as e:
        logger.info(f"Tool {name} rejected: {e}")
        return ToolResult.error(str(e))
    except JsonDbError as e:
        logger.warning(f"Tool {name} failed: {e}")
        return ToolResult.error(str(e))
    except Exception as e:
        logger.exception(f"Tool {name} failed unexpectedly")
        return ToolResult.error(str(e))
