"""
Tool request/response schemas.
"""
from jsondb.schemas.tools import (
    CreateDatabaseArgs,
    DeleteDocArgs,
    ListDatabasesArgs,
    LoadDocArgs,
    QueryDocsArgs,
    SaveDocArgs,
    TextContent,
    ToolDefinition,
    ToolResult,
)

__all__ = [
    "CreateDatabaseArgs",
    "DeleteDocArgs",
    "ListDatabasesArgs",
    "LoadDocArgs",
    "QueryDocsArgs",
    "SaveDocArgs",
    "TextContent",
    "ToolDefinition",
    "ToolResult",
]
