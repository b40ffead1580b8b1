"""
Tool argument and result schemas.

Argument models use the camelCase wire names of the tool interface as
aliases; their JSON Schema is published as each tool's input schema.
"""
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

# MongoDB collection names cannot contain "$" or NUL
DATABASE_NAME_PATTERN = r"^[^$\x00]+$"
FIELD_NAME_PATTERN = r"^[^$\x00][^\x00]*$"

# BSON integers are signed 64-bit
INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1


def _check_storable(value: Any, path: str) -> None:
    """Raise ValueError for values BSON cannot encode."""
    if isinstance(value, dict):
        for key, item in value.items():
            if "\x00" in key:
                raise ValueError(f"Document keys cannot contain NUL: {path}{key!r}")
            _check_storable(item, f"{path}{key}.")
    elif isinstance(value, list):
        for index, item in enumerate(value):
            _check_storable(item, f"{path}{index}.")
    elif isinstance(value, int) and not isinstance(value, bool):
        if not INT64_MIN <= value <= INT64_MAX:
            raise ValueError(
                f"Integer out of 64-bit range at {path.rstrip('.')}: {value}"
            )


class ToolArgs(BaseModel):
    """Base for tool argument models."""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class DatabaseArgs(ToolArgs):
    """Arguments naming a target database."""
    database_name: str = Field(
        ...,
        alias="databaseName",
        min_length=1,
        max_length=200,
        pattern=DATABASE_NAME_PATTERN,
        description="name of the document database",
    )


class CreateDatabaseArgs(DatabaseArgs):
    """create_json_doc_database arguments."""


class ListDatabasesArgs(ToolArgs):
    """list_json_doc_databases takes no arguments."""


class SaveDocArgs(DatabaseArgs):
    """save_json_doc_to_db arguments."""
    doc: dict[str, Any] = Field(..., description="JSON document to save")

    @field_validator("doc")
    @classmethod
    def doc_storable(cls, v: dict[str, Any]) -> dict[str, Any]:
        if not v:
            raise ValueError("Document is required")
        operators = sorted(key for key in v if key.startswith("$"))
        if operators:
            raise ValueError(
                f"Top-level document keys cannot start with '$': {', '.join(operators)}"
            )
        _check_storable(v, "")
        return v


class QueryDocsArgs(DatabaseArgs):
    """query_json_docs_from_db arguments."""
    sort_field: str = Field(
        ...,
        alias="sortField",
        min_length=1,
        pattern=FIELD_NAME_PATTERN,
        description="field to sort documents by (descending)",
    )


class DocIdArgs(DatabaseArgs):
    """Arguments naming one document."""
    id: str = Field(..., min_length=1, description="ID of the document")


class LoadDocArgs(DocIdArgs):
    """load_json_doc_from_db arguments."""


class DeleteDocArgs(DocIdArgs):
    """delete_json_doc_from_db arguments."""


class TextContent(BaseModel):
    """Single text item of a tool result."""
    type: Literal["text"] = "text"
    text: str


class ToolResult(BaseModel):
    """Uniform tool result envelope."""
    model_config = ConfigDict(populate_by_name=True)

    content: list[TextContent] = Field(default_factory=list)
    is_error: bool = Field(False, alias="isError")

    @classmethod
    def text(cls, text: str) -> "ToolResult":
        return cls(content=[TextContent(text=text)])

    @classmethod
    def error(cls, message: str) -> "ToolResult":
        return cls(content=[TextContent(text=f"Error: {message}")], is_error=True)


class ToolDefinition(BaseModel):
    """Tool listing entry."""
    model_config = ConfigDict(populate_by_name=True)

    name: str
    description: str
    input_schema: dict[str, Any] = Field(..., alias="inputSchema")
