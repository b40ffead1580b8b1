"""
Tools router: HTTP access to the JSON database tools.
"""
import json

from fastapi import APIRouter, Depends, Request

from jsondb.context import AppContext
from jsondb.dependencies.context import get_context
from jsondb.schemas.tools import ToolDefinition, ToolResult
from jsondb.services.tool_service import call_tool, list_tools

router = APIRouter(prefix="/tools", tags=["Tools"])

# The body is read by the handler so that malformed input still gets an envelope
ARGUMENTS_BODY = {
    "requestBody": {
        "required": False,
        "content": {"application/json": {"schema": {"type": "object"}}},
    }
}


@router.get(
    "",
    response_model=list[ToolDefinition],
    summary="List tools",
)
async def get_tools():
    """List available tools with their input schemas."""
    return list_tools()


@router.post(
    "/{name}",
    response_model=ToolResult,
    summary="Call a tool",
    openapi_extra=ARGUMENTS_BODY,
)
async def invoke_tool(
    name: str,
    request: Request,
    context: AppContext = Depends(get_context),
):
    """
    Call a tool by name with a JSON object of arguments.

    Failures are reported in the result envelope (`isError: true`),
    never as HTTP errors.
    """
    raw = await request.body()
    if not raw.strip():
        return await call_tool(context, name, None)
    try:
        arguments = json.loads(raw)
    except ValueError as e:
        return ToolResult.error(f"Invalid arguments for {name}: body is not valid JSON ({e})")
    return await call_tool(context, name, arguments)
