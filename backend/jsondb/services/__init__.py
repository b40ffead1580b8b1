"""
Services module - business logic layer.
"""
from jsondb.services.json_db_service import JsonDbService
from jsondb.services.tool_service import call_tool, list_tools

__all__ = ["JsonDbService", "call_tool", "list_tools"]
