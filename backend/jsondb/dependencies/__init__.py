"""
FastAPI dependencies.
"""
from jsondb.dependencies.context import get_context

__all__ = ["get_context"]
