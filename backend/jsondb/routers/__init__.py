"""
API routers.
"""
from jsondb.routers import health, tools

__all__ = ["health", "tools"]
