"""
Application context dependency.
"""
from fastapi import HTTPException, Request, status

from jsondb.context import AppContext


async def get_context(request: Request) -> AppContext:
    """Return the context created by the application lifespan."""
    context = getattr(request.app.state, "context", None)
    if context is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Database context not initialized",
        )
    return context
