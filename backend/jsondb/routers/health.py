"""
Health check router: liveness, and readiness of MongoDB and the catalog.
"""
from fastapi import APIRouter, Request, status

from jsondb.database.connections import get_mongo_client

router = APIRouter(tags=["Health"])


@router.get(
    "/health",
    status_code=status.HTTP_200_OK,
    summary="Basic health check",
)
async def health_check():
    """Returns 200 while the API process is up."""
    return {"status": "healthy"}


@router.get(
    "/health/ready",
    status_code=status.HTTP_200_OK,
    summary="Readiness of MongoDB and the database catalog",
)
async def readiness_check(request: Request):
    """
    Readiness check.

    ``mongodb`` pings the server. ``catalog`` is healthy once the unique
    name index exists; until then database creation retries it.
    ``open_databases`` counts the handles opened by this process.
    """
    checks = {
        "mongodb": "unknown",
        "catalog": "unknown",
    }

    try:
        client = await get_mongo_client()
        await client.admin.command("ping")
        checks["mongodb"] = "healthy"
    except Exception as e:
        checks["mongodb"] = f"unhealthy: {e}"

    context = getattr(request.app.state, "context", None)
    if context is None:
        checks["catalog"] = "unhealthy: context not initialized"
        open_databases = 0
    else:
        checks["catalog"] = "healthy" if context.catalog.indexes_ready else "indexes pending"
        open_databases = len(context.registry)

    all_healthy = all(v == "healthy" for v in checks.values())

    return {
        "status": "healthy" if all_healthy else "degraded",
        "checks": checks,
        "open_databases": open_databases,
    }
