"""Health check endpoints."""

from __future__ import annotations

from datetime import datetime, timezone

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from catalogsync import __version__
from catalogsync.api.schemas import (
    HealthResponse,
    HealthServices,
    SearchServiceStatus,
    ServiceStatus,
)

router = APIRouter(tags=["health"])


@router.get(
    "/health",
    response_model=HealthResponse,
    operation_id="getHealth",
    summary="Health check",
    description="Check connectivity to the database and the search engine.",
    responses={503: {"model": HealthResponse}},
)
async def health_check(request: Request):
    """Report the status of each backing store; one failure does not hide the other."""
    database = ServiceStatus(status="down")
    try:
        db = getattr(request.app.state, "database", None)
        if db is None:
            database.error = "database not configured"
        else:
            await db.ping()
            database.status = "up"
    except Exception as e:
        database.error = str(e)

    search_client = getattr(request.app.state, "search_client", None)
    search = SearchServiceStatus(
        status="down",
        nodes=[search_client.url] if search_client is not None else [],
    )
    try:
        if search_client is None:
            search.error = "search engine not configured"
        elif await search_client.ping():
            search.cluster_status = await search_client.cluster_health() or "unknown"
            search.status = "up"
        else:
            search.error = "ping returned no response"
    except Exception as e:
        search.error = str(e)

    cache = None
    cache_client = getattr(request.app.state, "cache_client", None)
    if cache_client is not None:
        cache = ServiceStatus(status="down")
        try:
            await cache_client.ping()
            cache.status = "up"
        except Exception as e:
            cache.error = str(e)

    # The cache is optional; only the two stores decide overall health
    healthy = database.status == "up" and search.status == "up"
    response = HealthResponse(
        success=healthy,
        status="healthy" if healthy else "unhealthy",
        version=__version__,
        timestamp=datetime.now(timezone.utc),
        services=HealthServices(database=database, search=search, cache=cache),
    )
    return JSONResponse(
        status_code=200 if healthy else 503,
        content=response.model_dump(mode="json", by_alias=True),
    )


@router.get(
    "/ready",
    operation_id="getReady",
    summary="Readiness check",
    description="Check if the API is ready to serve traffic.",
)
async def readiness_check(request: Request) -> dict[str, bool]:
    """Check if API is ready to serve traffic."""
    db_factory = getattr(request.app.state, "db_session_factory", None)
    search_client = getattr(request.app.state, "search_client", None)

    ready = db_factory is not None and search_client is not None

    return {"ready": ready}
