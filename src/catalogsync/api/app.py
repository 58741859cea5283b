"""FastAPI application factory."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from catalogsync import __version__
from catalogsync.api.routes import health_router, products_router, search_router
from catalogsync.api.schemas import APIError, ErrorDetail
from catalogsync.config import CatalogSettings
from catalogsync.core.exceptions import CatalogError, NotFoundError, SearchError, ValidationError

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """
    Application lifespan manager.

    Builds the process-scoped handles (database, search client, cache) and
    disposes them on shutdown.
    """
    settings = CatalogSettings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # Initialize database
    from catalogsync.db.session import DatabaseManager

    logger.info("Initializing database connection...")
    app.state.database = DatabaseManager(str(settings.database_url), echo=settings.debug)
    app.state.db_session_factory = app.state.database.session_factory
    try:
        await app.state.database.ping()
        logger.info("Database connection successful")
    except Exception as e:
        logger.error(f"Database connection failed; catalog endpoints will fail until it is up: {e}")

    # Initialize Redis cache (optional)
    if settings.redis_url:
        try:
            from catalogsync.cache.client import AsyncRedisClient

            logger.info("Initializing Redis cache...")
            app.state.cache_client = AsyncRedisClient(str(settings.redis_url))
            await app.state.cache_client.connect()
            logger.info("Redis cache initialized")
        except Exception as e:
            logger.warning(f"Failed to initialize Redis: {e}")
            app.state.cache_client = None
    else:
        app.state.cache_client = None

    # Initialize search engine
    from catalogsync.search.client import AsyncSearchClient
    from catalogsync.search.lifecycle import IndexManager

    logger.info("Initializing search client...")
    app.state.search_client = AsyncSearchClient(
        settings.elasticsearch_url,
        settings.elasticsearch_api_key,
        index_name=settings.index_name,
        request_timeout=settings.search_request_timeout,
        max_retries=settings.search_max_retries,
    )
    app.state.index_manager = IndexManager(app.state.search_client)
    try:
        attempts = await app.state.index_manager.wait_for_engine(
            max_attempts=settings.startup_max_attempts,
            delay=settings.startup_retry_delay,
        )
        logger.info(f"Search engine reachable after {attempts} attempt(s) at {settings.elasticsearch_url}")
        await app.state.index_manager.ensure_index()
        logger.info("Search index check complete")
    except SearchError as e:
        # Writes ensure the index lazily, so startup continues without it
        logger.error(f"Search index setup failed; search endpoints may fail until the engine is healthy: {e}")

    logger.info("Application startup complete")

    yield

    # Cleanup
    logger.info("Shutting down application...")

    if getattr(app.state, "search_client", None):
        await app.state.search_client.close()

    if getattr(app.state, "cache_client", None):
        await app.state.cache_client.close()

    if getattr(app.state, "database", None):
        await app.state.database.close()

    logger.info("Application shutdown complete")


def _error_response(status_code: int, code: str, message: str) -> JSONResponse:
    body = APIError(error=ErrorDetail(code=code, message=message))
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json", by_alias=True))


def register_exception_handlers(app: FastAPI) -> None:
    """Map domain and store errors onto JSON error responses."""

    @app.exception_handler(CatalogError)
    async def catalog_error_handler(request: Request, exc: CatalogError) -> JSONResponse:
        if isinstance(exc, NotFoundError):
            return _error_response(404, "not_found", exc.message)
        if isinstance(exc, ValidationError):
            return _error_response(400, "validation_error", exc.message)
        if isinstance(exc, SearchError):
            logger.error(f"Request failed: {request.method} {request.url.path} -> 502: {exc.message}")
            return _error_response(502, "search_error", exc.message)
        logger.error(f"Request failed: {request.method} {request.url.path} -> 500: {exc.message}")
        return _error_response(500, "internal_error", exc.message)

    @app.exception_handler(SQLAlchemyError)
    async def database_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
        logger.error(f"Database error: {request.method} {request.url.path}", exc_info=exc)
        return _error_response(500, "database_error", "Database operation failed")


def create_app(
    *,
    title: str = "Catalogsync API",
    description: str = "Product catalog with a write-through search index",
    version: str = __version__,
    cors_origins: list[str] | None = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        title: API title for OpenAPI docs
        description: API description for OpenAPI docs
        version: API version
        cors_origins: List of allowed CORS origins

    Returns:
        Configured FastAPI application
    """
    app = FastAPI(
        title=title,
        description=description,
        version=version,
        lifespan=lifespan,
        openapi_url="/api/openapi.json",
        docs_url="/api/docs",
        redoc_url="/api/redoc",
    )

    if cors_origins is None:
        cors_origins = CatalogSettings().cors_origins

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    # Register routes
    app.include_router(health_router, prefix="/api/v1")
    app.include_router(products_router, prefix="/api/v1")
    app.include_router(search_router, prefix="/api/v1")

    return app


# For uvicorn direct execution
app = create_app()
