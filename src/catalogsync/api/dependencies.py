"""FastAPI dependency injection."""

from __future__ import annotations

from collections.abc import AsyncIterator
from functools import lru_cache
from typing import TYPE_CHECKING, Annotated

from fastapi import Depends, Request

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

    from catalogsync.cache.client import AsyncRedisClient
    from catalogsync.config import CatalogSettings
    from catalogsync.search.client import AsyncSearchClient
    from catalogsync.search.lifecycle import IndexManager
    from catalogsync.search.propagator import WriteThroughPropagator
    from catalogsync.services.catalog import CatalogService
    from catalogsync.services.search import SearchService


@lru_cache
def get_settings() -> CatalogSettings:
    """Get cached application settings."""
    from catalogsync.config import CatalogSettings

    return CatalogSettings()


async def get_db_session(request: Request) -> AsyncIterator[AsyncSession]:
    """
    Get database session from app state.

    Yields a session that is automatically closed after the request.
    """
    session_factory = request.app.state.db_session_factory
    async with session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def get_cache_client(request: Request) -> AsyncRedisClient | None:
    """Get Redis cache client from app state."""
    return getattr(request.app.state, "cache_client", None)


async def get_search_client(request: Request) -> AsyncSearchClient:
    """Get search client from app state."""
    return request.app.state.search_client


async def get_index_manager(request: Request) -> IndexManager:
    """Get the shared index lifecycle manager from app state."""
    return request.app.state.index_manager


async def get_propagator(
    search_client: AsyncSearchClient = Depends(get_search_client),
    index_manager: IndexManager = Depends(get_index_manager),
) -> WriteThroughPropagator:
    """Get write-through hooks bound to the shared search client."""
    from catalogsync.search.indexer import SearchIndexer
    from catalogsync.search.propagator import WriteThroughPropagator

    return WriteThroughPropagator(SearchIndexer(search_client, index_manager))


async def get_catalog_service(
    session: AsyncSession = Depends(get_db_session),
    propagator: WriteThroughPropagator = Depends(get_propagator),
    cache: AsyncRedisClient | None = Depends(get_cache_client),
    settings: CatalogSettings = Depends(get_settings),
) -> CatalogService:
    """Get catalog service with all dependencies."""
    from catalogsync.services.catalog import CatalogService

    return CatalogService(
        session=session,
        propagator=propagator,
        cache=cache,
        cache_ttl=settings.cache_ttl,
    )


async def get_search_service(
    search_client: AsyncSearchClient = Depends(get_search_client),
    index_manager: IndexManager = Depends(get_index_manager),
) -> SearchService:
    """Get search service for queries (no database session)."""
    from catalogsync.services.search import SearchService

    return SearchService(search_client, index_manager=index_manager)


async def get_reindex_service(
    session: AsyncSession = Depends(get_db_session),
    search_client: AsyncSearchClient = Depends(get_search_client),
    index_manager: IndexManager = Depends(get_index_manager),
) -> SearchService:
    """Get search service with a database session for reindexing."""
    from catalogsync.services.search import SearchService

    return SearchService(search_client, session=session, index_manager=index_manager)


# Type aliases for cleaner dependency injection
Settings = Annotated["CatalogSettings", Depends(get_settings)]
DBSession = Annotated["AsyncSession", Depends(get_db_session)]
CacheClient = Annotated["AsyncRedisClient | None", Depends(get_cache_client)]
SearchClient = Annotated["AsyncSearchClient", Depends(get_search_client)]
CatalogSvc = Annotated["CatalogService", Depends(get_catalog_service)]
SearchSvc = Annotated["SearchService", Depends(get_search_service)]
ReindexSvc = Annotated["SearchService", Depends(get_reindex_service)]
