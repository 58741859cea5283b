"""Main library client for standalone usage."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from catalogsync.config import CatalogSettings
from catalogsync.core.models import CatalogRecord, MutationOutcome, ReconciliationReport
from catalogsync.db.session import DatabaseManager
from catalogsync.search.client import AsyncSearchClient
from catalogsync.search.indexer import SearchIndexer
from catalogsync.search.lifecycle import IndexManager
from catalogsync.search.propagator import WriteThroughPropagator
from catalogsync.search.query import SearchQuery
from catalogsync.search.searcher import SearchResults
from catalogsync.services.catalog import CatalogService
from catalogsync.services.search import SearchService

if TYPE_CHECKING:
    from catalogsync.cache.client import AsyncRedisClient

logger = logging.getLogger(__name__)


class CatalogSyncClient:
    """
    Main client for the catalogsync library.

    Provides the catalog and search operations without the web server, for
    scripts and scheduled jobs (e.g. a nightly reindex).

    Usage:
        async with CatalogSyncClient() as client:
            outcome = await client.create_record(
                {"name": "Runner Pro Shoes", "brand": "Nike", "category": "Shoes", "price": 129.99}
            )
            if outcome.warning:
                report = await client.reindex_all()

            results = await client.search(SearchQuery(text="runner"))

    Settings are loaded from environment variables or can be passed explicitly.
    """

    def __init__(
        self,
        settings: CatalogSettings | None = None,
        *,
        use_cache: bool = True,
    ) -> None:
        """
        Initialize the client.

        Args:
            settings: Application settings. If not provided, loaded from environment.
            use_cache: Whether to use the Redis record cache if configured.
        """
        self._settings = settings or CatalogSettings()
        self._use_cache = use_cache
        self._database: DatabaseManager | None = None
        self._search_client: AsyncSearchClient | None = None
        self._index_manager: IndexManager | None = None
        self._cache: AsyncRedisClient | None = None

    async def __aenter__(self) -> CatalogSyncClient:
        """Initialize resources on context entry."""
        await self._initialize()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Clean up resources on context exit."""
        await self.close()

    async def _initialize(self) -> None:
        """Initialize client resources."""
        self._database = DatabaseManager(str(self._settings.database_url))
        self._search_client = AsyncSearchClient(
            self._settings.elasticsearch_url,
            self._settings.elasticsearch_api_key,
            index_name=self._settings.index_name,
            request_timeout=self._settings.search_request_timeout,
            max_retries=self._settings.search_max_retries,
        )
        self._index_manager = IndexManager(self._search_client)

        if self._use_cache and self._settings.redis_url:
            try:
                from catalogsync.cache.client import AsyncRedisClient

                self._cache = AsyncRedisClient(str(self._settings.redis_url))
                await self._cache.connect()
                logger.info("Redis cache initialized")
            except Exception as e:
                logger.warning(f"Failed to initialize cache: {e}")
                self._cache = None

    async def close(self) -> None:
        """Close all resources."""
        if self._search_client:
            await self._search_client.close()
            self._search_client = None
            self._index_manager = None

        if self._cache:
            await self._cache.close()
            self._cache = None

        if self._database:
            await self._database.close()
            self._database = None

    def _ensure_initialized(self) -> None:
        """Ensure client is initialized."""
        if self._database is None or self._search_client is None:
            raise RuntimeError(
                "Client not initialized. Use 'async with CatalogSyncClient() as client:'"
            )

    def _catalog_service(self, session) -> CatalogService:
        propagator = WriteThroughPropagator(SearchIndexer(self._search_client, self._index_manager))
        return CatalogService(
            session,
            propagator,
            cache=self._cache,
            cache_ttl=self._settings.cache_ttl,
        )

    async def wait_until_ready(self) -> int:
        """Block until the search engine answers, then make sure the index exists."""
        self._ensure_initialized()
        attempts = await self._index_manager.wait_for_engine(
            max_attempts=self._settings.startup_max_attempts,
            delay=self._settings.startup_retry_delay,
        )
        await self._index_manager.ensure_index()
        return attempts

    async def create_record(self, payload: dict[str, Any]) -> MutationOutcome:
        """Create a product and index it."""
        self._ensure_initialized()
        async with self._database.session() as session:
            return await self._catalog_service(session).create_record(payload)

    async def update_record(self, record_id: int, changes: dict[str, Any]) -> MutationOutcome | None:
        """Update a product and replace its document; None if it does not exist."""
        self._ensure_initialized()
        async with self._database.session() as session:
            return await self._catalog_service(session).update_record(record_id, changes)

    async def delete_record(self, record_id: int) -> MutationOutcome | None:
        """Delete a product and its document; None if it does not exist."""
        self._ensure_initialized()
        async with self._database.session() as session:
            return await self._catalog_service(session).delete_record(record_id)

    async def get_record(self, record_id: int) -> CatalogRecord | None:
        """Get a product from the database."""
        self._ensure_initialized()
        async with self._database.session() as session:
            return await self._catalog_service(session).get_record(record_id)

    async def search(self, query: SearchQuery) -> SearchResults:
        """Run a product search."""
        self._ensure_initialized()
        service = SearchService(self._search_client, index_manager=self._index_manager)
        return await service.search(query)

    async def reindex_all(self) -> ReconciliationReport:
        """Rebuild the search index from the database."""
        self._ensure_initialized()
        async with self._database.session() as session:
            service = SearchService(
                self._search_client,
                session=session,
                index_manager=self._index_manager,
            )
            return await service.reindex_all()


# Convenience function for one-shot usage
async def reindex_all(settings: CatalogSettings | None = None) -> ReconciliationReport:
    """
    Rebuild the search index without managing a client.

    Args:
        settings: Optional settings (loaded from environment if omitted)

    Returns:
        Reconciliation report
    """
    async with CatalogSyncClient(settings, use_cache=False) as client:
        return await client.reindex_all()
