"""Search service for querying and rebuilding the product index."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from catalogsync.core.models import ReconciliationReport
from catalogsync.search.lifecycle import IndexManager
from catalogsync.search.query import SearchQuery
from catalogsync.search.reconciler import Reconciler
from catalogsync.search.searcher import Searcher, SearchResults

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

    from catalogsync.search.client import AsyncSearchClient

logger = logging.getLogger(__name__)


class SearchService:
    """
    Service for ranked product search and full reindexing.

    Search reads only from the index; reindexing reads the database and
    rewrites the index.
    """

    def __init__(
        self,
        search_client: "AsyncSearchClient",
        session: "AsyncSession | None" = None,
        index_manager: IndexManager | None = None,
    ) -> None:
        """
        Initialize the search service.

        Args:
            search_client: Search client for queries and bulk writes
            session: Database session, required for reindexing
            index_manager: Shared lifecycle manager
        """
        self._client = search_client
        self._session = session
        self._index_manager = index_manager or IndexManager(search_client)
        self._searcher = Searcher(search_client)

    async def search(self, query: SearchQuery) -> SearchResults:
        """Run a product search against the index."""
        results = await self._searcher.search(query)
        logger.debug(f"Search '{query.text or ''}' page {query.page}: {results.total} total hits")
        return results

    async def reindex_all(self) -> ReconciliationReport:
        """Rebuild the index from the database."""
        if self._session is None:
            raise RuntimeError("reindex_all requires a database session")

        reconciler = Reconciler(self._client, self._session, self._index_manager)
        return await reconciler.rebuild_all()
