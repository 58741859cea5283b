"""Search indexing service for single-record writes."""

from __future__ import annotations

import logging
from typing import Any

from catalogsync.search.client import AsyncSearchClient
from catalogsync.search.lifecycle import IndexManager
from catalogsync.search.mapping import to_search_document

logger = logging.getLogger(__name__)


class SearchIndexer:
    """
    Service for applying single catalog mutations to the search index.

    Converts records to search documents and writes them by id. Errors are
    raised to the caller.
    """

    def __init__(self, client: AsyncSearchClient, index_manager: IndexManager | None = None) -> None:
        """
        Initialize the indexer.

        Args:
            client: Search client for document operations
            index_manager: Lifecycle manager used to create the index lazily
        """
        self._client = client
        self._index_manager = index_manager or IndexManager(client)

    async def index_record(self, record: Any) -> dict[str, Any]:
        """
        Create or fully replace the document for a record.

        The index is ensured first in case the engine came up after the
        application did.

        Args:
            record: Product row or domain record

        Returns:
            The document that was written
        """
        await self._index_manager.ensure_index()

        doc = to_search_document(record)
        await self._client.index_document(str(doc["id"]), doc)
        logger.debug(f"Indexed product {doc['id']}")
        return doc

    async def reindex_record(self, record: Any) -> dict[str, Any]:
        """Replace the document after an update; the caller holds the full record."""
        return await self.index_record(record)

    async def remove_record(self, record_id: int) -> None:
        """
        Remove a record's document. A document that was never indexed is not an error.

        Args:
            record_id: ID of the deleted product
        """
        deleted = await self._client.delete_document(str(record_id))
        if deleted:
            logger.debug(f"Removed product {record_id} from index")
