"""Write-through propagation of committed catalog mutations."""

from __future__ import annotations

import logging
from typing import Any

from catalogsync.core.models import SyncWarning
from catalogsync.core.types import SyncAction
from catalogsync.search.indexer import SearchIndexer

logger = logging.getLogger(__name__)


class WriteThroughPropagator:
    """
    Applies committed database mutations to the search index.

    Each hook runs after the database write has committed. A failure here
    never fails the mutation: it is logged and returned as a SyncWarning so
    the response can tell the operator to reconcile. There is no retry; the
    transport already retries at the network layer.
    """

    def __init__(self, indexer: SearchIndexer) -> None:
        self._indexer = indexer

    async def on_create(self, record: Any) -> SyncWarning | None:
        """Index a newly created record."""
        try:
            await self._indexer.index_record(record)
        except Exception:
            logger.exception("Search index write failed after create")
            return SyncWarning.for_action(SyncAction.CREATED)
        return None

    async def on_update(self, record: Any) -> SyncWarning | None:
        """Replace the document of an updated record."""
        try:
            await self._indexer.reindex_record(record)
        except Exception:
            logger.exception("Search index write failed after update")
            return SyncWarning.for_action(SyncAction.UPDATED)
        return None

    async def on_delete(self, record_id: int) -> SyncWarning | None:
        """Remove the document of a deleted record."""
        try:
            await self._indexer.remove_record(record_id)
        except Exception:
            logger.exception("Search index delete failed after delete")
            return SyncWarning.for_action(SyncAction.DELETED)
        return None
