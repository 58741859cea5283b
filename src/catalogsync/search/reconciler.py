"""Full rebuild of the search index from the database."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from catalogsync.core.models import ReconciliationReport
from catalogsync.search.client import AsyncSearchClient
from catalogsync.search.lifecycle import IndexManager
from catalogsync.search.mapping import to_search_document

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

logger = logging.getLogger(__name__)


class Reconciler:
    """
    Rebuilds the product index so it mirrors the products table exactly.

    Assumes no concurrent writes while it runs. A write that lands between
    the table read and the bulk request may be missing from, or linger in,
    the rebuilt index until the next pass.
    """

    def __init__(
        self,
        client: AsyncSearchClient,
        session: AsyncSession,
        index_manager: IndexManager | None = None,
    ) -> None:
        """
        Initialize the reconciler.

        Args:
            client: Search client for bulk and count operations
            session: Database session used to read every product
            index_manager: Lifecycle manager (defaults to one over ``client``)
        """
        self._client = client
        self._session = session
        self._index_manager = index_manager or IndexManager(client)

    async def rebuild_all(self) -> ReconciliationReport:
        """
        Clear the index and bulk-load every product.

        Mismatches are reported, not raised: callers inspect ``failed`` and
        compare ``index_document_count`` with ``record_count``.

        Returns:
            Counts for the rebuild
        """
        from catalogsync.db.repositories.product import ProductRepository

        await self._index_manager.ensure_index()

        repo = ProductRepository(self._session)
        products = await repo.list_all_ordered()

        # Clear first so documents of rows deleted while the index was down go away
        logger.info(f"Clearing index {self._client.index_name}...")
        await self._client.delete_all_documents()

        if not products:
            logger.info("Reindex complete: no products in the database")
            return ReconciliationReport()

        documents = [to_search_document(product) for product in products]
        result = await self._client.bulk_index(documents)
        failed = result.failed

        index_count = await self._client.count()

        report = ReconciliationReport(
            indexed=len(documents) - failed,
            failed=failed,
            had_errors=result.errors,
            record_count=len(documents),
            index_document_count=index_count,
        )

        if report.in_sync:
            logger.info(f"Reindex complete: {report.indexed} products indexed")
        else:
            logger.warning(
                f"Reindex finished with mismatch: {report.failed} failed, "
                f"{report.index_document_count} documents for {report.record_count} products"
            )
        return report
