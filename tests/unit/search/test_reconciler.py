"""Tests for the full index rebuild."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from catalogsync.db.repositories.product import ProductRepository
from catalogsync.search.client import BulkResult
from catalogsync.search.reconciler import Reconciler


@pytest.fixture
def index_manager() -> AsyncMock:
    return AsyncMock()


def _patch_products(rows):
    return patch.object(ProductRepository, "list_all_ordered", new=AsyncMock(return_value=rows))


class TestReconciler:
    """Tests for Reconciler.rebuild_all."""

    async def test_happy_path(
        self, mock_search_client: AsyncMock, index_manager: AsyncMock, product_row_factory
    ):
        """Every row is bulk-indexed and the counts line up."""
        rows = [product_row_factory(id=i, name=f"Product {i}") for i in (1, 2, 3)]
        mock_search_client.bulk_index.return_value = BulkResult(
            items=[{"index": {"_id": str(i), "status": 201}} for i in (1, 2, 3)],
            errors=False,
        )
        mock_search_client.count.return_value = 3
        reconciler = Reconciler(mock_search_client, MagicMock(), index_manager)

        with _patch_products(rows):
            report = await reconciler.rebuild_all()

        index_manager.ensure_index.assert_awaited_once()
        mock_search_client.delete_all_documents.assert_awaited_once()
        documents = mock_search_client.bulk_index.await_args.args[0]
        assert [d["id"] for d in documents] == [1, 2, 3]

        assert report.indexed == 3
        assert report.failed == 0
        assert report.record_count == 3
        assert report.index_document_count == 3
        assert report.in_sync is True

    async def test_clears_before_loading(
        self, mock_search_client: AsyncMock, index_manager: AsyncMock, product_row_factory
    ):
        """The index is emptied before the bulk load so stale documents go away."""
        calls: list[str] = []
        mock_search_client.delete_all_documents.side_effect = lambda: calls.append("clear") or 0

        async def bulk(docs):
            calls.append("bulk")
            return BulkResult(items=[], errors=False)

        mock_search_client.bulk_index.side_effect = bulk
        mock_search_client.count.return_value = 1
        reconciler = Reconciler(mock_search_client, MagicMock(), index_manager)

        with _patch_products([product_row_factory()]):
            await reconciler.rebuild_all()

        assert calls == ["clear", "bulk"]

    async def test_partial_failure(
        self, mock_search_client: AsyncMock, index_manager: AsyncMock, product_row_factory
    ):
        """Rejected items are counted and the report is out of sync."""
        rows = [product_row_factory(id=i) for i in (1, 2, 3)]
        mock_search_client.bulk_index.return_value = BulkResult(
            items=[
                {"index": {"_id": "1", "status": 201}},
                {"index": {"_id": "2", "status": 400, "error": {"type": "mapper_parsing_exception"}}},
                {"index": {"_id": "3", "status": 201}},
            ],
            errors=True,
        )
        mock_search_client.count.return_value = 2
        reconciler = Reconciler(mock_search_client, MagicMock(), index_manager)

        with _patch_products(rows):
            report = await reconciler.rebuild_all()

        assert report.indexed == 2
        assert report.failed == 1
        assert report.had_errors is True
        assert report.record_count == 3
        assert report.index_document_count == 2
        assert report.in_sync is False

    async def test_count_shortfall_is_mismatch(
        self, mock_search_client: AsyncMock, index_manager: AsyncMock, product_row_factory
    ):
        """A clean bulk response with too few documents is still a mismatch."""
        mock_search_client.bulk_index.return_value = BulkResult(items=[], errors=False)
        mock_search_client.count.return_value = 1
        reconciler = Reconciler(mock_search_client, MagicMock(), index_manager)

        with _patch_products([product_row_factory(id=1), product_row_factory(id=2)]):
            report = await reconciler.rebuild_all()

        assert report.failed == 0
        assert report.in_sync is False

    async def test_zero_records(self, mock_search_client: AsyncMock, index_manager: AsyncMock):
        """An empty table clears the index and skips the bulk request."""
        reconciler = Reconciler(mock_search_client, MagicMock(), index_manager)

        with _patch_products([]):
            report = await reconciler.rebuild_all()

        mock_search_client.delete_all_documents.assert_awaited_once()
        mock_search_client.bulk_index.assert_not_awaited()
        assert report.indexed == 0
        assert report.record_count == 0
        assert report.in_sync is True

    async def test_engine_failure_propagates(
        self, mock_search_client: AsyncMock, index_manager: AsyncMock, product_row_factory
    ):
        mock_search_client.bulk_index.side_effect = ConnectionError("refused")
        reconciler = Reconciler(mock_search_client, MagicMock(), index_manager)

        with _patch_products([product_row_factory()]):
            with pytest.raises(ConnectionError):
                await reconciler.rebuild_all()
