"""Tests for the search service."""

from __future__ import annotations

from typing import Any
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from catalogsync.core.models import ReconciliationReport
from catalogsync.search.query import SearchQuery
from catalogsync.search.reconciler import Reconciler
from catalogsync.services.search import SearchService


class TestSearchService:
    """Tests for SearchService."""

    async def test_search(self, mock_search_client: AsyncMock, search_response: dict[str, Any]):
        mock_search_client.search.return_value = search_response
        service = SearchService(mock_search_client)

        results = await service.search(SearchQuery(text="runner"))

        assert results.total == 2
        assert results.facets.brands[0].key == "Acme"

    async def test_reindex_requires_session(self, mock_search_client: AsyncMock):
        service = SearchService(mock_search_client)

        with pytest.raises(RuntimeError):
            await service.reindex_all()

    async def test_reindex_runs_reconciler(self, mock_search_client: AsyncMock):
        report = ReconciliationReport(indexed=2, record_count=2, index_document_count=2)
        index_manager = AsyncMock()
        service = SearchService(mock_search_client, session=MagicMock(), index_manager=index_manager)

        with patch.object(Reconciler, "rebuild_all", new=AsyncMock(return_value=report)) as rebuild:
            assert await service.reindex_all() == report

        rebuild.assert_awaited_once()
