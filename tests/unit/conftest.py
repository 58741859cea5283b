"""Unit test fixtures with search engine mocking."""

from __future__ import annotations

from typing import Any
from unittest.mock import AsyncMock

import pytest
from elastic_transport import ApiResponseMeta, HttpHeaders, NodeConfig

from catalogsync.search.client import AsyncSearchClient


# ============================================================================
# Search Client Fixtures
# ============================================================================


@pytest.fixture
def es_mock() -> AsyncMock:
    """Stand-in for the low-level AsyncElasticsearch instance."""
    return AsyncMock()


@pytest.fixture
def search_client(es_mock: AsyncMock) -> AsyncSearchClient:
    """Search client wired to the mocked engine; no network is touched."""
    client = AsyncSearchClient("http://localhost:9200", index_name="products_test")
    client._client = es_mock
    return client


@pytest.fixture
def mock_search_client() -> AsyncMock:
    """Fully mocked search client for services that only need its interface."""
    client = AsyncMock(spec=AsyncSearchClient)
    client.index_name = "products_test"
    client.url = "http://localhost:9200"
    return client


# ============================================================================
# Engine Error Helpers
# ============================================================================


def make_api_error(error_cls: type, status: int, message: str = "error") -> Exception:
    """Build an elasticsearch ApiError subclass the way the transport raises it."""
    meta = ApiResponseMeta(
        status=status,
        http_version="1.1",
        headers=HttpHeaders(),
        duration=0.0,
        node=NodeConfig("http", "localhost", 9200),
    )
    return error_cls(message, meta=meta, body={"error": message})


@pytest.fixture
def api_error():
    """Factory fixture for engine API errors."""
    return make_api_error


# ============================================================================
# Engine Response Fixtures
# ============================================================================


@pytest.fixture
def search_response() -> dict[str, Any]:
    """Sample Elasticsearch response for a text search with facets."""
    return {
        "took": 3,
        "timed_out": False,
        "hits": {
            "total": {"value": 2, "relation": "eq"},
            "max_score": 2.1,
            "hits": [
                {
                    "_index": "products_test",
                    "_id": "1",
                    "_score": 2.1,
                    "_source": {
                        "id": 1,
                        "name": "Runner Pro Shoes",
                        "description": "Lightweight running shoes",
                        "brand": "Nike",
                        "category": "Shoes",
                        "price": 129.99,
                        "rating": 4.5,
                        "inStock": True,
                        "createdAt": "2024-01-15T12:00:00+00:00",
                    },
                    "highlight": {"name": ["<mark>Runner</mark> Pro Shoes"]},
                },
                {
                    "_index": "products_test",
                    "_id": "7",
                    "_score": 1.3,
                    "_source": {
                        "id": 7,
                        "name": "Road Runner Jacket",
                        "description": "",
                        "brand": "Acme",
                        "category": "Apparel",
                        "price": 80.0,
                        "rating": 0.0,
                        "inStock": False,
                        "createdAt": "2024-02-01T08:30:00+00:00",
                    },
                },
            ],
        },
        "aggregations": {
            "brands": {
                "doc_count_error_upper_bound": 0,
                "sum_other_doc_count": 0,
                "buckets": [
                    {"key": "Acme", "doc_count": 1},
                    {"key": "Nike", "doc_count": 1},
                ],
            },
            "categories": {
                "buckets": [
                    {"key": "Apparel", "doc_count": 1},
                    {"key": "Shoes", "doc_count": 1},
                ],
            },
            "price_ranges": {
                "buckets": [
                    {"key": "0-100", "to": 100.0, "doc_count": 1},
                    {"key": "100-500", "from": 100.0, "to": 500.0, "doc_count": 1},
                    {"key": "500-1000", "from": 500.0, "to": 1000.0, "doc_count": 0},
                    {"key": "1000+", "from": 1000.0, "doc_count": 0},
                ],
            },
        },
    }


@pytest.fixture
def empty_search_response() -> dict[str, Any]:
    """Elasticsearch response with no hits and no aggregations."""
    return {"hits": {"total": {"value": 0, "relation": "eq"}, "hits": []}}
