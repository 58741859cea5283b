"""Async Elasticsearch client wrapper and response-shape normalization."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from elasticsearch import AsyncElasticsearch, NotFoundError

logger = logging.getLogger(__name__)


DEFAULT_INDEX = "products_v1"


# ============================================================================
# Response shape normalization
# ============================================================================


def response_body(response: Any) -> Any:
    """Unwrap a transport response into its body; plain values pass through."""
    if response is not None and hasattr(response, "body"):
        return response.body
    return response


def parse_exists(raw: Any) -> bool:
    """Existence as either a bare boolean or an ``{"exists": bool}`` object."""
    if isinstance(raw, bool):
        return raw
    if isinstance(raw, dict) and isinstance(raw.get("exists"), bool):
        return raw["exists"]
    return bool(raw)


def parse_total(raw: Any) -> int:
    """Hit total as either a bare count or ``{"value": n, "relation": ...}``."""
    if isinstance(raw, bool):
        return 0
    if isinstance(raw, int | float):
        return int(raw)
    if isinstance(raw, dict):
        return int(raw.get("value") or 0)
    return 0


def parse_count(raw: Any) -> int:
    """Document count from a count API response."""
    if isinstance(raw, dict):
        return parse_total(raw.get("count"))
    return parse_total(raw)


@dataclass
class BulkResult:
    """Outcome of a bulk index request."""

    items: list[dict[str, Any]] = field(default_factory=list)
    errors: bool = False

    @property
    def failed(self) -> int:
        """Number of items the engine rejected."""
        if not self.errors:
            return 0
        return sum(
            1
            for item in self.items
            if isinstance(item.get("index"), dict) and item["index"].get("error")
        )


# ============================================================================
# Client
# ============================================================================


class AsyncSearchClient:
    """
    Async wrapper for Elasticsearch operations against the product index.

    Retries and request timeouts live in the transport; callers make a
    single attempt per operation.
    """

    def __init__(
        self,
        url: str,
        api_key: str | None = None,
        *,
        index_name: str = DEFAULT_INDEX,
        request_timeout: float = 30.0,
        max_retries: int = 5,
    ) -> None:
        """
        Initialize the search client.

        Args:
            url: Search engine URL
            api_key: Optional API key for authentication
            index_name: Name of the product index
            request_timeout: Per-request timeout in seconds
            max_retries: Transport retries for failed requests
        """
        self._url = url
        self._api_key = api_key
        self._index_name = index_name
        self._request_timeout = request_timeout
        self._max_retries = max_retries
        self._client: AsyncElasticsearch | None = None

    @property
    def index_name(self) -> str:
        return self._index_name

    @property
    def url(self) -> str:
        return self._url

    def _get_client(self) -> AsyncElasticsearch:
        """Get or create the async client."""
        if self._client is None:
            self._client = AsyncElasticsearch(
                hosts=[self._url],
                api_key=self._api_key,
                request_timeout=self._request_timeout,
                max_retries=self._max_retries,
                retry_on_timeout=True,
            )
        return self._client

    async def close(self) -> None:
        """Close the client connection."""
        if self._client is not None:
            await self._client.close()
            self._client = None

    async def ping(self) -> bool:
        """Check whether the engine answers at all."""
        return bool(await self._get_client().ping())

    async def cluster_health(self) -> str | None:
        """Cluster status colour (green/yellow/red)."""
        body = response_body(await self._get_client().cluster.health())
        return body.get("status") if isinstance(body, dict) else None

    async def index_exists(self) -> bool:
        """Check whether the product index exists."""
        response = await self._get_client().indices.exists(index=self._index_name)
        return parse_exists(response_body(response))

    async def create_index(self, mapping: dict[str, Any]) -> None:
        """
        Create the product index.

        Args:
            mapping: Index body with a ``mappings`` (and optional ``settings``) key
        """
        await self._get_client().indices.create(index=self._index_name, **mapping)

    async def index_document(self, document_id: str, document: dict[str, Any]) -> None:
        """Create or fully replace a document."""
        await self._get_client().index(
            index=self._index_name,
            id=document_id,
            document=document,
            refresh="wait_for",
        )

    async def delete_document(self, document_id: str) -> bool:
        """
        Delete a document by ID.

        Returns:
            False when the engine had no such document, True otherwise
        """
        try:
            await self._get_client().delete(
                index=self._index_name,
                id=document_id,
                refresh="wait_for",
            )
        except NotFoundError:
            logger.debug(f"Document {document_id} not in {self._index_name}, nothing to delete")
            return False
        return True

    async def bulk_index(self, documents: list[dict[str, Any]]) -> BulkResult:
        """
        Index documents in one bulk request, keyed by their ``id`` field.

        Args:
            documents: Documents to create or replace

        Returns:
            Per-item results and the engine's overall error flag
        """
        operations: list[dict[str, Any]] = []
        for doc in documents:
            operations.append({"index": {"_index": self._index_name, "_id": str(doc["id"])}})
            operations.append(doc)

        body = response_body(
            await self._get_client().bulk(operations=operations, refresh="wait_for")
        )
        return BulkResult(
            items=list(body.get("items") or []),
            errors=bool(body.get("errors")),
        )

    async def delete_all_documents(self) -> int:
        """Delete every document in the index; returns the number deleted."""
        body = response_body(
            await self._get_client().delete_by_query(
                index=self._index_name,
                query={"match_all": {}},
                conflicts="proceed",
                refresh=True,
            )
        )
        return int(body.get("deleted") or 0) if isinstance(body, dict) else 0

    async def count(self) -> int:
        """Total number of documents in the index."""
        response = await self._get_client().count(index=self._index_name)
        return parse_count(response_body(response))

    async def search(self, body: dict[str, Any]) -> dict[str, Any]:
        """
        Run a compiled query against the index.

        Args:
            body: Query DSL body (query, sort, from/size, highlight, aggs)

        Returns:
            Raw engine response body
        """
        response = await self._get_client().search(index=self._index_name, **body)
        return response_body(response) or {}

    async def __aenter__(self) -> AsyncSearchClient:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
