"""Search execution and response normalization."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from elastic_transport import TransportError
from elasticsearch import ApiError

from catalogsync.core.exceptions import SearchError
from catalogsync.search.client import AsyncSearchClient, parse_total
from catalogsync.search.query import SearchQuery, compile_query

logger = logging.getLogger(__name__)


@dataclass
class FacetBucket:
    """Document count for one facet value."""

    key: str | float
    count: int


@dataclass
class Facets:
    """Facet breakdowns returned alongside hits."""

    brands: list[FacetBucket] = field(default_factory=list)
    categories: list[FacetBucket] = field(default_factory=list)
    price_ranges: list[FacetBucket] = field(default_factory=list)


@dataclass
class SearchHit:
    """A single search result hit."""

    id: int
    score: float | None
    source: dict[str, Any]
    highlight: dict[str, list[str]] | None = None


@dataclass
class SearchResults:
    """Normalized result of a product search."""

    page: int
    limit: int
    total: int
    hits: list[SearchHit] = field(default_factory=list)
    facets: Facets = field(default_factory=Facets)

    @property
    def has_more(self) -> bool:
        """Whether there are more results available."""
        return self.page * self.limit < self.total


def map_buckets(aggregation: Any) -> list[FacetBucket]:
    """Bucket list of a terms/range aggregation; anything else maps to []."""
    if not isinstance(aggregation, dict) or not isinstance(aggregation.get("buckets"), list):
        return []
    return [
        FacetBucket(key=bucket.get("key"), count=int(bucket.get("doc_count") or 0))
        for bucket in aggregation["buckets"]
    ]


def _parse_hit(hit: dict[str, Any]) -> SearchHit:
    source = dict(hit.get("_source") or {})
    source.pop("id", None)
    return SearchHit(
        id=int(hit["_id"]),
        score=hit.get("_score"),
        source=source,
        highlight=hit.get("highlight") or None,
    )


def normalize_response(raw: dict[str, Any] | None, page: int, limit: int) -> SearchResults:
    """
    Map a raw engine response into the stable result shape.

    Args:
        raw: Engine response body
        page: Requested page (echoed back)
        limit: Effective page size (echoed back)

    Returns:
        Hits, total and facets; missing sections normalize to empty values
    """
    raw = raw or {}
    hits_section = raw.get("hits") or {}

    hits = []
    for hit in hits_section.get("hits") or []:
        try:
            hits.append(_parse_hit(hit))
        except (KeyError, TypeError, ValueError) as e:
            logger.warning(f"Invalid hit in search results: {e}")
            continue

    aggregations = raw.get("aggregations") or {}

    return SearchResults(
        page=page,
        limit=limit,
        total=parse_total(hits_section.get("total")),
        hits=hits,
        facets=Facets(
            brands=map_buckets(aggregations.get("brands")),
            categories=map_buckets(aggregations.get("categories")),
            price_ranges=map_buckets(aggregations.get("price_ranges")),
        ),
    )


class Searcher:
    """
    Service for searching products in the index.

    Compiles the request, runs it once, and normalizes the response. There is
    no fallback to the database for ranked search, so engine errors surface.
    """

    def __init__(self, client: AsyncSearchClient) -> None:
        """
        Initialize the searcher.

        Args:
            client: Search client for query execution
        """
        self._client = client

    async def search(self, query: SearchQuery) -> SearchResults:
        """
        Run a product search.

        Args:
            query: Structured search request

        Returns:
            Normalized search results

        Raises:
            SearchError: If the engine rejects the query or cannot be reached
        """
        body = compile_query(query)
        try:
            raw = await self._client.search(body)
        except (ApiError, TransportError) as e:
            raise SearchError(f"Search request failed: {e}") from e

        return normalize_response(raw, query.page, query.limit)
