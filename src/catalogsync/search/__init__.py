"""Search layer for Elasticsearch integration."""

from catalogsync.search.client import (
    DEFAULT_INDEX,
    AsyncSearchClient,
    BulkResult,
)
from catalogsync.search.indexer import SearchIndexer
from catalogsync.search.lifecycle import IndexManager
from catalogsync.search.mapping import INDEX_MAPPING, to_search_document
from catalogsync.search.propagator import WriteThroughPropagator
from catalogsync.search.query import MAX_PAGE_SIZE, SearchQuery, compile_query
from catalogsync.search.reconciler import Reconciler
from catalogsync.search.searcher import (
    FacetBucket,
    Facets,
    SearchHit,
    SearchResults,
    Searcher,
    normalize_response,
)

__all__ = [
    # Client
    "AsyncSearchClient",
    "BulkResult",
    "DEFAULT_INDEX",
    # Index
    "INDEX_MAPPING",
    "IndexManager",
    "to_search_document",
    # Writes
    "Reconciler",
    "SearchIndexer",
    "WriteThroughPropagator",
    # Queries
    "MAX_PAGE_SIZE",
    "SearchQuery",
    "compile_query",
    # Results
    "FacetBucket",
    "Facets",
    "SearchHit",
    "SearchResults",
    "Searcher",
    "normalize_response",
]
