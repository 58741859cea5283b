"""Catalogsync - Product catalog with a write-through full-text search index."""

__version__ = "0.1.0"

from catalogsync.client import CatalogSyncClient, reindex_all  # noqa: E402
from catalogsync.core.models import (  # noqa: E402
    CatalogRecord,
    MutationOutcome,
    ReconciliationReport,
    SyncWarning,
)
from catalogsync.core.types import SortOption, SyncAction  # noqa: E402
from catalogsync.search.query import SearchQuery  # noqa: E402
from catalogsync.search.searcher import SearchResults  # noqa: E402

__all__ = [
    # Client
    "CatalogSyncClient",
    "reindex_all",
    # Types
    "SortOption",
    "SyncAction",
    # Models
    "CatalogRecord",
    "MutationOutcome",
    "ReconciliationReport",
    "SyncWarning",
    # Search
    "SearchQuery",
    "SearchResults",
    # Version
    "__version__",
]
