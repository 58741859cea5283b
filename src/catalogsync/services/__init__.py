"""Service layer for orchestrating business logic."""

from catalogsync.services.catalog import CatalogService
from catalogsync.services.search import SearchService

__all__ = [
    "CatalogService",
    "SearchService",
]
