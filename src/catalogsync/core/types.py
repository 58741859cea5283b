"""Core enums and type definitions."""

from enum import StrEnum


class SortOption(StrEnum):
    """Orderings supported by product search."""

    RELEVANCE = "relevance"
    PRICE_ASC = "price_asc"
    PRICE_DESC = "price_desc"
    NEWEST = "newest"


class SyncAction(StrEnum):
    """Database mutations that are propagated to the search index."""

    CREATED = "created"
    UPDATED = "updated"
    DELETED = "deleted"
