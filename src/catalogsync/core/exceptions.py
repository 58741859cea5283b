"""Custom exception hierarchy for catalogsync."""

from typing import Any


class CatalogError(Exception):
    """Base exception for all catalogsync errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ValidationError(CatalogError):
    """Input validation failed."""

    pass


class NotFoundError(CatalogError):
    """Resource not found."""

    pass


class DatabaseError(CatalogError):
    """Database operation failed."""

    pass


class CacheError(CatalogError):
    """Cache operation failed."""

    pass


class SearchError(CatalogError):
    """Search operation failed."""

    pass


class SearchUnavailableError(SearchError):
    """Search engine could not be reached."""

    def __init__(
        self,
        message: str,
        attempts: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details)
        self.attempts = attempts


class IndexSetupError(SearchError):
    """Index existence check or creation failed."""

    def __init__(
        self,
        message: str,
        index_name: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details)
        self.index_name = index_name
