"""Core types, models, and exceptions."""

from .exceptions import (
    CacheError,
    CatalogError,
    DatabaseError,
    IndexSetupError,
    NotFoundError,
    SearchError,
    SearchUnavailableError,
    ValidationError,
)
from .models import (
    CatalogRecord,
    MutationOutcome,
    ReconciliationReport,
    RecordPage,
    SyncWarning,
)
from .types import SortOption, SyncAction

__all__ = [
    # Types
    "SortOption",
    "SyncAction",
    # Models
    "CatalogRecord",
    "MutationOutcome",
    "ReconciliationReport",
    "RecordPage",
    "SyncWarning",
    # Exceptions
    "CacheError",
    "CatalogError",
    "DatabaseError",
    "IndexSetupError",
    "NotFoundError",
    "SearchError",
    "SearchUnavailableError",
    "ValidationError",
]
