"""Domain models for catalog records and synchronization outcomes."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, computed_field

from .types import SyncAction

REINDEX_ENDPOINT = "POST /api/v1/search/reindex"
REMEDIATION = "trigger reconciliation"


class CatalogRecord(BaseModel):
    """Authoritative product record as stored in the database."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: int = Field(..., description="Store-assigned identifier")
    name: str = Field(..., description="Product name")
    brand: str = Field(..., description="Brand name")
    category: str = Field(..., description="Category name")
    description: str | None = Field(default=None, description="Free-text description")
    price: Decimal = Field(..., gt=0, description="Unit price")
    rating: float = Field(default=0.0, ge=0.0, le=5.0, description="Average rating (0-5)")
    in_stock: bool = Field(default=True, description="Availability flag")
    created_at: datetime | None = Field(default=None, description="Creation timestamp")
    updated_at: datetime | None = Field(default=None, description="Last modification timestamp")


class SyncWarning(BaseModel):
    """
    Advisory attached to a mutation whose search-side effect failed.

    The database write already succeeded; the caller should run a
    reconciliation to bring the index back in line.
    """

    model_config = ConfigDict(frozen=True)

    action: SyncAction
    message: str
    remediation: str = REMEDIATION

    @classmethod
    def for_action(cls, action: SyncAction) -> SyncWarning:
        """Build the standard warning for a failed propagation."""
        return cls(
            action=action,
            message=(
                f"Product {action.value} in the database, but search indexing failed. "
                f"Run {REINDEX_ENDPOINT} to repair index consistency."
            ),
        )


class MutationOutcome(BaseModel):
    """Result of a database mutation followed by its index propagation."""

    record: CatalogRecord | None = None
    warning: SyncWarning | None = None

    @property
    def index_synced(self) -> bool:
        """Whether the search index received the mutation."""
        return self.warning is None


class RecordPage(BaseModel):
    """A page of records read straight from the database."""

    page: int
    limit: int
    total: int
    items: list[CatalogRecord] = Field(default_factory=list)

    @computed_field
    @property
    def total_pages(self) -> int:
        if self.limit <= 0:
            return 0
        return -(-self.total // self.limit)


class ReconciliationReport(BaseModel):
    """Summary of a full rebuild of the search index."""

    indexed: int = 0
    failed: int = 0
    had_errors: bool = False
    record_count: int = 0
    index_document_count: int = 0

    @property
    def in_sync(self) -> bool:
        """False when any document failed or the index holds fewer documents than the store."""
        return (
            self.failed == 0
            and not self.had_errors
            and self.index_document_count >= self.record_count
        )
