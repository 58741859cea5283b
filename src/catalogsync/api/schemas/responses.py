"""Response schemas for API endpoints."""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import Field

from catalogsync.api.schemas.base import APIBaseSchema, PaginatedResponse
from catalogsync.core.types import SyncAction


# Product schemas
class ProductResponse(APIBaseSchema):
    """Product as stored in the database."""

    id: int
    name: str
    brand: str
    category: str
    description: str | None = None
    price: float
    rating: float
    in_stock: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None


class SyncWarningResponse(APIBaseSchema):
    """Search index was not updated; run a reindex."""

    action: SyncAction
    message: str
    remediation: str


class ProductMutationResponse(APIBaseSchema):
    """Response for create and update."""

    success: bool = True
    data: ProductResponse
    warning: SyncWarningResponse | None = None


class ProductDeleteResponse(APIBaseSchema):
    """Response for delete."""

    success: bool = True
    message: str = "Product deleted successfully"
    warning: SyncWarningResponse | None = None


class ProductDetailResponse(APIBaseSchema):
    """Single product lookup."""

    success: bool = True
    data: ProductResponse


class ProductListResponse(PaginatedResponse):
    """Paginated product listing from the database."""

    total_pages: int
    items: list[ProductResponse]


# Search schemas
class FacetBucketResponse(APIBaseSchema):
    """Count of documents for one facet value."""

    key: str | float
    count: int


class FacetsResponse(APIBaseSchema):
    """Facet breakdowns for a search."""

    brands: list[FacetBucketResponse] = Field(default_factory=list)
    categories: list[FacetBucketResponse] = Field(default_factory=list)
    price_ranges: list[FacetBucketResponse] = Field(default_factory=list, alias="price_ranges")


class SearchHitResponse(APIBaseSchema):
    """Search hit with relevance score and highlights."""

    id: int
    score: float | None = None
    name: str | None = None
    description: str | None = None
    brand: str | None = None
    category: str | None = None
    price: float | None = None
    rating: float | None = None
    in_stock: bool | None = None
    created_at: datetime | None = None
    highlight: dict[str, list[str]] | None = None


class SearchResponse(PaginatedResponse):
    """Paginated product search results."""

    hits: list[SearchHitResponse]
    facets: FacetsResponse


class ReindexResponse(APIBaseSchema):
    """Result of a full reindex."""

    success: bool
    message: str
    indexed: int
    failed: int
    had_errors: bool
    record_count: int
    index_document_count: int


# Health check
class ServiceStatus(APIBaseSchema):
    """Status of one backing store."""

    status: Literal["up", "down"]
    error: str | None = None


class SearchServiceStatus(ServiceStatus):
    """Search engine status with target and cluster colour."""

    nodes: list[str] = Field(default_factory=list)
    cluster_status: str | None = None


class HealthServices(APIBaseSchema):
    """Per-store status."""

    database: ServiceStatus
    search: SearchServiceStatus
    cache: ServiceStatus | None = None


class HealthResponse(APIBaseSchema):
    """Health check response."""

    success: bool
    status: Literal["healthy", "unhealthy"]
    version: str
    timestamp: datetime
    services: HealthServices
