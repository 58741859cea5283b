"""API schema definitions."""

from catalogsync.api.schemas.base import (
    APIBaseSchema,
    APIError,
    ErrorDetail,
    PaginatedResponse,
)
from catalogsync.api.schemas.requests import (
    ProductCreateRequest,
    ProductUpdateRequest,
)
from catalogsync.api.schemas.responses import (
    FacetBucketResponse,
    FacetsResponse,
    HealthResponse,
    HealthServices,
    ProductDeleteResponse,
    ProductDetailResponse,
    ProductListResponse,
    ProductMutationResponse,
    ProductResponse,
    ReindexResponse,
    SearchHitResponse,
    SearchResponse,
    SearchServiceStatus,
    ServiceStatus,
    SyncWarningResponse,
)

__all__ = [
    # Base
    "APIBaseSchema",
    "APIError",
    "ErrorDetail",
    "PaginatedResponse",
    # Requests
    "ProductCreateRequest",
    "ProductUpdateRequest",
    # Responses
    "FacetBucketResponse",
    "FacetsResponse",
    "HealthResponse",
    "HealthServices",
    "ProductDeleteResponse",
    "ProductDetailResponse",
    "ProductListResponse",
    "ProductMutationResponse",
    "ProductResponse",
    "ReindexResponse",
    "SearchHitResponse",
    "SearchResponse",
    "SearchServiceStatus",
    "ServiceStatus",
    "SyncWarningResponse",
]
