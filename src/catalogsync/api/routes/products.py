"""Product CRUD endpoints."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Path, Query, status

from catalogsync.api.dependencies import CatalogSvc
from catalogsync.api.schemas import (
    ProductCreateRequest,
    ProductDeleteResponse,
    ProductDetailResponse,
    ProductListResponse,
    ProductMutationResponse,
    ProductResponse,
    ProductUpdateRequest,
    SyncWarningResponse,
)
from catalogsync.core.models import MutationOutcome

router = APIRouter(prefix="/products", tags=["products"])

ProductId = Path(..., gt=0, description="Product ID")


def _not_found() -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Product not found")


def _warning(outcome: MutationOutcome) -> SyncWarningResponse | None:
    if outcome.warning is None:
        return None
    return SyncWarningResponse.model_validate(outcome.warning)


@router.post(
    "",
    response_model=ProductMutationResponse,
    status_code=status.HTTP_201_CREATED,
    operation_id="createProduct",
    summary="Create product",
    description="Store a product and index it for search.",
)
async def create_product(
    request: ProductCreateRequest,
    catalog_service: CatalogSvc,
) -> ProductMutationResponse:
    """Create a product. A search-side failure is reported in ``warning``."""
    outcome = await catalog_service.create_record(request.to_payload())

    return ProductMutationResponse(
        data=ProductResponse.model_validate(outcome.record),
        warning=_warning(outcome),
    )


@router.get(
    "",
    response_model=ProductListResponse,
    operation_id="listProducts",
    summary="List products",
    description="List products from the database, newest first.",
)
async def list_products(
    catalog_service: CatalogSvc,
    page: int = Query(1, ge=1, description="Page number"),
    limit: int = Query(10, ge=1, le=100, description="Results per page"),
) -> ProductListResponse:
    """List products."""
    result = await catalog_service.list_records(page=page, limit=limit)

    return ProductListResponse(
        page=result.page,
        limit=result.limit,
        total=result.total,
        total_pages=result.total_pages,
        items=[ProductResponse.model_validate(r) for r in result.items],
    )


@router.get(
    "/{product_id}",
    response_model=ProductDetailResponse,
    operation_id="getProduct",
    summary="Get product",
)
async def get_product(
    catalog_service: CatalogSvc,
    product_id: int = ProductId,
) -> ProductDetailResponse:
    """Get a single product by ID."""
    record = await catalog_service.get_record(product_id)
    if record is None:
        raise _not_found()

    return ProductDetailResponse(data=ProductResponse.model_validate(record))


@router.put(
    "/{product_id}",
    response_model=ProductMutationResponse,
    operation_id="updateProduct",
    summary="Update product",
    description="Change product fields and replace its search document.",
)
async def update_product(
    request: ProductUpdateRequest,
    catalog_service: CatalogSvc,
    product_id: int = ProductId,
) -> ProductMutationResponse:
    """Update a product. A search-side failure is reported in ``warning``."""
    outcome = await catalog_service.update_record(product_id, request.to_changes())
    if outcome is None:
        raise _not_found()

    return ProductMutationResponse(
        data=ProductResponse.model_validate(outcome.record),
        warning=_warning(outcome),
    )


@router.delete(
    "/{product_id}",
    response_model=ProductDeleteResponse,
    operation_id="deleteProduct",
    summary="Delete product",
    description="Delete a product and remove its search document.",
)
async def delete_product(
    catalog_service: CatalogSvc,
    product_id: int = ProductId,
) -> ProductDeleteResponse:
    """Delete a product. A search-side failure is reported in ``warning``."""
    outcome = await catalog_service.delete_record(product_id)
    if outcome is None:
        raise _not_found()

    return ProductDeleteResponse(warning=_warning(outcome))
