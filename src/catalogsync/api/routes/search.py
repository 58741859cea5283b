"""Search and reindex endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Query
from fastapi.responses import JSONResponse

from catalogsync.api.dependencies import ReindexSvc, SearchSvc
from catalogsync.api.schemas import (
    FacetBucketResponse,
    FacetsResponse,
    ReindexResponse,
    SearchHitResponse,
    SearchResponse,
)
from catalogsync.search.query import SearchQuery
from catalogsync.search.searcher import FacetBucket, SearchResults

router = APIRouter(prefix="/search", tags=["search"])


def _buckets(buckets: list[FacetBucket]) -> list[FacetBucketResponse]:
    return [FacetBucketResponse(key=b.key, count=b.count) for b in buckets]


def _to_response(results: SearchResults) -> SearchResponse:
    return SearchResponse(
        page=results.page,
        limit=results.limit,
        total=results.total,
        hits=[
            SearchHitResponse.model_validate(
                {**hit.source, "id": hit.id, "score": hit.score, "highlight": hit.highlight}
            )
            for hit in results.hits
        ],
        facets=FacetsResponse(
            brands=_buckets(results.facets.brands),
            categories=_buckets(results.facets.categories),
            price_ranges=_buckets(results.facets.price_ranges),
        ),
    )


@router.get(
    "",
    response_model=SearchResponse,
    operation_id="searchProducts",
    summary="Search products",
    description="Full-text product search with filters, sorting and facets.",
)
async def search_products(
    search_service: SearchSvc,
    q: str | None = Query(None, description="Free-text query"),
    brand: str | None = Query(None),
    category: str | None = Query(None),
    min_price: str | None = Query(None, alias="minPrice"),
    max_price: str | None = Query(None, alias="maxPrice"),
    in_stock: str | None = Query(None, alias="inStock"),
    sort: str | None = Query(None, description="relevance, price_asc, price_desc or newest"),
    page: str | None = Query(None, description="Page number (default 1)"),
    limit: str | None = Query(None, description="Results per page (default 10, max 50)"),
) -> SearchResponse:
    """Search the product index. Malformed numeric or boolean values are ignored."""
    query = SearchQuery.from_params(
        q=q,
        brand=brand,
        category=category,
        min_price=min_price,
        max_price=max_price,
        in_stock=in_stock,
        sort=sort,
        page=page,
        limit=limit,
    )
    results = await search_service.search(query)
    return _to_response(results)


@router.post(
    "/reindex",
    response_model=ReindexResponse,
    operation_id="reindexProducts",
    summary="Rebuild the search index",
    description="Clear the index and bulk-load every product from the database.",
    responses={500: {"model": ReindexResponse}},
)
async def reindex_products(reindex_service: ReindexSvc):
    """Rebuild the index; any drift is reported with a 500 and the counts."""
    report = await reindex_service.reindex_all()

    if report.in_sync:
        status_code = 200
        message = "Reindex completed"
    else:
        status_code = 500
        message = "Reindex finished with sync mismatch. Check logs and rerun reindex."

    response = ReindexResponse(
        success=report.in_sync,
        message=message,
        **report.model_dump(),
    )
    return JSONResponse(
        status_code=status_code,
        content=response.model_dump(mode="json", by_alias=True),
    )
