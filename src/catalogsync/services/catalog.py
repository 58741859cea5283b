"""Catalog service for the write → commit → propagate flow."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from catalogsync.cache.decorators import cache_invalidate, cached
from catalogsync.cache.keys import CacheKeys
from catalogsync.core.models import CatalogRecord, MutationOutcome, RecordPage
from catalogsync.db.models.product import ProductModel
from catalogsync.db.repositories.product import ProductRepository

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

    from catalogsync.cache.client import AsyncRedisClient
    from catalogsync.search.propagator import WriteThroughPropagator

logger = logging.getLogger(__name__)

MAX_LIST_LIMIT = 100


class CatalogService:
    """
    Service for mutating and reading catalog records.

    Every mutation runs as two sequential steps:
    1. Write and commit to the database (failure aborts the request)
    2. Propagate to the search index (failure only adds a warning)
    """

    def __init__(
        self,
        session: "AsyncSession",
        propagator: "WriteThroughPropagator",
        cache: "AsyncRedisClient | None" = None,
        cache_ttl: int = 300,
    ) -> None:
        """
        Initialize the catalog service.

        Args:
            session: Database session for the authoritative store
            propagator: Write-through hooks for the search index
            cache: Optional Redis client for single-record reads
            cache_ttl: Record cache TTL in seconds
        """
        self._session = session
        self._repo = ProductRepository(session)
        self._propagator = propagator
        self._cache = cache
        self._cache_ttl = cache_ttl

    async def create_record(self, payload: dict[str, Any]) -> MutationOutcome:
        """
        Create a product, then index it.

        Args:
            payload: Validated product fields (snake_case)

        Returns:
            The stored record and a warning if indexing failed
        """
        fields = {k: v for k, v in payload.items() if v is not None}
        product = await self._repo.create(ProductModel(**fields))
        await self._session.commit()

        record = CatalogRecord.model_validate(product)
        logger.info(f"Created product {record.id}")

        warning = await self._propagator.on_create(record)
        return MutationOutcome(record=record, warning=warning)

    @cache_invalidate(lambda record_id, *_, **__: CacheKeys.record(record_id))
    async def update_record(
        self,
        record_id: int,
        changes: dict[str, Any],
    ) -> MutationOutcome | None:
        """
        Apply changes to a product, then replace its document.

        Args:
            record_id: Product ID
            changes: Fields to change (only keys present are applied)

        Returns:
            Outcome with the full updated record, or None if the product does not exist
        """
        product = await self._repo.get(record_id)
        if product is None:
            return None

        product = await self._repo.update(product, changes)
        await self._session.commit()

        record = CatalogRecord.model_validate(product)
        logger.info(f"Updated product {record.id}")

        warning = await self._propagator.on_update(record)
        return MutationOutcome(record=record, warning=warning)

    @cache_invalidate(lambda record_id, *_, **__: CacheKeys.record(record_id))
    async def delete_record(self, record_id: int) -> MutationOutcome | None:
        """
        Delete a product, then remove its document.

        Args:
            record_id: Product ID

        Returns:
            Outcome without a record, or None if the product does not exist
        """
        if not await self._repo.exists(record_id):
            return None

        await self._repo.delete(record_id)
        await self._session.commit()
        logger.info(f"Deleted product {record_id}")

        warning = await self._propagator.on_delete(record_id)
        return MutationOutcome(record=None, warning=warning)

    async def get_record(self, record_id: int) -> CatalogRecord | None:
        """Get a product by ID, through the record cache when configured."""
        data = await self._load_record(record_id)
        if data is None:
            return None
        return CatalogRecord.model_validate(data)

    @cached(lambda record_id: CacheKeys.record(record_id))
    async def _load_record(self, record_id: int) -> dict[str, Any] | None:
        product = await self._repo.get(record_id)
        if product is None:
            return None
        return CatalogRecord.model_validate(product).model_dump(mode="json")

    async def list_records(self, page: int = 1, limit: int = 10) -> RecordPage:
        """
        List products newest first, straight from the database.

        Args:
            page: Page number (1-indexed)
            limit: Page size, capped at 100

        Returns:
            Page of records with the overall total
        """
        page = max(page, 1)
        limit = min(max(limit, 1), MAX_LIST_LIMIT)

        total = await self._repo.count()
        products = await self._repo.list_newest(offset=(page - 1) * limit, limit=limit)

        return RecordPage(
            page=page,
            limit=limit,
            total=total,
            items=[CatalogRecord.model_validate(p) for p in products],
        )
