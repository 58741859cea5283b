"""Product repository with catalog-specific queries."""

from collections.abc import Sequence

from sqlalchemy import select

from catalogsync.db.models.product import ProductModel
from catalogsync.db.repositories.base import BaseRepository


class ProductRepository(BaseRepository[ProductModel]):
    """Repository for product rows."""

    model = ProductModel

    async def list_newest(
        self,
        *,
        offset: int = 0,
        limit: int = 10,
    ) -> Sequence[ProductModel]:
        """List products newest first."""
        stmt = (
            select(ProductModel)
            .order_by(ProductModel.created_at.desc(), ProductModel.id.desc())
            .offset(offset)
            .limit(limit)
        )
        result = await self._session.execute(stmt)
        return result.scalars().all()

    async def list_all_ordered(self) -> Sequence[ProductModel]:
        """Every product ordered by id, as read by a full reindex."""
        stmt = select(ProductModel).order_by(ProductModel.id.asc())
        result = await self._session.execute(stmt)
        return result.scalars().all()
