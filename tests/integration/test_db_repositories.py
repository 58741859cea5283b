"""Integration tests for the product repository."""

from __future__ import annotations

from decimal import Decimal

import pytest
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from catalogsync.db.models.product import ProductModel
from catalogsync.db.repositories.product import ProductRepository

pytestmark = [pytest.mark.integration, pytest.mark.requires_db]


class TestProductRepositoryCrud:
    """Tests for basic CRUD operations."""

    async def test_create_assigns_id_and_defaults(self, db_session: AsyncSession):
        repo = ProductRepository(db_session)

        product = await repo.create(
            ProductModel(name="Desk Lamp", brand="Lumo", category="Lighting", price=Decimal("45.00"))
        )
        await db_session.commit()

        assert product.id is not None
        assert product.rating == 0.0
        assert product.in_stock is True
        assert product.created_at is not None

    async def test_get(self, db_session: AsyncSession, sample_product: ProductModel):
        repo = ProductRepository(db_session)

        product = await repo.get(sample_product.id)

        assert product is not None
        assert product.name == "Runner Pro Shoes"
        assert product.price == Decimal("129.99")

    async def test_get_missing(self, db_session: AsyncSession):
        assert await ProductRepository(db_session).get(999_999) is None

    async def test_update(self, db_session: AsyncSession, sample_product: ProductModel):
        repo = ProductRepository(db_session)

        product = await repo.update(sample_product, {"price": Decimal("99.00"), "in_stock": False})
        await db_session.commit()

        assert product.price == Decimal("99.00")
        assert product.in_stock is False
        assert product.name == "Runner Pro Shoes"

    async def test_delete(self, db_session: AsyncSession, sample_product: ProductModel):
        repo = ProductRepository(db_session)

        assert await repo.delete(sample_product.id) is True
        await db_session.commit()

        assert await repo.exists(sample_product.id) is False

    async def test_delete_missing(self, db_session: AsyncSession):
        assert await ProductRepository(db_session).delete(999_999) is False

    async def test_count(self, db_session: AsyncSession, multiple_products: list[ProductModel]):
        assert await ProductRepository(db_session).count() == 5


class TestProductConstraints:
    """Tests for table constraints."""

    async def test_price_must_be_positive(self, db_session: AsyncSession):
        repo = ProductRepository(db_session)

        with pytest.raises(IntegrityError):
            await repo.create(ProductModel(name="Free", brand="Acme", category="Misc", price=Decimal("0")))
        await db_session.rollback()

    async def test_rating_range(self, db_session: AsyncSession):
        repo = ProductRepository(db_session)

        with pytest.raises(IntegrityError):
            await repo.create(
                ProductModel(name="Overrated", brand="Acme", category="Misc", price=Decimal("1"), rating=6)
            )
        await db_session.rollback()


class TestProductListing:
    """Tests for ordered listing."""

    async def test_list_all_ordered_by_id(
        self, db_session: AsyncSession, multiple_products: list[ProductModel]
    ):
        products = await ProductRepository(db_session).list_all_ordered()

        ids = [p.id for p in products]
        assert ids == sorted(ids)
        assert len(ids) == 5

    async def test_list_newest_first(
        self, db_session: AsyncSession, multiple_products: list[ProductModel]
    ):
        products = await ProductRepository(db_session).list_newest(offset=0, limit=10)

        keys = [(p.created_at, p.id) for p in products]
        assert keys == sorted(keys, reverse=True)

    async def test_list_newest_pagination(
        self, db_session: AsyncSession, multiple_products: list[ProductModel]
    ):
        repo = ProductRepository(db_session)

        first = await repo.list_newest(offset=0, limit=2)
        second = await repo.list_newest(offset=2, limit=2)

        assert len(first) == 2
        assert len(second) == 2
        assert {p.id for p in first}.isdisjoint({p.id for p in second})
