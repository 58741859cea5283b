"""Product database model."""

from __future__ import annotations

from decimal import Decimal

from sqlalchemy import Boolean, CheckConstraint, Float, Index, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from catalogsync.db.base import Base, IntegerPrimaryKeyMixin, TimestampMixin


class ProductModel(Base, IntegerPrimaryKeyMixin, TimestampMixin):
    """
    Authoritative catalog record.

    Rows in this table are the source of truth; the search index only ever
    holds a projection of them keyed by the same integer id.
    """

    __tablename__ = "products"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    brand: Mapped[str] = mapped_column(String(120), nullable=False, index=True)
    category: Mapped[str] = mapped_column(String(120), nullable=False, index=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    rating: Mapped[float] = mapped_column(
        Float,
        nullable=False,
        default=0.0,
        server_default="0",
    )
    in_stock: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=True,
        server_default="true",
    )

    __table_args__ = (
        CheckConstraint("price > 0", name="positive_price"),
        CheckConstraint("rating >= 0 AND rating <= 5", name="valid_rating"),
        Index("ix_products_created_at", "created_at"),
    )

    def __repr__(self) -> str:
        return f"<ProductModel(id={self.id}, brand={self.brand}, name='{self.name[:50]}')>"
