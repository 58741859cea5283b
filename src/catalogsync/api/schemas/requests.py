"""Request schemas for API endpoints."""

from __future__ import annotations

from decimal import Decimal
from typing import Annotated, Any

from pydantic import Field, StringConstraints, model_validator

from catalogsync.api.schemas.base import APIBaseSchema

RequiredText = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=255)]
Price = Annotated[Decimal, Field(gt=0, max_digits=10, decimal_places=2, description="Unit price")]
OptionalText = Annotated[str, StringConstraints(strip_whitespace=True, max_length=5000)] | None
Rating = Annotated[float, Field(ge=0, le=5, description="Average rating (0-5)")]


class ProductCreateRequest(APIBaseSchema):
    """Request to create a product."""

    name: RequiredText
    brand: RequiredText
    category: RequiredText
    description: OptionalText = None
    price: Price
    rating: Rating | None = None
    in_stock: bool | None = None

    def to_payload(self) -> dict[str, Any]:
        """Snake_case fields for the service layer; unset optionals are omitted."""
        return self.model_dump(exclude_none=True)


class ProductUpdateRequest(APIBaseSchema):
    """Request to change some fields of a product."""

    name: RequiredText | None = None
    brand: RequiredText | None = None
    category: RequiredText | None = None
    description: OptionalText = None
    price: Price | None = None
    rating: Rating | None = None
    in_stock: bool | None = None

    @model_validator(mode="after")
    def require_some_field(self) -> ProductUpdateRequest:
        if not self.model_fields_set:
            raise ValueError("At least one field must be provided for update")
        return self

    def to_changes(self) -> dict[str, Any]:
        """Only the fields the client actually sent."""
        changes = self.model_dump(exclude_unset=True)
        # Required columns cannot be nulled out; description can.
        return {k: v for k, v in changes.items() if v is not None or k == "description"}
