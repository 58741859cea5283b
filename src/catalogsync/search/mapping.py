"""Index mapping and record-to-document conversion."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime
from typing import Any

# Exact-match filters need keyword fields; term queries against analyzed
# text fields silently miss.
INDEX_MAPPING: dict[str, Any] = {
    "mappings": {
        "properties": {
            "name": {
                "type": "text",
                "fields": {"keyword": {"type": "keyword"}},
            },
            "description": {"type": "text"},
            "brand": {"type": "keyword"},
            "category": {"type": "keyword"},
            "price": {"type": "float"},
            "rating": {"type": "float"},
            "inStock": {"type": "boolean"},
            "createdAt": {"type": "date"},
        }
    }
}

# Record attribute -> document field, for mapping-shaped input
_FIELD_ALIASES = {
    "in_stock": "inStock",
    "created_at": "createdAt",
}


def _read(record: Any, field: str) -> Any:
    if isinstance(record, Mapping):
        if field in record:
            return record[field]
        return record.get(_FIELD_ALIASES.get(field, field))
    return getattr(record, field, None)


def _timestamp(value: Any) -> str | None:
    if isinstance(value, datetime):
        return value.isoformat()
    return value


def to_search_document(record: Any) -> dict[str, Any]:
    """
    Convert a catalog record into its search document.

    Accepts an ORM row, a ``CatalogRecord`` or a plain mapping (including a
    previously produced document). Numeric fields are coerced to the index's
    float/int types and a missing description becomes an empty string.

    Args:
        record: Product row, domain record, or mapping

    Returns:
        Document body keyed the way the index mapping expects
    """
    rating = _read(record, "rating")
    return {
        "id": int(_read(record, "id")),
        "name": _read(record, "name"),
        "description": _read(record, "description") or "",
        "brand": _read(record, "brand"),
        "category": _read(record, "category"),
        "price": float(_read(record, "price")),
        "rating": float(rating or 0),
        "inStock": bool(_read(record, "in_stock")),
        "createdAt": _timestamp(_read(record, "created_at")),
    }
