"""Compile structured product searches into Elasticsearch query DSL."""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import Any

from catalogsync.core.types import SortOption

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 50

HIGHLIGHT_PRE_TAG = "<mark>"
HIGHLIGHT_POST_TAG = "</mark>"

TEXT_FIELDS = ["name^3", "description"]

PRICE_RANGES: list[dict[str, Any]] = [
    {"key": "0-100", "to": 100},
    {"key": "100-500", "from": 100, "to": 500},
    {"key": "500-1000", "from": 500, "to": 1000},
    {"key": "1000+", "from": 1000},
]

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")

_SORT_CLAUSES: dict[SortOption, list[dict[str, Any]]] = {
    SortOption.PRICE_ASC: [{"price": {"order": "asc"}}],
    SortOption.PRICE_DESC: [{"price": {"order": "desc"}}],
    SortOption.NEWEST: [{"createdAt": {"order": "desc"}}],
}


# ============================================================================
# Lenient query-string parsing
# ============================================================================


def parse_positive_int(value: Any, default: int) -> int:
    """
    Positive integer or ``default`` for anything else.

    Only the leading digits count, so ``"2.5"`` is 2 and ``"3abc"`` is 3.
    """
    if value is None or isinstance(value, bool):
        return default
    match = _LEADING_INT.match(str(value))
    if match is None:
        return default
    parsed = int(match.group(1))
    return parsed if parsed > 0 else default


def parse_optional_number(value: Any) -> float | None:
    """Finite number or None for empty/invalid input."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str) and not value.strip():
        return None
    try:
        parsed = float(value)
    except (TypeError, ValueError):
        return None
    return parsed if math.isfinite(parsed) else None


def parse_optional_bool(value: Any) -> bool | None:
    """``true``/``false`` (any case) or None."""
    if isinstance(value, bool):
        return value
    if value is None:
        return None
    normalized = str(value).strip().lower()
    if normalized == "true":
        return True
    if normalized == "false":
        return False
    return None


def parse_sort(value: Any) -> SortOption:
    """Known sort selector, falling back to relevance."""
    try:
        return SortOption(str(value).strip().lower())
    except ValueError:
        return SortOption.RELEVANCE


# ============================================================================
# Request
# ============================================================================


@dataclass
class SearchQuery:
    """A structured product search request."""

    text: str | None = None
    brand: str | None = None
    category: str | None = None
    min_price: float | None = None
    max_price: float | None = None
    in_stock: bool | None = None
    sort: SortOption = SortOption.RELEVANCE
    page: int = 1
    limit: int = DEFAULT_PAGE_SIZE

    def __post_init__(self) -> None:
        self.text = (self.text or "").strip() or None
        self.page = max(self.page, 1)
        if self.limit < 1:
            self.limit = DEFAULT_PAGE_SIZE
        self.limit = min(self.limit, MAX_PAGE_SIZE)

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    @classmethod
    def from_params(
        cls,
        *,
        q: Any = None,
        brand: Any = None,
        category: Any = None,
        min_price: Any = None,
        max_price: Any = None,
        in_stock: Any = None,
        sort: Any = None,
        page: Any = None,
        limit: Any = None,
    ) -> SearchQuery:
        """
        Build a query from raw query-string values.

        Invalid values are dropped or replaced by defaults rather than rejected.
        """
        return cls(
            text=str(q) if q is not None else None,
            brand=str(brand).strip() or None if brand is not None else None,
            category=str(category).strip() or None if category is not None else None,
            min_price=parse_optional_number(min_price),
            max_price=parse_optional_number(max_price),
            in_stock=parse_optional_bool(in_stock),
            sort=parse_sort(sort) if sort is not None else SortOption.RELEVANCE,
            page=parse_positive_int(page, 1),
            limit=parse_positive_int(limit, DEFAULT_PAGE_SIZE),
        )


# ============================================================================
# Compilation
# ============================================================================


def build_filters(query: SearchQuery) -> list[dict[str, Any]]:
    """Non-scoring clauses: they narrow the result set without touching relevance."""
    filters: list[dict[str, Any]] = []

    if query.brand:
        filters.append({"term": {"brand": query.brand}})
    if query.category:
        filters.append({"term": {"category": query.category}})

    if query.min_price is not None or query.max_price is not None:
        price_range: dict[str, float] = {}
        if query.min_price is not None:
            price_range["gte"] = query.min_price
        if query.max_price is not None:
            price_range["lte"] = query.max_price
        filters.append({"range": {"price": price_range}})

    if query.in_stock is not None:
        filters.append({"term": {"inStock": query.in_stock}})

    return filters


def build_sort(sort: SortOption) -> list[dict[str, Any]] | None:
    """Sort clause, or None to keep the engine's score ordering."""
    clause = _SORT_CLAUSES.get(sort)
    return [dict(c) for c in clause] if clause else None


def build_aggregations() -> dict[str, Any]:
    """Facet aggregations returned with every search."""
    return {
        "brands": {"terms": {"field": "brand"}},
        "categories": {"terms": {"field": "category"}},
        "price_ranges": {
            "range": {
                "field": "price",
                "ranges": [dict(r) for r in PRICE_RANGES],
            }
        },
    }


def compile_query(query: SearchQuery) -> dict[str, Any]:
    """
    Translate a search request into an Elasticsearch request body.

    Args:
        query: Structured search request

    Returns:
        Body with bool query, pagination, optional sort and highlight, and aggregations
    """
    bool_query: dict[str, Any] = {"filter": build_filters(query)}

    if query.text:
        bool_query["must"] = [
            {
                "multi_match": {
                    "query": query.text,
                    "fields": list(TEXT_FIELDS),
                    "fuzziness": "AUTO",
                }
            }
        ]

    body: dict[str, Any] = {
        "from": query.offset,
        "size": query.limit,
        "query": {"bool": bool_query},
        "aggs": build_aggregations(),
    }

    if query.text:
        body["highlight"] = {
            "pre_tags": [HIGHLIGHT_PRE_TAG],
            "post_tags": [HIGHLIGHT_POST_TAG],
            "fields": {"name": {}, "description": {}},
        }

    sort_clause = build_sort(query.sort)
    if sort_clause:
        body["sort"] = sort_clause

    return body
