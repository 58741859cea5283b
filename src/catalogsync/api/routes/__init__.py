"""API route modules."""

from catalogsync.api.routes.health import router as health_router
from catalogsync.api.routes.products import router as products_router
from catalogsync.api.routes.search import router as search_router

__all__ = [
    "health_router",
    "products_router",
    "search_router",
]
