"""FastAPI application and routes."""

from catalogsync.api.app import app, create_app

__all__ = [
    "app",
    "create_app",
]
