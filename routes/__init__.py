"""
API route modules.

Each module defines routes for one domain area.
"""

from routes.migrations import router as migrations_router
from routes.catalog import router as catalog_router

__all__ = [
    "migrations_router",
    "catalog_router",
]
