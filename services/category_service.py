"""
Category lookups used while migrating materials.
"""

from typing import Optional
import structlog

from config import get_supabase_client
from models.category import CategoryResponse
from exceptions import DatabaseError

logger = structlog.get_logger(__name__)


class CategoryService:
    """Category reads."""

    def __init__(self):
        self.db = get_supabase_client()
        self.table = "categories"

    def get_by_id(self, category_id: str) -> Optional[CategoryResponse]:
        """
        Get a category by ID.

        Returns:
            CategoryResponse or None if not found
        """
        logger.debug("getting_category", category_id=category_id)

        try:
            result = (
                self.db.table(self.table)
                .select("*")
                .eq("id", category_id)
                .limit(1)
                .execute()
            )
        except Exception as e:
            logger.error(
                "get_category_failed",
                category_id=category_id,
                error=str(e)
            )
            raise DatabaseError("select", str(e))

        if not result.data:
            return None

        return CategoryResponse(**result.data[0])


# Singleton instance for convenience
_category_service: Optional[CategoryService] = None

def get_category_service() -> CategoryService:
    """Get or create CategoryService instance."""
    global _category_service
    if _category_service is None:
        _category_service = CategoryService()
    return _category_service
