"""
Legacy material data source.

Read-only access to the `materials` table that the migration drains.
"""

from typing import Optional
import structlog

from config import get_supabase_client
from models.material import MaterialRecord
from exceptions import DatabaseError

logger = structlog.get_logger(__name__)


class MaterialService:
    """
    Material reads.

    Nothing here writes; materials are left untouched by a migration.
    """

    def __init__(self):
        self.db = get_supabase_client()
        self.table = "materials"

    def get_by_id(self, material_id: str) -> Optional[MaterialRecord]:
        """
        Get a material by ID.

        Args:
            material_id: Material UUID

        Returns:
            MaterialRecord or None if not found
        """
        logger.debug("getting_material", material_id=material_id)

        try:
            result = (
                self.db.table(self.table)
                .select("*")
                .eq("id", material_id)
                .limit(1)
                .execute()
            )
        except Exception as e:
            logger.error(
                "get_material_failed",
                material_id=material_id,
                error=str(e)
            )
            raise DatabaseError("select", str(e))

        if not result.data:
            return None

        return MaterialRecord(**result.data[0])

    def get_all_ids(self) -> list[str]:
        """
        Get every material ID, oldest first.

        Returns:
            List of material UUIDs
        """
        logger.info("getting_all_material_ids")

        try:
            result = (
                self.db.table(self.table)
                .select("id")
                .order("created_at")
                .order("id")
                .execute()
            )
        except Exception as e:
            logger.error("get_material_ids_failed", error=str(e))
            raise DatabaseError("select", str(e))

        ids = [row["id"] for row in result.data]
        logger.info("material_ids_retrieved", count=len(ids))
        return ids

    def get_batch(self, skip: int, take: int) -> list[MaterialRecord]:
        """
        Get a page of materials, oldest first.

        Args:
            skip: Number of materials to skip
            take: Maximum number of materials to return

        Returns:
            List of MaterialRecord (empty past the end)
        """
        if take <= 0:
            return []

        logger.debug("getting_material_batch", skip=skip, take=take)

        try:
            result = (
                self.db.table(self.table)
                .select("*")
                .order("created_at")
                .order("id")
                .range(skip, skip + take - 1)
                .execute()
            )
        except Exception as e:
            logger.error(
                "get_material_batch_failed",
                skip=skip,
                take=take,
                error=str(e)
            )
            raise DatabaseError("select", str(e))

        return [MaterialRecord(**row) for row in result.data]

    def count(self) -> int:
        """Count legacy materials."""
        try:
            result = self.db.table(self.table).select("id", count="exact").execute()
            return result.count or 0
        except Exception as e:
            logger.error("count_materials_failed", error=str(e))
            raise DatabaseError("count", str(e))


# Singleton instance for convenience
_material_service: Optional[MaterialService] = None

def get_material_service() -> MaterialService:
    """Get or create MaterialService instance."""
    global _material_service
    if _material_service is None:
        _material_service = MaterialService()
    return _material_service
