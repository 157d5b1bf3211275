"""
Base product service.

See services/migration_service.py for how materials map onto base products.
"""

from typing import Optional
import structlog

from config import get_supabase_client
from models.base_product import (
    BaseProductCreate,
    BaseProductUpdate,
    BaseProductResponse
)
from exceptions import BaseProductNotFoundError, DatabaseError

logger = structlog.get_logger(__name__)


class BaseProductService:
    """
    Base product business logic.

    Names are matched exactly; two materials with the same name share
    one base product.
    """

    def __init__(self):
        self.db = get_supabase_client()
        self.table = "base_products"

    # ===================
    # READ OPERATIONS
    # ===================

    def get_by_id(self, base_product_id: str) -> BaseProductResponse:
        """
        Get a base product by ID.

        Raises:
            BaseProductNotFoundError: If base product doesn't exist
        """
        logger.debug("getting_base_product", base_product_id=base_product_id)

        try:
            result = (
                self.db.table(self.table)
                .select("*")
                .eq("id", base_product_id)
                .limit(1)
                .execute()
            )
        except Exception as e:
            logger.error(
                "get_base_product_failed",
                base_product_id=base_product_id,
                error=str(e)
            )
            raise DatabaseError("select", str(e))

        if not result.data:
            raise BaseProductNotFoundError(base_product_id)

        return BaseProductResponse(**result.data[0])

    def get_by_name(self, name: str) -> Optional[BaseProductResponse]:
        """
        Get a base product by exact name.

        Returns:
            BaseProductResponse or None if not found
        """
        logger.debug("getting_base_product_by_name", name=name)

        try:
            result = (
                self.db.table(self.table)
                .select("*")
                .eq("name", name)
                .limit(1)
                .execute()
            )
        except Exception as e:
            logger.error("get_base_product_by_name_failed", name=name, error=str(e))
            raise DatabaseError("select", str(e))

        if not result.data:
            return None

        return BaseProductResponse(**result.data[0])

    # ===================
    # WRITE OPERATIONS
    # ===================

    def create(self, data: BaseProductCreate) -> BaseProductResponse:
        """Create a new base product."""
        logger.info("creating_base_product", name=data.name)

        try:
            result = (
                self.db.table(self.table)
                .insert({
                    "name": data.name,
                    "description": data.description,
                    "category_id": data.category_id
                })
                .execute()
            )
        except Exception as e:
            logger.error("create_base_product_failed", name=data.name, error=str(e))
            raise DatabaseError("insert", str(e))

        product = BaseProductResponse(**result.data[0])
        logger.info("base_product_created", base_product_id=product.id, name=product.name)
        return product

    def update(self, base_product_id: str, data: BaseProductUpdate) -> BaseProductResponse:
        """
        Overwrite name, description and category.

        Raises:
            BaseProductNotFoundError: If base product doesn't exist
        """
        logger.info("updating_base_product", base_product_id=base_product_id)

        try:
            result = (
                self.db.table(self.table)
                .update({
                    "name": data.name,
                    "description": data.description,
                    "category_id": data.category_id
                })
                .eq("id", base_product_id)
                .execute()
            )
        except Exception as e:
            logger.error(
                "update_base_product_failed",
                base_product_id=base_product_id,
                error=str(e)
            )
            raise DatabaseError("update", str(e))

        if not result.data:
            raise BaseProductNotFoundError(base_product_id)

        logger.info("base_product_updated", base_product_id=base_product_id)
        return BaseProductResponse(**result.data[0])


# Singleton instance for convenience
_base_product_service: Optional[BaseProductService] = None

def get_base_product_service() -> BaseProductService:
    """Get or create BaseProductService instance."""
    global _base_product_service
    if _base_product_service is None:
        _base_product_service = BaseProductService()
    return _base_product_service
