"""
Product variant service.

Variants are unique per (name, base_product_id).
"""

from typing import Optional
import structlog

from config import get_supabase_client
from models.product_variant import (
    ProductVariantCreate,
    ProductVariantUpdate,
    ProductVariantResponse
)
from exceptions import ProductVariantNotFoundError, ValidationError, DatabaseError

logger = structlog.get_logger(__name__)


class ProductVariantService:
    """
    Product variant business logic.

    Handles lookups and writes for the `product_variants` table.
    """

    def __init__(self):
        self.db = get_supabase_client()
        self.table = "product_variants"

    # ===================
    # READ OPERATIONS
    # ===================

    def get_by_id(self, variant_id: str) -> ProductVariantResponse:
        """
        Get a variant by ID.

        Raises:
            ProductVariantNotFoundError: If variant doesn't exist
        """
        logger.debug("getting_product_variant", variant_id=variant_id)

        try:
            result = (
                self.db.table(self.table)
                .select("*")
                .eq("id", variant_id)
                .limit(1)
                .execute()
            )
        except Exception as e:
            logger.error("get_product_variant_failed", variant_id=variant_id, error=str(e))
            raise DatabaseError("select", str(e))

        if not result.data:
            raise ProductVariantNotFoundError(variant_id)

        return ProductVariantResponse(**result.data[0])

    def get_by_name_and_base_product(
        self,
        name: str,
        base_product_id: str
    ) -> Optional[ProductVariantResponse]:
        """
        Get the variant with this name under a base product.

        Returns:
            ProductVariantResponse or None if not found
        """
        logger.debug(
            "getting_variant_by_name",
            name=name,
            base_product_id=base_product_id
        )

        try:
            result = (
                self.db.table(self.table)
                .select("*")
                .eq("name", name)
                .eq("base_product_id", base_product_id)
                .limit(1)
                .execute()
            )
        except Exception as e:
            logger.error(
                "get_variant_by_name_failed",
                name=name,
                base_product_id=base_product_id,
                error=str(e)
            )
            raise DatabaseError("select", str(e))

        if not result.data:
            return None

        return ProductVariantResponse(**result.data[0])

    def get_by_base_product(self, base_product_id: str) -> list[ProductVariantResponse]:
        """Get all variants of a base product ordered by name."""
        try:
            result = (
                self.db.table(self.table)
                .select("*")
                .eq("base_product_id", base_product_id)
                .order("name")
                .execute()
            )
        except Exception as e:
            logger.error(
                "get_variants_by_base_product_failed",
                base_product_id=base_product_id,
                error=str(e)
            )
            raise DatabaseError("select", str(e))

        return [ProductVariantResponse(**row) for row in result.data]

    # ===================
    # WRITE OPERATIONS
    # ===================

    def create(self, data: ProductVariantCreate) -> ProductVariantResponse:
        """Create a new variant with its photos and properties."""
        logger.info(
            "creating_product_variant",
            name=data.name,
            base_product_id=data.base_product_id
        )

        try:
            result = (
                self.db.table(self.table)
                .insert({
                    "base_product_id": data.base_product_id,
                    "name": data.name,
                    "stock_quantity": float(data.stock_quantity),
                    "unit_of_measure_id": data.unit_of_measure_id,
                    "unit_value": float(data.unit_value),
                    "usage_notes": data.usage_notes,
                    "photos": data.photos,
                    "dynamic_properties": data.dynamic_properties
                })
                .execute()
            )
        except Exception as e:
            logger.error("create_product_variant_failed", name=data.name, error=str(e))
            raise DatabaseError("insert", str(e))

        variant = ProductVariantResponse(**result.data[0])
        logger.info(
            "product_variant_created",
            variant_id=variant.id,
            base_product_id=variant.base_product_id
        )
        return variant

    def update(self, variant_id: str, data: ProductVariantUpdate) -> ProductVariantResponse:
        """
        Overwrite a variant's details, stock, photos and properties.

        Raises:
            ValidationError: If stock quantity is negative
            ProductVariantNotFoundError: If variant doesn't exist
        """
        logger.info("updating_product_variant", variant_id=variant_id)

        if data.stock_quantity < 0:
            raise ValidationError(
                "Stock quantity cannot be negative.",
                code="NEGATIVE_STOCK",
                details={"stock_quantity": str(data.stock_quantity)}
            )

        try:
            result = (
                self.db.table(self.table)
                .update({
                    "name": data.name,
                    "stock_quantity": float(data.stock_quantity),
                    "unit_of_measure_id": data.unit_of_measure_id,
                    "unit_value": float(data.unit_value),
                    "usage_notes": data.usage_notes,
                    "photos": data.photos,
                    "dynamic_properties": data.dynamic_properties
                })
                .eq("id", variant_id)
                .execute()
            )
        except Exception as e:
            logger.error("update_product_variant_failed", variant_id=variant_id, error=str(e))
            raise DatabaseError("update", str(e))

        if not result.data:
            raise ProductVariantNotFoundError(variant_id)

        logger.info("product_variant_updated", variant_id=variant_id)
        return ProductVariantResponse(**result.data[0])


# Singleton instance for convenience
_product_variant_service: Optional[ProductVariantService] = None

def get_product_variant_service() -> ProductVariantService:
    """Get or create ProductVariantService instance."""
    global _product_variant_service
    if _product_variant_service is None:
        _product_variant_service = ProductVariantService()
    return _product_variant_service
