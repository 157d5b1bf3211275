"""
Pydantic models for validation and serialization.
"""

from models.base import BaseSchema, TimestampMixin
from models.material import MaterialRecord
from models.unit_of_measure import (
    UnitDefinition,
    UnitOfMeasureCreate,
    UnitOfMeasureResponse,
)
from models.category import CategoryResponse
from models.base_product import (
    BaseProductCreate,
    BaseProductUpdate,
    BaseProductResponse,
)
from models.product_variant import (
    DynamicProperties,
    ProductVariantCreate,
    ProductVariantUpdate,
    ProductVariantResponse,
)
from models.migration import (
    MigrationErrorCode,
    MigrateMaterialRequest,
    BulkMigrateMaterialsRequest,
    MigrationResult,
    BulkMigrationResult,
)

__all__ = [
    # Base
    "BaseSchema",
    "TimestampMixin",

    # Legacy
    "MaterialRecord",

    # Catalog
    "UnitDefinition",
    "UnitOfMeasureCreate",
    "UnitOfMeasureResponse",
    "CategoryResponse",
    "BaseProductCreate",
    "BaseProductUpdate",
    "BaseProductResponse",
    "DynamicProperties",
    "ProductVariantCreate",
    "ProductVariantUpdate",
    "ProductVariantResponse",

    # Migration
    "MigrationErrorCode",
    "MigrateMaterialRequest",
    "BulkMigrateMaterialsRequest",
    "MigrationResult",
    "BulkMigrationResult",
]
