"""
Business logic services.

Each service handles one domain area.
"""

from services.material_service import MaterialService, get_material_service
from services.unit_of_measure_service import UnitOfMeasureService, get_unit_of_measure_service
from services.category_service import CategoryService, get_category_service
from services.base_product_service import BaseProductService, get_base_product_service
from services.product_variant_service import ProductVariantService, get_product_variant_service
from services.migration_service import MigrationService, get_migration_service

__all__ = [
    "MaterialService",
    "get_material_service",
    "UnitOfMeasureService",
    "get_unit_of_measure_service",
    "CategoryService",
    "get_category_service",
    "BaseProductService",
    "get_base_product_service",
    "ProductVariantService",
    "get_product_variant_service",
    "MigrationService",
    "get_migration_service",
]
