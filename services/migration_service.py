"""
Material migration service.

Moves legacy materials onto the BaseProduct/ProductVariant model:

    materials row ──► unit of measure (find or create)
                  ──► base product    (find by name or create, refresh details)
                  ──► product variant (create, or overwrite when forced)

Single materials go through migrate_material(); bulk_migrate() runs many
of them in sequential batches. Neither raises for a material that cannot
be migrated: every outcome is a MigrationResult.

Each material is its own unit of work. A bulk run that stops halfway
leaves the materials it already migrated in place.
"""

import json
from typing import Any, Iterable, Optional, Protocol
import structlog

from models.material import MaterialRecord
from models.base_product import BaseProductCreate, BaseProductUpdate, BaseProductResponse
from models.product_variant import (
    DynamicProperties,
    ProductVariantCreate,
    ProductVariantUpdate,
)
from models.migration import (
    MigrationErrorCode,
    MigrationResult,
    BulkMigrationResult,
)
from services.material_service import MaterialService, get_material_service
from services.unit_of_measure_service import UnitOfMeasureService, get_unit_of_measure_service
from services.category_service import CategoryService, get_category_service
from services.base_product_service import BaseProductService, get_base_product_service
from services.product_variant_service import ProductVariantService, get_product_variant_service
from exceptions import InvalidBatchSizeError
from utils.batch_utils import chunked
from utils.unit_utils import is_known_unit_type

logger = structlog.get_logger(__name__)


class CancelSignal(Protocol):
    """Anything with is_set(), normally a threading.Event."""

    def is_set(self) -> bool: ...


# ===================
# VALIDATION & PARSING
# ===================

def validate_material(material: MaterialRecord) -> list[str]:
    """
    Check a material has what a product variant needs.

    Returns:
        Every violated rule, empty if the material is valid
    """
    errors = []

    if not material.name or not material.name.strip():
        errors.append("Material name is required")

    if not material.unit_type or not material.unit_type.strip():
        errors.append("Unit type is required")

    if material.unit_value <= 0:
        errors.append("Unit value must be greater than 0")

    if material.stock_quantity < 0:
        errors.append("Stock quantity cannot be negative")

    return errors


def _load_json(raw: Any, field: str, log) -> Any:
    """Decode a JSON text column; already-decoded values pass through."""
    if not isinstance(raw, str):
        return raw
    if not raw.strip():
        return None
    try:
        return json.loads(raw)
    except json.JSONDecodeError as e:
        log.warning(f"{field}_json_malformed", raw=raw[:200], error=str(e))
        return None


def parse_photos(raw: Any, log=logger) -> list[str]:
    """
    Read a material's photo list.

    Malformed JSON or anything other than a list of strings gives [].
    """
    value = _load_json(raw, "photos", log)
    if value is None:
        return []
    if not isinstance(value, list) or not all(isinstance(p, str) for p in value):
        log.warning("photos_json_invalid", value_type=type(value).__name__)
        return []
    return value


def parse_dynamic_properties(raw: Any, log=logger) -> DynamicProperties:
    """
    Read a material's dynamic property map.

    Malformed JSON or anything other than a JSON object gives {}.
    """
    value = _load_json(raw, "dynamic_properties", log)
    if value is None:
        return {}
    if not isinstance(value, dict):
        log.warning("dynamic_properties_json_invalid", value_type=type(value).__name__)
        return {}
    return value


def _is_cancelled(cancel_event: Optional[CancelSignal]) -> bool:
    return cancel_event is not None and cancel_event.is_set()


# ===================
# SERVICE
# ===================

class MigrationService:
    """
    Material → BaseProduct/ProductVariant migration.

    Collaborating services default to their singletons; pass them in
    (and a logger) to run against something else.
    """

    def __init__(
        self,
        material_service: Optional[MaterialService] = None,
        unit_service: Optional[UnitOfMeasureService] = None,
        category_service: Optional[CategoryService] = None,
        base_product_service: Optional[BaseProductService] = None,
        variant_service: Optional[ProductVariantService] = None,
        logger=None
    ):
        self.materials = material_service or get_material_service()
        self.units = unit_service or get_unit_of_measure_service()
        self.categories = category_service or get_category_service()
        self.base_products = base_product_service or get_base_product_service()
        self.variants = variant_service or get_product_variant_service()
        self.logger = logger or structlog.get_logger(__name__)

    # ===================
    # SINGLE MATERIAL
    # ===================

    def migrate_material(
        self,
        material_id: str,
        user_id: str,
        skip_validation: bool = False,
        force_migration: bool = False
    ) -> MigrationResult:
        """
        Migrate one material.

        Args:
            material_id: Material UUID
            user_id: User running the migration (logged only)
            skip_validation: Skip the material data checks
            force_migration: Proceed past validation failures and
                overwrite a variant that already exists

        Returns:
            MigrationResult; success=False carries the reason, nothing raises
        """
        log = self.logger.bind(material_id=material_id, user_id=user_id)
        log.info(
            "material_migration_started",
            skip_validation=skip_validation,
            force_migration=force_migration
        )

        try:
            return self._migrate(material_id, skip_validation, force_migration, log)
        except Exception as e:
            log.error(
                "material_migration_failed",
                error=str(e),
                error_type=type(e).__name__
            )
            return MigrationResult.failed(
                material_id,
                MigrationErrorCode.UNEXPECTED_ERROR,
                str(e)
            )

    def _migrate(
        self,
        material_id: str,
        skip_validation: bool,
        force_migration: bool,
        log
    ) -> MigrationResult:
        material = self.materials.get_by_id(material_id)
        if material is None:
            log.warning("material_not_found")
            return MigrationResult.failed(
                material_id,
                MigrationErrorCode.MATERIAL_NOT_FOUND,
                f"Material with ID {material_id} not found"
            )

        if not skip_validation:
            errors = validate_material(material)
            if errors and not force_migration:
                log.warning("material_validation_failed", errors=errors)
                return MigrationResult.failed(
                    material_id,
                    MigrationErrorCode.VALIDATION_FAILED,
                    f"Validation failed: {'; '.join(errors)}"
                )
            if errors:
                log.warning("material_validation_failed_forcing", errors=errors)

        unit = self.units.resolve_for_unit_type(material.unit_type)
        if unit is None:
            log.error("unit_resolution_failed", unit_type=material.unit_type)
            return MigrationResult.failed(
                material_id,
                MigrationErrorCode.UNIT_RESOLUTION_FAILED,
                f"Failed to process unit type: {material.unit_type}"
            )
        if not is_known_unit_type(material.unit_type):
            log.info("unit_type_unrecognized", unit_type=material.unit_type, unit_id=unit.id)

        category_id = self._resolve_category_id(material, log)
        base_product = self._upsert_base_product(material, category_id, log)

        photos = parse_photos(material.photos, log)
        properties = parse_dynamic_properties(material.dynamic_properties, log)

        existing = self.variants.get_by_name_and_base_product(material.name, base_product.id)

        if existing and not force_migration:
            log.warning("product_variant_exists", base_product_id=base_product.id)
            return MigrationResult.failed(
                material_id,
                MigrationErrorCode.VARIANT_EXISTS,
                f"Product variant with name '{material.name}' already exists for this base product"
            )

        if existing:
            log.info("product_variant_overwriting", variant_id=existing.id)
            variant = self.variants.update(existing.id, ProductVariantUpdate(
                name=material.name,
                stock_quantity=material.stock_quantity,
                unit_of_measure_id=unit.id,
                unit_value=material.unit_value,
                usage_notes=material.usage_notes,
                photos=photos,
                dynamic_properties=properties
            ))
        else:
            variant = self.variants.create(ProductVariantCreate(
                base_product_id=base_product.id,
                name=material.name,
                stock_quantity=material.stock_quantity,
                unit_of_measure_id=unit.id,
                unit_value=material.unit_value,
                usage_notes=material.usage_notes,
                photos=photos,
                dynamic_properties=properties
            ))

        log.info(
            "material_migrated",
            base_product_id=base_product.id,
            variant_id=variant.id
        )
        return MigrationResult.succeeded(material_id, base_product.id, variant.id)

    def _resolve_category_id(self, material: MaterialRecord, log) -> Optional[str]:
        """A dangling category reference migrates as uncategorized."""
        if not material.category_id:
            return None

        category = self.categories.get_by_id(material.category_id)
        if category is None:
            log.warning("category_not_found", category_id=material.category_id)
            return None
        return category.id

    def _upsert_base_product(
        self,
        material: MaterialRecord,
        category_id: Optional[str],
        log
    ) -> BaseProductResponse:
        existing = self.base_products.get_by_name(material.name)

        if existing is None:
            return self.base_products.create(BaseProductCreate(
                name=material.name,
                description=material.description,
                category_id=category_id
            ))

        log.info("base_product_reused", base_product_id=existing.id)

        if existing.description != material.description or existing.category_id != category_id:
            return self.base_products.update(existing.id, BaseProductUpdate(
                name=material.name,
                description=material.description,
                category_id=category_id
            ))

        return existing

    # ===================
    # BULK
    # ===================

    def bulk_migrate(
        self,
        user_id: str,
        material_ids: Optional[Iterable[str]] = None,
        batch_size: int = 10,
        continue_on_error: bool = True,
        skip_validation: bool = False,
        force_migration: bool = False,
        cancel_event: Optional[CancelSignal] = None
    ) -> BulkMigrationResult:
        """
        Migrate many materials in sequential batches.

        Args:
            user_id: User running the migration
            material_ids: Materials to migrate; None means every material
            batch_size: Materials per batch, must be positive
            continue_on_error: Keep going after a batch with failures
            skip_validation: Passed to each migrate_material() call
            force_migration: Passed to each migrate_material() call
            cancel_event: Checked before each batch and each material;
                once set, the run stops and returns what it has

        Returns:
            BulkMigrationResult with one result per attempted material

        Raises:
            InvalidBatchSizeError: If batch_size is not positive
        """
        if batch_size <= 0:
            raise InvalidBatchSizeError(batch_size)

        log = self.logger.bind(user_id=user_id)
        log.info(
            "bulk_migration_started",
            batch_size=batch_size,
            continue_on_error=continue_on_error
        )

        ids = list(material_ids) if material_ids is not None else self.materials.get_all_ids()
        result = BulkMigrationResult(total_processed=len(ids))

        log.info("bulk_migration_materials_selected", count=len(ids))

        for batch_number, batch in enumerate(chunked(ids, batch_size), start=1):
            if _is_cancelled(cancel_event):
                log.warning("bulk_migration_cancelled", batch=batch_number)
                result.cancelled = True
                break

            batch_results = self._process_batch(
                batch,
                user_id,
                skip_validation,
                force_migration,
                cancel_event,
                log
            )
            result.results.extend(batch_results)

            successful = sum(1 for r in batch_results if r.success)
            failed = len(batch_results) - successful
            result.successful_migrations += successful
            result.failed_migrations += failed

            log.info(
                "batch_processed",
                batch=batch_number,
                successful=successful,
                failed=failed
            )

            if len(batch_results) < len(batch):
                log.warning("bulk_migration_cancelled", batch=batch_number)
                result.cancelled = True
                break

            if not continue_on_error and failed > 0:
                log.warning("bulk_migration_stopped_on_error", batch=batch_number)
                result.stopped_on_error = True
                break

        log.info(
            "bulk_migration_completed",
            total=result.total_processed,
            successful=result.successful_migrations,
            failed=result.failed_migrations
        )
        return result

    def _process_batch(
        self,
        batch: list[str],
        user_id: str,
        skip_validation: bool,
        force_migration: bool,
        cancel_event: Optional[CancelSignal],
        log
    ) -> list[MigrationResult]:
        results = []

        for material_id in batch:
            if _is_cancelled(cancel_event):
                break

            try:
                results.append(self.migrate_material(
                    material_id,
                    user_id,
                    skip_validation=skip_validation,
                    force_migration=force_migration
                ))
            except Exception as e:
                log.error(
                    "batch_item_failed",
                    material_id=material_id,
                    error=str(e),
                    error_type=type(e).__name__
                )
                results.append(MigrationResult.failed(
                    material_id,
                    MigrationErrorCode.UNEXPECTED_ERROR,
                    str(e)
                ))

        return results


# Singleton instance for convenience
_migration_service: Optional[MigrationService] = None

def get_migration_service() -> MigrationService:
    """Get or create MigrationService instance."""
    global _migration_service
    if _migration_service is None:
        _migration_service = MigrationService()
    return _migration_service
