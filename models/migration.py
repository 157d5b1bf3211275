"""
Material migration schemas.

Commands accepted by the migration endpoints and the result types they
return. A failed migration is a MigrationResult with success=False,
never an exception.
"""

from pydantic import Field
from typing import Optional
from enum import Enum
from datetime import datetime, timezone

from models.base import BaseSchema


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class MigrationErrorCode(str, Enum):
    """Why a single material failed to migrate."""
    MATERIAL_NOT_FOUND = "MATERIAL_NOT_FOUND"
    VALIDATION_FAILED = "VALIDATION_FAILED"
    UNIT_RESOLUTION_FAILED = "UNIT_RESOLUTION_FAILED"
    VARIANT_EXISTS = "VARIANT_EXISTS"
    UNEXPECTED_ERROR = "UNEXPECTED_ERROR"


# ===================
# COMMANDS
# ===================

class MigrateMaterialRequest(BaseSchema):
    """Migrate one material to a base product and variant."""

    user_id: str = Field(..., min_length=1, description="User running the migration")
    skip_validation: bool = Field(
        False,
        description="Skip the material data checks entirely"
    )
    force_migration: bool = Field(
        False,
        description="Proceed past validation failures and overwrite existing variants"
    )


class BulkMigrateMaterialsRequest(BaseSchema):
    """
    Migrate many materials in sequential batches.

    material_ids omitted (null) migrates every material.
    """

    material_ids: Optional[list[str]] = Field(
        None,
        description="Materials to migrate; null means all"
    )
    user_id: str = Field(..., min_length=1, description="User running the migration")
    batch_size: int = Field(10, ge=1, le=1000, description="Materials per batch")
    continue_on_error: bool = Field(
        True,
        description="Keep going after a batch that contained failures"
    )
    skip_validation: bool = False
    force_migration: bool = False


# ===================
# RESULTS
# ===================

class MigrationResult(BaseSchema):
    """Outcome of migrating one material."""

    material_id: str
    success: bool
    base_product_id: Optional[str] = None
    product_variant_id: Optional[str] = None
    error_message: Optional[str] = None
    error_code: Optional[MigrationErrorCode] = None
    migrated_at: datetime = Field(default_factory=_utcnow)

    @classmethod
    def succeeded(
        cls,
        material_id: str,
        base_product_id: str,
        product_variant_id: str
    ) -> "MigrationResult":
        return cls(
            material_id=material_id,
            success=True,
            base_product_id=base_product_id,
            product_variant_id=product_variant_id
        )

    @classmethod
    def failed(
        cls,
        material_id: str,
        code: MigrationErrorCode,
        message: str
    ) -> "MigrationResult":
        return cls(
            material_id=material_id,
            success=False,
            error_code=code,
            error_message=message
        )


class BulkMigrationResult(BaseSchema):
    """
    Aggregate outcome of a bulk migration.

    total_processed counts every material selected for the run.
    successful_migrations + failed_migrations counts only those attempted,
    which is fewer when the run was cancelled or stopped on error.
    """

    total_processed: int = 0
    successful_migrations: int = 0
    failed_migrations: int = 0
    results: list[MigrationResult] = Field(default_factory=list)
    cancelled: bool = False
    stopped_on_error: bool = False
    migrated_at: datetime = Field(default_factory=_utcnow)

    @property
    def attempted(self) -> int:
        return self.successful_migrations + self.failed_migrations
