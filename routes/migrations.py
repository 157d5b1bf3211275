"""
Material migration API routes.

Business failures (missing material, invalid data, existing variant)
come back as 200 with success=false in the result body.
"""

from typing import Optional
from fastapi import APIRouter, Depends, Header
from fastapi.responses import JSONResponse
import structlog

from config import settings
from models.migration import (
    MigrateMaterialRequest,
    BulkMigrateMaterialsRequest,
    MigrationResult,
    BulkMigrationResult
)
from services.material_service import get_material_service
from services.migration_service import get_migration_service
from exceptions import AppError, UnauthorizedError

logger = structlog.get_logger(__name__)


# ===================
# EXCEPTION HANDLER
# ===================

def handle_error(e: Exception) -> JSONResponse:
    """Convert exception to JSON response."""
    if isinstance(e, AppError):
        return JSONResponse(
            status_code=e.status_code,
            content=e.to_dict()
        )
    # Unexpected error
    logger.error("unexpected_error", error=str(e), type=type(e).__name__)
    return JSONResponse(
        status_code=500,
        content={
            "error": {
                "code": "INTERNAL_ERROR",
                "message": "An unexpected error occurred"
            }
        }
    )


def require_api_key(x_api_key: Optional[str] = Header(None)) -> None:
    """
    Gate migration endpoints behind API_KEY when it is configured.

    Raises:
        UnauthorizedError: If the X-API-Key header is missing or wrong
    """
    if settings.api_key_required and x_api_key != settings.api_key:
        logger.warning("migration_unauthorized", key_provided=x_api_key is not None)
        raise UnauthorizedError()


router = APIRouter(
    prefix="/api/migrations",
    tags=["Migrations"],
    dependencies=[Depends(require_api_key)]
)


# ===================
# ROUTES
# ===================

@router.get("/materials/count")
async def count_materials():
    """Get number of legacy materials left to migrate from."""
    try:
        service = get_material_service()
        return {"count": service.count()}

    except Exception as e:
        return handle_error(e)


@router.post("/materials/bulk", response_model=BulkMigrationResult)
def bulk_migrate_materials(data: BulkMigrateMaterialsRequest):
    """
    Migrate many materials in sequential batches.

    Omit material_ids to migrate every material. Declared sync so the
    blocking batch loop runs in the threadpool, off the event loop.

    Raises:
        422: Invalid batch size
    """
    try:
        service = get_migration_service()
        return service.bulk_migrate(
            user_id=data.user_id,
            material_ids=data.material_ids,
            batch_size=data.batch_size,
            continue_on_error=data.continue_on_error,
            skip_validation=data.skip_validation,
            force_migration=data.force_migration
        )

    except Exception as e:
        return handle_error(e)


@router.post("/materials/{material_id}", response_model=MigrationResult)
def migrate_material(material_id: str, data: MigrateMaterialRequest):
    """
    Migrate one material to a base product and product variant.
    """
    try:
        service = get_migration_service()
        return service.migrate_material(
            material_id,
            data.user_id,
            skip_validation=data.skip_validation,
            force_migration=data.force_migration
        )

    except Exception as e:
        return handle_error(e)
