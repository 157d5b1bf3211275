"""
Catalog read routes.

Read-only views of base products, variants and units, used to check
what a migration produced.
"""

from fastapi import APIRouter
from fastapi.responses import JSONResponse
import structlog

from models.base_product import BaseProductResponse
from models.product_variant import ProductVariantResponse
from models.unit_of_measure import UnitOfMeasureResponse
from services.base_product_service import get_base_product_service
from services.product_variant_service import get_product_variant_service
from services.unit_of_measure_service import get_unit_of_measure_service
from exceptions import AppError

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/api", tags=["Catalog"])


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


# ===================
# ROUTES
# ===================

@router.get("/base-products/{base_product_id}", response_model=BaseProductResponse)
async def get_base_product(base_product_id: str):
    """
    Get a base product by ID.

    Raises:
        404: Base product not found
    """
    try:
        return get_base_product_service().get_by_id(base_product_id)
    except Exception as e:
        return handle_error(e)


@router.get("/base-products/{base_product_id}/variants", response_model=list[ProductVariantResponse])
async def list_base_product_variants(base_product_id: str):
    """
    List the variants of a base product.

    Raises:
        404: Base product not found
    """
    try:
        get_base_product_service().get_by_id(base_product_id)
        return get_product_variant_service().get_by_base_product(base_product_id)
    except Exception as e:
        return handle_error(e)


@router.get("/product-variants/{variant_id}", response_model=ProductVariantResponse)
async def get_product_variant(variant_id: str):
    """
    Get a product variant by ID.

    Raises:
        404: Product variant not found
    """
    try:
        return get_product_variant_service().get_by_id(variant_id)
    except Exception as e:
        return handle_error(e)


@router.get("/units-of-measure", response_model=list[UnitOfMeasureResponse])
async def list_units_of_measure():
    """List all units of measure."""
    try:
        return get_unit_of_measure_service().get_all()
    except Exception as e:
        return handle_error(e)
