"""
Custom exceptions module.
"""

from exceptions.errors import (
    # Base exceptions
    AppError,
    NotFoundError,
    ValidationError,
    ConflictError,
    DuplicateError,
    UnauthorizedError,
    DatabaseError,

    # Catalog
    BaseProductNotFoundError,
    ProductVariantNotFoundError,
    UnitOfMeasureExistsError,

    # Migration
    InvalidBatchSizeError,
)

__all__ = [
    # Base
    "AppError",
    "NotFoundError",
    "ValidationError",
    "ConflictError",
    "DuplicateError",
    "UnauthorizedError",
    "DatabaseError",

    # Catalog
    "BaseProductNotFoundError",
    "ProductVariantNotFoundError",
    "UnitOfMeasureExistsError",

    # Migration
    "InvalidBatchSizeError",
]
