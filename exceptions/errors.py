"""
Custom exception classes for the application.

Expected migration failures are reported as MigrationResult values,
not raised. These exceptions cover API and persistence errors.
"""

from typing import Optional, Any
from datetime import datetime, timezone


class AppError(Exception):
    """
    Base exception for all application errors.

    All custom exceptions inherit from this.

    Attributes:
        code: Error code (e.g., "MATERIAL_NOT_FOUND")
        message: Human-readable message
        status_code: HTTP status code
        details: Additional context
    """

    def __init__(
        self,
        code: str,
        message: str,
        status_code: int = 500,
        details: Optional[dict[str, Any]] = None
    ):
        self.code = code
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        self.timestamp = datetime.now(timezone.utc).isoformat()
        super().__init__(message)

    def to_dict(self) -> dict:
        """Convert to API response format."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "details": self.details,
                "timestamp": self.timestamp
            }
        }


class NotFoundError(AppError):
    """Resource not found (404)."""

    def __init__(
        self,
        resource: str,
        identifier: str,
        code: Optional[str] = None
    ):
        super().__init__(
            code=code or f"{resource.upper()}_NOT_FOUND",
            message=f"{resource} not found",
            status_code=404,
            details={"id": identifier}
        )


class ValidationError(AppError):
    """Validation failed (422)."""

    def __init__(
        self,
        message: str,
        code: str = "VALIDATION_ERROR",
        details: Optional[dict] = None
    ):
        super().__init__(
            code=code,
            message=message,
            status_code=422,
            details=details
        )


class ConflictError(AppError):
    """Conflict with existing resource (409)."""

    def __init__(
        self,
        message: str,
        code: str = "CONFLICT",
        details: Optional[dict] = None
    ):
        super().__init__(
            code=code,
            message=message,
            status_code=409,
            details=details
        )


class DuplicateError(ConflictError):
    """Duplicate resource (409)."""

    def __init__(
        self,
        resource: str,
        field: str,
        value: str
    ):
        super().__init__(
            code=f"{resource.upper()}_{field.upper()}_EXISTS",
            message=f"{resource} with this {field} already exists",
            details={field: value}
        )


class UnauthorizedError(AppError):
    """Missing or invalid credentials (401)."""

    def __init__(self, message: str = "Invalid or missing API key"):
        super().__init__(
            code="UNAUTHORIZED",
            message=message,
            status_code=401
        )


class DatabaseError(AppError):
    """Database operation failed (500)."""

    def __init__(
        self,
        operation: str,
        message: str,
        details: Optional[dict] = None
    ):
        super().__init__(
            code="DATABASE_ERROR",
            message=f"Database {operation} failed: {message}",
            status_code=500,
            details={"operation": operation, **(details or {})}
        )


# ===================
# CATALOG ERRORS
# ===================

class BaseProductNotFoundError(NotFoundError):
    """Base product not found."""

    def __init__(self, base_product_id: str):
        super().__init__(
            resource="Base product",
            identifier=base_product_id,
            code="BASE_PRODUCT_NOT_FOUND"
        )


class ProductVariantNotFoundError(NotFoundError):
    """Product variant not found."""

    def __init__(self, variant_id: str):
        super().__init__(
            resource="Product variant",
            identifier=variant_id,
            code="PRODUCT_VARIANT_NOT_FOUND"
        )


class UnitOfMeasureExistsError(DuplicateError):
    """Unit of measure name already taken."""

    def __init__(self, name: str):
        super().__init__(
            resource="Unit of measure",
            field="name",
            value=name
        )


# ===================
# MIGRATION ERRORS
# ===================

class InvalidBatchSizeError(ValidationError):
    """Bulk migration batch size must be positive."""

    def __init__(self, batch_size: int):
        super().__init__(
            code="INVALID_BATCH_SIZE",
            message="Batch size must be greater than 0",
            details={"provided": batch_size}
        )
