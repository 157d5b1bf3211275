"""
Base product schemas for validation and serialization.
"""

from pydantic import Field
from typing import Optional

from models.base import BaseSchema, TimestampMixin


class BaseProductCreate(BaseSchema):
    """
    Create a new base product.

    Required: name
    Optional: description, category_id
    """

    name: str = Field(..., min_length=1, max_length=200, description="Product name")
    description: Optional[str] = Field(None, description="Product description")
    category_id: Optional[str] = Field(None, description="Category UUID")


class BaseProductUpdate(BaseSchema):
    """
    Replace the details of a base product.

    Description and category are written as given, so None clears them.
    """

    name: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = None
    category_id: Optional[str] = None


class BaseProductResponse(BaseSchema, TimestampMixin):
    """Base product with all fields."""

    id: str = Field(..., description="Base product UUID")
    name: str
    description: Optional[str] = None
    category_id: Optional[str] = None
