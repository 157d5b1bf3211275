"""
Product category schema.
"""

from pydantic import Field
from typing import Optional

from models.base import BaseSchema, TimestampMixin


class CategoryResponse(BaseSchema, TimestampMixin):
    """Category with all fields."""

    id: str = Field(..., description="Category UUID")
    name: str
    description: Optional[str] = None
