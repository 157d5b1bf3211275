"""
Unit of measure schemas.
"""

from pydantic import Field
from typing import NamedTuple

from models.base import BaseSchema, TimestampMixin


class UnitDefinition(NamedTuple):
    """Canonical (name, symbol, type) triple for a unit."""
    name: str
    symbol: str
    type: str


class UnitOfMeasureCreate(BaseSchema):
    """Create a new unit of measure."""

    name: str = Field(..., min_length=1, description="Unique unit name; unrecognized units keep the raw legacy text")
    symbol: str = Field(..., min_length=1, description="Unit symbol")
    type: str = Field(..., min_length=1, max_length=50, description="Weight, Volume, Length, Count or Other")


class UnitOfMeasureResponse(BaseSchema, TimestampMixin):
    """Unit of measure with all fields."""

    id: str = Field(..., description="Unit UUID")
    name: str
    symbol: str
    type: str
